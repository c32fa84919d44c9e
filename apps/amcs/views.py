"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: AMC views: list with expiry banner and billing stats,
             detail with bills, create/edit/delete and bill payment.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.conf import settings
from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.amcs.forms import AMCForm, BillPaymentForm
from apps.amcs.mock_data import (
    AMCStatus, BillingCycle, amc_billings, amcs, get_billings_by_amc_id
)
from apps.amcs.services import AMCService, amc_stats, expiring_amcs, filter_amcs
from apps.core.alerts import show_error, show_info, show_success
from apps.core.exceptions import ConsoleException, PaymentAlreadyPaidException
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView


class AMCListView(TemplateView):
    """
    AMC list.

    Query parameters: search, status, billing_cycle, expiry (days).
    """
    template_name = 'amcs/amc_list.html'

    def get_expiry_window(self):
        try:
            return int(self.request.GET['expiry'])
        except (KeyError, ValueError):
            return None

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        all_amcs = amcs.all()
        expiry_window = self.get_expiry_window()
        search = self.request.GET.get('search', '')
        status = self.request.GET.get('status', 'all')
        billing_cycle = self.request.GET.get('billing_cycle', 'all')

        filtered = filter_amcs(all_amcs, search, status, billing_cycle, expiry_window)
        context.update({
            'rows': [{'amc': amc, 'stats': amc_stats(amc)} for amc in filtered],
            'expiring': expiring_amcs(all_amcs),
            'expiry_window': expiry_window,
            'warning_days': settings.EXPIRY_WARNING_DAYS,
            'total_count': len(all_amcs),
            'active_count': len([a for a in all_amcs if a.status == AMCStatus.ACTIVE]),
            'pending_bill_count': len(amc_billings.filter(paid=False)),
            'search_query': search,
            'status_filter': status,
            'billing_cycle_filter': billing_cycle,
            'status_choices': AMCStatus.choices,
            'billing_cycle_choices': BillingCycle.choices,
        })
        return context


class AMCDetailView(RecordMixin, TemplateView):
    template_name = 'amcs/amc_detail.html'
    repository = amcs
    context_object_name = 'amc'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        amc = self.get_object()
        context.update({
            'bills': get_billings_by_amc_id(amc.id),
            'stats': amc_stats(amc),
            'payment_form': BillPaymentForm(),
        })
        return context


class AMCCreateView(FormView):
    template_name = 'amcs/amc_form.html'
    form_class = AMCForm

    def get_initial(self) -> Dict[str, Any]:
        initial = super().get_initial()
        # "Save & add AMC" from the client form lands here with the client preselected
        if self.request.GET.get('client'):
            initial['client_id'] = self.request.GET['client']
        return initial

    def form_valid(self, form):
        amc = amcs.create(**form.cleaned_data)
        ConsoleLogger.log_record_created('AMC', amc, amc.amc_number)
        show_success(self.request, 'AMC Created', f"{amc.amc_number} created for {amc.client_name}.")
        return redirect('amcs:amc_detail', pk=amc.id)

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('amc_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Create New AMC'
        return context


class AMCUpdateView(RecordMixin, FormView):
    template_name = 'amcs/amc_form.html'
    form_class = AMCForm
    repository = amcs
    context_object_name = 'amc'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        amc = amcs.update(self.get_object().id, **form.cleaned_data)
        ConsoleLogger.log_record_updated('AMC', amc, amc.amc_number)
        show_success(self.request, 'AMC Updated', f"{amc.amc_number} updated.")
        return redirect('amcs:amc_detail', pk=amc.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Edit AMC'
        return context


class AMCDeleteView(RecordDeleteView):
    repository = amcs
    item_label = 'this AMC'

    def get_success_url(self) -> str:
        return reverse('amcs:amc_list')

    def perform_delete(self, record) -> None:
        for bill in amc_billings.filter(amc_id=record.id):
            amc_billings.delete(bill.id)
        super().perform_delete(record)


class BillPaymentView(View):
    """Mark an AMC bill as paid."""

    def post(self, request, bill_id, *args, **kwargs):
        bill = amc_billings.get_by_id(bill_id)
        if bill is None:
            show_error(request, 'Not Found', f"AMC bill #{bill_id} not found.")
            return redirect('amcs:amc_list')

        form = BillPaymentForm(request.POST)
        if not form.is_valid():
            show_error(request, 'Payment Not Recorded', 'Enter the payment date and mode.')
            return redirect('amcs:amc_detail', pk=bill.amc_id)

        try:
            AMCService.mark_bill_paid(bill.id, form.cleaned_data['payment_date'], form.cleaned_data['payment_mode'])
        except PaymentAlreadyPaidException as e:
            show_info(request, 'Already Paid', e.message)
        else:
            show_success(request, 'Bill Paid', f"{bill.bill_number} marked as paid.")
        return redirect('amcs:amc_detail', pk=bill.amc_id)


class GenerateBillView(RecordMixin, View):
    """Raise the next bill for an AMC."""
    repository = amcs

    def post(self, request, *args, **kwargs):
        amc = self.get_object()
        try:
            bill = AMCService.generate_next_bill(amc.id)
        except ConsoleException as e:
            show_error(request, 'No Bill Generated', e.message)
        else:
            show_success(request, 'Bill Generated', f"{bill.bill_number} raised for {bill.amount}.")
        return redirect('amcs:amc_detail', pk=amc.id)
