"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tender views: list with stats, detail with financials,
             documents and activity feed, create/edit with deposit
             auto-calculation, delete and EMD refund.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_error, show_success
from apps.core.exceptions import EMDRefundException
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin, SearchFilterMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView
from apps.tenders.forms import EMDRefundForm, TenderForm
from apps.tenders.mock_data import (
    TenderStatus, get_activities_by_tender_id, get_documents_by_tender_id,
    get_financials_by_tender_id, tender_activities, tender_documents,
    tender_financials, tenders
)
from apps.tenders.services import (
    TenderService, calculate_financials, display_amounts, tender_stats
)


class TenderListView(SearchFilterMixin, TemplateView):
    """Tender list with name/reference search and status filter."""
    template_name = 'tenders/tender_list.html'
    search_fields = ('name', 'reference_number')
    filter_fields = {'status': 'status'}

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        all_tenders = tenders.all()
        rows = [
            {'tender': tender, 'financials': get_financials_by_tender_id(tender.id)}
            for tender in self.apply_filters(all_tenders)
        ]
        context.update(self.get_filter_context())
        context.update({
            'rows': rows,
            'stats': tender_stats(all_tenders),
            'status_choices': TenderStatus.choices,
            'view_mode': 'kanban' if self.request.GET.get('view') == 'kanban' else 'list',
        })
        return context


class TenderDetailView(RecordMixin, TemplateView):
    template_name = 'tenders/tender_detail.html'
    repository = tenders
    context_object_name = 'tender'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        tender = self.get_object()
        financials = get_financials_by_tender_id(tender.id)
        context.update({
            'financials': financials,
            'amounts': display_amounts(tender, financials),
            'documents': get_documents_by_tender_id(tender.id),
            'activities': get_activities_by_tender_id(tender.id),
            'refund_form': EMDRefundForm(),
        })
        return context


class TenderFormMixin:
    """Shared rendering for the tender create and edit pages."""
    template_name = 'tenders/tender_form.html'
    form_class = TenderForm

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        form = context['form']
        # Percentages for the estimated value currently in the form
        value = form['estimated_value'].value()
        try:
            context['preview'] = calculate_financials(value) if value else None
        except ArithmeticError:
            context['preview'] = None
        return context

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('tender_form', form.errors.get_json_data(), {})
        return super().form_invalid(form)


class TenderCreateView(TenderFormMixin, FormView):

    def form_valid(self, form):
        tender, amounts = TenderService.create_tender(form.cleaned_data)
        if amounts.auto_calculated:
            show_success(
                self.request, 'Tender Created',
                f"{tender.reference_number} created. EMD, SD1 and SD2 were calculated from the estimated value."
            )
        else:
            show_success(self.request, 'Tender Created', f"{tender.reference_number} created.")
        return redirect('tenders:tender_detail', pk=tender.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'New Tender'
        return context


class TenderUpdateView(RecordMixin, TenderFormMixin, FormView):
    repository = tenders
    context_object_name = 'tender'

    def get_initial(self) -> Dict[str, Any]:
        tender = self.get_object()
        initial = as_dict(tender)
        financials = get_financials_by_tender_id(tender.id)
        if financials is not None:
            initial.update({
                'emd_amount': financials.emd_amount,
                'sd1_amount': financials.sd1_amount,
                'sd2_amount': financials.sd2_amount,
                'emd_dd_number': financials.emd_dd_number,
                'emd_dd_date': financials.emd_dd_date,
                'emd_bank': financials.emd_bank,
            })
        return initial

    def form_valid(self, form):
        tender = TenderService.update_tender(self.get_object().id, form.cleaned_data)
        show_success(self.request, 'Tender Updated', f"{tender.reference_number} updated.")
        return redirect('tenders:tender_detail', pk=tender.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = f"Edit Tender - {self.get_object().reference_number}"
        return context


class TenderDeleteView(RecordDeleteView):
    repository = tenders
    item_label = 'this tender'

    def get_success_url(self) -> str:
        return reverse('tenders:tender_list')

    def perform_delete(self, record) -> None:
        for repository in (tender_financials, tender_documents, tender_activities):
            for related in repository.filter(tender_id=record.id):
                repository.delete(related.id)
        super().perform_delete(record)


class EMDRefundView(RecordMixin, View):
    """Mark a tender's EMD as refunded."""
    repository = tenders

    def post(self, request, *args, **kwargs):
        tender = self.get_object()
        form = EMDRefundForm(request.POST)
        if not form.is_valid():
            show_error(request, 'Invalid Date', 'Enter the date the EMD was refunded.')
            return redirect('tenders:tender_detail', pk=tender.id)

        try:
            TenderService.mark_emd_refunded(tender.id, form.cleaned_data['refund_date'])
        except EMDRefundException as e:
            show_error(request, 'Refund Not Recorded', e.message)
        else:
            show_success(request, 'EMD Refunded', f"EMD refund recorded for {tender.reference_number}.")
        return redirect('tenders:tender_detail', pk=tender.id)
