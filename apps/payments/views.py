"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Payment views: filtered list with overdue banner, create/
             edit/delete, mark paid, Excel/CSV export and Excel import.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.http import HttpResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.utils import timezone
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_error, show_info, show_success
from apps.core.exceptions import PaymentAlreadyPaidException, PaymentSheetException
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin, SearchFilterMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView
from apps.payments.forms import MarkPaymentPaidForm, PaymentForm, PaymentImportForm
from apps.payments.mock_data import PaymentCategory, PaymentStatus, payments
from apps.payments.services import (
    PaymentService, SHEET_COLUMNS, build_payments_workbook, payment_stats, write_payments_csv
)


class PaymentFilterMixin(SearchFilterMixin):
    search_fields = ('payment_number', 'vendor_name', 'contractor_name', 'description')
    filter_fields = {'status': 'status', 'category': 'category'}


class PaymentListView(PaymentFilterMixin, TemplateView):
    """Payment list; the summary cards reflect the filtered rows."""
    template_name = 'payments/payment_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        filtered = self.apply_filters(payments.all())
        context.update(self.get_filter_context())
        context.update({
            'payments': filtered,
            'stats': payment_stats(filtered),
            'status_choices': PaymentStatus.choices,
            'category_choices': PaymentCategory.choices,
            'export_query': self.request.GET.urlencode(),
            'import_form': PaymentImportForm(),
        })
        return context


class PaymentCreateView(FormView):
    template_name = 'payments/payment_form.html'
    form_class = PaymentForm

    def form_valid(self, form):
        payment = PaymentService.create_payment(form.cleaned_data)
        show_success(self.request, 'Payment Created', f"{payment.payment_number} created.")
        return redirect('payments:payment_list')

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('payment_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'New Payment'
        return context


class PaymentUpdateView(RecordMixin, FormView):
    template_name = 'payments/payment_form.html'
    form_class = PaymentForm
    repository = payments
    context_object_name = 'payment'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        payment = PaymentService.update_payment(self.get_object().id, form.cleaned_data)
        show_success(self.request, 'Payment Updated', f"{payment.payment_number} updated.")
        return redirect('payments:payment_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = f"Edit Payment - {self.get_object().payment_number}"
        return context


class PaymentDeleteView(RecordDeleteView):
    repository = payments
    item_label = 'this payment record'

    def get_success_url(self) -> str:
        return reverse('payments:payment_list')


class PaymentMarkPaidView(RecordMixin, View):
    repository = payments

    def post(self, request, *args, **kwargs):
        payment = self.get_object()
        form = MarkPaymentPaidForm(request.POST)
        details = form.cleaned_data if form.is_valid() else {}
        try:
            PaymentService.mark_paid(payment.id, **details)
        except PaymentAlreadyPaidException:
            show_info(request, 'Already Paid', 'This payment has already been marked as paid')
        else:
            show_success(request, 'Payment marked as paid successfully')
        return redirect('payments:payment_list')


class PaymentExportView(PaymentFilterMixin, View):
    """Export the filtered payments as Excel (default) or CSV."""

    def get(self, request, *args, **kwargs) -> HttpResponse:
        rows = self.apply_filters(payments.all())
        timestamp = timezone.now().strftime('%Y%m%d_%H%M%S')

        if request.GET.get('format') == 'csv':
            response = HttpResponse(content_type='text/csv; charset=utf-8')
            response['Content-Disposition'] = f'attachment; filename="payments_{timestamp}.csv"'
            # Add UTF-8 BOM for Excel compatibility
            response.write('\ufeff')
            write_payments_csv(response, rows)
            return response

        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="payments_{timestamp}.xlsx"'
        build_payments_workbook(rows).save(response)
        return response


class PaymentImportView(FormView):
    """Upload a payment sheet; row errors are listed and nothing is imported."""
    template_name = 'payments/payment_import.html'
    form_class = PaymentImportForm

    def form_valid(self, form):
        try:
            created, row_errors = PaymentService.import_sheet(form.cleaned_data['sheet'])
        except PaymentSheetException as e:
            ConsoleLogger.log_error('payment_import', e, e.details)
            show_error(self.request, 'Import Failed', e.message)
            return self.render_to_response(self.get_context_data(form=form))

        if row_errors:
            show_error(self.request, 'Import Failed',
                       f"{len(row_errors)} row(s) have errors. No payments were imported.")
            return self.render_to_response(self.get_context_data(form=form, row_errors=row_errors))

        show_success(self.request, 'Import Complete', f"{len(created)} payment(s) imported.")
        return redirect('payments:payment_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['sheet_columns'] = SHEET_COLUMNS
        return context
