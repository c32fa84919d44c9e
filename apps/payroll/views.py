"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Payroll views: period listing with summary cards, payslip
             (HTML and PDF), mark-paid workflow, attendance sync and
             the payroll calculator.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import redirect
from django.template.loader import render_to_string
from django.utils import timezone
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_error, show_success, show_warning
from apps.core.exceptions import ConsoleException, PayrollComputationException
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin
from apps.payroll.forms import (
    BulkMarkPaidForm, MarkPaidForm, PayrollCalculatorForm, PayrollFilterForm
)
from apps.payroll.mock_data import payroll_records
from apps.payroll.services import (
    PayrollService, compute_payroll, filter_payroll_records, summarize_payroll
)


class PayrollListView(TemplateView):
    """
    Payroll records for the selected period with summary cards.

    Query parameters: period_start, period_end, status, search.
    """
    template_name = 'payroll/payroll_list.html'

    def get_filter_form(self) -> PayrollFilterForm:
        data = self.request.GET or None
        form = PayrollFilterForm(data)
        return form

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        form = self.get_filter_form()

        period_start = form.fields['period_start'].initial
        period_end = form.fields['period_end'].initial
        status, search = 'all', ''
        if form.is_bound:
            if form.is_valid():
                period_start = form.cleaned_data['period_start'] or period_start
                period_end = form.cleaned_data['period_end'] or period_end
                status = form.cleaned_data['status'] or 'all'
                search = form.cleaned_data['search']
            else:
                ConsoleLogger.log_validation_error('payroll_filter', form.errors.get_json_data(), {})

        records = filter_payroll_records(
            payroll_records.all(), period_start, period_end, status, search
        )
        context.update({
            'filter_form': form,
            'records': records,
            'summary': summarize_payroll(records),
            'period_start': period_start,
            'period_end': period_end,
            'bulk_form': BulkMarkPaidForm(records=records),
        })
        return context


class PayslipView(RecordMixin, TemplateView):
    """
    Payslip for one payroll record.

    ``?format=pdf`` downloads the payslip as PDF. When WeasyPrint cannot
    render on this system the printable HTML version is returned instead.
    """
    template_name = 'payroll/payslip.html'
    repository = payroll_records
    context_object_name = 'record'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['computation'] = self.get_object().computation
        context['generated_date'] = timezone.localdate()
        return context

    def get(self, request, *args, **kwargs):
        if request.GET.get('format') != 'pdf':
            return super().get(request, *args, **kwargs)

        record = self.get_object()
        context = self.get_context_data(**kwargs)
        context['pdf'] = True
        html_string = render_to_string('payroll/payslip_pdf.html', context, request=request)

        try:
            from weasyprint import HTML
            pdf_file = HTML(string=html_string, base_url=request.build_absolute_uri('/')).write_pdf()
        except (ImportError, OSError) as e:
            # WeasyPrint missing or its native libraries unavailable
            ConsoleLogger.log_error('payslip_pdf', e, {'payroll_id': record.id})
            messages.warning(request, 'PDF generation is unavailable. Displaying printable version.')
            return HttpResponse(html_string)

        response = HttpResponse(pdf_file, content_type='application/pdf')
        filename = f"payslip_{record.employee_name.replace(' ', '_')}_{record.period_start:%Y_%m}.pdf"
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response


class MarkPaidView(RecordMixin, FormView):
    """Record the payment of a single payroll record."""
    template_name = 'payroll/mark_paid.html'
    form_class = MarkPaidForm
    repository = payroll_records
    context_object_name = 'record'

    def dispatch(self, request, *args, **kwargs):
        record = self.get_object()
        if record.is_paid:
            show_warning(request, 'Already Paid', f"Payroll for {record.employee_name} is already paid.")
            return redirect('payroll:payroll_list')
        return super().dispatch(request, *args, **kwargs)

    def form_valid(self, form):
        record = self.get_object()
        try:
            PayrollService.mark_paid(
                record.id,
                form.cleaned_data['payment_mode'],
                form.cleaned_data['payment_date'],
                form.cleaned_data['bank_transaction_ref'],
            )
        except ConsoleException as e:
            show_error(self.request, 'Error', e.message)
            return redirect('payroll:payroll_list')

        show_success(self.request, 'Payment Recorded', f"Payroll for {record.employee_name} marked as paid.")
        return redirect('payroll:payroll_list')

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error(
            'payroll_mark_paid', form.errors.get_json_data(), {'payroll_id': self.get_object().id}
        )
        return super().form_invalid(form)


class BulkMarkPaidView(View):
    """Mark the selected payroll records as paid in one step."""

    def post(self, request, *args, **kwargs):
        form = BulkMarkPaidForm(request.POST, records=payroll_records.all())
        if not form.is_valid():
            errors = '; '.join(str(e) for errs in form.errors.values() for e in errs)
            show_error(request, 'Nothing Paid', errors)
            return redirect('payroll:payroll_list')

        paid, skipped = PayrollService.bulk_mark_paid(
            form.cleaned_data['record_ids'],
            form.cleaned_data['payment_mode'],
            form.cleaned_data['payment_date'],
        )
        if paid:
            show_success(request, 'Payments Recorded', f"{len(paid)} payroll record(s) marked as paid.")
        for message in skipped:
            show_warning(request, 'Skipped', message)
        return redirect('payroll:payroll_list')


class RecalculateView(RecordMixin, View):
    """Recompute a payroll record from its salary and attendance."""
    repository = payroll_records

    def post(self, request, *args, **kwargs):
        record = self.get_object()
        try:
            PayrollService.recalculate(record.id)
        except PayrollComputationException as e:
            ConsoleLogger.log_error('payroll_recalculate', e, {'payroll_id': record.id})
            show_error(request, 'Recalculation Failed', e.message)
        else:
            show_success(request, 'Recalculated', f"Payroll for {record.employee_name} recalculated.")
        return redirect('payroll:payslip', pk=record.id)


class ApplyAttendanceView(RecordMixin, View):
    """Take days present for a payroll record from marked attendance."""
    repository = payroll_records

    def post(self, request, *args, **kwargs):
        record = self.get_object()
        try:
            record = PayrollService.apply_attendance(record.id)
        except ConsoleException as e:
            ConsoleLogger.log_error('payroll_apply_attendance', e, {'payroll_id': record.id})
            show_error(request, 'Attendance Not Applied', e.message)
        else:
            show_success(
                request, 'Attendance Applied',
                f"{record.employee_name}: {record.days_present} of {record.working_days} days present."
            )
        return redirect('payroll:payslip', pk=record.id)


class PayrollCalculatorView(FormView):
    """Ad-hoc payroll calculator: shows the full breakdown for the inputs."""
    template_name = 'payroll/calculator.html'
    form_class = PayrollCalculatorForm

    def form_valid(self, form):
        try:
            computation = compute_payroll(
                form.cleaned_data['base_salary'],
                form.cleaned_data['working_days'],
                form.cleaned_data['days_present'],
                allowances=form.cleaned_data['allowances'],
                deductions=form.cleaned_data['deductions'],
            )
        except PayrollComputationException as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)

        return self.render_to_response(self.get_context_data(form=form, computation=computation))
