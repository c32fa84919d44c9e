"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Attendance views: monthly list and calendar, CSV export,
             marking, approval and deletion of entries.
-------------------------------------------------------------------------
"""
import csv
from typing import Any, Dict

from django.http import HttpResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.attendance.forms import MarkAttendanceForm
from apps.attendance.mock_data import AttendanceStatus, attendance_records
from apps.attendance.services import (
    WEEKDAY_LABELS, AttendanceService, adjacent_months, attendance_stats,
    calendar_weeks, filter_attendance, parse_month
)
from apps.core.alerts import show_success
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin
from apps.core.views import RecordDeleteView


def list_url(month_start) -> str:
    return f"{reverse('attendance:attendance_list')}?month={month_start:%Y-%m}"


class AttendanceFilterMixin:
    """Reads the month/search/status query parameters."""

    def get_month(self):
        return parse_month(self.request.GET.get('month'))

    def get_filtered_records(self):
        params = self.request.GET
        return filter_attendance(
            attendance_records.all(),
            self.get_month(),
            params.get('search', ''),
            params.get('status', 'all'),
        )


class AttendanceListView(AttendanceFilterMixin, TemplateView):
    """
    Attendance for one month.

    Query parameters: month (YYYY-MM), search, status, view (list or
    calendar).
    """
    template_name = 'attendance/attendance_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        params = self.request.GET
        month_start = self.get_month()
        previous_month, next_month = adjacent_months(month_start)
        records = self.get_filtered_records()
        view_mode = 'calendar' if params.get('view') == 'calendar' else 'list'

        context.update({
            'records': records,
            'stats': attendance_stats(records, month_start),
            'month_start': month_start,
            'previous_month': previous_month,
            'next_month': next_month,
            'view_mode': view_mode,
            'search_query': params.get('search', '').strip(),
            'status_filter': params.get('status', 'all'),
            'status_choices': AttendanceStatus.choices,
            'export_query': params.urlencode(),
        })
        if view_mode == 'calendar':
            context['weeks'] = calendar_weeks(records, month_start)
            context['weekday_labels'] = WEEKDAY_LABELS
        return context


class AttendanceExportView(AttendanceFilterMixin, View):
    """Export the month's filtered attendance to CSV."""

    def get(self, request, *args, **kwargs) -> HttpResponse:
        filename = f"attendance_{self.get_month():%Y-%m}.csv"
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'

        # Add UTF-8 BOM for Excel compatibility
        response.write('\ufeff')

        writer = csv.writer(response)
        writer.writerow(['Date', 'Employee', 'Status', 'Check In', 'Check Out', 'Notes', 'Approved By'])
        for record in self.get_filtered_records():
            writer.writerow([
                record.date.strftime('%d/%m/%Y'),
                record.employee_name,
                record.status,
                record.check_in.strftime('%H:%M') if record.check_in else '',
                record.check_out.strftime('%H:%M') if record.check_out else '',
                record.notes,
                record.approved_by or '',
            ])
        return response


class MarkAttendanceView(FormView):
    """Mark attendance; ``?employee=<id>`` preselects the employee."""
    template_name = 'administration/setup_form.html'
    form_class = MarkAttendanceForm

    def get_initial(self) -> Dict[str, Any]:
        initial = super().get_initial()
        employee = self.request.GET.get('employee', '')
        if employee.isdigit():
            initial['employee_id'] = int(employee)
        return initial

    def form_valid(self, form):
        record = AttendanceService.mark_attendance(form.cleaned_data)
        show_success(
            self.request, 'Attendance Marked',
            f"{record.employee_name} marked {record.status} on {record.date:%d %b %Y}."
        )
        return redirect(list_url(record.date.replace(day=1)))

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('attendance_mark', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Mark Attendance'
        context['back_url'] = reverse('attendance:attendance_list')
        return context


class AttendanceApproveView(RecordMixin, View):
    repository = attendance_records

    def post(self, request, *args, **kwargs):
        record = AttendanceService.approve(self.get_object().id)
        show_success(request, 'Approved', f"Attendance of {record.employee_name} approved.")
        return redirect(list_url(record.date.replace(day=1)))


class AttendanceDeleteView(RecordDeleteView):
    repository = attendance_records

    def get_item_label(self) -> str:
        record = self.get_object()
        return f"attendance of {record.employee_name} on {record.date:%d %b %Y}"

    def get_success_url(self) -> str:
        return list_url(self.get_object().date.replace(day=1))
