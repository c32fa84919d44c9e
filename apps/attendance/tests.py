"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for attendance counting, month navigation, marking
             and approval, and the attendance views.
-------------------------------------------------------------------------
"""
from datetime import date, time
from unittest import mock

from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from apps.administration.mock_data import HolidayType, holidays
from apps.attendance.forms import MarkAttendanceForm
from apps.attendance.mock_data import (
    AttendanceStatus, attendance_records, get_attendance_by_employee_id, get_attendance_for
)
from apps.attendance.services import (
    AttendanceService, adjacent_months, attendance_stats, calendar_weeks, days_present,
    filter_attendance, parse_month, working_days_between, working_days_in_month
)
from apps.employees.mock_data import employees

OCTOBER = date(2025, 10, 1)
NOVEMBER = date(2025, 11, 1)


def reset_attendance():
    for repository in (attendance_records, employees, holidays):
        repository.reset()


class AttendanceCountTestCase(SimpleTestCase):
    """Days present and working days."""

    def setUp(self):
        reset_attendance()

    def test_october_seed(self):
        self.assertEqual(days_present(101, date(2025, 10, 1), date(2025, 10, 31)), 26)
        self.assertEqual(days_present(102, date(2025, 10, 1), date(2025, 10, 31)), 24)
        self.assertEqual(days_present(104, date(2025, 10, 1), date(2025, 10, 31)), 25)

    def test_half_days_count_half_and_round_down(self):
        AttendanceService.mark_attendance({
            'employee_id': 106, 'date': date(2025, 11, 3), 'status': AttendanceStatus.HALF_DAY,
        })
        self.assertEqual(days_present(106, date(2025, 11, 1), date(2025, 11, 30)), 0)
        AttendanceService.mark_attendance({
            'employee_id': 106, 'date': date(2025, 11, 4), 'status': AttendanceStatus.HALF_DAY,
        })
        self.assertEqual(days_present(106, date(2025, 11, 1), date(2025, 11, 30)), 1)

    def test_leave_and_absence_count_nothing(self):
        self.assertEqual(days_present(103, date(2025, 11, 3), date(2025, 11, 3)), 0)

    def test_working_days_skip_sundays(self):
        # 1-7 June 2026 is Monday to Sunday
        self.assertEqual(working_days_between(date(2026, 6, 1), date(2026, 6, 7)), 6)

    def test_working_days_skip_public_holidays_only(self):
        # January 2026: 31 days, 4 Sundays, Republic Day on a Monday
        self.assertEqual(working_days_in_month(date(2026, 1, 1)), 26)
        holidays.create(name='Site Visit Day', date=date(2026, 1, 27), type=HolidayType.OPTIONAL)
        self.assertEqual(working_days_in_month(date(2026, 1, 1)), 26)


class AttendanceMonthTestCase(SimpleTestCase):

    def setUp(self):
        reset_attendance()

    def test_parse_month(self):
        self.assertEqual(parse_month('2025-10'), OCTOBER)
        self.assertEqual(parse_month('2025-13', today=date(2026, 3, 9)), date(2026, 3, 1))
        self.assertEqual(parse_month('', today=date(2026, 3, 9)), date(2026, 3, 1))
        self.assertEqual(parse_month('october', today=date(2026, 3, 9)), date(2026, 3, 1))

    def test_adjacent_months_cross_years(self):
        self.assertEqual(adjacent_months(date(2026, 1, 1)), (date(2025, 12, 1), date(2026, 2, 1)))

    def test_filter_by_month_and_search(self):
        november = filter_attendance(attendance_records.all(), NOVEMBER)
        self.assertEqual(len(november), 5)
        self.assertEqual(november[0].date, date(2025, 11, 3))
        rajesh = filter_attendance(attendance_records.all(), NOVEMBER, search='rajesh')
        self.assertEqual([r.date for r in rajesh], [date(2025, 11, 3), date(2025, 11, 4)])

    def test_filter_by_status(self):
        leave = filter_attendance(attendance_records.all(), OCTOBER, status=AttendanceStatus.LEAVE)
        self.assertEqual([r.employee_name for r in leave], ['Anita Desai'])

    def test_stats(self):
        records = filter_attendance(attendance_records.all(), NOVEMBER)
        stats = attendance_stats(records, NOVEMBER)
        self.assertEqual(stats['total_days'], 30)
        self.assertEqual(stats['present'], 3)
        self.assertEqual(stats['leave'], 1)
        self.assertEqual(stats['half_day'], 1)
        self.assertEqual(stats['pending_approval'], 2)

    def test_calendar_weeks(self):
        records = filter_attendance(attendance_records.all(), NOVEMBER)
        weeks = calendar_weeks(records, NOVEMBER)
        # 1 November 2025 is a Saturday
        self.assertEqual(weeks[0][:5], [None] * 5)
        self.assertEqual(weeks[0][5]['date'], NOVEMBER)
        monday = weeks[1][0]
        self.assertEqual(monday['date'], date(2025, 11, 3))
        self.assertEqual(monday['present'], 2)
        self.assertEqual(monday['total'], 4)


@override_settings(CONSOLE_USER_NAME='Office Admin')
class AttendanceServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_attendance()

    def test_mark_creates_approved_entry(self):
        record = AttendanceService.mark_attendance({
            'employee_id': 105, 'date': date(2025, 11, 3), 'status': AttendanceStatus.PRESENT,
            'check_in': time(9, 0), 'check_out': time(18, 0), 'notes': '',
        })
        self.assertEqual(record.approved_by, 'Office Admin')
        self.assertIsNotNone(record.approved_at)
        self.assertEqual(get_attendance_by_employee_id(105)[0], record)

    def test_mark_same_day_replaces_entry(self):
        before = attendance_records.count()
        AttendanceService.mark_attendance({
            'employee_id': 103, 'date': date(2025, 11, 3), 'status': AttendanceStatus.PRESENT,
        })
        self.assertEqual(attendance_records.count(), before)
        self.assertEqual(get_attendance_for(103, date(2025, 11, 3)).status, AttendanceStatus.PRESENT)

    def test_approve(self):
        pending = get_attendance_for(104, date(2025, 11, 3))
        record = AttendanceService.approve(pending.id)
        self.assertTrue(record.is_approved)
        self.assertEqual(record.approved_by, 'Office Admin')

    def test_approve_keeps_existing_approver(self):
        approved = get_attendance_for(101, date(2025, 11, 3))
        record = AttendanceService.approve(approved.id, approved_by='Someone Else')
        self.assertEqual(record.approved_by, 'Admin')


class MarkAttendanceFormTestCase(SimpleTestCase):

    def setUp(self):
        reset_attendance()

    def form(self, **overrides):
        data = {'employee_id': '101', 'date': '2025-11-05', 'status': AttendanceStatus.PRESENT,
                'check_in': '09:00', 'check_out': '18:00', 'notes': ''}
        data.update(overrides)
        return MarkAttendanceForm(data)

    def test_valid(self):
        form = self.form()
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['employee_id'], 101)

    def test_unknown_employee_rejected(self):
        self.assertFalse(self.form(employee_id='999').is_valid())

    def test_future_date_rejected(self):
        with mock.patch('django.utils.timezone.localdate', return_value=date(2025, 11, 4)):
            form = self.form(date='2025-11-05')
            self.assertFalse(form.is_valid())
        self.assertIn('date', form.errors)

    def test_check_out_before_check_in(self):
        form = self.form(check_in='18:00', check_out='09:00')
        self.assertFalse(form.is_valid())
        self.assertIn('check_out', form.errors)

    def test_times_dropped_for_leave(self):
        form = self.form(status=AttendanceStatus.LEAVE)
        self.assertTrue(form.is_valid(), form.errors)
        self.assertIsNone(form.cleaned_data['check_in'])
        self.assertIsNone(form.cleaned_data['check_out'])


class AttendanceViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_attendance()

    def test_list_month(self):
        response = self.client.get(reverse('attendance:attendance_list'), {'month': '2025-11'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['records']), 5)
        self.assertEqual(response.context['previous_month'], OCTOBER)
        self.assertContains(response, 'November 2025')

    def test_calendar_view(self):
        response = self.client.get(reverse('attendance:attendance_list'),
                                   {'month': '2025-11', 'view': 'calendar'})
        self.assertEqual(response.context['view_mode'], 'calendar')
        self.assertEqual(len(response.context['weeks']), 5)

    def test_export_csv(self):
        response = self.client.get(reverse('attendance:attendance_export'),
                                   {'month': '2025-11', 'search': 'amit'})
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        self.assertIn('attendance_2025-11.csv', response['Content-Disposition'])
        lines = response.content.decode('utf-8-sig').strip().splitlines()
        self.assertEqual(lines[0], 'Date,Employee,Status,Check In,Check Out,Notes,Approved By')
        self.assertEqual(lines[1], '03/11/2025,Amit Patel,Leave,,,Medical leave,')

    def test_mark_form_preselects_employee(self):
        response = self.client.get(reverse('attendance:attendance_mark'), {'employee': '102'})
        self.assertEqual(response.context['form'].initial['employee_id'], 102)

    def test_mark(self):
        response = self.client.post(reverse('attendance:attendance_mark'), {
            'employee_id': '105', 'date': '2025-11-05', 'status': AttendanceStatus.ABSENT,
        })
        self.assertRedirects(response, f"{reverse('attendance:attendance_list')}?month=2025-11",
                             fetch_redirect_response=False)
        self.assertEqual(get_attendance_for(105, date(2025, 11, 5)).status, AttendanceStatus.ABSENT)

    def test_mark_invalid(self):
        response = self.client.post(reverse('attendance:attendance_mark'), {'date': '2025-11-05'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('employee_id', response.context['form'].errors)

    def test_approve(self):
        pending = get_attendance_for(103, date(2025, 11, 3))
        response = self.client.post(reverse('attendance:attendance_approve', args=[pending.id]))
        self.assertEqual(response.status_code, 302)
        self.assertTrue(attendance_records.get_by_id(pending.id).is_approved)

    def test_delete(self):
        record = get_attendance_for(104, date(2025, 11, 3))
        response = self.client.post(reverse('attendance:attendance_delete', args=[record.id]))
        self.assertRedirects(response, f"{reverse('attendance:attendance_list')}?month=2025-11",
                             fetch_redirect_response=False)
        self.assertIsNone(attendance_records.get_by_id(record.id))

    def test_unknown_entry(self):
        response = self.client.post(reverse('attendance:attendance_approve', args=[99999]))
        self.assertEqual(response.status_code, 404)
