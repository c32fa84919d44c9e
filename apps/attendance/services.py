"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Attendance services: month selection and navigation,
             monthly stats, the calendar grid, working-day counts and
             days present for payroll, and the mark/approve workflow.

             A Present day counts 1 and a Half Day counts 0.5 towards
             days present; Leave and Absent count nothing. The total is
             rounded down to whole days.
-------------------------------------------------------------------------
"""
import calendar
from datetime import date, timedelta
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.utils import timezone

from apps.core.logging import ConsoleLogger

DAY_WEIGHTS = {
    'Present': Decimal('1'),
    'Half Day': Decimal('0.5'),
}

WEEKDAY_LABELS = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']


def parse_month(value: Optional[str], today: Optional[date] = None) -> date:
    """First day of the ``YYYY-MM`` month, or of the current month when invalid."""
    today = today or timezone.localdate()
    try:
        year, month = (int(part) for part in (value or '').split('-'))
        return date(year, month, 1)
    except ValueError:
        return today.replace(day=1)


def month_bounds(month_start: date) -> Tuple[date, date]:
    return month_start, month_start + relativedelta(months=1) - timedelta(days=1)


def adjacent_months(month_start: date) -> Tuple[date, date]:
    return month_start - relativedelta(months=1), month_start + relativedelta(months=1)


def filter_attendance(records: Iterable, month_start: date, search: str = '',
                      status: str = 'all') -> List:
    """Records in the month, matched on employee name, oldest day first."""
    first, last = month_bounds(month_start)
    search = (search or '').strip().lower()
    filtered = [
        r for r in records
        if first <= r.date <= last
        and (not search or search in r.employee_name.lower())
        and (status in ('', 'all') or r.status == status)
    ]
    return sorted(filtered, key=lambda r: (r.date, r.employee_name))


def attendance_stats(records: Iterable, month_start: date) -> Dict[str, int]:
    records = list(records)
    first, last = month_bounds(month_start)
    return {
        'total_days': (last - first).days + 1,
        'working_days': working_days_in_month(month_start),
        'present': len([r for r in records if r.status == 'Present']),
        'absent': len([r for r in records if r.status == 'Absent']),
        'leave': len([r for r in records if r.status == 'Leave']),
        'half_day': len([r for r in records if r.status == 'Half Day']),
        'pending_approval': len([r for r in records if not r.is_approved]),
    }


def calendar_weeks(records: Iterable, month_start: date) -> List[List[Optional[Dict[str, Any]]]]:
    """
    Month grid of weeks starting on Monday.

    Days outside the month are None; each day carries its present and
    absent counts.
    """
    by_day: Dict[date, List] = {}
    for record in records:
        by_day.setdefault(record.date, []).append(record)

    weeks = []
    for week in calendar.Calendar(firstweekday=0).monthdatescalendar(month_start.year, month_start.month):
        row = []
        for current in week:
            if current.month != month_start.month:
                row.append(None)
                continue
            day_records = by_day.get(current, [])
            row.append({
                'date': current,
                'present': len([r for r in day_records if r.status == 'Present']),
                'absent': len([r for r in day_records if r.status == 'Absent']),
                'total': len(day_records),
            })
        weeks.append(row)
    return weeks


def public_holiday_dates(first: date, last: date) -> List[date]:
    from apps.administration.mock_data import HolidayType, holidays

    return [
        h.date for h in holidays.all()
        if h.type == HolidayType.PUBLIC and first <= h.date <= last
    ]


def working_days_between(first: date, last: date) -> int:
    """Monday to Saturday days in the range, less public holidays."""
    closed = set(public_holiday_dates(first, last))
    count = 0
    current = first
    while current <= last:
        if current.weekday() != 6 and current not in closed:
            count += 1
        current += timedelta(days=1)
    return count


def working_days_in_month(month_start: date) -> int:
    return working_days_between(*month_bounds(month_start))


def days_present(employee_id: int, first: date, last: date) -> int:
    """Whole days present for an employee in ``[first, last]``."""
    from apps.attendance.mock_data import attendance_records

    total = sum(
        (DAY_WEIGHTS.get(r.status, Decimal('0'))
         for r in attendance_records.filter(employee_id=employee_id)
         if first <= r.date <= last),
        Decimal('0')
    )
    return int(total.to_integral_value(rounding=ROUND_FLOOR))


class AttendanceService:
    """
    Service class for marking and approving attendance.
    """

    @staticmethod
    def mark_attendance(data: Dict[str, Any]):
        """
        Record attendance for one employee on one day.

        Marking a day that already has an entry replaces it. Attendance
        marked from the console is approved by the console user.
        """
        from apps.attendance.mock_data import attendance_records, get_attendance_for

        values = dict(data)
        values.update(approved_by=settings.CONSOLE_USER_NAME, approved_at=timezone.now())
        existing = get_attendance_for(values['employee_id'], values['date'])
        if existing:
            record = attendance_records.update(existing.id, **values)
            ConsoleLogger.log_record_updated('Attendance', record, record.employee_name)
        else:
            record = attendance_records.create(**values)
            ConsoleLogger.log_record_created('Attendance', record, record.employee_name)
        return record

    @staticmethod
    def approve(record_id: int, approved_by: Optional[str] = None):
        """
        Approve an attendance entry. Approving an approved entry changes nothing.

        Raises:
            RecordNotFoundException: If the entry does not exist.
        """
        from apps.attendance.mock_data import attendance_records

        record = attendance_records.get_or_raise(record_id)
        if record.is_approved:
            return record
        record = attendance_records.update(
            record.id,
            approved_by=approved_by or settings.CONSOLE_USER_NAME,
            approved_at=timezone.now(),
        )
        ConsoleLogger.log_record_updated('Attendance', record, 'approved')
        return record
