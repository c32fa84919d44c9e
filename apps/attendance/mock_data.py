"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock daily attendance of employees. October 2025 is filled
             in for the staff on the October payroll so that attendance
             agrees with the days present on each payroll record; a few
             November entries follow.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class AttendanceStatus(models.TextChoices):
    PRESENT = 'Present', _('Present')
    ABSENT = 'Absent', _('Absent')
    LEAVE = 'Leave', _('Leave')
    HALF_DAY = 'Half Day', _('Half Day')


@dataclass
class AttendanceRecord:
    id: int
    employee_id: int
    date: date
    status: str
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    notes: str = ''
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def employee_name(self) -> str:
        from apps.employees.mock_data import get_employee_name
        return get_employee_name(self.employee_id)

    @property
    def is_approved(self) -> bool:
        return self.approved_by is not None


# Office closed on Sundays and on 2 October (Gandhi Jayanti)
_OCTOBER_CLOSED = {date(2025, 10, 2)}

# Employee -> {date: (status, note)} for the days they were not present
_OCTOBER_EXCEPTIONS = {
    101: {},
    102: {date(2025, 10, 30): (AttendanceStatus.ABSENT, ''),
          date(2025, 10, 31): (AttendanceStatus.ABSENT, '')},
    103: {},
    104: {date(2025, 10, 14): (AttendanceStatus.LEAVE, 'Sick leave')},
    105: {},
}


def _october_days() -> List[date]:
    first = date(2025, 10, 1)
    days = [first + timedelta(days=offset) for offset in range(31)]
    return [d for d in days if d.weekday() != 6 and d not in _OCTOBER_CLOSED]


def _seed_attendance() -> List[AttendanceRecord]:
    records = []
    pk = 1
    for employee_id, exceptions in _OCTOBER_EXCEPTIONS.items():
        for work_day in _october_days():
            status, note = exceptions.get(work_day, (AttendanceStatus.PRESENT, ''))
            present = status == AttendanceStatus.PRESENT
            approved_at = stamp(f"{work_day.isoformat()}T18:30:00Z")
            records.append(AttendanceRecord(
                id=pk,
                employee_id=employee_id,
                date=work_day,
                status=status,
                check_in=time(9, 15) if present else None,
                check_out=time(18, 30) if present else None,
                notes=note,
                approved_by='Admin',
                approved_at=approved_at,
                created_at=approved_at,
                updated_at=approved_at,
            ))
            pk += 1

    november = [
        (101, '2025-11-03', AttendanceStatus.PRESENT, time(9, 15), time(18, 30), '', 'Admin'),
        (102, '2025-11-03', AttendanceStatus.PRESENT, time(9, 0), time(18, 0), '', 'Admin'),
        (101, '2025-11-04', AttendanceStatus.PRESENT, time(9, 10), None, '', 'Admin'),
        (103, '2025-11-03', AttendanceStatus.LEAVE, None, None, 'Medical leave', None),
        (104, '2025-11-03', AttendanceStatus.HALF_DAY, time(9, 30), time(13, 30), 'Bank visit', None),
    ]
    for employee_id, on, status, check_in, check_out, notes, approved_by in november:
        created = stamp(f"{on}T19:00:00Z")
        records.append(AttendanceRecord(
            id=pk, employee_id=employee_id, date=day(on), status=status,
            check_in=check_in, check_out=check_out, notes=notes,
            approved_by=approved_by, approved_at=created if approved_by else None,
            created_at=created, updated_at=created,
        ))
        pk += 1
    return records


attendance_records: MockRepository[AttendanceRecord] = MockRepository(
    'Attendance record', AttendanceRecord, _seed_attendance
)


def get_attendance_by_employee_id(employee_id: int) -> List[AttendanceRecord]:
    """Attendance of one employee, newest first."""
    return sorted(
        attendance_records.filter(employee_id=employee_id),
        key=lambda r: r.date,
        reverse=True
    )


def get_attendance_for(employee_id: int, on: date) -> Optional[AttendanceRecord]:
    for record in attendance_records.filter(employee_id=employee_id):
        if record.date == on:
            return record
    return None
