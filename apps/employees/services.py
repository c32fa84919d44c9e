"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Staff services: list filters and stats for employees and
             contract workers, code numbering, payroll history and the
             contract-worker CSV import.

             Worker files use one row per worker with the columns in
             WORKER_COLUMNS. Like the payment sheet import, nothing is
             created unless every row is valid.
-------------------------------------------------------------------------
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from apps.core.exceptions import WorkerImportException
from apps.core.logging import ConsoleLogger

WORKER_COLUMNS = ['Name', 'Phone', 'Skill', 'Daily Rate', 'Status', 'Assigned To', 'Address']
REQUIRED_WORKER_COLUMNS = ['Name', 'Phone', 'Skill', 'Daily Rate']


def phone_digits(phone: str) -> Optional[str]:
    """
    The 10-digit mobile number in ``phone``, or None.

    A leading ``91`` country code is accepted and dropped.
    """
    digits = re.sub(r'\D', '', phone or '')
    if len(digits) == 12 and digits.startswith('91'):
        digits = digits[2:]
    return digits if len(digits) == 10 else None


def _next_code(prefix: str, codes: Iterable[str]) -> str:
    used = [
        int(code[len(prefix):]) for code in codes
        if code.startswith(prefix) and code[len(prefix):].isdigit()
    ]
    return f"{prefix}{max(used, default=0) + 1:03d}"


def next_employee_code() -> str:
    from apps.employees.mock_data import employees
    return _next_code('EMP-', (e.employee_code for e in employees.all()))


def next_worker_code() -> str:
    from apps.employees.mock_data import contract_workers
    return _next_code('CW-', (w.worker_code for w in contract_workers.all()))


def filter_employees(records: Iterable, search: str = '', department: str = 'all',
                     status: str = 'all') -> List:
    """Search matches name, employee code or email."""
    search = (search or '').strip().lower()
    filtered = []
    for employee in records:
        if search and not any(
            search in value.lower()
            for value in (employee.name, employee.employee_code, employee.email)
        ):
            continue
        if department not in ('', 'all') and employee.department != department:
            continue
        if status not in ('', 'all') and employee.status != status:
            continue
        filtered.append(employee)
    return filtered


def employee_stats(records: Iterable) -> Dict[str, Any]:
    """Headcount per status and the monthly salary bill of active employees."""
    from apps.employees.mock_data import EmployeeStatus

    records = list(records)
    active = [e for e in records if e.status == EmployeeStatus.ACTIVE]
    return {
        'total': len(records),
        'active': len(active),
        'on_leave': len([e for e in records if e.status == EmployeeStatus.ON_LEAVE]),
        'monthly_payroll': sum((e.salary for e in active), Decimal('0')),
    }


def filter_workers(records: Iterable, search: str = '', skill: str = 'all',
                   status: str = 'all') -> List:
    """Search matches name or worker code, and the phone number as typed."""
    query = (search or '').strip()
    lowered = query.lower()
    filtered = []
    for worker in records:
        if query and lowered not in worker.name.lower() \
                and lowered not in worker.worker_code.lower() \
                and query not in worker.phone:
            continue
        if skill not in ('', 'all') and worker.skill != skill:
            continue
        if status not in ('', 'all') and worker.status != status:
            continue
        filtered.append(worker)
    return filtered


def worker_stats(records: Iterable) -> Dict[str, Any]:
    """Worker counts per status and the average daily rate in whole rupees."""
    from apps.employees.mock_data import WorkerStatus

    records = list(records)
    total_rate = sum((w.daily_rate for w in records), Decimal('0'))
    return {
        'total': len(records),
        'available': len([w for w in records if w.status == WorkerStatus.AVAILABLE]),
        'assigned': len([w for w in records if w.status == WorkerStatus.ASSIGNED]),
        'average_daily_rate': (
            (total_rate / len(records)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
            if records else Decimal('0')
        ),
    }


def distinct_values(records: Iterable, attribute: str) -> List[str]:
    return sorted({getattr(record, attribute) for record in records if getattr(record, attribute)})


def payroll_history(employee_id: Optional[int] = None, contract_worker_id: Optional[int] = None) -> List:
    """Payroll records linked to one employee or contract worker, newest period first."""
    from apps.payroll.mock_data import payroll_records

    if employee_id is not None:
        records = payroll_records.filter(employee_id=employee_id)
    else:
        records = payroll_records.filter(contract_worker_id=contract_worker_id)
    return sorted(records, key=lambda r: r.period_start, reverse=True)


# =====================================================================
# WORKER FILE IMPORT
# =====================================================================


def _cell_text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ''
    return str(value).strip()


def parse_worker_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate one worker row and convert it to ContractWorker field values.

    Raises:
        ValueError: With a message naming the first problem in the row.
    """
    from apps.employees.mock_data import Skill, WorkerStatus

    name = _cell_text(row.get('Name'))
    if not name:
        raise ValueError('Name is required')

    phone = _cell_text(row.get('Phone'))
    if phone_digits(phone) is None:
        raise ValueError(f"Invalid phone number '{phone}'")

    skill = _cell_text(row.get('Skill'))
    if skill not in Skill.values:
        raise ValueError(f"Unknown skill '{skill}'")

    raw_rate = _cell_text(row.get('Daily Rate')).replace(',', '')
    try:
        daily_rate = Decimal(raw_rate)
    except InvalidOperation:
        raise ValueError(f"Invalid daily rate '{raw_rate}'")
    if not daily_rate.is_finite() or daily_rate <= 0:
        raise ValueError('Daily rate must be greater than 0')

    status = _cell_text(row.get('Status')) or WorkerStatus.AVAILABLE
    if status not in WorkerStatus.values:
        raise ValueError(f"Unknown status '{status}'")

    assigned_to = _cell_text(row.get('Assigned To'))
    if status == WorkerStatus.ASSIGNED and not assigned_to:
        raise ValueError('Assigned workers need an assignment')

    return {
        'name': name,
        'phone': phone,
        'skill': skill,
        'daily_rate': daily_rate,
        'status': status,
        'assigned_to': assigned_to,
        'address': _cell_text(row.get('Address')),
    }


def read_worker_file(source) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Read a worker CSV into (file row number, row dict) pairs.

    The header is file row 1. Blank lines are skipped but still counted.

    Raises:
        WorkerImportException: If the file is not readable CSV or required
                               columns are missing.
    """
    try:
        df = pd.read_csv(source, dtype=object, skip_blank_lines=False, encoding='utf-8-sig')
    except (ValueError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise WorkerImportException(details={'reason': str(e)})

    df.columns = [str(column).strip() for column in df.columns]
    missing = [column for column in REQUIRED_WORKER_COLUMNS if column not in df.columns]
    if missing:
        raise WorkerImportException(
            f"Missing required column(s): {', '.join(missing)}",
            details={'missing_columns': missing}
        )

    df = df.dropna(how='all')
    return [(int(index) + 2, row.to_dict()) for index, row in df.iterrows()]


class EmployeeService:
    """
    Service class for employee records.
    """

    @staticmethod
    def create_employee(data: Dict[str, Any]):
        from apps.employees.mock_data import employees

        employee = employees.create(employee_code=next_employee_code(), **data)
        ConsoleLogger.log_record_created('Employee', employee, employee.name)
        return employee

    @staticmethod
    def update_employee(employee_id: int, data: Dict[str, Any]):
        from apps.employees.mock_data import employees

        employee = employees.update(employee_id, **data)
        ConsoleLogger.log_record_updated('Employee', employee, employee.name)
        return employee

    @staticmethod
    def delete_employee(employee_id: int):
        """
        Delete an employee and their attendance. Payroll records are kept
        under the employee's name but lose the link.
        """
        from apps.attendance.mock_data import attendance_records
        from apps.employees.mock_data import employees
        from apps.payroll.mock_data import payroll_records

        employee = employees.delete(employee_id)
        for record in attendance_records.filter(employee_id=employee.id):
            attendance_records.delete(record.id)
        for record in payroll_records.filter(employee_id=employee.id):
            payroll_records.update(record.id, employee_id=None)
        return employee


class ContractWorkerService:
    """
    Service class for contract workers, including the CSV bulk import.
    """

    @staticmethod
    def create_worker(data: Dict[str, Any]):
        from apps.employees.mock_data import contract_workers

        worker = contract_workers.create(worker_code=next_worker_code(), **data)
        ConsoleLogger.log_record_created('Contract worker', worker, worker.name)
        return worker

    @staticmethod
    def update_worker(worker_id: int, data: Dict[str, Any]):
        from apps.employees.mock_data import contract_workers

        worker = contract_workers.update(worker_id, **data)
        ConsoleLogger.log_record_updated('Contract worker', worker, worker.name)
        return worker

    @staticmethod
    def delete_worker(worker_id: int):
        """Delete a worker; their payroll records are kept without the link."""
        from apps.employees.mock_data import contract_workers
        from apps.payroll.mock_data import payroll_records

        worker = contract_workers.delete(worker_id)
        for record in payroll_records.filter(contract_worker_id=worker.id):
            payroll_records.update(record.id, contract_worker_id=None)
        return worker

    @staticmethod
    def import_workers(source) -> Tuple[List, List[Tuple[int, str]]]:
        """
        Import contract workers from a CSV file.

        Returns:
            tuple: (created_workers, row_errors)

        Raises:
            WorkerImportException: If the file itself cannot be read.
        """
        rows = read_worker_file(source)
        parsed, errors = [], []
        for row_number, row in rows:
            try:
                parsed.append(parse_worker_row(row))
            except ValueError as e:
                errors.append((row_number, str(e)))

        if errors:
            ConsoleLogger.log_validation_error(
                'worker_import', {'rows': errors}, {'row_count': len(rows)}
            )
            return [], errors

        created = [ContractWorkerService.create_worker(values) for values in parsed]
        return created, []
