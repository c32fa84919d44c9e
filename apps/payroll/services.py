"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Payroll computation service. Pro-rates the monthly salary
             by attendance and derives gross, deductions and net pay:

             per_day_rate  = round(base_salary / working_days)
             earned_salary = per_day_rate * days_present
             gross_amount  = earned_salary + sum(allowances)
             net_amount    = gross_amount - sum(deductions)

             Amounts are whole rupees; the per-day rate rounds half up.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from apps.core.exceptions import PayrollAlreadyPaidException, PayrollComputationException
from apps.core.logging import ConsoleLogger

Number = Union[int, Decimal, str]

RUPEE = Decimal('1')


@dataclass
class LineItem:
    """A named allowance or deduction."""
    name: str
    amount: Decimal


@dataclass
class PayrollComputation:
    """Breakdown shown on the payslip."""
    base_salary: Decimal
    working_days: int
    days_present: int
    per_day_rate: Decimal
    earned_salary: Decimal
    allowances: List[LineItem] = field(default_factory=list)
    gross_amount: Decimal = Decimal('0')
    deductions: List[LineItem] = field(default_factory=list)
    total_deductions: Decimal = Decimal('0')
    net_amount: Decimal = Decimal('0')

    @property
    def total_allowances(self) -> Decimal:
        return sum((item.amount for item in self.allowances), Decimal('0'))


def _amount(value, label: str) -> Decimal:
    """A finite rupee amount, or PayrollComputationException."""
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        amount = None
    if amount is None or not amount.is_finite():
        raise PayrollComputationException(
            f"{label} must be a number.",
            details={'value': str(value)}
        )
    return amount


def _day_count(value, label: str) -> int:
    """A whole number of days; fractional counts are rejected, not truncated."""
    days = _amount(value, label)
    if days != days.to_integral_value():
        raise PayrollComputationException(
            f"{label} must be a whole number of days.",
            details={'value': str(value)}
        )
    return int(days)


def _line_items(items: Optional[Iterable], kind: str) -> List[LineItem]:
    """Normalise ``(name, amount)`` pairs, dicts or LineItems into LineItems."""
    normalised = []
    for item in items or []:
        if isinstance(item, LineItem):
            name, amount = item.name, item.amount
        elif isinstance(item, dict):
            name, amount = item['name'], item['amount']
        else:
            name, amount = item
        amount = _amount(amount, f"{kind.capitalize()} '{name}'")
        if amount < 0:
            raise PayrollComputationException(
                f"{kind.capitalize()} '{name}' cannot be negative.",
                details={'kind': kind, 'name': name, 'amount': str(amount)}
            )
        normalised.append(LineItem(name=name, amount=amount))
    return normalised


def compute_payroll(
    base_salary: Number,
    working_days: int,
    days_present: int,
    allowances: Optional[Sequence] = None,
    deductions: Optional[Sequence] = None,
) -> PayrollComputation:
    """
    Compute one payroll period.

    Args:
        base_salary: Monthly base salary in rupees.
        working_days: Working days in the period (must be positive).
        days_present: Days the employee was present (0..working_days).
        allowances: Optional named allowances, as LineItem, dict or
                    ``(name, amount)`` pairs.
        deductions: Optional named deductions, same shapes as allowances.

    Returns:
        PayrollComputation with every intermediate figure.

    Raises:
        PayrollComputationException: If an input is not a number, a day count
            is fractional, or a value is out of range.

    Example:
        >>> compute_payroll(35000, 26, 26).per_day_rate
        Decimal('1346')
    """
    base_salary = _amount(base_salary, "Base salary")
    working_days = _day_count(working_days, "Working days")
    days_present = _day_count(days_present, "Days present")

    if base_salary < 0:
        raise PayrollComputationException(
            "Base salary cannot be negative.",
            details={'base_salary': str(base_salary)}
        )
    if working_days <= 0:
        raise PayrollComputationException(
            "Working days must be greater than 0.",
            details={'working_days': working_days}
        )
    if days_present < 0 or days_present > working_days:
        raise PayrollComputationException(
            "Days present must be between 0 and the number of working days.",
            details={'working_days': working_days, 'days_present': days_present}
        )

    allowance_items = _line_items(allowances, 'allowance')
    deduction_items = _line_items(deductions, 'deduction')

    per_day_rate = (base_salary / Decimal(working_days)).quantize(RUPEE, rounding=ROUND_HALF_UP)
    earned_salary = per_day_rate * days_present
    gross_amount = earned_salary + sum((a.amount for a in allowance_items), Decimal('0'))
    total_deductions = sum((d.amount for d in deduction_items), Decimal('0'))
    net_amount = gross_amount - total_deductions

    return PayrollComputation(
        base_salary=base_salary,
        working_days=working_days,
        days_present=days_present,
        per_day_rate=per_day_rate,
        earned_salary=earned_salary,
        allowances=allowance_items,
        gross_amount=gross_amount,
        deductions=deduction_items,
        total_deductions=total_deductions,
        net_amount=net_amount,
    )


def filter_payroll_records(
    records: Iterable,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    status: str = 'all',
    search: str = '',
) -> List:
    """
    Filter payroll records the way the payroll page does.

    A record is in the period when its ``period_start`` falls within
    ``[period_start, period_end]``.
    """
    search = (search or '').strip().lower()
    filtered = []
    for record in records:
        if period_start and record.period_start < period_start:
            continue
        if period_end and record.period_start > period_end:
            continue
        if status and status != 'all' and record.payment_status != status:
            continue
        if search and search not in record.employee_name.lower():
            continue
        filtered.append(record)
    return filtered


def summarize_payroll(records: Sequence) -> Dict:
    """
    Summary cards for a list of payroll records.

    Returns:
        dict: {
            'total_payroll_cost': Decimal,
            'employee_count': int, 'employee_cost': Decimal,
            'contract_count': int, 'contract_cost': Decimal,
            'pending_count': int, 'paid_count': int,
            'average_net': Decimal,
        }
    """
    from apps.payroll.mock_data import EmployeeType, PaymentStatus

    employee_records = [r for r in records if r.employee_type == EmployeeType.EMPLOYEE]
    contract_records = [r for r in records if r.employee_type == EmployeeType.CONTRACT_WORKER]
    total = sum((r.net_amount for r in records), Decimal('0'))

    return {
        'total_payroll_cost': total,
        'employee_count': len(employee_records),
        'employee_cost': sum((r.net_amount for r in employee_records), Decimal('0')),
        'contract_count': len(contract_records),
        'contract_cost': sum((r.net_amount for r in contract_records), Decimal('0')),
        'pending_count': len([r for r in records if r.payment_status == PaymentStatus.PENDING]),
        'paid_count': len([r for r in records if r.payment_status == PaymentStatus.PAID]),
        'average_net': (
            (total / len(records)).quantize(RUPEE, rounding=ROUND_HALF_UP) if records else Decimal('0')
        ),
    }


class PayrollService:
    """
    Service class for payroll record workflow.

    Provides methods to mark records paid (singly or in bulk) and to
    recompute a record from its stored inputs.
    """

    @staticmethod
    def mark_paid(record_id: int, payment_mode: str, payment_date: date,
                  bank_transaction_ref: str = ''):
        """
        Mark a payroll record as paid.

        Raises:
            RecordNotFoundException: If the record does not exist.
            PayrollAlreadyPaidException: If the record is already paid.
        """
        from apps.payroll.mock_data import PaymentStatus, payroll_records

        record = payroll_records.get_or_raise(record_id)
        if record.payment_status == PaymentStatus.PAID:
            raise PayrollAlreadyPaidException(
                f"Payroll for {record.employee_name} is already paid.",
                details={'payroll_id': record.id}
            )

        payroll_records.update(
            record.id,
            payment_status=PaymentStatus.PAID,
            payment_mode=payment_mode,
            payment_date=payment_date,
            bank_transaction_ref=bank_transaction_ref or None,
        )
        ConsoleLogger.log_payroll_paid(record)
        return record

    @staticmethod
    def bulk_mark_paid(record_ids: Iterable[int], payment_mode: str,
                       payment_date: date) -> Tuple[List, List[str]]:
        """
        Mark several records paid; already-paid records are skipped.

        Returns:
            tuple: (paid_records: list, skipped: list[str])
        """
        paid, skipped = [], []
        for record_id in record_ids:
            try:
                paid.append(PayrollService.mark_paid(record_id, payment_mode, payment_date))
            except PayrollAlreadyPaidException as exc:
                skipped.append(exc.message)
        return paid, skipped

    @staticmethod
    def recalculate(record_id: int):
        """Recompute a record's figures from its stored salary and attendance."""
        from apps.payroll.mock_data import payroll_records

        record = payroll_records.get_or_raise(record_id)
        computation = compute_payroll(
            record.base_salary,
            record.working_days,
            record.days_present,
            allowances=record.computation.allowances,
            deductions=record.computation.deductions,
        )
        return payroll_records.update(
            record.id,
            computation=computation,
            days_absent=record.working_days - record.days_present,
        )

    @staticmethod
    def apply_attendance(record_id: int):
        """
        Take days present from the employee's attendance in the pay period
        and recompute the record.

        Raises:
            RecordNotFoundException: If the record does not exist.
            PayrollAlreadyPaidException: If the record is already paid.
            PayrollComputationException: If the record has no linked
                                         employee, no attendance in the
                                         period, or more days present
                                         than working days.
        """
        from apps.attendance.mock_data import attendance_records
        from apps.attendance.services import days_present
        from apps.payroll.mock_data import payroll_records

        record = payroll_records.get_or_raise(record_id)
        if record.is_paid:
            raise PayrollAlreadyPaidException(
                f"Payroll for {record.employee_name} is already paid.",
                details={'payroll_id': record.id}
            )
        if record.employee is None:
            raise PayrollComputationException(
                f"{record.employee_name} is not linked to an employee with attendance.",
                details={'payroll_id': record.id}
            )

        marked = [
            r for r in attendance_records.filter(employee_id=record.employee_id)
            if record.period_start <= r.date <= record.period_end
        ]
        if not marked:
            raise PayrollComputationException(
                f"No attendance is marked for {record.employee_name} in this period.",
                details={'payroll_id': record.id, 'employee_id': record.employee_id}
            )

        present = days_present(record.employee_id, record.period_start, record.period_end)
        computation = compute_payroll(
            record.base_salary,
            record.working_days,
            present,
            allowances=record.computation.allowances,
            deductions=record.computation.deductions,
        )
        record = payroll_records.update(
            record.id,
            computation=computation,
            days_present=present,
            days_absent=record.working_days - present,
        )
        ConsoleLogger.log_record_updated('Payroll', record, f"{record.employee_name} attendance applied")
        return record
