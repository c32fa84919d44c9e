"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock payroll records for the October 2025 pay period.
             Figures are derived with compute_payroll() so the seed data
             always agrees with the payroll formula.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp
from apps.payroll.services import PayrollComputation, compute_payroll


class EmployeeType(models.TextChoices):
    EMPLOYEE = 'Employee', _('Employee')
    CONTRACT_WORKER = 'Contract Worker', _('Contract Worker')


class PaymentStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    PAID = 'Paid', _('Paid')
    HOLD = 'Hold', _('Hold')


class PaymentMode(models.TextChoices):
    CASH = 'Cash', _('Cash')
    CHEQUE = 'Cheque', _('Cheque')
    BANK_TRANSFER = 'Bank Transfer', _('Bank Transfer')
    UPI = 'UPI', _('UPI')


@dataclass
class PayrollRecord:
    id: int
    employee_name: str
    employee_type: str
    period_start: date
    period_end: date
    working_days: int
    days_present: int
    days_absent: int
    base_salary: Decimal
    computation: PayrollComputation
    payment_status: str
    employee_id: Optional[int] = None
    contract_worker_id: Optional[int] = None
    payment_date: Optional[date] = None
    payment_mode: Optional[str] = None
    bank_transaction_ref: Optional[str] = None
    notes: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def gross_amount(self) -> Decimal:
        return self.computation.gross_amount

    @property
    def deductions(self) -> Decimal:
        return self.computation.total_deductions

    @property
    def net_amount(self) -> Decimal:
        return self.computation.net_amount

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def employee(self):
        from apps.employees.mock_data import get_employee_by_id
        return get_employee_by_id(self.employee_id)

    @property
    def contract_worker(self):
        from apps.employees.mock_data import get_contract_worker_by_id
        return get_contract_worker_by_id(self.contract_worker_id)


def _record(pk, name, employee_type, working_days, days_present, base_salary,
            allowances=None, deductions=None, **extra) -> PayrollRecord:
    extra.setdefault('created_at', stamp('2025-10-31T10:00:00Z'))
    extra.setdefault('updated_at', extra['created_at'])
    return PayrollRecord(
        id=pk,
        employee_name=name,
        employee_type=employee_type,
        period_start=day('2025-10-01'),
        period_end=day('2025-10-31'),
        working_days=working_days,
        days_present=days_present,
        days_absent=working_days - days_present,
        base_salary=Decimal(base_salary),
        computation=compute_payroll(base_salary, working_days, days_present, allowances, deductions),
        **extra
    )


def _seed_payroll_records() -> List[PayrollRecord]:
    return [
        _record(
            1, 'Rajesh Kumar', EmployeeType.EMPLOYEE, 26, 26, 35000,
            allowances=[('Conveyance', 2000), ('HRA', 3500)],
            deductions=[('PF', 1750), ('ESI', 525)],
            employee_id=101,
            payment_status=PaymentStatus.PAID,
            payment_date=day('2025-11-01'),
            payment_mode=PaymentMode.BANK_TRANSFER,
            bank_transaction_ref='TXN1234567890',
            notes='October 2025 salary',
            updated_at=stamp('2025-11-01T14:30:00Z'),
        ),
        _record(
            2, 'Priya Sharma', EmployeeType.EMPLOYEE, 26, 24, 28000,
            allowances=[('Conveyance', 1500), ('HRA', 2800)],
            deductions=[('PF', 1400), ('ESI', 420)],
            employee_id=102,
            payment_status=PaymentStatus.PENDING,
            notes='October 2025 salary - 2 days absent',
        ),
        _record(
            3, 'Amit Patel', EmployeeType.EMPLOYEE, 26, 26, 42000,
            allowances=[('Conveyance', 2500), ('HRA', 4200), ('Special Allowance', 3000)],
            deductions=[('PF', 2100), ('ESI', 630), ('Professional Tax', 200)],
            employee_id=103,
            payment_status=PaymentStatus.PENDING,
            notes='October 2025 salary',
        ),
        _record(
            4, 'Ramesh Singh', EmployeeType.CONTRACT_WORKER, 26, 22, 18000,
            deductions=[('Advance Deduction', 2000)],
            contract_worker_id=201,
            payment_status=PaymentStatus.HOLD,
            notes='October 2025 - On hold due to advance adjustment',
        ),
        _record(
            5, 'Sunil Yadav', EmployeeType.CONTRACT_WORKER, 26, 26, 22000,
            contract_worker_id=202,
            payment_status=PaymentStatus.PAID,
            payment_date=day('2025-11-01'),
            payment_mode=PaymentMode.CASH,
            notes='October 2025 - Full attendance',
            updated_at=stamp('2025-11-01T09:00:00Z'),
        ),
        _record(
            6, 'Anita Desai', EmployeeType.EMPLOYEE, 26, 25, 32000,
            allowances=[('Conveyance', 2000), ('HRA', 3200)],
            deductions=[('PF', 1600), ('ESI', 480)],
            employee_id=104,
            payment_status=PaymentStatus.PENDING,
            notes='October 2025 salary - 1 day sick leave',
        ),
        _record(
            7, 'Manoj Kumar', EmployeeType.CONTRACT_WORKER, 26, 20, 20000,
            contract_worker_id=203,
            payment_status=PaymentStatus.PENDING,
            notes='October 2025 - Multiple absences',
        ),
        _record(
            8, 'Deepak Verma', EmployeeType.EMPLOYEE, 26, 26, 38000,
            allowances=[('Conveyance', 2200), ('HRA', 3800), ('Performance Bonus', 2000)],
            deductions=[('PF', 1900), ('ESI', 570)],
            employee_id=105,
            payment_status=PaymentStatus.PAID,
            payment_date=day('2025-11-01'),
            payment_mode=PaymentMode.BANK_TRANSFER,
            bank_transaction_ref='TXN9876543210',
            notes='October 2025 salary with performance bonus',
            updated_at=stamp('2025-11-01T16:00:00Z'),
        ),
    ]


payroll_records: MockRepository[PayrollRecord] = MockRepository(
    'Payroll record', PayrollRecord, _seed_payroll_records
)


def get_payroll_records_by_period(start_date: date, end_date: date) -> List[PayrollRecord]:
    return [
        record for record in payroll_records.all()
        if start_date <= record.period_start <= end_date
    ]


def get_payroll_record_by_id(pk: int) -> Optional[PayrollRecord]:
    return payroll_records.get_by_id(pk)
