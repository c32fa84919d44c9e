"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock outgoing payments to vendors, contractors, employees
             and utilities.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class PaymentStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    PAID = 'Paid', _('Paid')
    OVERDUE = 'Overdue', _('Overdue')
    HOLD = 'Hold', _('Hold')
    CANCELLED = 'Cancelled', _('Cancelled')


class PaymentCategory(models.TextChoices):
    VENDOR = 'Vendor', _('Vendor')
    CONTRACTOR = 'Contractor', _('Contractor')
    EMPLOYEE = 'Employee', _('Employee')
    UTILITY = 'Utility', _('Utility')
    OTHER = 'Other', _('Other')


class PaymentMode(models.TextChoices):
    CASH = 'Cash', _('Cash')
    CHEQUE = 'Cheque', _('Cheque')
    BANK_TRANSFER = 'Bank Transfer', _('Bank Transfer')
    UPI = 'UPI', _('UPI')
    NEFT_RTGS = 'NEFT/RTGS', _('NEFT/RTGS')


@dataclass
class Payment:
    id: int
    payment_number: str
    category: str
    amount: Decimal
    description: str
    due_date: date
    status: str = PaymentStatus.PENDING
    vendor_name: str = ''
    contractor_id: Optional[int] = None
    contractor_name: str = ''
    paid_date: Optional[date] = None
    payment_mode: str = ''
    transaction_reference: str = ''
    notes: str = ''
    created_by: str = 'Admin'
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def payee_name(self) -> str:
        return self.vendor_name or self.contractor_name or '-'

    def __str__(self) -> str:
        return self.payment_number


def _seed_payments() -> List[Payment]:
    return [
        Payment(
            id=1,
            payment_number='PAY-2025-001',
            vendor_name='ABC Electric Supplies',
            category=PaymentCategory.VENDOR,
            amount=Decimal('45000'),
            description='Electrical components for BSNL project',
            due_date=day('2025-11-05'),
            status=PaymentStatus.PENDING,
            created_at=stamp('2025-10-25T00:00:00Z'),
            updated_at=stamp('2025-10-25T00:00:00Z'),
        ),
        Payment(
            id=2,
            payment_number='PAY-2025-002',
            contractor_id=1,
            contractor_name='Ramesh Kumar',
            category=PaymentCategory.CONTRACTOR,
            amount=Decimal('28000'),
            description='Contract work payment - October',
            due_date=day('2025-11-01'),
            paid_date=day('2025-10-31'),
            status=PaymentStatus.OVERDUE,
            payment_mode=PaymentMode.BANK_TRANSFER,
            transaction_reference='TXN123456789',
            created_at=stamp('2025-10-20T00:00:00Z'),
            updated_at=stamp('2025-10-31T00:00:00Z'),
        ),
        Payment(
            id=3,
            payment_number='PAY-2025-003',
            vendor_name='Metro Utilities',
            category=PaymentCategory.UTILITY,
            amount=Decimal('12500'),
            description='Office electricity bill - October',
            due_date=day('2025-11-10'),
            paid_date=day('2025-11-02'),
            status=PaymentStatus.PAID,
            payment_mode=PaymentMode.UPI,
            transaction_reference='UPI/98765432',
            created_at=stamp('2025-11-01T00:00:00Z'),
            updated_at=stamp('2025-11-02T00:00:00Z'),
        ),
        Payment(
            id=4,
            payment_number='PAY-2025-004',
            contractor_id=2,
            contractor_name='Sunil Verma',
            category=PaymentCategory.CONTRACTOR,
            amount=Decimal('32000'),
            description='Site maintenance work',
            due_date=day('2025-10-28'),
            status=PaymentStatus.OVERDUE,
            notes='Payment delayed due to pending verification',
            created_at=stamp('2025-10-18T00:00:00Z'),
            updated_at=stamp('2025-10-28T00:00:00Z'),
        ),
    ]


payments: MockRepository[Payment] = MockRepository('Payment', Payment, _seed_payments)


def get_payment_by_id(pk: int) -> Optional[Payment]:
    return payments.get_by_id(pk)
