"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock AMC (annual maintenance contract) records and their
             bills. The running contracts are dated relative to the day
             the data is loaded so the expiry banner always has entries.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class AMCStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    ACTIVE = 'Active', _('Active')
    EXPIRED = 'Expired', _('Expired')
    CANCELED = 'Canceled', _('Canceled')


class BillingCycle(models.TextChoices):
    MONTHLY = 'Monthly', _('Monthly')
    QUARTERLY = 'Quarterly', _('Quarterly')
    HALF_YEARLY = 'Half-yearly', _('Half-yearly')
    YEARLY = 'Yearly', _('Yearly')


class BillPaymentMode(models.TextChoices):
    CASH = 'Cash', _('Cash')
    CHEQUE = 'Cheque', _('Cheque')
    BANK_TRANSFER = 'Bank Transfer', _('Bank Transfer')
    UPI = 'UPI', _('UPI')


@dataclass
class AMC:
    id: int
    client_id: int
    amc_number: str
    start_date: date
    end_date: date
    amount: Decimal
    status: str = AMCStatus.PENDING
    billing_cycle: str = BillingCycle.QUARTERLY
    description: str = ''
    notes: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def client_name(self) -> str:
        from apps.clients.mock_data import get_client_name
        return get_client_name(self.client_id)

    @property
    def days_remaining(self) -> int:
        from apps.amcs.services import days_to_end
        return days_to_end(self)


@dataclass
class AMCBilling:
    id: int
    amc_id: int
    bill_number: str
    period_from: date
    period_to: date
    amount: Decimal
    bill_date: Optional[date] = None
    paid: bool = False
    payment_date: Optional[date] = None
    payment_mode: Optional[str] = None
    notes: str = ''


def _seed_amcs() -> List[AMC]:
    today = timezone.localdate()
    return [
        AMC(
            id=1,
            client_id=1,
            amc_number='AMC/2024/028',
            start_date=today - timedelta(days=318),
            end_date=today + timedelta(days=12),
            status=AMCStatus.ACTIVE,
            billing_cycle=BillingCycle.QUARTERLY,
            amount=Decimal('500000'),
            description='Annual maintenance for electrical panels and systems',
            notes='Client requires 24/7 support',
            created_at=stamp('2024-12-15T10:00:00Z'),
            updated_at=stamp('2025-01-01T08:00:00Z'),
        ),
        AMC(
            id=2,
            client_id=2,
            amc_number='AMC/2024/033',
            start_date=today - timedelta(days=520),
            end_date=today + timedelta(days=17),
            status=AMCStatus.ACTIVE,
            billing_cycle=BillingCycle.MONTHLY,
            amount=Decimal('300000'),
            description='Preventive maintenance for industrial electrical equipment',
            notes='Monthly site visits required',
            created_at=stamp('2024-05-20T09:00:00Z'),
            updated_at=stamp('2024-06-01T10:00:00Z'),
        ),
        AMC(
            id=3,
            client_id=1,
            amc_number='AMC/2024/015',
            start_date=day('2024-03-01'),
            end_date=day('2025-02-28'),
            status=AMCStatus.EXPIRED,
            billing_cycle=BillingCycle.HALF_YEARLY,
            amount=Decimal('450000'),
            description='Panel board maintenance contract',
            created_at=stamp('2024-02-15T11:00:00Z'),
            updated_at=stamp('2025-03-01T09:00:00Z'),
        ),
        AMC(
            id=4,
            client_id=1,
            amc_number='AMC/2025/045',
            start_date=today - timedelta(days=2),
            end_date=today + timedelta(days=6),
            status=AMCStatus.ACTIVE,
            billing_cycle=BillingCycle.YEARLY,
            amount=Decimal('600000'),
            description='Comprehensive electrical maintenance',
            notes='Expiring soon - need to discuss renewal',
            created_at=stamp('2025-10-20T14:00:00Z'),
            updated_at=stamp('2025-11-01T08:00:00Z'),
        ),
    ]


def _seed_billings() -> List[AMCBilling]:
    return [
        AMCBilling(
            id=1, amc_id=1, bill_number='BILL/AMC/2025/001',
            period_from=day('2025-01-01'), period_to=day('2025-03-31'),
            amount=Decimal('125000'), bill_date=day('2025-01-01'),
            paid=True, payment_date=day('2025-01-15'), payment_mode=BillPaymentMode.BANK_TRANSFER,
        ),
        AMCBilling(
            id=2, amc_id=1, bill_number='BILL/AMC/2025/002',
            period_from=day('2025-04-01'), period_to=day('2025-06-30'),
            amount=Decimal('125000'), bill_date=day('2025-04-01'),
            paid=True, payment_date=day('2025-04-10'), payment_mode=BillPaymentMode.CHEQUE,
        ),
        AMCBilling(
            id=3, amc_id=1, bill_number='BILL/AMC/2025/003',
            period_from=day('2025-07-01'), period_to=day('2025-09-30'),
            amount=Decimal('125000'), bill_date=day('2025-07-01'),
        ),
        AMCBilling(
            id=4, amc_id=2, bill_number='BILL/AMC/2025/010',
            period_from=day('2025-10-01'), period_to=day('2025-10-31'),
            amount=Decimal('25000'), bill_date=day('2025-10-01'),
        ),
    ]


amcs: MockRepository[AMC] = MockRepository('AMC', AMC, _seed_amcs)
amc_billings: MockRepository[AMCBilling] = MockRepository('AMC bill', AMCBilling, _seed_billings)


def get_amc_by_id(pk: int) -> Optional[AMC]:
    return amcs.get_by_id(pk)


def get_amcs_by_client_id(client_id: int) -> List[AMC]:
    return amcs.filter(client_id=client_id)


def get_billings_by_amc_id(amc_id: int) -> List[AMCBilling]:
    return sorted(amc_billings.filter(amc_id=amc_id), key=lambda b: b.period_from)
