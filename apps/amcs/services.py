"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: AMC services: expiry tracking, per-contract billing stats,
             list filtering and the billing workflow.
-------------------------------------------------------------------------
"""
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.utils import timezone

from apps.core.exceptions import ConsoleException, PaymentAlreadyPaidException
from apps.core.logging import ConsoleLogger

# Billing cycle -> months covered by one bill
CYCLE_MONTHS = {
    'Monthly': 1,
    'Quarterly': 3,
    'Half-yearly': 6,
    'Yearly': 12,
}


def days_to_end(amc, today: Optional[date] = None) -> int:
    """Whole days from today until the contract end date (negative once past)."""
    today = today or timezone.localdate()
    return (amc.end_date - today).days


def expiring_amcs(amc_list: Iterable, within: Optional[int] = None,
                  today: Optional[date] = None) -> List:
    """
    Active AMCs ending within ``within`` days (EXPIRY_WARNING_DAYS by default).

    Contracts already past their end date are included; they still need
    renewal or closure.
    """
    from apps.amcs.mock_data import AMCStatus

    within = settings.EXPIRY_WARNING_DAYS if within is None else within
    expiring = [
        amc for amc in amc_list
        if amc.status == AMCStatus.ACTIVE and days_to_end(amc, today) <= within
    ]
    return sorted(expiring, key=lambda amc: amc.end_date)


def amc_stats(amc, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Billing figures shown on an AMC row.

    Returns:
        dict: {
            'total_bills': int, 'paid_bills': int,
            'outstanding': Decimal, 'next_bill': AMCBilling | None,
            'days_to_end': int,
        }
    """
    from apps.amcs.mock_data import get_billings_by_amc_id

    bills = get_billings_by_amc_id(amc.id)
    unpaid = [b for b in bills if not b.paid]
    return {
        'total_bills': len(bills),
        'paid_bills': len(bills) - len(unpaid),
        'outstanding': sum((b.amount for b in unpaid), Decimal('0')),
        'next_bill': unpaid[0] if unpaid else None,
        'days_to_end': days_to_end(amc, today),
    }


def filter_amcs(amc_list: Iterable, search: str = '', status: str = 'all',
                billing_cycle: str = 'all', expiry_within: Optional[int] = None,
                today: Optional[date] = None) -> List:
    """Search by AMC number or client name, then apply the dropdown filters."""
    search = (search or '').strip().lower()
    filtered = []
    for amc in amc_list:
        if search and search not in amc.amc_number.lower() and search not in amc.client_name.lower():
            continue
        if status not in ('', 'all') and amc.status != status:
            continue
        if billing_cycle not in ('', 'all') and amc.billing_cycle != billing_cycle:
            continue
        if expiry_within is not None and days_to_end(amc, today) > expiry_within:
            continue
        filtered.append(amc)
    return filtered


def client_amc_summary(client_id: int) -> Dict[str, Any]:
    """AMC count and outstanding billing for one client."""
    from apps.amcs.mock_data import AMCStatus, get_amcs_by_client_id

    client_amcs = get_amcs_by_client_id(client_id)
    return {
        'amc_count': len(client_amcs),
        'active_amc_count': len([a for a in client_amcs if a.status == AMCStatus.ACTIVE]),
        'outstanding_amount': sum((amc_stats(a)['outstanding'] for a in client_amcs), Decimal('0')),
    }


class AMCService:
    """
    Service class for AMC billing workflow.
    """

    @staticmethod
    def mark_bill_paid(bill_id: int, payment_date: date, payment_mode: str):
        """
        Record payment of an AMC bill.

        Raises:
            RecordNotFoundException: If the bill does not exist.
            PaymentAlreadyPaidException: If the bill is already paid.
        """
        from apps.amcs.mock_data import amc_billings

        bill = amc_billings.get_or_raise(bill_id)
        if bill.paid:
            raise PaymentAlreadyPaidException(
                f"Bill {bill.bill_number} is already paid.",
                details={'bill_id': bill.id}
            )
        amc_billings.update(bill.id, paid=True, payment_date=payment_date, payment_mode=payment_mode)
        ConsoleLogger.log_record_updated('AMC bill', bill, f"{bill.bill_number} paid")
        return bill

    @staticmethod
    def generate_next_bill(amc_id: int):
        """
        Raise the next bill for an AMC according to its billing cycle.

        The period starts the day after the last billed period (or on the
        contract start date) and the amount is the contract value split
        evenly across the bills in a year.

        Raises:
            ConsoleException: If the next period would start after the
                              contract has ended.
        """
        from apps.amcs.mock_data import amc_billings, amcs, get_billings_by_amc_id

        amc = amcs.get_or_raise(amc_id)
        months = CYCLE_MONTHS.get(amc.billing_cycle, 3)
        bills = get_billings_by_amc_id(amc.id)

        period_from = bills[-1].period_to + timedelta(days=1) if bills else amc.start_date
        if period_from > amc.end_date:
            raise ConsoleException(
                f"{amc.amc_number} is fully billed up to its end date.",
                details={'amc_id': amc.id}
            )
        period_to = min(period_from + relativedelta(months=months) - timedelta(days=1), amc.end_date)
        amount = (amc.amount * months / 12).quantize(Decimal('1'), rounding=ROUND_HALF_UP)

        sequence = amc_billings.next_id()
        bill = amc_billings.create(
            amc_id=amc.id,
            bill_number=f"BILL/AMC/{period_from.year}/{sequence:03d}",
            period_from=period_from,
            period_to=period_to,
            amount=amount,
            bill_date=timezone.localdate(),
        )
        ConsoleLogger.log_record_created('AMC bill', bill, bill.bill_number)
        return bill
