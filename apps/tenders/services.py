"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tender services: deposit auto-calculation from the estimated
             value, tender statistics and the create/edit/refund
             workflow.

             EMD = 5%, SD1 = 2%, SD2 = 3% of the estimated value.
             Amounts are only derived for new tenders whose SD1 and SD2
             fields are both empty; any amount entered manually is kept.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional, Union

from django.utils import timezone

from apps.core.exceptions import EMDRefundException
from apps.core.logging import ConsoleLogger

EMD_RATE = Decimal('0.05')
SD1_RATE = Decimal('0.02')
SD2_RATE = Decimal('0.03')

PAISE = Decimal('0.01')

Amount = Union[Decimal, int, str, None]


@dataclass
class TenderAmounts:
    """EMD and security deposit amounts for a tender."""
    emd_amount: Optional[Decimal]
    sd1_amount: Optional[Decimal]
    sd2_amount: Optional[Decimal]
    auto_calculated: bool = False


def _percent(value: Decimal, rate: Decimal) -> Decimal:
    return (value * rate).quantize(PAISE, rounding=ROUND_HALF_UP)


def _amount(value: Amount) -> Optional[Decimal]:
    if value is None or value == '':
        return None
    return Decimal(str(value))


def calculate_financials(estimated_value: Amount) -> TenderAmounts:
    """
    Deposit amounts for an estimated contract value.

    Example:
        >>> calculate_financials(10000000).emd_amount
        Decimal('500000.00')
    """
    value = _amount(estimated_value) or Decimal('0')
    return TenderAmounts(
        emd_amount=_percent(value, EMD_RATE),
        sd1_amount=_percent(value, SD1_RATE),
        sd2_amount=_percent(value, SD2_RATE),
        auto_calculated=True,
    )


def resolve_financials(
    estimated_value: Amount,
    emd_amount: Amount = None,
    sd1_amount: Amount = None,
    sd2_amount: Amount = None,
    is_new: bool = True,
) -> TenderAmounts:
    """
    Work out the deposit amounts to store for a submitted tender.

    Auto-calculation applies only to a new tender with both SD fields
    empty; a manually entered EMD still wins in that case. Otherwise the
    submitted amounts are returned as entered (empty stays empty).

    Args:
        estimated_value: The tender's estimated contract value.
        emd_amount: Manually entered EMD, or None.
        sd1_amount: Manually entered SD1, or None.
        sd2_amount: Manually entered SD2, or None.
        is_new: False when editing an existing tender.

    Returns:
        TenderAmounts with ``auto_calculated`` set when percentages were applied.
    """
    emd, sd1, sd2 = _amount(emd_amount), _amount(sd1_amount), _amount(sd2_amount)

    if is_new and sd1 is None and sd2 is None:
        calculated = calculate_financials(estimated_value)
        if emd is not None:
            calculated.emd_amount = emd
        return calculated

    return TenderAmounts(emd_amount=emd, sd1_amount=sd1, sd2_amount=sd2)


def display_amounts(tender, financials) -> TenderAmounts:
    """
    Amounts shown on the tender page.

    Stored amounts take precedence; missing or zero ones fall back to
    the percentage of the estimated value.
    """
    calculated = calculate_financials(tender.estimated_value)
    if financials is None:
        return calculated
    return TenderAmounts(
        emd_amount=financials.emd_amount or calculated.emd_amount,
        sd1_amount=financials.sd1_amount or calculated.sd1_amount,
        sd2_amount=financials.sd2_amount or calculated.sd2_amount,
    )


def tender_stats(tender_list: Iterable) -> Dict[str, Any]:
    """
    Summary cards for the tenders page.

    Returns:
        dict: {'total', 'draft', 'filed', 'awarded', 'lost', 'closed',
               'total_value', 'awarded_value'}
    """
    from apps.tenders.mock_data import TenderStatus

    tender_list = list(tender_list)

    def count(status):
        return len([t for t in tender_list if t.status == status])

    return {
        'total': len(tender_list),
        'draft': count(TenderStatus.DRAFT),
        'filed': count(TenderStatus.FILED),
        'awarded': count(TenderStatus.AWARDED),
        'lost': count(TenderStatus.LOST),
        'closed': count(TenderStatus.CLOSED),
        'total_value': sum((t.estimated_value for t in tender_list), Decimal('0')),
        'awarded_value': sum(
            (t.estimated_value for t in tender_list if t.status == TenderStatus.AWARDED),
            Decimal('0')
        ),
    }


class TenderService:
    """
    Service class for the tender workflow.

    Keeps the tender, its financials and its activity feed in step.
    """

    TENDER_FIELDS = (
        'name', 'reference_number', 'description', 'filed_date',
        'start_date', 'end_date', 'estimated_value', 'status',
    )
    DD_FIELDS = ('emd_dd_number', 'emd_dd_date', 'emd_bank')

    @staticmethod
    def log_activity(tender_id: int, activity_type: str, description: str,
                     performed_by: str = 'Admin User'):
        from apps.tenders.mock_data import tender_activities

        return tender_activities.create(
            tender_id=tender_id,
            activity_type=activity_type,
            description=description,
            performed_by=performed_by,
        )

    @staticmethod
    def create_tender(data: Dict[str, Any]):
        """
        Create a tender from cleaned form data, deriving its deposits.

        Returns:
            tuple: (tender, TenderAmounts)
        """
        from apps.tenders.mock_data import (
            TenderActivityType, TenderStatus, tender_financials, tenders
        )

        tender = tenders.create(**{f: data.get(f) for f in TenderService.TENDER_FIELDS})
        amounts = resolve_financials(
            tender.estimated_value,
            data.get('emd_amount'),
            data.get('sd1_amount'),
            data.get('sd2_amount'),
            is_new=True,
        )
        tender_financials.create(
            tender_id=tender.id,
            emd_amount=amounts.emd_amount,
            emd_refundable=tender.status != TenderStatus.AWARDED,
            sd1_amount=amounts.sd1_amount,
            sd2_amount=amounts.sd2_amount,
            **{f: data.get(f) or TenderService._blank(f) for f in TenderService.DD_FIELDS}
        )
        TenderService.log_activity(tender.id, TenderActivityType.CREATED, 'Tender created')
        ConsoleLogger.log_record_created('Tender', tender, tender.reference_number)
        return tender, amounts

    @staticmethod
    def update_tender(tender_id: int, data: Dict[str, Any]):
        """
        Update a tender and its manually entered deposits.

        Existing tenders are never re-derived from the estimated value.
        """
        from apps.tenders.mock_data import (
            TenderActivityType, TenderStatus, get_financials_by_tender_id,
            tender_financials, tenders
        )

        tender = tenders.get_or_raise(tender_id)
        old_status = tender.status
        tenders.update(tender_id, **{f: data.get(f) for f in TenderService.TENDER_FIELDS})

        amounts = resolve_financials(
            tender.estimated_value,
            data.get('emd_amount'),
            data.get('sd1_amount'),
            data.get('sd2_amount'),
            is_new=False,
        )
        values = {
            'emd_amount': amounts.emd_amount,
            'sd1_amount': amounts.sd1_amount,
            'sd2_amount': amounts.sd2_amount,
        }
        values.update({f: data.get(f) or TenderService._blank(f) for f in TenderService.DD_FIELDS})

        financials = get_financials_by_tender_id(tender_id)
        if financials is None:
            tender_financials.create(
                tender_id=tender_id,
                emd_refundable=tender.status != TenderStatus.AWARDED,
                **values
            )
        else:
            if tender.status == TenderStatus.AWARDED:
                values['emd_refundable'] = False
            tender_financials.update(financials.id, **values)

        if old_status != tender.status:
            TenderService.log_activity(
                tender_id, TenderActivityType.STATUS,
                f"Status changed from {old_status} to {tender.status}"
            )
        ConsoleLogger.log_record_updated('Tender', tender, tender.reference_number)
        return tender

    @staticmethod
    def mark_emd_refunded(tender_id: int, refund_date: Optional[date] = None):
        """
        Record the refund of a tender's EMD.

        Raises:
            RecordNotFoundException: If the tender does not exist.
            EMDRefundException: If the EMD is missing, non-refundable or
                                already refunded.
        """
        from apps.tenders.mock_data import (
            TenderActivityType, get_financials_by_tender_id, tender_financials, tenders
        )

        tender = tenders.get_or_raise(tender_id)
        financials = get_financials_by_tender_id(tender_id)
        if financials is None or financials.emd_amount is None:
            raise EMDRefundException(
                f"No EMD is recorded for {tender.reference_number}.",
                details={'tender_id': tender_id}
            )
        if not financials.emd_refundable:
            raise EMDRefundException(details={'tender_id': tender_id})
        if financials.emd_refund_date:
            raise EMDRefundException(
                f"EMD for {tender.reference_number} was already refunded on {financials.emd_refund_date:%d %b %Y}.",
                details={'tender_id': tender_id}
            )

        refund_date = refund_date or timezone.localdate()
        tender_financials.update(financials.id, emd_refund_date=refund_date)
        TenderService.log_activity(tender_id, TenderActivityType.REFUND, 'EMD refunded')
        ConsoleLogger.log_record_updated('Tender financials', financials, f"EMD refunded {refund_date}")
        return financials

    @staticmethod
    def _blank(field_name: str):
        return None if field_name.endswith('_date') else ''
