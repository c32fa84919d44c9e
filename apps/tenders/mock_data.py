"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock tenders with their financials (EMD / SD1 / SD2),
             bid documents and activity feed.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class TenderStatus(models.TextChoices):
    DRAFT = 'Draft', _('Draft')
    FILED = 'Filed', _('Filed')
    AWARDED = 'Awarded', _('Awarded')
    LOST = 'Lost', _('Lost')
    CLOSED = 'Closed', _('Closed')


class TenderActivityType(models.TextChoices):
    CREATED = 'Created', _('Created')
    FILED = 'Filed', _('Filed')
    DOCUMENT = 'Document', _('Document')
    STATUS = 'Status Change', _('Status Change')
    REFUND = 'Refund', _('Refund')


@dataclass
class Tender:
    id: int
    name: str
    reference_number: str
    description: str
    start_date: date
    end_date: date
    estimated_value: Decimal
    status: str = TenderStatus.DRAFT
    filed_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class TenderFinancials:
    id: int
    tender_id: int
    emd_amount: Optional[Decimal] = None
    emd_refundable: bool = True
    emd_dd_number: str = ''
    emd_dd_date: Optional[date] = None
    emd_bank: str = ''
    emd_refund_date: Optional[date] = None
    sd1_amount: Optional[Decimal] = None
    sd1_refundable: bool = False
    sd2_amount: Optional[Decimal] = None
    sd2_refundable: bool = False


@dataclass
class TenderDocument:
    id: int
    tender_id: int
    file_name: str
    file_size: int
    uploaded_by: str
    uploaded_at: datetime


@dataclass
class TenderActivity:
    id: int
    tender_id: int
    activity_type: str
    description: str
    performed_by: str
    created_at: Optional[datetime] = None


def _seed_tenders() -> List[Tender]:
    return [
        Tender(
            id=1,
            name='Smart City Infrastructure Project',
            reference_number='TND/2024/001',
            description='Development of smart city infrastructure including traffic management and surveillance systems',
            filed_date=day('2024-10-15'),
            start_date=day('2024-11-01'),
            end_date=day('2025-10-31'),
            estimated_value=Decimal('10000000'),
            status=TenderStatus.FILED,
            created_at=stamp('2024-10-10T10:00:00Z'),
            updated_at=stamp('2024-10-15T14:30:00Z'),
        ),
        Tender(
            id=2,
            name='Municipal Office Networking',
            reference_number='TND/2024/002',
            description='Complete networking solution for 5 municipal office buildings',
            filed_date=day('2024-09-20'),
            start_date=day('2024-10-01'),
            end_date=day('2025-03-31'),
            estimated_value=Decimal('2500000'),
            status=TenderStatus.AWARDED,
            created_at=stamp('2024-09-15T09:00:00Z'),
            updated_at=stamp('2024-10-25T11:00:00Z'),
        ),
        Tender(
            id=3,
            name='State Highway CCTV Installation',
            reference_number='TND/2024/003',
            description='Installation of CCTV cameras along 50km state highway stretch',
            filed_date=day('2024-08-10'),
            start_date=day('2024-09-01'),
            end_date=day('2024-12-31'),
            estimated_value=Decimal('5000000'),
            status=TenderStatus.LOST,
            created_at=stamp('2024-08-05T10:00:00Z'),
            updated_at=stamp('2024-09-15T16:00:00Z'),
        ),
        Tender(
            id=4,
            name='Healthcare IT Modernization',
            reference_number='TND/2024/004',
            description='IT infrastructure upgrade for district hospitals',
            start_date=day('2025-01-01'),
            end_date=day('2025-12-31'),
            estimated_value=Decimal('8000000'),
            status=TenderStatus.DRAFT,
            created_at=stamp('2024-11-01T10:00:00Z'),
            updated_at=stamp('2024-11-01T10:00:00Z'),
        ),
        Tender(
            id=5,
            name='Public WiFi Network Deployment',
            reference_number='TND/2024/005',
            description='Deployment of public WiFi across 20 city locations',
            filed_date=day('2024-07-15'),
            start_date=day('2024-08-01'),
            end_date=day('2024-11-30'),
            estimated_value=Decimal('3000000'),
            status=TenderStatus.CLOSED,
            created_at=stamp('2024-07-10T10:00:00Z'),
            updated_at=stamp('2024-11-20T15:00:00Z'),
        ),
    ]


def _seed_financials() -> List[TenderFinancials]:
    from apps.tenders.services import calculate_financials

    financials = []
    # Tender 4 is still a draft without deposits on file
    for tender in _seed_tenders():
        if tender.status == TenderStatus.DRAFT:
            continue
        amounts = calculate_financials(tender.estimated_value)
        financials.append(TenderFinancials(
            id=tender.id,
            tender_id=tender.id,
            emd_amount=amounts.emd_amount,
            emd_refundable=tender.status != TenderStatus.AWARDED,
            sd1_amount=amounts.sd1_amount,
            sd2_amount=amounts.sd2_amount,
        ))
    financials[0].emd_dd_number = 'DD-448120'
    financials[0].emd_dd_date = day('2024-10-14')
    financials[0].emd_bank = 'HDFC Bank'
    # Lost bid: EMD already returned
    financials[2].emd_refund_date = day('2024-10-05')
    return financials


def _seed_documents() -> List[TenderDocument]:
    return [
        TenderDocument(1, 1, 'Technical_Bid_Smart_City.pdf', 2457600, 'Admin User', stamp('2024-10-14T11:00:00Z')),
        TenderDocument(2, 1, 'Financial_Bid_Smart_City.pdf', 1048576, 'Admin User', stamp('2024-10-14T11:05:00Z')),
        TenderDocument(3, 1, 'EMD_DD_Copy.pdf', 262144, 'Accounts Team', stamp('2024-10-14T15:20:00Z')),
        TenderDocument(4, 2, 'Network_Design_Proposal.pdf', 3145728, 'Admin User', stamp('2024-09-18T10:00:00Z')),
        TenderDocument(5, 2, 'Work_Order_Municipal.pdf', 524288, 'Admin User', stamp('2024-10-25T11:00:00Z')),
        TenderDocument(6, 3, 'CCTV_Technical_Specs.docx', 819200, 'Admin User', stamp('2024-08-09T16:00:00Z')),
        TenderDocument(7, 5, 'WiFi_Site_Survey.pdf', 1572864, 'Field Team', stamp('2024-07-14T12:30:00Z')),
    ]


def _seed_activities() -> List[TenderActivity]:
    return [
        TenderActivity(1, 1, TenderActivityType.CREATED, 'Tender created', 'Admin User', stamp('2024-10-10T10:00:00Z')),
        TenderActivity(2, 1, TenderActivityType.DOCUMENT, 'Technical and financial bids uploaded', 'Admin User', stamp('2024-10-14T11:05:00Z')),
        TenderActivity(3, 1, TenderActivityType.FILED, 'Tender filed with EMD DD-448120', 'Admin User', stamp('2024-10-15T14:30:00Z')),
        TenderActivity(4, 2, TenderActivityType.FILED, 'Tender filed', 'Admin User', stamp('2024-09-20T10:00:00Z')),
        TenderActivity(5, 2, TenderActivityType.STATUS, 'Status changed from Filed to Awarded', 'Admin User', stamp('2024-10-25T11:00:00Z')),
        TenderActivity(6, 3, TenderActivityType.STATUS, 'Status changed from Filed to Lost', 'Admin User', stamp('2024-09-15T16:00:00Z')),
        TenderActivity(7, 3, TenderActivityType.REFUND, 'EMD refunded', 'Accounts Team', stamp('2024-10-05T12:00:00Z')),
        TenderActivity(8, 4, TenderActivityType.CREATED, 'Tender created as draft', 'Admin User', stamp('2024-11-01T10:00:00Z')),
        TenderActivity(9, 5, TenderActivityType.STATUS, 'Tender closed', 'Admin User', stamp('2024-11-20T15:00:00Z')),
    ]


tenders: MockRepository[Tender] = MockRepository('Tender', Tender, _seed_tenders)
tender_financials: MockRepository[TenderFinancials] = MockRepository(
    'Tender financials', TenderFinancials, _seed_financials
)
tender_documents: MockRepository[TenderDocument] = MockRepository(
    'Tender document', TenderDocument, _seed_documents
)
tender_activities: MockRepository[TenderActivity] = MockRepository(
    'Tender activity', TenderActivity, _seed_activities
)


def get_tender_by_id(pk: int) -> Optional[Tender]:
    return tenders.get_by_id(pk)


def get_financials_by_tender_id(tender_id: int) -> Optional[TenderFinancials]:
    matches = tender_financials.filter(tender_id=tender_id)
    return matches[0] if matches else None


def get_documents_by_tender_id(tender_id: int) -> List[TenderDocument]:
    return tender_documents.filter(tender_id=tender_id)


def get_activities_by_tender_id(tender_id: int) -> List[TenderActivity]:
    return sorted(
        tender_activities.filter(tender_id=tender_id),
        key=lambda a: a.created_at,
        reverse=True
    )
