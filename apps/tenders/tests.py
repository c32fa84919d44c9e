"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for tender deposit calculation, the tender workflow
             and the tender views.
-------------------------------------------------------------------------
"""
from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase
from django.urls import reverse

from apps.core.exceptions import EMDRefundException
from apps.tenders.forms import TenderForm
from apps.tenders.mock_data import (
    TenderStatus, get_activities_by_tender_id, get_financials_by_tender_id,
    tender_activities, tender_documents, tender_financials, tenders
)
from apps.tenders.services import (
    TenderService, calculate_financials, display_amounts, resolve_financials, tender_stats
)


def reset_tenders():
    for repository in (tenders, tender_financials, tender_documents, tender_activities):
        repository.reset()


class TenderFinancialsTestCase(SimpleTestCase):
    """Test cases for EMD / SD1 / SD2 derivation."""

    def test_percentages(self):
        amounts = calculate_financials(10000000)
        self.assertEqual(amounts.emd_amount, Decimal('500000.00'))
        self.assertEqual(amounts.sd1_amount, Decimal('200000.00'))
        self.assertEqual(amounts.sd2_amount, Decimal('300000.00'))

    def test_percentages_of_odd_value(self):
        amounts = calculate_financials(Decimal('123457'))
        self.assertEqual(amounts.emd_amount, Decimal('6172.85'))
        self.assertEqual(amounts.sd1_amount, Decimal('2469.14'))
        self.assertEqual(amounts.sd2_amount, Decimal('3703.71'))

    def test_new_tender_without_deposits_is_auto_calculated(self):
        amounts = resolve_financials(2500000, is_new=True)
        self.assertTrue(amounts.auto_calculated)
        self.assertEqual(amounts.emd_amount, Decimal('125000.00'))
        self.assertEqual(amounts.sd1_amount, Decimal('50000.00'))
        self.assertEqual(amounts.sd2_amount, Decimal('75000.00'))

    def test_manual_emd_kept_during_auto_calculation(self):
        amounts = resolve_financials(2500000, emd_amount=100000, is_new=True)
        self.assertTrue(amounts.auto_calculated)
        self.assertEqual(amounts.emd_amount, Decimal('100000'))
        self.assertEqual(amounts.sd1_amount, Decimal('50000.00'))

    def test_any_sd_entered_disables_auto_calculation(self):
        amounts = resolve_financials(2500000, sd1_amount=40000, is_new=True)
        self.assertFalse(amounts.auto_calculated)
        self.assertEqual(amounts.sd1_amount, Decimal('40000'))
        self.assertIsNone(amounts.sd2_amount)
        self.assertIsNone(amounts.emd_amount)

    def test_existing_tender_never_auto_calculated(self):
        amounts = resolve_financials(2500000, is_new=False)
        self.assertFalse(amounts.auto_calculated)
        self.assertIsNone(amounts.emd_amount)
        self.assertIsNone(amounts.sd1_amount)
        self.assertIsNone(amounts.sd2_amount)

    def test_display_falls_back_to_percentages(self):
        reset_tenders()
        draft = tenders.get_by_id(4)
        self.assertIsNone(get_financials_by_tender_id(4))
        amounts = display_amounts(draft, None)
        self.assertEqual(amounts.emd_amount, Decimal('400000.00'))

    def test_display_treats_zero_stored_amounts_as_missing(self):
        reset_tenders()
        tender = tenders.get_by_id(1)
        financials = tender_financials.update(
            get_financials_by_tender_id(1).id,
            emd_amount=Decimal('0'), sd1_amount=Decimal('12345'), sd2_amount=None
        )
        amounts = display_amounts(tender, financials)
        self.assertEqual(amounts.emd_amount, Decimal('500000.00'))
        self.assertEqual(amounts.sd1_amount, Decimal('12345'))
        self.assertEqual(amounts.sd2_amount, Decimal('300000.00'))


class TenderDataTestCase(SimpleTestCase):

    def setUp(self):
        reset_tenders()

    def test_seed_financials(self):
        awarded = get_financials_by_tender_id(2)
        self.assertFalse(awarded.emd_refundable)
        self.assertEqual(awarded.emd_amount, Decimal('125000.00'))
        self.assertTrue(get_financials_by_tender_id(1).emd_refundable)

    def test_stats(self):
        stats = tender_stats(tenders.all())
        self.assertEqual(stats['total'], 5)
        self.assertEqual(stats['filed'], 1)
        self.assertEqual(stats['awarded'], 1)
        self.assertEqual(stats['total_value'], Decimal('28500000'))
        self.assertEqual(stats['awarded_value'], Decimal('2500000'))

    def test_activities_newest_first(self):
        activities = get_activities_by_tender_id(1)
        self.assertEqual(activities[0].description, 'Tender filed with EMD DD-448120')


class TenderFormTestCase(SimpleTestCase):

    def valid_data(self, **overrides):
        data = {
            'name': 'Railway Yard Lighting',
            'reference_number': 'TND/2025/006',
            'start_date': '2025-02-01',
            'end_date': '2025-08-31',
            'estimated_value': '4000000',
            'status': TenderStatus.DRAFT,
        }
        data.update(overrides)
        return data

    def test_valid(self):
        self.assertTrue(TenderForm(data=self.valid_data()).is_valid())

    def test_required_fields(self):
        form = TenderForm(data={'status': TenderStatus.DRAFT})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['name'], ['Tender name is required'])
        self.assertEqual(form.errors['reference_number'], ['Reference number is required'])
        self.assertEqual(form.errors['start_date'], ['Start date is required'])
        self.assertEqual(form.errors['end_date'], ['End date is required'])

    def test_end_date_must_follow_start_date(self):
        form = TenderForm(data=self.valid_data(end_date='2025-02-01'))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['end_date'], ['End date must be after start date'])

    def test_estimated_value_must_be_positive(self):
        form = TenderForm(data=self.valid_data(estimated_value='0'))
        self.assertFalse(form.is_valid())
        self.assertIn('estimated_value', form.errors)

    def test_blank_name_rejected(self):
        form = TenderForm(data=self.valid_data(name='   '))
        self.assertFalse(form.is_valid())
        self.assertIn('name', form.errors)


class TenderServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_tenders()

    def test_create_derives_deposits(self):
        tender, amounts = TenderService.create_tender({
            'name': 'Railway Yard Lighting',
            'reference_number': 'TND/2025/006',
            'description': '',
            'start_date': date(2025, 2, 1),
            'end_date': date(2025, 8, 31),
            'estimated_value': Decimal('4000000'),
            'status': TenderStatus.DRAFT,
        })
        self.assertEqual(tender.id, 6)
        financials = get_financials_by_tender_id(tender.id)
        self.assertEqual(financials.emd_amount, Decimal('200000.00'))
        self.assertEqual(financials.sd1_amount, Decimal('80000.00'))
        self.assertEqual(financials.sd2_amount, Decimal('120000.00'))
        self.assertEqual(len(get_activities_by_tender_id(tender.id)), 1)

    def test_update_keeps_manual_amounts(self):
        tender = tenders.get_by_id(1)
        data = {f: getattr(tender, f) for f in TenderService.TENDER_FIELDS}
        data.update(estimated_value=Decimal('20000000'), emd_amount=Decimal('450000'),
                    sd1_amount=Decimal('180000'), sd2_amount=Decimal('270000'))
        TenderService.update_tender(1, data)
        financials = get_financials_by_tender_id(1)
        self.assertEqual(financials.emd_amount, Decimal('450000'))
        self.assertEqual(financials.sd1_amount, Decimal('180000'))

    def test_update_logs_status_change(self):
        tender = tenders.get_by_id(1)
        data = {f: getattr(tender, f) for f in TenderService.TENDER_FIELDS}
        data['status'] = TenderStatus.AWARDED
        TenderService.update_tender(1, data)
        self.assertFalse(get_financials_by_tender_id(1).emd_refundable)
        self.assertEqual(
            get_activities_by_tender_id(1)[0].description,
            'Status changed from Filed to Awarded'
        )

    def test_emd_refund(self):
        TenderService.mark_emd_refunded(1, date(2025, 11, 5))
        self.assertEqual(get_financials_by_tender_id(1).emd_refund_date, date(2025, 11, 5))

    def test_emd_refund_rejected_for_awarded_tender(self):
        with self.assertRaises(EMDRefundException):
            TenderService.mark_emd_refunded(2)

    def test_emd_refund_rejected_twice(self):
        with self.assertRaises(EMDRefundException):
            TenderService.mark_emd_refunded(3)

    def test_emd_refund_rejected_without_financials(self):
        with self.assertRaises(EMDRefundException):
            TenderService.mark_emd_refunded(4)


class TenderViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_tenders()

    def test_list(self):
        response = self.client.get(reverse('tenders:tender_list'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['rows']), 5)
        self.assertEqual(response.context['stats']['total'], 5)

    def test_list_search_and_filter(self):
        response = self.client.get(reverse('tenders:tender_list'), {'search': 'tnd/2024/00', 'status': 'Lost'})
        self.assertEqual([r['tender'].id for r in response.context['rows']], [3])

    def test_detail(self):
        response = self.client.get(reverse('tenders:tender_detail', args=[1]))
        self.assertContains(response, 'Smart City Infrastructure Project')
        self.assertContains(response, 'Technical_Bid_Smart_City.pdf')

    def test_detail_missing(self):
        self.assertEqual(self.client.get(reverse('tenders:tender_detail', args=[99])).status_code, 404)

    def test_create(self):
        response = self.client.post(reverse('tenders:tender_create'), {
            'name': 'Substation Automation',
            'reference_number': 'TND/2025/010',
            'start_date': '2025-03-01',
            'end_date': '2025-12-31',
            'estimated_value': '6000000',
            'status': TenderStatus.DRAFT,
        })
        self.assertRedirects(response, reverse('tenders:tender_detail', args=[6]))
        self.assertEqual(get_financials_by_tender_id(6).sd2_amount, Decimal('180000.00'))

    def test_create_invalid_shows_preview(self):
        response = self.client.post(reverse('tenders:tender_create'), {
            'name': '', 'estimated_value': '1000000', 'status': TenderStatus.DRAFT,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['preview'].emd_amount, Decimal('50000.00'))
        self.assertEqual(tenders.count(), 5)

    def test_edit_prefills_deposits(self):
        response = self.client.get(reverse('tenders:tender_update', args=[1]))
        self.assertEqual(response.context['form'].initial['emd_amount'], Decimal('500000.00'))

    def test_delete(self):
        response = self.client.post(reverse('tenders:tender_delete', args=[5]))
        self.assertRedirects(response, reverse('tenders:tender_list'))
        self.assertIsNone(tenders.get_by_id(5))
        self.assertIsNone(get_financials_by_tender_id(5))

    def test_emd_refund(self):
        response = self.client.post(reverse('tenders:emd_refund', args=[5]), {'refund_date': '2025-01-10'})
        self.assertRedirects(response, reverse('tenders:tender_detail', args=[5]))
        self.assertEqual(get_financials_by_tender_id(5).emd_refund_date, date(2025, 1, 10))
