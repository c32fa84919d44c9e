"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for AMC expiry tracking, billing and views.
-------------------------------------------------------------------------
"""
from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase
from django.urls import reverse
from django.utils import timezone

from apps.amcs.forms import AMCForm
from apps.amcs.mock_data import AMCStatus, BillingCycle, amc_billings, amcs, get_billings_by_amc_id
from apps.amcs.services import (
    AMCService, amc_stats, client_amc_summary, days_to_end, expiring_amcs, filter_amcs
)
from apps.clients.mock_data import clients
from apps.core.exceptions import ConsoleException, PaymentAlreadyPaidException
from apps.core.templatetags.custom_filters import BADGE_CLASSES, expiry_badge


def reset_amcs():
    for repository in (amcs, amc_billings, clients):
        repository.reset()


class AMCExpiryTestCase(SimpleTestCase):

    def setUp(self):
        reset_amcs()

    def test_days_to_end(self):
        amc = amcs.get_by_id(1)
        self.assertEqual(days_to_end(amc), 12)
        self.assertEqual(days_to_end(amc, today=amc.end_date + timedelta(days=3)), -3)

    def test_expiring_only_active_within_window(self):
        expiring = expiring_amcs(amcs.all())
        self.assertEqual([amc.id for amc in expiring], [4, 1, 2])

    def test_expiring_custom_window(self):
        self.assertEqual([amc.id for amc in expiring_amcs(amcs.all(), within=7)], [4])

    def test_expired_contract_not_in_banner(self):
        self.assertEqual(amcs.get_by_id(3).status, AMCStatus.EXPIRED)
        self.assertNotIn(3, [amc.id for amc in expiring_amcs(amcs.all(), within=10000)])

    def test_expiry_badge_bands(self):
        self.assertEqual(expiry_badge(7), BADGE_CLASSES['red'])
        self.assertEqual(expiry_badge(8), BADGE_CLASSES['orange'])
        self.assertEqual(expiry_badge(15), BADGE_CLASSES['orange'])
        self.assertEqual(expiry_badge(30), BADGE_CLASSES['yellow'])
        self.assertEqual(expiry_badge(31), BADGE_CLASSES['gray'])


class AMCStatsTestCase(SimpleTestCase):

    def setUp(self):
        reset_amcs()

    def test_stats(self):
        stats = amc_stats(amcs.get_by_id(1))
        self.assertEqual(stats['total_bills'], 3)
        self.assertEqual(stats['paid_bills'], 2)
        self.assertEqual(stats['outstanding'], Decimal('125000'))
        self.assertEqual(stats['next_bill'].bill_number, 'BILL/AMC/2025/003')

    def test_stats_without_bills(self):
        stats = amc_stats(amcs.get_by_id(3))
        self.assertEqual(stats['total_bills'], 0)
        self.assertIsNone(stats['next_bill'])

    def test_filter(self):
        all_amcs = amcs.all()
        self.assertEqual(len(filter_amcs(all_amcs, search='xyz')), 1)
        self.assertEqual(len(filter_amcs(all_amcs, search='amc/2024')), 3)
        self.assertEqual([a.id for a in filter_amcs(all_amcs, billing_cycle=BillingCycle.YEARLY)], [4])
        self.assertEqual(len(filter_amcs(all_amcs, status=AMCStatus.ACTIVE, expiry_within=15)), 2)

    def test_client_summary(self):
        summary = client_amc_summary(1)
        self.assertEqual(summary['amc_count'], 3)
        self.assertEqual(summary['active_amc_count'], 2)
        self.assertEqual(summary['outstanding_amount'], Decimal('125000'))


class AMCServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_amcs()

    def test_mark_bill_paid(self):
        AMCService.mark_bill_paid(3, date(2025, 10, 10), 'UPI')
        bill = amc_billings.get_by_id(3)
        self.assertTrue(bill.paid)
        self.assertEqual(bill.payment_mode, 'UPI')
        self.assertEqual(amc_stats(amcs.get_by_id(1))['outstanding'], Decimal('0'))

    def test_mark_paid_bill_twice(self):
        with self.assertRaises(PaymentAlreadyPaidException):
            AMCService.mark_bill_paid(1, date(2025, 10, 10), 'Cash')

    def test_generate_next_quarterly_bill(self):
        bill = AMCService.generate_next_bill(1)
        self.assertEqual(bill.period_from, date(2025, 10, 1))
        self.assertEqual(bill.period_to, date(2025, 12, 31))
        self.assertEqual(bill.amount, Decimal('125000'))
        self.assertFalse(bill.paid)

    def test_generate_bill_stops_at_contract_end(self):
        amc = amcs.get_by_id(4)
        bill = AMCService.generate_next_bill(4)
        self.assertEqual(bill.period_from, amc.start_date)
        self.assertEqual(bill.period_to, amc.end_date)
        with self.assertRaises(ConsoleException):
            AMCService.generate_next_bill(4)


class AMCFormTestCase(SimpleTestCase):

    def setUp(self):
        reset_amcs()

    def valid_data(self, **overrides):
        data = {
            'client_id': '3',
            'amc_number': 'AMC/2025/050',
            'start_date': '2025-12-01',
            'end_date': '2026-11-30',
            'status': AMCStatus.PENDING,
            'billing_cycle': BillingCycle.QUARTERLY,
            'amount': '240000',
        }
        data.update(overrides)
        return data

    def test_valid(self):
        form = AMCForm(data=self.valid_data())
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['client_id'], 3)

    def test_unknown_client_rejected(self):
        form = AMCForm(data=self.valid_data(client_id='42'))
        self.assertFalse(form.is_valid())
        self.assertIn('client_id', form.errors)

    def test_end_date_after_start_date(self):
        form = AMCForm(data=self.valid_data(end_date='2025-12-01'))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['end_date'], ['End date must be after start date'])

    def test_amount_positive(self):
        form = AMCForm(data=self.valid_data(amount='-5'))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['amount'], ['Amount must be greater than 0'])

    def test_required(self):
        form = AMCForm(data={})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['client_id'], ['Client is required'])
        self.assertEqual(form.errors['amc_number'], ['AMC Number is required'])


class AMCViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_amcs()

    def test_list_with_banner(self):
        response = self.client.get(reverse('amcs:amc_list'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['rows']), 4)
        self.assertEqual(len(response.context['expiring']), 3)
        self.assertContains(response, 'expiring in next 30 days')

    def test_list_expiry_filter(self):
        response = self.client.get(reverse('amcs:amc_list'), {'expiry': '7'})
        self.assertEqual([r['amc'].id for r in response.context['rows']], [3, 4])

    def test_detail(self):
        response = self.client.get(reverse('amcs:amc_detail', args=[1]))
        self.assertContains(response, 'BILL/AMC/2025/003')

    def test_create(self):
        response = self.client.post(reverse('amcs:amc_create'), {
            'client_id': '2',
            'amc_number': 'AMC/2025/060',
            'start_date': '2025-12-01',
            'end_date': '2026-11-30',
            'status': AMCStatus.PENDING,
            'billing_cycle': BillingCycle.MONTHLY,
            'amount': '120000',
        })
        self.assertRedirects(response, reverse('amcs:amc_detail', args=[5]))
        self.assertEqual(amcs.get_by_id(5).client_name, 'XYZ Industries')

    def test_create_prefills_client(self):
        response = self.client.get(reverse('amcs:amc_create'), {'client': '2'})
        self.assertEqual(response.context['form'].initial['client_id'], '2')

    def test_update(self):
        response = self.client.post(reverse('amcs:amc_update', args=[3]), {
            'client_id': '1',
            'amc_number': 'AMC/2024/015',
            'start_date': '2024-03-01',
            'end_date': '2025-02-28',
            'status': AMCStatus.CANCELED,
            'billing_cycle': BillingCycle.HALF_YEARLY,
            'amount': '450000',
        })
        self.assertRedirects(response, reverse('amcs:amc_detail', args=[3]))
        self.assertEqual(amcs.get_by_id(3).status, AMCStatus.CANCELED)

    def test_delete_confirmation_and_delete(self):
        response = self.client.get(reverse('amcs:amc_delete', args=[2]))
        self.assertContains(response, 'Do you want to delete this AMC? This action cannot be undone.')
        response = self.client.post(reverse('amcs:amc_delete', args=[2]))
        self.assertRedirects(response, reverse('amcs:amc_list'))
        self.assertIsNone(amcs.get_by_id(2))
        self.assertEqual(get_billings_by_amc_id(2), [])

    def test_pay_bill(self):
        response = self.client.post(reverse('amcs:bill_pay', args=[4]), {
            'payment_date': timezone.localdate().isoformat(),
            'payment_mode': 'Cash',
        })
        self.assertRedirects(response, reverse('amcs:amc_detail', args=[2]))
        self.assertTrue(amc_billings.get_by_id(4).paid)

    def test_generate_bill(self):
        response = self.client.post(reverse('amcs:generate_bill', args=[2]))
        self.assertRedirects(response, reverse('amcs:amc_detail', args=[2]))
        self.assertEqual(len(get_billings_by_amc_id(2)), 2)
