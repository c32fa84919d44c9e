"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for bank accounts, the holiday calendar and email
             templates.
-------------------------------------------------------------------------
"""
from datetime import date

from django.core import mail
from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from apps.administration.forms import BankAccountForm, SendEmailForm
from apps.administration.mock_data import bank_accounts, email_templates, holidays
from apps.administration.services import (
    BankAccountService, EmailTemplateService, extract_placeholders, holiday_stats,
    preview_template, render_placeholders, sorted_holidays
)


def account_data(**overrides):
    data = {
        'bank_name': 'State Bank of India', 'account_holder_name': 'Electrocom Pvt. Ltd.',
        'account_number': '30012345678', 'ifsc_code': 'SBIN0001234', 'branch': 'Fort, Mumbai',
        'account_type': 'Savings', 'is_primary': False,
    }
    data.update(overrides)
    return data


def primary_ids():
    return [a.id for a in bank_accounts.all() if a.is_primary]


class BankAccountServiceTestCase(SimpleTestCase):

    def setUp(self):
        bank_accounts.reset()

    def test_masked_account_number(self):
        self.assertEqual(bank_accounts.get_by_id(1).masked_account_number, '****6789')

    def test_new_primary_clears_others(self):
        account = BankAccountService.create_account(account_data(is_primary=True))
        self.assertEqual(primary_ids(), [account.id])

    def test_non_primary_create_keeps_primary(self):
        BankAccountService.create_account(account_data())
        self.assertEqual(primary_ids(), [1])

    def test_make_existing_primary(self):
        BankAccountService.update_account(2, {'is_primary': True})
        self.assertEqual(primary_ids(), [2])

    def test_unflagging_only_primary_keeps_one(self):
        BankAccountService.update_account(1, {'is_primary': False})
        self.assertEqual(primary_ids(), [1])

    def test_deleting_primary_promotes_oldest(self):
        BankAccountService.create_account(account_data())
        BankAccountService.delete_account(1)
        self.assertEqual(primary_ids(), [2])

    def test_first_account_becomes_primary(self):
        BankAccountService.delete_account(1)
        BankAccountService.delete_account(2)
        account = BankAccountService.create_account(account_data())
        self.assertTrue(account.is_primary)


class BankAccountFormTestCase(SimpleTestCase):

    def test_ifsc_is_uppercased(self):
        form = BankAccountForm(data=account_data(ifsc_code='sbin0001234'))
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['ifsc_code'], 'SBIN0001234')

    def test_invalid_ifsc(self):
        for code in ('SBI00001234', 'SBIN1001234', 'SBIN000123'):
            form = BankAccountForm(data=account_data(ifsc_code=code))
            self.assertEqual(form.errors['ifsc_code'], ['Invalid IFSC code (e.g. HDFC0001234)'])

    def test_account_number_digits(self):
        form = BankAccountForm(data=account_data(account_number='ACC-123'))
        self.assertIn('account_number', form.errors)


class HolidayTestCase(SimpleTestCase):

    def setUp(self):
        holidays.reset()

    def test_sorted_and_filtered(self):
        holidays.create(name='New Year', date=date(2026, 1, 1), type='Restricted', description='')
        self.assertEqual([h.name for h in sorted_holidays(holidays.all())][:2], ['New Year', 'Republic Day'])
        self.assertEqual([h.name for h in sorted_holidays(holidays.all(), 'Optional')], ['Good Friday'])

    def test_stats(self):
        stats = holiday_stats(holidays.all(), today=date(2026, 5, 1))
        self.assertEqual(stats, {'total': 5, 'public': 4, 'optional': 1, 'upcoming': 2})


class EmailTemplateTestCase(SimpleTestCase):

    def setUp(self):
        email_templates.reset()

    def test_render_leaves_unknown_placeholders(self):
        text = 'Dear {{client_name}}, ref {{ amc_number }} due {{due_date}}'
        rendered = render_placeholders(text, {'client_name': 'Acme', 'amc_number': 'AMC-1'})
        self.assertEqual(rendered, 'Dear Acme, ref AMC-1 due {{due_date}}')

    def test_extract_placeholders(self):
        self.assertEqual(
            extract_placeholders('Hi {{name}}', '<p>{{name}} owes {{amount}}</p>'),
            ['name', 'amount']
        )

    @override_settings(COMPANY_NAME='Electrocom Pvt Ltd')
    def test_preview(self):
        preview = preview_template(email_templates.get_by_id(1))
        self.assertEqual(preview['subject'], 'Payment Reminder - AMC Bill AMC-2025-042')
        self.assertIn('Dear TechCorp Solutions,', preview['body'])
        self.assertIn('{{period_from}}', preview['body'])
        self.assertIn('<strong>Electrocom Pvt Ltd</strong>', preview['body'])

    def test_save_derives_placeholders(self):
        template = EmailTemplateService.save_template({
            'name': 'Site Visit', 'subject': 'Visit on {{task_date}}', 'body': '<p>{{client_name}}</p>',
        })
        self.assertEqual(template.placeholders, ['task_date', 'client_name'])

    def test_send(self):
        sent = EmailTemplateService.send_template(email_templates.get_by_id(2), ['ops@example.com'])
        self.assertEqual(sent, 1)
        self.assertEqual(mail.outbox[0].to, ['ops@example.com'])
        self.assertNotIn('<p>', mail.outbox[0].body)

    def test_recipients_validated(self):
        form = SendEmailForm(data={'recipients': 'a@example.com, not-an-email'})
        self.assertEqual(form.errors['recipients'], ['Invalid email address: not-an-email'])


class AdministrationViewTestCase(SimpleTestCase):

    def setUp(self):
        bank_accounts.reset()
        holidays.reset()
        email_templates.reset()

    def test_bank_account_list(self):
        response = self.client.get(reverse('administration:bank_account_list'))
        self.assertContains(response, 'HDFC Bank')
        self.assertEqual(response.context['bank_accounts'][0].id, 1)

    def test_bank_account_create(self):
        response = self.client.post(reverse('administration:bank_account_create'),
                                    account_data(is_primary='on'))
        self.assertRedirects(response, reverse('administration:bank_account_list'))
        self.assertEqual(primary_ids(), [3])

    def test_bank_account_edit(self):
        response = self.client.get(reverse('administration:bank_account_update', args=[2]))
        self.assertEqual(response.context['form'].initial['ifsc_code'], 'ICIC0006023')

    def test_bank_account_delete(self):
        self.client.post(reverse('administration:bank_account_delete', args=[1]))
        self.assertEqual(primary_ids(), [2])

    def test_holiday_list_filter(self):
        response = self.client.get(reverse('administration:holiday_list'), {'type': 'Public'})
        self.assertEqual([h.id for h in response.context['holidays']], [1, 2, 4, 5])

    def test_holiday_create(self):
        self.client.post(reverse('administration:holiday_create'), {
            'name': 'Gandhi Jayanti', 'date': '2026-10-02', 'type': 'Public',
        })
        self.assertEqual(holidays.all()[0].name, 'Gandhi Jayanti')

    def test_holiday_requires_date(self):
        response = self.client.post(reverse('administration:holiday_create'), {'name': 'X', 'type': 'Public'})
        self.assertEqual(response.context['form'].errors['date'], ['Date is required'])

    def test_email_template_search(self):
        response = self.client.get(reverse('administration:email_template_list'), {'search': 'payslip'})
        self.assertEqual([t.id for t in response.context['email_templates']], [4])

    def test_email_template_preview(self):
        response = self.client.get(reverse('administration:email_template_preview', args=[1]))
        self.assertContains(response, 'Dear TechCorp Solutions,')

    def test_email_template_send(self):
        response = self.client.post(reverse('administration:email_template_preview', args=[3]),
                                    {'recipients': 'ravi@example.com'})
        self.assertRedirects(response, reverse('administration:email_template_list'))
        self.assertEqual(len(mail.outbox), 1)

    def test_email_template_update(self):
        self.client.post(reverse('administration:email_template_update', args=[5]), {
            'name': 'Tender Submitted', 'subject': 'Submitted {{tender_name}}', 'body': '<p>Done</p>',
        })
        self.assertEqual(email_templates.get_by_id(5).placeholders, ['tender_name'])
