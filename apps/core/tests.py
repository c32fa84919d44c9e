"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Unit tests for the core module - repository, alerts,
             template filters, theme toggle and shared views.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.test import RequestFactory, SimpleTestCase
from django.test.runner import DiscoverRunner
from django.urls import reverse

from apps.core.alerts import confirm_context, delete_confirm_context, show_alert
from apps.core.context_processors import navigation, theme
from apps.core.exceptions import InvalidFileException, RecordNotFoundException
from apps.core.repository import MockRepository, as_dict, day, stamp
from apps.core.templatetags.custom_filters import (
    currency, expiry_badge, filesize, lakhs, rupees, status_badge, BADGE_CLASSES
)


@dataclass
class Widget:
    id: int
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def seed_widgets():
    return [Widget(1, 'Fuse'), Widget(2, 'Breaker')]


class MockRepositoryTests(SimpleTestCase):
    """Tests for the in-memory repository."""

    def setUp(self):
        self.repo = MockRepository('Widget', Widget, seed_widgets)

    def test_get_and_filter(self):
        self.assertEqual(self.repo.get_by_id(2).name, 'Breaker')
        self.assertIsNone(self.repo.get_by_id(9))
        self.assertEqual([w.id for w in self.repo.filter(name='Fuse')], [1])

    def test_get_or_raise(self):
        with self.assertRaises(RecordNotFoundException) as ctx:
            self.repo.get_or_raise(9)
        self.assertEqual(ctx.exception.message, 'Widget #9 not found.')
        self.assertEqual(ctx.exception.to_dict()['error_code'], 'ERR_RECORD_NOT_FOUND')

    def test_create_puts_newest_first(self):
        widget = self.repo.create(name='Relay')
        self.assertEqual(widget.id, 3)
        self.assertIsNotNone(widget.created_at)
        self.assertEqual(self.repo.all()[0].id, 3)

    def test_update(self):
        widget = self.repo.update(1, name='HRC Fuse')
        self.assertEqual(widget.name, 'HRC Fuse')
        self.assertIsNotNone(widget.updated_at)

    def test_update_unknown_field(self):
        with self.assertRaises(AttributeError):
            self.repo.update(1, colour='red')

    def test_delete_and_reset(self):
        self.repo.delete(1)
        self.assertEqual(self.repo.count(), 1)
        self.repo.reset()
        self.assertEqual(self.repo.count(), 2)

    def test_seed_is_not_shared(self):
        self.repo.get_by_id(1).name = 'Changed'
        self.repo.reset()
        self.assertEqual(self.repo.get_by_id(1).name, 'Fuse')

    def test_as_dict(self):
        self.assertEqual(as_dict(Widget(5, 'Lug'))['name'], 'Lug')

    def test_parsers(self):
        self.assertEqual(stamp('2025-01-15T10:00:00Z').year, 2025)
        self.assertEqual(day('2025-11-01').month, 11)
        self.assertIsNone(day(None))
        with self.assertRaises(ValueError):
            day('not a date')


class AlertTests(SimpleTestCase):

    def test_delete_confirm_context(self):
        context = delete_confirm_context('this client')
        self.assertEqual(context['title'], 'Are you sure?')
        self.assertEqual(context['text'], 'Do you want to delete this client? This action cannot be undone.')
        self.assertEqual(context['confirm_button_text'], 'Yes, delete it')

    def test_confirm_context_defaults(self):
        context = confirm_context('Proceed?')
        self.assertEqual((context['confirm_button_text'], context['cancel_button_text']), ('Yes', 'Cancel'))

    def test_unknown_icon(self):
        with self.assertRaises(ValueError):
            show_alert(None, 'Oops', icon='fire')

    def test_invalid_file_default_message(self):
        self.assertEqual(InvalidFileException().message, 'Only PDF and DOCX files are allowed.')


class CustomFilterTests(SimpleTestCase):

    def test_amount_formats(self):
        self.assertEqual(currency(Decimal('1234567.891')), '1,234,567.89')
        self.assertEqual(currency(None), '0.00')
        self.assertEqual(rupees(Decimal('41500.75')), '₹41,500')
        self.assertEqual(lakhs(10000000), '₹100.00L')
        self.assertEqual(currency('n/a'), 'n/a')

    def test_status_badge(self):
        self.assertEqual(status_badge('Active'), BADGE_CLASSES['green'])
        self.assertEqual(status_badge('Overdue'), BADGE_CLASSES['red'])
        self.assertEqual(status_badge('Something else'), BADGE_CLASSES['gray'])

    def test_expiry_badge(self):
        self.assertEqual(expiry_badge(5), BADGE_CLASSES['red'])
        self.assertEqual(expiry_badge(15), BADGE_CLASSES['orange'])
        self.assertEqual(expiry_badge(30), BADGE_CLASSES['yellow'])
        self.assertEqual(expiry_badge(45), BADGE_CLASSES['gray'])

    def test_filesize(self):
        self.assertEqual(filesize(245760), '240.0 KB')
        self.assertEqual(filesize(2 * 1024 * 1024), '2.00 MB')


class ContextProcessorTests(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_theme_defaults_to_light(self):
        request = self.factory.get('/')
        request.COOKIES['theme'] = 'neon'
        self.assertEqual(theme(request)['theme'], 'light')

    def test_navigation_marks_active_entry(self):
        items = navigation(self.factory.get('/tasks/3/'))['sidebar_items']
        active = [item['label'] for item in items if item['active']]
        self.assertEqual(active, ['Tasks'])

    def test_dashboard_only_active_on_root(self):
        items = navigation(self.factory.get('/'))['sidebar_items']
        self.assertEqual([item['label'] for item in items if item['active']], ['Dashboard'])

    def test_longest_matching_entry_wins(self):
        for path, label in (('/employees/workers/3/', 'Contract Workers'),
                            ('/employees/101/', 'Employees'),
                            ('/tasks/resources/', 'Task Resources')):
            items = navigation(self.factory.get(path))['sidebar_items']
            self.assertEqual([item['label'] for item in items if item['active']], [label])


class ThemeToggleTests(SimpleTestCase):

    def test_toggle_sets_cookie(self):
        response = self.client.post(reverse('core:theme_toggle'), {'next': '/clients/'})
        self.assertRedirects(response, '/clients/', fetch_redirect_response=False)
        self.assertEqual(response.cookies['theme'].value, 'dark')

        self.client.cookies['theme'] = 'dark'
        response = self.client.post(reverse('core:theme_toggle'))
        self.assertEqual(response.cookies['theme'].value, 'light')

    def test_external_next_is_ignored(self):
        response = self.client.post(reverse('core:theme_toggle'), {'next': 'https://example.com/'})
        self.assertEqual(response['Location'], '/')

    def test_dark_theme_rendered(self):
        self.client.cookies['theme'] = 'dark'
        response = self.client.get(reverse('core:dashboard'))
        self.assertContains(response, 'class="dark"')


class DashboardViewTests(SimpleTestCase):

    def setUp(self):
        from apps.amcs.mock_data import amcs
        from apps.payments.mock_data import payments
        from apps.tenders.mock_data import tenders
        for repo in (amcs, payments, tenders):
            repo.reset()

    def test_dashboard(self):
        response = self.client.get(reverse('core:dashboard'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['active_amc_count'], 3)
        self.assertEqual(response.context['filed_tender_count'], 1)
        self.assertEqual(response.context['overdue_payment_count'], 2)
        self.assertLessEqual(len(response.context['recent_tasks']), 5)

    def test_home_redirects_to_dashboard(self):
        self.assertRedirects(self.client.get('/home/'), '/')


class RecordDeleteViewTests(SimpleTestCase):

    def setUp(self):
        from apps.payments.mock_data import payments
        payments.reset()

    def test_get_renders_confirmation(self):
        response = self.client.get(reverse('payments:payment_delete', args=[1]))
        self.assertContains(response, 'Are you sure?')
        self.assertContains(response, 'Do you want to delete this payment record? This action cannot be undone.')

    def test_missing_record_is_404(self):
        response = self.client.get(reverse('payments:payment_delete', args=[999]))
        self.assertEqual(response.status_code, 404)

    def test_post_deletes_and_reports(self):
        response = self.client.post(reverse('payments:payment_delete', args=[1]), follow=True)
        self.assertContains(response, 'Payment deleted successfully.')


class TestDiscoveryTests(SimpleTestCase):
    """The module apps must be found by ``manage.py test``."""

    def test_apps_is_a_regular_package(self):
        import apps
        self.assertIsNotNone(apps.__file__)

    def test_app_label_discovers_its_tests(self):
        suite = DiscoverRunner(verbosity=0).build_suite(['apps.payroll'])
        self.assertGreater(suite.countTestCases(), 0)
