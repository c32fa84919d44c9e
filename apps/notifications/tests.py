"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for notification filtering, read state and views.
-------------------------------------------------------------------------
"""
from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.test import SimpleTestCase
from django.urls import reverse
from django.utils import timezone

from apps.notifications.forms import NotificationForm
from apps.notifications.mock_data import Notification, NotificationType, notifications
from apps.notifications.services import NotificationService, filter_notifications, group_by_day


class NotificationServiceTestCase(SimpleTestCase):

    def setUp(self):
        notifications.reset()

    def test_unread_count(self):
        self.assertEqual(NotificationService.get_unread_count(), 4)

    def test_recent_is_newest_first(self):
        recent = NotificationService.get_recent_notifications(limit=3)
        self.assertEqual([n.id for n in recent], [1, 2, 3])

    def test_mark_as_read(self):
        notification = NotificationService.mark_as_read(1)
        self.assertTrue(notification.is_read)
        self.assertIsNotNone(notification.read_at)
        self.assertEqual(NotificationService.get_unread_count(), 3)

    def test_mark_as_read_keeps_first_read_time(self):
        read_at = notifications.get_by_id(5).read_at
        NotificationService.mark_as_read(5)
        self.assertEqual(notifications.get_by_id(5).read_at, read_at)

    def test_mark_all_as_read(self):
        self.assertEqual(NotificationService.mark_all_as_read(), 4)
        self.assertEqual(NotificationService.get_unread_count(), 0)
        self.assertEqual(NotificationService.mark_all_as_read(), 0)

    def test_send_notification(self):
        notification = NotificationService.send_notification('Stock audit', 'Audit the store on Friday.')
        self.assertFalse(notification.is_read)
        self.assertEqual(notification.type, NotificationType.SYSTEM)
        self.assertEqual(NotificationService.get_recent_notifications(limit=1)[0].id, notification.id)

    def test_filters(self):
        records = notifications.all()
        self.assertEqual(len(filter_notifications(records, filter_type='Unread')), 4)
        self.assertEqual([n.id for n in filter_notifications(records, filter_type='Task')], [1, 7])
        self.assertEqual([n.id for n in filter_notifications(records, 'bsnl')], [3])
        self.assertEqual(filter_notifications(records, 'bsnl', 'Payroll'), [])

    def test_group_by_day(self):
        def at(day, hour):
            return Notification(id=hour, title='t', message='m',
                                created_at=datetime(2025, 11, day, hour, tzinfo=dt_timezone.utc))
        groups = group_by_day([at(3, 6), at(2, 6), at(1, 6)], today=date(2025, 11, 3))
        self.assertEqual([len(groups[key]) for key in ('today', 'yesterday', 'older')], [1, 1, 1])


class NotificationFormTestCase(SimpleTestCase):

    def test_title_and_message_required(self):
        form = NotificationForm(data={'title': '  ', 'message': '', 'type': 'System'})
        self.assertEqual(form.errors['title'], ['Title is required'])
        self.assertEqual(form.errors['message'], ['Message is required'])

    def test_external_link_rejected(self):
        form = NotificationForm(data={'title': 'x', 'message': 'y', 'type': 'Task', 'link': 'https://evil.test/'})
        self.assertIn('link', form.errors)


class NotificationViewTestCase(SimpleTestCase):

    def setUp(self):
        notifications.reset()

    def test_list_filter(self):
        response = self.client.get(reverse('notifications:notification_list'), {'type': 'Unread'})
        self.assertEqual(len(response.context['notifications']), 4)
        self.assertContains(response, 'Task awaiting approval')

    def test_unknown_filter_falls_back_to_all(self):
        response = self.client.get(reverse('notifications:notification_list'), {'type': 'Nope'})
        self.assertEqual(response.context['type_filter'], 'All')
        self.assertEqual(len(response.context['notifications']), 8)

    def test_header_badge(self):
        response = self.client.get(reverse('core:dashboard'))
        self.assertEqual(response.context['unread_count'], 4)
        self.assertEqual(len(response.context['recent_notifications']), 5)

    def test_create(self):
        response = self.client.post(reverse('notifications:notification_create'), {
            'title': 'Safety drill', 'message': 'Drill at 4 PM.', 'type': 'Reminder',
        })
        self.assertRedirects(response, reverse('notifications:notification_list'))
        self.assertEqual(notifications.all()[0].title, 'Safety drill')

    def test_create_scheduled(self):
        later = timezone.localtime() + timedelta(days=2)
        response = self.client.post(reverse('notifications:notification_create'), {
            'title': 'Holiday notice', 'message': 'Office closed.', 'type': 'System',
            'scheduled_for': later.strftime('%Y-%m-%dT%H:%M'),
        }, follow=True)
        self.assertContains(response, 'Notification Scheduled')

    def test_mark_read(self):
        response = self.client.post(reverse('notifications:notification_mark_read', args=[2]))
        self.assertRedirects(response, reverse('notifications:notification_list'))
        self.assertTrue(notifications.get_by_id(2).is_read)

    def test_mark_read_returns_to_next(self):
        response = self.client.post(reverse('notifications:notification_mark_read', args=[2]), {'next': '/tasks/'})
        self.assertEqual(response['Location'], '/tasks/')

    def test_mark_all_read(self):
        self.client.post(reverse('notifications:notification_mark_all_read'))
        self.assertEqual(NotificationService.get_unread_count(), 0)

    def test_delete(self):
        self.client.post(reverse('notifications:notification_delete', args=[6]))
        self.assertIsNone(notifications.get_by_id(6))
