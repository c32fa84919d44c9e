"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Notification services: unread badge, recent dropdown,
             mark read and create.
-------------------------------------------------------------------------
"""
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from django.utils import timezone

from apps.core.logging import ConsoleLogger
from apps.notifications.mock_data import Notification, NotificationType, notifications

# Filter chips on the list page, in display order
FILTER_CHOICES = ['All', 'Unread'] + [value for value, _label in NotificationType.choices]


def filter_notifications(records: Iterable[Notification], search: str = '',
                         filter_type: str = 'All') -> List[Notification]:
    """
    Search matches title or message; ``filter_type`` is All, Unread or a type.
    """
    search = (search or '').strip().lower()
    filtered = []
    for notification in records:
        if search and search not in notification.title.lower() \
                and search not in notification.message.lower():
            continue
        if filter_type == 'Unread' and notification.is_read:
            continue
        if filter_type not in ('', 'All', 'Unread') and notification.type != filter_type:
            continue
        filtered.append(notification)
    return filtered


def group_by_day(records: Iterable[Notification], today: Optional[date] = None) -> Dict[str, List[Notification]]:
    """Split notifications into today, yesterday and older by local date."""
    today = today or timezone.localdate()
    groups = {'today': [], 'yesterday': [], 'older': []}
    for notification in records:
        created = timezone.localdate(notification.created_at)
        if created == today:
            groups['today'].append(notification)
        elif created == today - timedelta(days=1):
            groups['yesterday'].append(notification)
        else:
            groups['older'].append(notification)
    return groups


class NotificationService:
    """
    Service class for managing notifications.

    Provides methods to create notifications, update their read state
    and query the unread count for the header badge.
    """

    @staticmethod
    def send_notification(
        title: str,
        message: str,
        type: str = NotificationType.SYSTEM,
        link: str = '',
        scheduled_for: Optional[datetime] = None
    ) -> Notification:
        """
        Create a notification for all employees.

        Args:
            title: Short notification title.
            message: Detailed notification message.
            type: Notification type (Task, Bill, Tender, Payroll, System, Reminder).
            link: Optional URL to the related page.
            scheduled_for: Optional delivery time; it becomes the creation time.

        Returns:
            The created Notification.
        """
        notification = notifications.create(
            title=title,
            message=message,
            type=type,
            link=link,
            created_at=scheduled_for or timezone.now(),
        )
        ConsoleLogger.log_record_created('Notification', notification, title)
        return notification

    @staticmethod
    def get_unread_count() -> int:
        return len(notifications.filter(is_read=False))

    @staticmethod
    def get_recent_notifications(limit: Optional[int] = 10) -> List[Notification]:
        """
        Get the most recent notifications.

        Args:
            limit: Maximum number of notifications to return (default: 10);
                   ``None`` returns all of them.
        """
        return sorted(notifications.all(), key=lambda n: n.created_at, reverse=True)[:limit]

    @staticmethod
    def mark_as_read(notification_id: int) -> Notification:
        """
        Mark one notification read; the first read time is kept.

        Raises:
            RecordNotFoundException: If the notification does not exist.
        """
        notification = notifications.get_or_raise(notification_id)
        if not notification.is_read:
            notifications.update(notification.id, is_read=True, read_at=timezone.now())
        return notification

    @staticmethod
    def mark_all_as_read() -> int:
        """
        Mark every unread notification as read.

        Returns:
            Number of notifications marked as read.
        """
        now = timezone.now()
        unread = notifications.filter(is_read=False)
        for notification in unread:
            notifications.update(notification.id, is_read=True, read_at=now)
        return len(unread)
