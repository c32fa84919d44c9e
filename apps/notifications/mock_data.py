"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock in-app notifications. Timestamps are relative to the
             moment the data is loaded so the dropdown's Today /
             Yesterday grouping has entries.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository


class NotificationType(models.TextChoices):
    TASK = 'Task', _('Task')
    BILL = 'Bill', _('Bill')
    TENDER = 'Tender', _('Tender')
    PAYROLL = 'Payroll', _('Payroll')
    SYSTEM = 'System', _('System')
    REMINDER = 'Reminder', _('Reminder')


class NotificationChannel(models.TextChoices):
    IN_APP = 'In-App', _('In-App')
    EMAIL = 'Email', _('Email')
    PUSH = 'Push', _('Push')


# Type -> icon shown in the list and dropdown
TYPE_ICONS = {
    NotificationType.TASK: '📋',
    NotificationType.BILL: '💰',
    NotificationType.TENDER: '📄',
    NotificationType.PAYROLL: '💼',
    NotificationType.SYSTEM: '⚙️',
    NotificationType.REMINDER: '⏰',
}


@dataclass
class Notification:
    id: int
    title: str
    message: str
    type: str = NotificationType.SYSTEM
    channel: str = NotificationChannel.IN_APP
    recipient_name: str = 'All Employees'
    link: str = ''
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def icon(self) -> str:
        return TYPE_ICONS.get(self.type, '🔔')


def _seed_notifications() -> List[Notification]:
    now = timezone.now()
    rows = [
        (1, 'Task awaiting approval', 'Ravi Sharma completed "Panel wiring at Sunrise Towers" and it needs approval.',
         NotificationType.TASK, '/tasks/1/', False, timedelta(minutes=25)),
        (2, 'AMC bill overdue', 'Quarterly bill for AMC-2025-002 is 15 days past due.',
         NotificationType.BILL, '/amcs/2/', False, timedelta(hours=3)),
        (3, 'Tender closing soon', 'Bid submission for the BSNL network expansion closes in 3 days.',
         NotificationType.TENDER, '/tenders/2/', False, timedelta(hours=26)),
        (4, 'Payroll ready for payment', 'October payroll has been computed for 5 employees.',
         NotificationType.PAYROLL, '/payroll/', False, timedelta(hours=30)),
        (5, 'AMC renewal reminder', 'AMC-2025-001 expires within the next 30 days.',
         NotificationType.REMINDER, '/amcs/1/', True, timedelta(days=2)),
        (6, 'Scheduled maintenance', 'The console will be read-only on Sunday from 22:00 to 23:00.',
         NotificationType.SYSTEM, '', True, timedelta(days=3)),
        (7, 'Task approved', 'Site inspection report for Green Valley Apartments was approved.',
         NotificationType.TASK, '/tasks/2/', True, timedelta(days=5)),
        (8, 'Vendor payment due', 'Payment PAY-2025-001 to ABC Electric Supplies is due this week.',
         NotificationType.BILL, '/payments/', True, timedelta(days=8)),
    ]
    notifications = []
    for pk, title, message, kind, link, is_read, age in rows:
        created_at = now - age
        notifications.append(Notification(
            id=pk,
            title=title,
            message=message,
            type=kind,
            link=link,
            is_read=is_read,
            read_at=created_at + timedelta(hours=1) if is_read else None,
            created_at=created_at,
        ))
    return notifications


notifications: MockRepository[Notification] = MockRepository(
    'Notification', Notification, _seed_notifications
)
