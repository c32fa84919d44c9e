from django.conf import settings
from django.urls import reverse


# Sidebar navigation: (label, url name, icon)
NAVIGATION = [
    ('Dashboard', 'core:dashboard', 'bi-speedometer2'),
    ('Clients', 'clients:client_list', 'bi-people'),
    ('AMCs', 'amcs:amc_list', 'bi-file-earmark-text'),
    ('Tenders', 'tenders:tender_list', 'bi-briefcase'),
    ('Projects', 'projects:project_list', 'bi-kanban'),
    ('Tasks', 'tasks:task_list', 'bi-list-check'),
    ('Task Resources', 'tasks:resource_summary', 'bi-box-seam'),
    ('Employees', 'employees:employee_list', 'bi-person-badge'),
    ('Contract Workers', 'employees:worker_list', 'bi-person-workspace'),
    ('Attendance', 'attendance:attendance_list', 'bi-calendar-check'),
    ('Payroll', 'payroll:payroll_list', 'bi-cash-stack'),
    ('Payments', 'payments:payment_list', 'bi-credit-card'),
    ('Reports', 'reports:report_index', 'bi-bar-chart'),
    ('Documents', 'documents:template_list', 'bi-folder2-open'),
    ('Notifications', 'notifications:notification_list', 'bi-bell'),
    ('Bank Accounts', 'administration:bank_account_list', 'bi-bank'),
    ('Holiday Calendar', 'administration:holiday_list', 'bi-calendar-event'),
    ('Email Templates', 'administration:email_template_list', 'bi-envelope'),
]


def theme(request):
    """
    Context processor exposing the light/dark theme preference.
    """
    current = request.COOKIES.get(settings.THEME_COOKIE_NAME, 'light')
    if current not in ('light', 'dark'):
        current = 'light'
    return {
        'theme': current,
        'company_name': settings.COMPANY_NAME,
        'console_user_name': settings.CONSOLE_USER_NAME,
    }


def navigation(request):
    """
    Context processor building the sidebar with the active entry marked.

    Only the entry with the longest URL prefix of the current path is
    active, so nested sections such as contract workers under employees
    mark one entry.
    """
    path = request.path
    entries = [(label, reverse(url_name), icon) for label, url_name, icon in NAVIGATION]
    matches = [
        url for _label, url, _icon in entries
        if (path == url if url == '/' else path.startswith(url))
    ]
    active_url = max(matches, key=len, default=None)
    items = [
        {'label': label, 'url': url, 'icon': icon, 'active': url == active_url}
        for label, url, icon in entries
    ]
    return {'sidebar_items': items}


def notifications(request):
    """
    Context processor to add the unread notification count for the header badge.
    """
    from apps.notifications.services import NotificationService, group_by_day

    recent = NotificationService.get_recent_notifications(limit=5)
    return {
        'unread_count': NotificationService.get_unread_count(),
        'recent_notifications': recent,
        'notification_groups': group_by_day(recent),
    }
