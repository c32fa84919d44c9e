"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Notification views: filtered list, create, mark read and
             delete.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.shortcuts import redirect
from django.urls import reverse
from django.utils import formats, timezone
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_info, show_success
from apps.core.mixins import RecordMixin
from apps.core.views import RecordDeleteView
from apps.notifications.forms import NotificationForm
from apps.notifications.mock_data import notifications
from apps.notifications.services import FILTER_CHOICES, NotificationService, filter_notifications


def _redirect_back(request):
    """Return to the page the action was posted from (list or dropdown)."""
    next_url = request.POST.get('next') or request.META.get('HTTP_REFERER')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return redirect(next_url)
    return redirect('notifications:notification_list')


class NotificationListView(TemplateView):
    template_name = 'notifications/notification_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        search = self.request.GET.get('search', '').strip()
        filter_type = self.request.GET.get('type', 'All')
        if filter_type not in FILTER_CHOICES:
            filter_type = 'All'
        context.update({
            'notifications': filter_notifications(
                NotificationService.get_recent_notifications(limit=None), search, filter_type
            ),
            'search_query': search,
            'type_filter': filter_type,
            'filter_choices': FILTER_CHOICES,
            'form': kwargs.get('form') or NotificationForm(),
        })
        return context


class NotificationCreateView(FormView):
    template_name = 'notifications/notification_form.html'
    form_class = NotificationForm

    def form_valid(self, form):
        data = form.cleaned_data
        notification = NotificationService.send_notification(
            data['title'], data['message'], data['type'], data['link'], data['scheduled_for']
        )
        if data['scheduled_for'] and notification.created_at > timezone.now():
            when = formats.date_format(timezone.localtime(notification.created_at), 'DATETIME_FORMAT')
            show_success(self.request, 'Notification Scheduled', f"Notification scheduled for {when}")
        else:
            show_success(self.request, 'Notification Sent', notification.title)
        return redirect('notifications:notification_list')


class NotificationMarkReadView(RecordMixin, View):
    repository = notifications

    def post(self, request, *args, **kwargs):
        NotificationService.mark_as_read(self.get_object().id)
        return _redirect_back(request)


class NotificationMarkAllReadView(View):

    def post(self, request, *args, **kwargs):
        count = NotificationService.mark_all_as_read()
        if count:
            show_success(request, 'All Read', f"{count} notification(s) marked as read.")
        else:
            show_info(request, 'No unread notifications')
        return _redirect_back(request)


class NotificationDeleteView(RecordDeleteView):
    repository = notifications
    item_label = 'this notification'

    def get_success_url(self) -> str:
        return reverse('notifications:notification_list')
