"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Core views: dashboard, theme toggle and the shared
             delete-confirmation view used by every module.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.conf import settings
from django.http import HttpResponseRedirect
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import TemplateView

from apps.core.alerts import delete_confirm_context, show_success
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin


class DashboardView(TemplateView):
    """
    Landing page with summary cards from every module.
    """
    template_name = 'core/dashboard.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        from apps.amcs.services import expiring_amcs
        from apps.amcs.mock_data import AMCStatus, amcs
        from apps.clients.mock_data import clients
        from apps.payments.mock_data import PaymentStatus as PaymentRecordStatus, payments
        from apps.payroll.mock_data import PaymentStatus, payroll_records
        from apps.projects.mock_data import ProjectStatus, projects
        from apps.tasks.mock_data import TaskStatus, tasks
        from apps.tenders.mock_data import TenderStatus, tenders

        context = super().get_context_data(**kwargs)
        all_tasks = sorted(tasks.all(), key=lambda t: t.date, reverse=True)
        pending_payroll = [r for r in payroll_records.all() if r.payment_status == PaymentStatus.PENDING]

        context.update({
            'client_count': clients.count(),
            'active_amc_count': len(amcs.filter(status=AMCStatus.ACTIVE)),
            'expiring_amcs': expiring_amcs(amcs.all()),
            'active_project_count': len(projects.filter(status=ProjectStatus.IN_PROGRESS)),
            'open_task_count': len([t for t in all_tasks if t.status in (TaskStatus.OPEN, TaskStatus.IN_PROGRESS)]),
            'filed_tender_count': len(tenders.filter(status=TenderStatus.FILED)),
            'awarded_tender_value': sum(t.estimated_value for t in tenders.filter(status=TenderStatus.AWARDED)),
            'pending_payroll_count': len(pending_payroll),
            'pending_payroll_amount': sum(r.net_amount for r in pending_payroll),
            'overdue_payment_count': len(payments.filter(status=PaymentRecordStatus.OVERDUE)),
            'recent_tasks': all_tasks[:5],
        })
        return context


class ThemeToggleView(View):
    """
    Switch between light and dark theme.

    The preference lives in a long-lived cookie, the server-side
    counterpart of the browser's local storage.
    """

    def post(self, request, *args, **kwargs):
        current = request.COOKIES.get(settings.THEME_COOKIE_NAME, 'light')
        new_theme = 'light' if current == 'dark' else 'dark'

        next_url = request.POST.get('next') or request.META.get('HTTP_REFERER') or '/'
        if not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
            next_url = '/'

        response = HttpResponseRedirect(next_url)
        response.set_cookie(
            settings.THEME_COOKIE_NAME,
            new_theme,
            max_age=settings.THEME_COOKIE_MAX_AGE,
            samesite='Lax'
        )
        return response


class RecordDeleteView(RecordMixin, TemplateView):
    """
    Delete a record after confirmation.

    GET renders the confirmation dialog; POST deletes the record from its
    repository and redirects to ``success_url``.

    Attributes:
        item_label: Phrase used in the dialog, e.g. "this client".
        success_url: URL name to redirect to after deletion.
    """
    template_name = 'core/confirm_delete.html'
    context_object_name = 'item'
    item_label = 'this item'
    success_url = '/'

    def get_item_label(self) -> str:
        return self.item_label

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['dialog'] = delete_confirm_context(self.get_item_label())
        context['cancel_url'] = self.get_success_url()
        return context

    def get_success_url(self) -> str:
        return self.success_url

    def perform_delete(self, record) -> None:
        self.repository.delete(record.id)

    def post(self, request, *args, **kwargs):
        record = self.get_object()
        self.perform_delete(record)
        ConsoleLogger.log_record_deleted(self.repository.name, record)
        show_success(request, 'Deleted', f"{self.repository.name} deleted successfully.")
        return redirect(self.get_success_url())
