"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Settings views: bank accounts, holiday calendar and email
             templates (with preview and send).
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.shortcuts import redirect
from django.urls import reverse
from django.views.generic import FormView, TemplateView

from apps.administration.forms import BankAccountForm, EmailTemplateForm, HolidayForm, SendEmailForm
from apps.administration.mock_data import HolidayType, bank_accounts, email_templates, holidays
from apps.administration.services import (
    AVAILABLE_PLACEHOLDERS, BankAccountService, EmailTemplateService, holiday_stats,
    preview_template, sorted_holidays
)
from apps.core.alerts import show_success
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin, SearchFilterMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView


# =====================================================================
# BANK ACCOUNT VIEWS
# =====================================================================


class BankAccountListView(TemplateView):
    """List all bank accounts, primary first."""
    template_name = 'administration/bank_account_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['bank_accounts'] = sorted(bank_accounts.all(), key=lambda a: not a.is_primary)
        return context


class BankAccountCreateView(FormView):
    """Create new bank account."""
    template_name = 'administration/setup_form.html'
    form_class = BankAccountForm

    def form_valid(self, form):
        account = BankAccountService.create_account(form.cleaned_data)
        show_success(self.request, 'Account Added', f"{account.bank_name} account added.")
        return redirect('administration:bank_account_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Add Bank Account'
        context['back_url'] = reverse('administration:bank_account_list')
        return context


class BankAccountUpdateView(RecordMixin, FormView):
    """Update bank account."""
    template_name = 'administration/setup_form.html'
    form_class = BankAccountForm
    repository = bank_accounts
    context_object_name = 'account'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        account = BankAccountService.update_account(self.get_object().id, form.cleaned_data)
        show_success(self.request, 'Account Updated', f"{account.bank_name} account updated.")
        return redirect('administration:bank_account_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Edit Bank Account'
        context['back_url'] = reverse('administration:bank_account_list')
        return context


class BankAccountDeleteView(RecordDeleteView):
    """Delete bank account."""
    repository = bank_accounts
    item_label = 'this bank account'

    def perform_delete(self, record) -> None:
        BankAccountService.delete_account(record.id)

    def get_success_url(self) -> str:
        return reverse('administration:bank_account_list')


# =====================================================================
# HOLIDAY VIEWS
# =====================================================================


class HolidayListView(TemplateView):
    template_name = 'administration/holiday_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        holiday_type = self.request.GET.get('type', 'all')
        context.update({
            'holidays': sorted_holidays(holidays.all(), holiday_type),
            'stats': holiday_stats(holidays.all()),
            'type_filter': holiday_type,
            'type_choices': HolidayType.choices,
        })
        return context


class HolidayCreateView(FormView):
    template_name = 'administration/setup_form.html'
    form_class = HolidayForm

    def form_valid(self, form):
        holiday = holidays.create(**form.cleaned_data)
        ConsoleLogger.log_record_created('Holiday', holiday, holiday.name)
        show_success(self.request, 'Holiday Added', f"{holiday.name} added to the calendar.")
        return redirect('administration:holiday_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Add Holiday'
        context['back_url'] = reverse('administration:holiday_list')
        return context


class HolidayUpdateView(RecordMixin, FormView):
    template_name = 'administration/setup_form.html'
    form_class = HolidayForm
    repository = holidays
    context_object_name = 'holiday'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        holiday = holidays.update(self.get_object().id, **form.cleaned_data)
        ConsoleLogger.log_record_updated('Holiday', holiday, holiday.name)
        show_success(self.request, 'Holiday Updated', f"{holiday.name} updated.")
        return redirect('administration:holiday_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Edit Holiday'
        context['back_url'] = reverse('administration:holiday_list')
        return context


class HolidayDeleteView(RecordDeleteView):
    repository = holidays
    item_label = 'this holiday'

    def get_success_url(self) -> str:
        return reverse('administration:holiday_list')


# =====================================================================
# EMAIL TEMPLATE VIEWS
# =====================================================================


class EmailTemplateListView(SearchFilterMixin, TemplateView):
    template_name = 'administration/email_template_list.html'
    search_fields = ('name', 'subject')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context.update(self.get_filter_context())
        context['email_templates'] = self.apply_filters(email_templates.all())
        return context


class EmailTemplateCreateView(FormView):
    template_name = 'administration/email_template_form.html'
    form_class = EmailTemplateForm

    def form_valid(self, form):
        template = EmailTemplateService.save_template(form.cleaned_data)
        show_success(self.request, 'Template Created', f"{template.name} saved.")
        return redirect('administration:email_template_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Create Email Template'
        context['available_placeholders'] = AVAILABLE_PLACEHOLDERS
        return context


class EmailTemplateUpdateView(RecordMixin, FormView):
    template_name = 'administration/email_template_form.html'
    form_class = EmailTemplateForm
    repository = email_templates
    context_object_name = 'email_template'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        template = EmailTemplateService.save_template(form.cleaned_data, self.get_object().id)
        show_success(self.request, 'Template Updated', f"{template.name} saved.")
        return redirect('administration:email_template_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Edit Email Template'
        context['available_placeholders'] = AVAILABLE_PLACEHOLDERS
        return context


class EmailTemplatePreviewView(RecordMixin, FormView):
    """Preview a template with sample values; POST sends it."""
    template_name = 'administration/email_template_preview.html'
    form_class = SendEmailForm
    repository = email_templates
    context_object_name = 'email_template'

    def form_valid(self, form):
        template = self.get_object()
        recipients = form.cleaned_data['recipients']
        EmailTemplateService.send_template(template, recipients)
        show_success(self.request, 'Email sent successfully!',
                     f"Template: {template.name} | Recipients: {', '.join(recipients)}")
        return redirect('administration:email_template_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['preview'] = preview_template(self.get_object())
        return context


class EmailTemplateDeleteView(RecordDeleteView):
    repository = email_templates

    def get_item_label(self) -> str:
        return f'the "{self.get_object().name}" template'

    def get_success_url(self) -> str:
        return reverse('administration:email_template_list')
