"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Settings services: primary bank account upkeep, holiday
             calendar queries and email template rendering.
-------------------------------------------------------------------------
"""
import re
from datetime import date
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone
from django.utils.html import strip_tags

from apps.core.logging import ConsoleLogger

PLACEHOLDER_PATTERN = re.compile(r'\{\{\s*(\w+)\s*\}\}')

# Placeholders offered by the template editor
AVAILABLE_PLACEHOLDERS = [
    'client_name', 'client_id', 'contact_name', 'contact_email', 'contact_phone',
    'amc_number', 'period_from', 'period_to', 'amount', 'due_date',
    'employee_name', 'task_id', 'task_description', 'location', 'task_date',
    'company_name', 'company_email', 'company_phone',
]


# =====================================================================
# BANK ACCOUNTS
# =====================================================================


class BankAccountService:
    """
    Create, update and delete bank accounts while keeping exactly one
    primary account.
    """

    @staticmethod
    def _ensure_primary() -> None:
        """Flag the oldest account as primary when none is."""
        from apps.administration.mock_data import bank_accounts

        accounts = bank_accounts.all()
        if accounts and not any(a.is_primary for a in accounts):
            oldest = min(accounts, key=lambda a: (a.created_at, a.id))
            oldest.is_primary = True

    @staticmethod
    def _make_primary(account_id: int) -> None:
        from apps.administration.mock_data import bank_accounts

        for account in bank_accounts.all():
            account.is_primary = account.id == account_id

    @staticmethod
    def create_account(data: Dict):
        from apps.administration.mock_data import bank_accounts

        account = bank_accounts.create(**data)
        if account.is_primary:
            BankAccountService._make_primary(account.id)
        BankAccountService._ensure_primary()
        ConsoleLogger.log_record_created('Bank account', account, account.bank_name)
        return account

    @staticmethod
    def update_account(account_id: int, data: Dict):
        from apps.administration.mock_data import bank_accounts

        account = bank_accounts.update(account_id, **data)
        if account.is_primary:
            BankAccountService._make_primary(account.id)
        BankAccountService._ensure_primary()
        ConsoleLogger.log_record_updated('Bank account', account, account.bank_name)
        return account

    @staticmethod
    def delete_account(account_id: int):
        """Delete an account; removing the primary promotes the oldest remaining one."""
        from apps.administration.mock_data import bank_accounts

        account = bank_accounts.delete(account_id)
        BankAccountService._ensure_primary()
        return account


# =====================================================================
# HOLIDAYS
# =====================================================================


def sorted_holidays(records: Iterable, holiday_type: str = 'all') -> List:
    """Holidays of the given type (or all) in date order."""
    return sorted(
        (h for h in records if holiday_type in ('', 'all') or h.type == holiday_type),
        key=lambda h: h.date
    )


def holiday_stats(records: Iterable, today: Optional[date] = None) -> Dict[str, int]:
    from apps.administration.mock_data import HolidayType

    today = today or timezone.localdate()
    records = list(records)
    return {
        'total': len(records),
        'public': len([h for h in records if h.type == HolidayType.PUBLIC]),
        'optional': len([h for h in records if h.type == HolidayType.OPTIONAL]),
        'upcoming': len([h for h in records if h.date >= today]),
    }


# =====================================================================
# EMAIL TEMPLATES
# =====================================================================


def extract_placeholders(*texts: str) -> List[str]:
    """Distinct placeholder names in order of first use."""
    names = []
    for text in texts:
        names.extend(PLACEHOLDER_PATTERN.findall(text or ''))
    return list(dict.fromkeys(names))


def render_placeholders(text: str, values: Dict[str, str]) -> str:
    """
    Substitute ``{{name}}`` placeholders.

    Names without a value are left as written.
    """
    def replace(match):
        name = match.group(1)
        return str(values[name]) if name in values else match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, text)


def sample_values() -> Dict[str, str]:
    """Values used to preview a template."""
    return {
        'client_name': 'TechCorp Solutions',
        'amc_number': 'AMC-2025-042',
        'amount': '25,000',
        'company_name': settings.COMPANY_NAME,
        'company_email': settings.COMPANY_EMAIL,
        'company_phone': settings.COMPANY_PHONE,
    }


def preview_template(template, values: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    values = values if values is not None else sample_values()
    return {
        'subject': render_placeholders(template.subject, values),
        'body': render_placeholders(template.body, values),
    }


class EmailTemplateService:

    @staticmethod
    def save_template(data: Dict, template_id: Optional[int] = None):
        """Create or update a template; ``placeholders`` is derived from subject and body."""
        from apps.administration.mock_data import email_templates

        values = dict(data, placeholders=extract_placeholders(data['subject'], data['body']))
        if template_id is None:
            template = email_templates.create(**values)
            ConsoleLogger.log_record_created('Email template', template, template.name)
        else:
            template = email_templates.update(template_id, **values)
            ConsoleLogger.log_record_updated('Email template', template, template.name)
        return template

    @staticmethod
    def send_template(template, recipients: List[str], values: Optional[Dict[str, str]] = None) -> int:
        """
        Render a template with sample (or given) values and send it.

        Returns:
            Number of messages sent by the configured email backend.
        """
        rendered = preview_template(template, values)
        sent = send_mail(
            subject=rendered['subject'],
            message=strip_tags(rendered['body']),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=recipients,
            html_message=rendered['body'],
        )
        ConsoleLogger.log_email_sent(template.name, recipients)
        return sent
