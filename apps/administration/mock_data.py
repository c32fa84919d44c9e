"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock settings data: company bank accounts, the holiday
             calendar and email templates.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class AccountType(models.TextChoices):
    SAVINGS = 'Savings', _('Savings')
    CURRENT = 'Current', _('Current')


class HolidayType(models.TextChoices):
    PUBLIC = 'Public', _('Public')
    OPTIONAL = 'Optional', _('Optional')
    RESTRICTED = 'Restricted', _('Restricted')


@dataclass
class BankAccount:
    """
    Company bank account used for payments.

    Exactly one account is flagged ``is_primary`` while any exist.
    """
    id: int
    bank_name: str
    account_number: str
    account_holder_name: str
    ifsc_code: str
    branch: str = ''
    account_type: str = AccountType.CURRENT
    is_primary: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.bank_name} - {self.masked_account_number}"

    @property
    def masked_account_number(self) -> str:
        """Return masked account number for display (e.g., ****1234)."""
        if len(self.account_number) > 4:
            return f"****{self.account_number[-4:]}"
        return self.account_number


@dataclass
class Holiday:
    id: int
    name: str
    date: date
    type: str = HolidayType.PUBLIC
    description: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class EmailTemplate:
    id: int
    name: str
    subject: str
    body: str
    placeholders: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def _seed_bank_accounts() -> List[BankAccount]:
    return [
        BankAccount(1, 'HDFC Bank', '50100123456789', 'Electrocom Pvt. Ltd.', 'HDFC0001234',
                    'Andheri West, Mumbai', AccountType.CURRENT, True,
                    stamp('2024-01-15T00:00:00Z'), stamp('2024-01-15T00:00:00Z')),
        BankAccount(2, 'ICICI Bank', '602305987654', 'Electrocom Pvt. Ltd.', 'ICIC0006023',
                    'Vashi, Navi Mumbai', AccountType.CURRENT, False,
                    stamp('2024-06-20T00:00:00Z'), stamp('2024-06-20T00:00:00Z')),
    ]


def _seed_holidays() -> List[Holiday]:
    rows = [
        (1, 'Republic Day', '2026-01-26', HolidayType.PUBLIC, "National holiday celebrating India's constitution"),
        (2, 'Holi', '2026-03-14', HolidayType.PUBLIC, 'Festival of colors'),
        (3, 'Good Friday', '2026-04-03', HolidayType.OPTIONAL, 'Christian holiday'),
        (4, 'Independence Day', '2026-08-15', HolidayType.PUBLIC, "National holiday celebrating India's independence"),
        (5, 'Diwali', '2026-11-01', HolidayType.PUBLIC, 'Festival of lights'),
    ]
    created = stamp('2025-01-01T00:00:00Z')
    return [
        Holiday(pk, name, day(on), kind, description, created, created)
        for pk, name, on, kind, description in rows
    ]


_CARD = 'background: #f3f4f6; padding: 20px; margin: 20px 0; border-radius: 8px;'
_WRAP = 'font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;'


def _seed_email_templates() -> List[EmailTemplate]:
    amc_reminder = f"""<div style="{_WRAP}">
  <h2 style="color: #0284c7;">Payment Reminder</h2>
  <p>Dear {{{{client_name}}}},</p>
  <p>This is a friendly reminder that your AMC bill is due for payment.</p>
  <div style="{_CARD}">
    <p><strong>AMC Number:</strong> {{{{amc_number}}}}</p>
    <p><strong>Period:</strong> {{{{period_from}}}} to {{{{period_to}}}}</p>
    <p><strong>Amount:</strong> &#8377;{{{{amount}}}}</p>
    <p><strong>Due Date:</strong> {{{{due_date}}}}</p>
  </div>
  <p>Please make the payment at your earliest convenience to avoid service interruption.</p>
  <p>For any queries, please contact us at {{{{company_email}}}} or {{{{company_phone}}}}.</p>
  <p>Thank you for your business!</p>
  <p><strong>{{{{company_name}}}}</strong></p>
</div>"""
    welcome = f"""<div style="{_WRAP}">
  <h1 style="color: #0284c7;">Welcome Aboard!</h1>
  <p>Dear {{{{client_name}}}},</p>
  <p>Thank you for choosing {{{{company_name}}}} as your service partner. We are excited to work with you!</p>
  <div style="{_CARD}">
    <h3 style="margin-top: 0;">Your Account Details</h3>
    <p><strong>Client ID:</strong> {{{{client_id}}}}</p>
    <p><strong>Primary Contact:</strong> {{{{contact_name}}}}</p>
    <p><strong>Email:</strong> {{{{contact_email}}}}</p>
    <p><strong>Phone:</strong> {{{{contact_phone}}}}</p>
  </div>
  <p>Our team will reach out to you shortly to discuss your requirements.</p>
  <p>{{{{company_email}}}} | {{{{company_phone}}}}</p>
  <p>Best regards,<br><strong>{{{{company_name}}}} Team</strong></p>
</div>"""
    task_assignment = f"""<div style="{_WRAP}">
  <h2 style="color: #0284c7;">New Task Assigned</h2>
  <p>Hello {{{{employee_name}}}},</p>
  <p>You have been assigned a new task. Please review the details below:</p>
  <div style="{_CARD}">
    <p><strong>Task ID:</strong> {{{{task_id}}}}</p>
    <p><strong>Description:</strong> {{{{task_description}}}}</p>
    <p><strong>Client:</strong> {{{{client_name}}}}</p>
    <p><strong>Location:</strong> {{{{location}}}}</p>
    <p><strong>Date:</strong> {{{{task_date}}}}</p>
    <p><strong>Priority:</strong> <span style="color: #dc2626;">{{{{priority}}}}</span></p>
  </div>
  <p>Please confirm receipt and update the task status upon completion.</p>
  <p>Best regards,<br><strong>{{{{company_name}}}}</strong></p>
</div>"""
    payslip = f"""<div style="{_WRAP}">
  <h2 style="color: #0284c7;">Payslip for {{{{month_year}}}}</h2>
  <p>Dear {{{{employee_name}}}},</p>
  <p>Please find your payslip details for {{{{month_year}}}} below:</p>
  <div style="{_CARD}">
    <h3 style="margin-top: 0;">Earnings</h3>
    <p><strong>Base Salary:</strong> &#8377;{{{{base_salary}}}}</p>
    <p><strong>Allowances:</strong> &#8377;{{{{allowances}}}}</p>
    <p><strong>Gross Salary:</strong> &#8377;{{{{gross_salary}}}}</p>
    <h3>Deductions</h3>
    <p><strong>PF:</strong> &#8377;{{{{pf}}}}</p>
    <p><strong>ESI:</strong> &#8377;{{{{esi}}}}</p>
    <p><strong>Professional Tax:</strong> &#8377;{{{{professional_tax}}}}</p>
    <p><strong>Total Deductions:</strong> &#8377;{{{{total_deductions}}}}</p>
    <h3 style="color: #0284c7;">Net Salary: &#8377;{{{{net_salary}}}}</h3>
  </div>
  <p>Payment will be credited to your bank account on {{{{payment_date}}}}.</p>
  <p>For any queries, please contact HR at {{{{hr_email}}}}.</p>
  <p>Best regards,<br><strong>{{{{company_name}}}}</strong></p>
</div>"""
    tender_confirmation = f"""<div style="{_WRAP}">
  <h2 style="color: #0284c7;">Tender Submission Confirmation</h2>
  <p>Dear Team,</p>
  <p>This is to confirm that we have successfully submitted our bid for the following tender:</p>
  <div style="{_CARD}">
    <p><strong>Tender Name:</strong> {{{{tender_name}}}}</p>
    <p><strong>Reference Number:</strong> {{{{reference_number}}}}</p>
    <p><strong>Estimated Value:</strong> &#8377;{{{{estimated_value}}}}</p>
    <p><strong>Submission Date:</strong> {{{{submission_date}}}}</p>
    <p><strong>Result Date:</strong> {{{{result_date}}}}</p>
  </div>
  <p>All required documents have been submitted and EMD payment has been made.</p>
  <p>Best regards,<br><strong>{{{{company_name}}}}</strong></p>
</div>"""

    rows = [
        (1, 'AMC Bill Reminder', 'Payment Reminder - AMC Bill {{amc_number}}', amc_reminder,
         ['client_name', 'amc_number', 'period_from', 'period_to', 'amount', 'due_date',
          'company_email', 'company_phone', 'company_name'],
         '2025-01-15T10:00:00Z', '2025-10-20T14:30:00Z'),
        (2, 'Welcome New Client', 'Welcome to {{company_name}}!', welcome,
         ['client_name', 'company_name', 'client_id', 'contact_name', 'contact_email',
          'contact_phone', 'company_email', 'company_phone'],
         '2025-02-01T09:00:00Z', '2025-02-01T09:00:00Z'),
        (3, 'Task Assignment', 'New Task Assigned - {{task_id}}', task_assignment,
         ['employee_name', 'task_id', 'task_description', 'client_name', 'location',
          'task_date', 'priority', 'company_name'],
         '2025-03-10T11:00:00Z', '2025-09-15T16:00:00Z'),
        (4, 'Payslip - Monthly', 'Payslip for {{month_year}} - {{employee_name}}', payslip,
         ['employee_name', 'month_year', 'base_salary', 'allowances', 'gross_salary', 'pf', 'esi',
          'professional_tax', 'total_deductions', 'net_salary', 'payment_date', 'hr_email', 'company_name'],
         '2025-04-05T10:00:00Z', '2025-04-05T10:00:00Z'),
        (5, 'Tender Submission Confirmation', 'Tender Submitted - {{tender_name}}', tender_confirmation,
         ['tender_name', 'reference_number', 'estimated_value', 'submission_date', 'result_date', 'company_name'],
         '2025-05-20T15:00:00Z', '2025-05-20T15:00:00Z'),
    ]
    return [
        EmailTemplate(pk, name, subject, body, placeholders, stamp(created), stamp(updated))
        for pk, name, subject, body, placeholders, created, updated in rows
    ]


bank_accounts: MockRepository[BankAccount] = MockRepository(
    'Bank account', BankAccount, _seed_bank_accounts
)
holidays: MockRepository[Holiday] = MockRepository('Holiday', Holiday, _seed_holidays)
email_templates: MockRepository[EmailTemplate] = MockRepository(
    'Email template', EmailTemplate, _seed_email_templates
)
