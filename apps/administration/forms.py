"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Bank account, holiday and email template forms.
-------------------------------------------------------------------------
"""
import re

from django import forms
from django.core.validators import validate_email
from django.utils.translation import gettext_lazy as _

from apps.administration.mock_data import AccountType, HolidayType

IFSC_PATTERN = re.compile(r'^[A-Z]{4}0[A-Z0-9]{6}$')


class BankAccountForm(forms.Form):
    bank_name = forms.CharField(
        max_length=100,
        error_messages={'required': _('Bank name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    account_holder_name = forms.CharField(
        max_length=150,
        error_messages={'required': _('Account holder name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    account_number = forms.CharField(
        max_length=20,
        error_messages={'required': _('Account number is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    ifsc_code = forms.CharField(
        max_length=11,
        label=_('IFSC Code'),
        error_messages={'required': _('IFSC code is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'HDFC0001234'})
    )
    branch = forms.CharField(
        required=False,
        max_length=150,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    account_type = forms.ChoiceField(
        choices=AccountType.choices,
        initial=AccountType.CURRENT,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    is_primary = forms.BooleanField(
        required=False,
        label=_('Set as primary account'),
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'})
    )

    def clean_account_number(self):
        number = self.cleaned_data['account_number'].replace(' ', '')
        if not number.isdigit():
            raise forms.ValidationError(_('Account number must contain digits only'))
        return number

    def clean_ifsc_code(self):
        code = self.cleaned_data['ifsc_code'].strip().upper()
        if not IFSC_PATTERN.match(code):
            raise forms.ValidationError(_('Invalid IFSC code (e.g. HDFC0001234)'))
        return code


class HolidayForm(forms.Form):
    name = forms.CharField(
        max_length=100,
        error_messages={'required': _('Holiday name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    date = forms.DateField(
        error_messages={'required': _('Date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    type = forms.ChoiceField(
        choices=HolidayType.choices,
        initial=HolidayType.PUBLIC,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )


class EmailTemplateForm(forms.Form):
    name = forms.CharField(
        max_length=150,
        error_messages={'required': _('Template name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., AMC Bill Reminder'})
    )
    subject = forms.CharField(
        max_length=250,
        error_messages={'required': _('Subject is required')},
        widget=forms.TextInput(attrs={'class': 'form-control',
                                      'placeholder': 'Use placeholders like {{client_name}}'})
    )
    body = forms.CharField(
        error_messages={'required': _('Body is required')},
        widget=forms.Textarea(attrs={'class': 'form-control font-monospace', 'rows': 14,
                                     'placeholder': '<p>Dear {{client_name}},</p>'})
    )


class SendEmailForm(forms.Form):
    recipients = forms.CharField(
        error_messages={'required': _('Recipients are required')},
        widget=forms.TextInput(attrs={'class': 'form-control',
                                      'placeholder': 'email1@example.com, email2@example.com'})
    )

    def clean_recipients(self):
        recipients = [r.strip() for r in self.cleaned_data['recipients'].split(',') if r.strip()]
        if not recipients:
            raise forms.ValidationError(_('Recipients are required'))
        for recipient in recipients:
            try:
                validate_email(recipient)
            except forms.ValidationError:
                raise forms.ValidationError(_('Invalid email address: %(email)s') % {'email': recipient})
        return recipients
