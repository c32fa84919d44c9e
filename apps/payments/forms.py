"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Payment create/edit, mark-paid and sheet import forms.
-------------------------------------------------------------------------
"""
import os

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.payments.mock_data import PaymentCategory, PaymentMode, PaymentStatus

# Categories that must name who is being paid
NAMED_PAYEE_CATEGORIES = (PaymentCategory.VENDOR, PaymentCategory.UTILITY, PaymentCategory.CONTRACTOR)


class PaymentForm(forms.Form):
    """
    Create or edit a payment.

    ``payee`` is stored as the contractor name for contractor payments
    and as the vendor name otherwise.
    """

    payment_number = forms.CharField(
        required=False,
        max_length=30,
        label=_('Payment Number'),
        help_text=_('Leave blank to assign the next number'),
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'PAY-2025-005'})
    )
    category = forms.ChoiceField(
        choices=PaymentCategory.choices,
        initial=PaymentCategory.VENDOR,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    payee = forms.CharField(
        required=False,
        max_length=200,
        label=_('Vendor / Contractor Name'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    amount = forms.DecimalField(
        max_digits=14,
        decimal_places=2,
        error_messages={'required': _('Amount must be greater than 0')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    description = forms.CharField(
        error_messages={'required': _('Description is required')},
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )
    due_date = forms.DateField(
        label=_('Due Date'),
        error_messages={'required': _('Due date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    status = forms.ChoiceField(
        choices=PaymentStatus.choices,
        initial=PaymentStatus.PENDING,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    payment_mode = forms.ChoiceField(
        required=False,
        choices=[('', _('Select mode'))] + PaymentMode.choices,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    transaction_reference = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def __init__(self, *args, **kwargs) -> None:
        initial = kwargs.get('initial')
        if initial and 'payee' not in initial:
            kwargs['initial'] = dict(
                initial, payee=initial.get('vendor_name') or initial.get('contractor_name') or ''
            )
        super().__init__(*args, **kwargs)

    def clean_amount(self):
        amount = self.cleaned_data['amount']
        if amount <= 0:
            raise forms.ValidationError(_('Amount must be greater than 0'))
        return amount

    def clean(self) -> dict:
        cleaned_data = super().clean()
        category = cleaned_data.get('category')
        if category in NAMED_PAYEE_CATEGORIES and not cleaned_data.get('payee'):
            if category == PaymentCategory.CONTRACTOR:
                self.add_error('payee', _('Contractor name is required'))
            else:
                self.add_error('payee', _('Vendor name is required'))
        return cleaned_data


class MarkPaymentPaidForm(forms.Form):
    """Optional details recorded when a payment is marked paid."""

    paid_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    payment_mode = forms.ChoiceField(
        required=False,
        choices=[('', _('Select mode'))] + PaymentMode.choices,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    transaction_reference = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )


class PaymentImportForm(forms.Form):
    sheet = forms.FileField(
        label=_('Payment Sheet (.xlsx)'),
        error_messages={'required': _('Please choose a file to import')},
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.xlsx'})
    )

    def clean_sheet(self):
        sheet = self.cleaned_data['sheet']
        if os.path.splitext(sheet.name)[1].lower() != '.xlsx':
            raise forms.ValidationError(_('Only .xlsx files can be imported'))
        return sheet
