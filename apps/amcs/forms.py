"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: AMC create/edit form and bill payment form.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.amcs.mock_data import AMCStatus, BillingCycle, BillPaymentMode
from apps.clients.mock_data import clients


class AMCForm(forms.Form):
    """Create or edit an AMC."""

    client_id = forms.TypedChoiceField(
        coerce=int,
        label=_('Client'),
        error_messages={
            'required': _('Client is required'),
            'invalid_choice': _('Select an existing client'),
        },
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    amc_number = forms.CharField(
        max_length=50,
        label=_('AMC Number'),
        error_messages={'required': _('AMC Number is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'AMC/2025/001'})
    )
    start_date = forms.DateField(
        label=_('Start Date'),
        error_messages={'required': _('Start date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    end_date = forms.DateField(
        label=_('End Date'),
        error_messages={'required': _('End date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    status = forms.ChoiceField(
        choices=AMCStatus.choices,
        initial=AMCStatus.PENDING,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    billing_cycle = forms.ChoiceField(
        choices=BillingCycle.choices,
        initial=BillingCycle.QUARTERLY,
        help_text=_('Frequency of billing generation'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    amount = forms.DecimalField(
        max_digits=12,
        decimal_places=2,
        label=_('Contract Amount'),
        error_messages={'required': _('Amount must be greater than 0')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['client_id'].choices = [('', _('Select client'))] + [
            (client.id, client.name) for client in clients.all()
        ]

    def clean_amc_number(self) -> str:
        amc_number = self.cleaned_data['amc_number'].strip()
        if not amc_number:
            raise forms.ValidationError(_('AMC Number is required'))
        return amc_number

    def clean_amount(self):
        amount = self.cleaned_data['amount']
        if amount is None or amount <= 0:
            raise forms.ValidationError(_('Amount must be greater than 0'))
        return amount

    def clean(self) -> dict:
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')
        if start_date and end_date and start_date >= end_date:
            self.add_error('end_date', _('End date must be after start date'))
        return cleaned_data


class BillPaymentForm(forms.Form):
    """Record payment against an AMC bill."""

    payment_date = forms.DateField(
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    payment_mode = forms.ChoiceField(
        choices=BillPaymentMode.choices,
        initial=BillPaymentMode.BANK_TRANSFER,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        if not self.is_bound:
            self.fields['payment_date'].initial = timezone.localdate()
