"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tender create/edit form and EMD refund form.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.tenders.mock_data import TenderStatus


class TenderForm(forms.Form):
    """
    Create or edit a tender.

    The deposit fields are optional; for a new tender with SD1 and SD2
    left empty they are derived from the estimated value.
    """

    name = forms.CharField(
        max_length=200,
        label=_('Tender Name'),
        error_messages={'required': _('Tender name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    reference_number = forms.CharField(
        max_length=50,
        label=_('Reference Number'),
        error_messages={'required': _('Reference number is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'TND/2025/001'})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )
    filed_date = forms.DateField(
        required=False,
        label=_('Filed Date'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
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
    estimated_value = forms.DecimalField(
        max_digits=14,
        decimal_places=2,
        label=_('Estimated Value'),
        error_messages={'required': _('Estimated value must be greater than 0')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    status = forms.ChoiceField(
        choices=TenderStatus.choices,
        initial=TenderStatus.DRAFT,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    # Deposits
    emd_amount = forms.DecimalField(
        required=False, min_value=0, max_digits=14, decimal_places=2,
        label=_('EMD Amount'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    sd1_amount = forms.DecimalField(
        required=False, min_value=0, max_digits=14, decimal_places=2,
        label=_('SD1 Amount'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    sd2_amount = forms.DecimalField(
        required=False, min_value=0, max_digits=14, decimal_places=2,
        label=_('SD2 Amount'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    emd_dd_number = forms.CharField(
        required=False, max_length=30, label=_('EMD DD Number'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    emd_dd_date = forms.DateField(
        required=False, label=_('EMD DD Date'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    emd_bank = forms.CharField(
        required=False, max_length=100, label=_('EMD Bank'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )

    def clean_name(self) -> str:
        name = self.cleaned_data['name'].strip()
        if not name:
            raise forms.ValidationError(_('Tender name is required'))
        return name

    def clean_reference_number(self) -> str:
        reference = self.cleaned_data['reference_number'].strip()
        if not reference:
            raise forms.ValidationError(_('Reference number is required'))
        return reference

    def clean_estimated_value(self):
        value = self.cleaned_data['estimated_value']
        if value is None or value <= 0:
            raise forms.ValidationError(_('Estimated value must be greater than 0'))
        return value

    def clean(self) -> dict:
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')
        if start_date and end_date and end_date <= start_date:
            self.add_error('end_date', _('End date must be after start date'))
        return cleaned_data


class EMDRefundForm(forms.Form):
    """Date on which the EMD came back."""

    refund_date = forms.DateField(
        label=_('Refund Date'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        if not self.is_bound:
            self.fields['refund_date'].initial = timezone.localdate()
