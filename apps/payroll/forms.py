"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Forms for the payroll module: period filter, mark-paid,
             bulk mark-paid and the ad-hoc payroll calculator.
-------------------------------------------------------------------------
"""
from datetime import date

from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.payroll.mock_data import PaymentMode, PaymentStatus


class PayrollFilterForm(forms.Form):
    """Period selector, status filter and name search on the payroll page."""

    period_start = forms.DateField(
        required=False,
        initial=date(2025, 10, 1),
        label=_('From'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    period_end = forms.DateField(
        required=False,
        initial=date(2025, 10, 31),
        label=_('To'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    status = forms.ChoiceField(
        required=False,
        choices=[('all', _('All Status'))] + list(PaymentStatus.choices),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Search by employee name...'
        })
    )

    def clean(self) -> dict:
        cleaned_data = super().clean()
        start = cleaned_data.get('period_start')
        end = cleaned_data.get('period_end')
        if start and end and end < start:
            self.add_error('period_end', _('Period end must be on or after period start.'))
        return cleaned_data


class MarkPaidForm(forms.Form):
    """Record payment of a single payroll record."""

    payment_date = forms.DateField(
        label=_('Payment Date'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    payment_mode = forms.ChoiceField(
        choices=PaymentMode.choices,
        initial=PaymentMode.BANK_TRANSFER,
        label=_('Payment Mode'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bank_transaction_ref = forms.CharField(
        required=False,
        max_length=64,
        label=_('Bank Transaction Reference Number'),
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Enter transaction reference number (optional)'
        })
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        if not self.is_bound:
            self.fields['payment_date'].initial = timezone.localdate()


class BulkMarkPaidForm(forms.Form):
    """Mark the selected payroll records as paid."""

    record_ids = forms.TypedMultipleChoiceField(
        coerce=int,
        label=_('Selected Records'),
        error_messages={'required': _('Select at least one payroll record.')}
    )
    payment_date = forms.DateField(
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    payment_mode = forms.ChoiceField(
        choices=PaymentMode.choices,
        initial=PaymentMode.BANK_TRANSFER,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, records=(), **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['record_ids'].choices = [(r.id, r.employee_name) for r in records]


class PayrollCalculatorForm(forms.Form):
    """
    Ad-hoc payroll calculator.

    Allowances and deductions are entered one per line as
    ``Name: amount`` (e.g. ``HRA: 3500``).
    """

    base_salary = forms.IntegerField(
        min_value=0,
        label=_('Base Salary'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'placeholder': '35000'})
    )
    working_days = forms.IntegerField(
        min_value=1,
        initial=26,
        label=_('Working Days'),
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    days_present = forms.IntegerField(
        min_value=0,
        label=_('Days Present'),
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    allowances = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'HRA: 3500'})
    )
    deductions = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'PF: 1750'})
    )

    @staticmethod
    def _parse_lines(value: str, field_label: str):
        items = []
        for line_no, line in enumerate((value or '').splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            name, sep, amount = line.rpartition(':')
            if not sep or not name.strip():
                raise forms.ValidationError(
                    _('%(label)s line %(line)s must look like "Name: amount".'),
                    params={'label': field_label, 'line': line_no}
                )
            try:
                amount = int(amount.strip())
            except ValueError:
                raise forms.ValidationError(
                    _('%(label)s line %(line)s has an invalid amount.'),
                    params={'label': field_label, 'line': line_no}
                )
            if amount < 0:
                raise forms.ValidationError(
                    _('%(label)s line %(line)s cannot be negative.'),
                    params={'label': field_label, 'line': line_no}
                )
            items.append((name.strip(), amount))
        return items

    def clean_allowances(self):
        return self._parse_lines(self.cleaned_data.get('allowances'), 'Allowances')

    def clean_deductions(self):
        return self._parse_lines(self.cleaned_data.get('deductions'), 'Deductions')

    def clean(self) -> dict:
        cleaned_data = super().clean()
        working_days = cleaned_data.get('working_days')
        days_present = cleaned_data.get('days_present')
        if working_days and days_present is not None and days_present > working_days:
            self.add_error('days_present', _('Days present cannot exceed working days.'))
        return cleaned_data
