"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Date range and output format selection for reports.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils.translation import gettext_lazy as _

from apps.reports.services import DATE_RANGE_CHOICES, resolve_date_range

FORMAT_CHOICES = [
    ('html', _('View')),
    ('pdf', _('PDF')),
    ('csv', _('CSV')),
    ('excel', _('Excel')),
]


class ReportFilterForm(forms.Form):
    """
    Date range and output format; with no range given the report covers
    all dates. Custom ranges need both dates; other ranges ignore them.
    """

    date_range = forms.ChoiceField(
        required=False,
        choices=DATE_RANGE_CHOICES,
        initial='all',
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    date_from = forms.DateField(
        required=False,
        label=_('From'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    date_to = forms.DateField(
        required=False,
        label=_('To'),
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    format = forms.ChoiceField(
        required=False,
        choices=FORMAT_CHOICES,
        initial='html',
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def clean(self) -> dict:
        cleaned_data = super().clean()
        cleaned_data['date_range'] = cleaned_data.get('date_range') or 'all'
        cleaned_data['format'] = cleaned_data.get('format') or 'html'
        try:
            cleaned_data['period'] = resolve_date_range(
                cleaned_data['date_range'],
                date_from=cleaned_data.get('date_from'),
                date_to=cleaned_data.get('date_to'),
            )
        except ValueError as e:
            raise forms.ValidationError(str(e))
        return cleaned_data
