"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Client create/edit form.
-------------------------------------------------------------------------
"""
import re

from django import forms
from django.utils.translation import gettext_lazy as _

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


class ClientForm(forms.Form):
    """
    Create or edit a client.

    Tags are entered comma separated and cleaned into a list.
    """

    name = forms.CharField(
        max_length=200,
        label=_('Client Name'),
        error_messages={'required': _('Client name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    business_name = forms.CharField(
        required=False,
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    address = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )
    city = forms.CharField(
        max_length=100,
        error_messages={'required': _('City is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    state = forms.CharField(
        max_length=100,
        error_messages={'required': _('State is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    pin_code = forms.CharField(
        required=False,
        max_length=10,
        label=_('PIN Code'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    country = forms.CharField(
        required=False,
        max_length=100,
        initial='India',
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    primary_contact_name = forms.CharField(
        required=False,
        max_length=100,
        label=_('Contact Name'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    primary_contact_email = forms.CharField(
        max_length=254,
        label=_('Contact Email'),
        error_messages={'required': _('Email is required')},
        widget=forms.EmailInput(attrs={'class': 'form-control'})
    )
    primary_contact_phone = forms.CharField(
        max_length=20,
        label=_('Contact Phone'),
        error_messages={'required': _('Phone is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '9876543210'})
    )
    secondary_contact = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )
    tags = forms.CharField(
        required=False,
        help_text=_('Comma separated, e.g. premium, long-term'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )

    def __init__(self, *args, **kwargs) -> None:
        initial = kwargs.get('initial')
        if initial and isinstance(initial.get('tags'), list):
            initial = dict(initial, tags=', '.join(initial['tags']))
            kwargs['initial'] = initial
        super().__init__(*args, **kwargs)

    def clean_primary_contact_email(self) -> str:
        email = self.cleaned_data['primary_contact_email']
        if not EMAIL_PATTERN.match(email):
            raise forms.ValidationError(_('Invalid email format'))
        return email

    def clean_primary_contact_phone(self) -> str:
        phone = self.cleaned_data['primary_contact_phone']
        if not re.fullmatch(r'\d{10}', re.sub(r'\D', '', phone)):
            raise forms.ValidationError(_('Phone must be 10 digits'))
        return phone

    def clean_country(self) -> str:
        return self.cleaned_data['country'] or 'India'

    def clean_tags(self) -> list:
        return [tag.strip() for tag in self.cleaned_data['tags'].split(',') if tag.strip()]
