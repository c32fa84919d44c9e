"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Employee, contract worker and worker-import forms.
-------------------------------------------------------------------------
"""
import os
import re

from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.employees.mock_data import Department, EmployeeStatus, Skill, WorkerStatus
from apps.employees.services import phone_digits

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


class EmployeeForm(forms.Form):
    """
    Create or edit an employee.

    The employee code is assigned on create and never edited.
    """

    name = forms.CharField(
        max_length=200,
        error_messages={'required': _('Name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    email = forms.CharField(
        max_length=254,
        error_messages={'required': _('Email is required')},
        widget=forms.EmailInput(attrs={'class': 'form-control'})
    )
    phone = forms.CharField(
        required=False,
        max_length=20,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '+91 98765 43210'})
    )
    department = forms.ChoiceField(
        choices=Department.choices,
        initial=Department.TECHNICAL,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    role = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    joining_date = forms.DateField(
        initial=timezone.localdate,
        error_messages={'required': _('Joining date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    status = forms.ChoiceField(
        choices=EmployeeStatus.choices,
        initial=EmployeeStatus.ACTIVE,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    salary = forms.DecimalField(
        max_digits=12,
        decimal_places=2,
        label=_('Monthly Salary (Rs)'),
        error_messages={'required': _('Salary is required')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': '0', 'step': '1'})
    )
    address = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )
    emergency_contact = forms.CharField(
        required=False,
        max_length=20,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )

    def clean_email(self) -> str:
        email = self.cleaned_data['email']
        if not EMAIL_PATTERN.match(email):
            raise forms.ValidationError(_('Invalid email format'))
        return email

    def clean_phone(self) -> str:
        phone = self.cleaned_data['phone']
        if phone and phone_digits(phone) is None:
            raise forms.ValidationError(_('Phone must be 10 digits'))
        return phone

    def clean_salary(self):
        salary = self.cleaned_data['salary']
        if salary <= 0:
            raise forms.ValidationError(_('Salary must be greater than 0'))
        return salary


class ContractWorkerForm(forms.Form):
    """Create or edit a contract worker."""

    name = forms.CharField(
        max_length=200,
        error_messages={'required': _('Name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    phone = forms.CharField(
        max_length=20,
        error_messages={'required': _('Phone is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '+91 98765 43210'})
    )
    skill = forms.ChoiceField(
        choices=Skill.choices,
        initial=Skill.ELECTRICIAN,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    daily_rate = forms.DecimalField(
        max_digits=10,
        decimal_places=2,
        label=_('Daily Rate (Rs)'),
        error_messages={'required': _('Daily rate is required')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': '0', 'step': '1'})
    )
    status = forms.ChoiceField(
        choices=WorkerStatus.choices,
        initial=WorkerStatus.AVAILABLE,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    assigned_to = forms.CharField(
        required=False,
        max_length=200,
        help_text=_('Client or project the worker is deployed on'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    address = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def clean_phone(self) -> str:
        phone = self.cleaned_data['phone']
        if phone_digits(phone) is None:
            raise forms.ValidationError(_('Phone must be 10 digits'))
        return phone

    def clean_daily_rate(self):
        rate = self.cleaned_data['daily_rate']
        if rate <= 0:
            raise forms.ValidationError(_('Daily rate must be greater than 0'))
        return rate

    def clean(self) -> dict:
        cleaned_data = super().clean()
        if cleaned_data.get('status') == WorkerStatus.ASSIGNED and not cleaned_data.get('assigned_to'):
            self.add_error('assigned_to', _('Assigned workers need an assignment'))
        return cleaned_data


class WorkerImportForm(forms.Form):
    file = forms.FileField(
        label=_('Worker File (.csv)'),
        error_messages={'required': _('Please choose a file to import')},
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.csv'})
    )

    def clean_file(self):
        upload = self.cleaned_data['file']
        if os.path.splitext(upload.name)[1].lower() != '.csv':
            raise forms.ValidationError(_('Only .csv files can be imported'))
        return upload
