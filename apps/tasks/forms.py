"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Task forms: create/edit, resource entry and rejection.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.clients.mock_data import clients
from apps.projects.mock_data import projects
from apps.tasks.mock_data import TaskPriority, TaskStatus


class TaskForm(forms.Form):
    """Create or edit a field task."""

    employee_name = forms.CharField(
        max_length=100,
        label=_('Employee'),
        error_messages={'required': _('Employee name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    client_id = forms.TypedChoiceField(
        coerce=int,
        required=False,
        empty_value=None,
        label=_('Client'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    project_id = forms.TypedChoiceField(
        coerce=int,
        required=False,
        empty_value=None,
        label=_('Project'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    description = forms.CharField(
        label=_('Description'),
        error_messages={'required': _('Description is required')},
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )
    date = forms.DateField(
        initial=timezone.localdate,
        error_messages={'required': _('Date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    location = forms.CharField(
        max_length=200,
        error_messages={'required': _('Location is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    time_taken_minutes = forms.IntegerField(
        min_value=0,
        initial=0,
        label=_('Time Taken (minutes)'),
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    estimated_time_minutes = forms.IntegerField(
        required=False,
        min_value=0,
        label=_('Estimated Time (minutes)'),
        widget=forms.NumberInput(attrs={'class': 'form-control'})
    )
    status = forms.ChoiceField(
        choices=TaskStatus.choices,
        initial=TaskStatus.OPEN,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    priority = forms.ChoiceField(
        choices=TaskPriority.choices,
        initial=TaskPriority.MEDIUM,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    internal_notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['client_id'].choices = [('', _('No client'))] + [
            (client.id, client.name) for client in clients.all()
        ]
        self.fields['project_id'].choices = [('', _('No project'))] + [
            (project.id, project.name) for project in projects.all()
        ]

    def clean(self) -> dict:
        cleaned_data = super().clean()
        client_id = cleaned_data.get('client_id')
        project_id = cleaned_data.get('project_id')
        if client_id and project_id:
            project = projects.get_by_id(project_id)
            if project is not None and project.client_id != client_id:
                self.add_error('project_id', _('Project does not belong to the selected client'))
        return cleaned_data


class TaskResourceForm(forms.Form):
    """Add a resource line to a task."""

    resource_name = forms.CharField(
        max_length=200,
        label=_('Resource'),
        error_messages={'required': _('Resource name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    quantity = forms.DecimalField(
        max_digits=12,
        decimal_places=2,
        error_messages={'required': _('Quantity is required')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    unit = forms.CharField(
        max_length=20,
        initial='pcs',
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    unit_cost = forms.DecimalField(
        required=False,
        min_value=0,
        max_digits=12,
        decimal_places=2,
        label=_('Unit Cost'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    notes = forms.CharField(
        required=False,
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )

    def clean_quantity(self):
        quantity = self.cleaned_data['quantity']
        if quantity <= 0:
            raise forms.ValidationError(_('Quantity must be greater than 0'))
        return quantity


class UnitCostForm(forms.Form):
    unit_cost = forms.DecimalField(
        min_value=0,
        max_digits=12,
        decimal_places=2,
        error_messages={'required': _('Unit cost is required')},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )


class TaskRejectForm(forms.Form):
    reason = forms.CharField(
        error_messages={'required': _('Please provide a reason for rejection')},
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def clean_reason(self) -> str:
        reason = self.cleaned_data['reason'].strip()
        if not reason:
            raise forms.ValidationError(_('Please provide a reason for rejection'))
        return reason
