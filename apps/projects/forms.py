from django import forms
from django.utils.translation import gettext_lazy as _

from apps.clients.mock_data import clients
from apps.projects.mock_data import ProjectStatus


class ProjectForm(forms.Form):
    """Create or edit a project."""

    client_id = forms.TypedChoiceField(
        coerce=int,
        label=_('Client'),
        error_messages={
            'required': _('Client is required'),
            'invalid_choice': _('Select an existing client'),
        },
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    name = forms.CharField(
        max_length=200,
        label=_('Project Name'),
        error_messages={'required': _('Project name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3})
    )
    start_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    end_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    status = forms.ChoiceField(
        choices=ProjectStatus.choices,
        initial=ProjectStatus.PLANNED,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['client_id'].choices = [('', _('Select client'))] + [
            (client.id, client.name) for client in clients.all()
        ]

    def clean_name(self) -> str:
        name = self.cleaned_data['name'].strip()
        if not name:
            raise forms.ValidationError(_('Project name is required'))
        return name

    def clean(self) -> dict:
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')
        if start_date and end_date and end_date < start_date:
            self.add_error('end_date', _('End date cannot be before start date'))
        return cleaned_data
