"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Create-notification form.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils.translation import gettext_lazy as _

from apps.notifications.mock_data import NotificationType


class NotificationForm(forms.Form):
    title = forms.CharField(
        max_length=200,
        error_messages={'required': _('Title is required')},
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Enter notification title'})
    )
    message = forms.CharField(
        error_messages={'required': _('Message is required')},
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4,
                                     'placeholder': 'Enter notification message'})
    )
    type = forms.ChoiceField(
        choices=NotificationType.choices,
        initial=NotificationType.SYSTEM,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    link = forms.CharField(
        required=False,
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '/tasks/1/'})
    )
    scheduled_for = forms.DateTimeField(
        required=False,
        label=_('Schedule (Optional)'),
        help_text=_('Leave empty to send immediately'),
        input_formats=['%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M'],
        widget=forms.DateTimeInput(attrs={'class': 'form-control', 'type': 'datetime-local'})
    )

    def clean_title(self):
        title = self.cleaned_data['title'].strip()
        if not title:
            raise forms.ValidationError(_('Title is required'))
        return title

    def clean_link(self):
        link = self.cleaned_data['link'].strip()
        if link and not link.startswith('/'):
            raise forms.ValidationError(_('Link must be a path inside the console, e.g. /tasks/1/'))
        return link
