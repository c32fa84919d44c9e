"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Document template upload, new version and bulk tag forms.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils.translation import gettext_lazy as _

from apps.core.exceptions import InvalidFileException
from apps.documents.mock_data import DocumentCategory
from apps.documents.services import validate_upload


class TemplateFileMixin:
    """Runs the PDF/DOCX and size checks on the ``file`` field."""

    def clean_file(self):
        uploaded_file = self.cleaned_data['file']
        try:
            validate_upload(uploaded_file)
        except InvalidFileException as e:
            raise forms.ValidationError(e.message)
        return uploaded_file


class TemplateUploadForm(TemplateFileMixin, forms.Form):
    title = forms.CharField(
        max_length=200,
        error_messages={'required': _('Title is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    category = forms.ChoiceField(
        choices=[('', _('Select category'))] + DocumentCategory.choices,
        error_messages={'required': _('Category is required')},
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    tags = forms.CharField(
        required=False,
        help_text=_('Comma separated'),
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    file = forms.FileField(
        error_messages={'required': _('File is required')},
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.pdf,.docx'})
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def clean_tags(self):
        tags = [tag.strip().lower() for tag in self.cleaned_data['tags'].split(',')]
        return list(dict.fromkeys(tag for tag in tags if tag))


class TemplateVersionForm(TemplateFileMixin, forms.Form):
    file = forms.FileField(
        error_messages={'required': _('File is required')},
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.pdf,.docx'})
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )
    publish = forms.BooleanField(
        required=False,
        initial=True,
        label=_('Publish this version'),
    )


class BulkTagForm(forms.Form):
    ids = forms.TypedMultipleChoiceField(coerce=int)
    tag = forms.CharField(
        max_length=50,
        error_messages={'required': _('Tag is required')},
    )

    def __init__(self, *args, template_ids=(), **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['ids'].choices = [(str(pk), str(pk)) for pk in template_ids]
