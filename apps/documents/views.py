"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Document template views: searchable list, version history,
             upload, publish, download and delete.
-------------------------------------------------------------------------
"""
import mimetypes
from typing import Any, Dict

from django.conf import settings
from django.http import HttpResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_error, show_success, show_warning
from apps.core.mixins import RecordMixin
from apps.core.views import RecordDeleteView
from apps.documents.forms import BulkTagForm, TemplateUploadForm, TemplateVersionForm
from apps.documents.mock_data import (
    DocumentCategory, document_templates, document_versions, get_versions_by_template_id
)
from apps.documents.services import DocumentService, current_version, filter_templates


class TemplateListView(TemplateView):
    template_name = 'documents/template_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        search = self.request.GET.get('search', '').strip()
        category = self.request.GET.get('category', 'all')
        templates = filter_templates(document_templates.all(), search, category)
        context.update({
            'rows': [
                {'template': template, 'version': current_version(template.id)}
                for template in templates
            ],
            'search_query': search,
            'category_filter': category,
            'category_choices': DocumentCategory.choices,
            'upload_form': TemplateUploadForm(),
        })
        return context


class TemplateDetailView(RecordMixin, TemplateView):
    """Version history of one template."""
    template_name = 'documents/template_detail.html'
    repository = document_templates
    context_object_name = 'document'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['versions'] = get_versions_by_template_id(self.get_object().id)
        context['version_form'] = kwargs.get('version_form') or TemplateVersionForm()
        return context


class TemplateUploadView(FormView):
    template_name = 'documents/template_upload.html'
    form_class = TemplateUploadForm

    def form_valid(self, form):
        data = form.cleaned_data
        template, _version = DocumentService.upload_template(
            data['title'], data['category'], data['file'], data['notes'], data['tags']
        )
        show_success(self.request, 'Template Uploaded', f"{template.title} uploaded as version 1.")
        return redirect('documents:template_detail', pk=template.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['max_upload_mb'] = settings.DOCUMENT_MAX_UPLOAD_MB
        return context


class TemplateVersionCreateView(RecordMixin, View):
    repository = document_templates

    def post(self, request, *args, **kwargs):
        template = self.get_object()
        form = TemplateVersionForm(request.POST, request.FILES)
        if not form.is_valid():
            show_error(request, 'Upload Failed', '; '.join(e for errs in form.errors.values() for e in errs))
            return redirect('documents:template_detail', pk=template.id)

        version = DocumentService.add_version(
            template.id, form.cleaned_data['file'], form.cleaned_data['notes'], form.cleaned_data['publish']
        )
        show_success(request, 'Version Uploaded', f"Version {version.version_number} uploaded.")
        return redirect('documents:template_detail', pk=template.id)


class VersionPublishView(RecordMixin, View):
    repository = document_versions
    pk_url_kwarg = 'version_id'

    def post(self, request, *args, **kwargs):
        version = DocumentService.publish_version(self.get_object().id)
        show_success(request, 'Version Published', f"Version {version.version_number} is now published.")
        return redirect('documents:template_detail', pk=version.template_id)


class VersionDownloadView(RecordMixin, View):
    repository = document_versions
    pk_url_kwarg = 'version_id'

    def get(self, request, *args, **kwargs):
        version = self.get_object()
        if not version.content:
            show_warning(request, 'File Unavailable', f"{version.file_name} has no stored file to download.")
            return redirect('documents:template_detail', pk=version.template_id)

        content_type = mimetypes.guess_type(version.file_name)[0] or 'application/octet-stream'
        response = HttpResponse(version.content, content_type=content_type)
        response['Content-Disposition'] = f'attachment; filename="{version.file_name}"'
        return response


class TemplateDeleteView(RecordDeleteView):
    repository = document_templates

    def get_item_label(self) -> str:
        return f'"{self.get_object().title}" and all its versions'

    def perform_delete(self, record) -> None:
        DocumentService.delete_template(record.id)

    def get_success_url(self) -> str:
        return reverse('documents:template_list')


class VersionDeleteView(RecordDeleteView):
    repository = document_versions
    pk_url_kwarg = 'version_id'

    def get_item_label(self) -> str:
        return f"version {self.get_object().version_number}"

    def perform_delete(self, record) -> None:
        DocumentService.delete_version(record.id)

    def get_success_url(self) -> str:
        return reverse('documents:template_detail', args=[self.get_object().template_id])


class TemplateBulkTagView(View):

    def post(self, request, *args, **kwargs):
        form = BulkTagForm(request.POST, template_ids=[t.id for t in document_templates.all()])
        if form.is_valid():
            count = DocumentService.add_tag(form.cleaned_data['ids'], form.cleaned_data['tag'])
            show_success(request, 'Tags Added', f"Tag added to {count} template(s).")
        else:
            show_error(request, 'No Templates Tagged', 'Select templates and enter a tag.')
        return redirect('documents:template_list')
