"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for document upload validation, versioning and the
             document template views.
-------------------------------------------------------------------------
"""
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings
from django.urls import reverse

from apps.core.exceptions import InvalidFileException
from apps.documents.forms import TemplateUploadForm
from apps.documents.mock_data import (
    DocumentCategory, document_templates, document_versions, get_versions_by_template_id
)
from apps.documents.services import DocumentService, current_version, filter_templates, validate_upload


def reset_documents():
    document_templates.reset()
    document_versions.reset()


def pdf(name='Scope.pdf', content=b'%PDF-1.4 test'):
    return SimpleUploadedFile(name, content, content_type='application/pdf')


class UploadValidationTestCase(SimpleTestCase):

    def test_accepts_pdf_and_docx(self):
        self.assertEqual(validate_upload(pdf()), 'pdf')
        self.assertEqual(validate_upload(SimpleUploadedFile('Letter.DOCX', b'PK')), 'docx')

    def test_rejects_other_types(self):
        with self.assertRaisesMessage(InvalidFileException, 'Only PDF and DOCX files are allowed'):
            validate_upload(SimpleUploadedFile('notes.txt', b'hello'))

    @override_settings(DOCUMENT_MAX_UPLOAD_MB=1)
    def test_rejects_large_files(self):
        big = pdf(content=b'x' * (1024 * 1024 + 1))
        with self.assertRaisesMessage(InvalidFileException, 'File size must be less than 1MB'):
            validate_upload(big)

    @override_settings(DOCUMENT_MAX_UPLOAD_MB=1)
    def test_file_at_limit_is_accepted(self):
        self.assertEqual(validate_upload(pdf(content=b'x' * 1024 * 1024)), 'pdf')


class DocumentServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_documents()

    def test_filter_by_title_tag_and_category(self):
        templates = document_templates.all()
        self.assertEqual([t.id for t in filter_templates(templates, 'cover')], [2])
        self.assertEqual([t.id for t in filter_templates(templates, 'HR')], [4])
        self.assertEqual([t.id for t in filter_templates(templates, category='Report')], [5])
        self.assertEqual(filter_templates(templates, 'contract', 'Tender'), [])

    def test_current_version(self):
        self.assertEqual(current_version(1).version_number, 3)

    def test_upload_template(self):
        template, version = DocumentService.upload_template(
            'Site Handover Form', DocumentCategory.OTHER, pdf(), tags=['handover']
        )
        self.assertEqual(template.latest_version_number, 1)
        self.assertEqual(version.version_number, 1)
        self.assertTrue(version.is_published)
        self.assertEqual(version.content, b'%PDF-1.4 test')

    def test_upload_invalid_file_creates_nothing(self):
        with self.assertRaises(InvalidFileException):
            DocumentService.upload_template('Bad', DocumentCategory.OTHER, SimpleUploadedFile('a.exe', b'x'))
        self.assertEqual(document_templates.count(), 6)

    def test_add_version_publishes_it(self):
        version = DocumentService.add_version(1, pdf('AMC_v4.pdf'), 'Renewal clause')
        self.assertEqual(version.version_number, 4)
        self.assertEqual(document_templates.get_by_id(1).latest_version_number, 4)
        published = [v.version_number for v in get_versions_by_template_id(1) if v.is_published]
        self.assertEqual(published, [4])

    def test_add_unpublished_version(self):
        DocumentService.add_version(1, pdf('AMC_v4.pdf'), publish=False)
        self.assertEqual(current_version(1).version_number, 3)

    def test_publish_keeps_one_published(self):
        DocumentService.publish_version(3)
        published = [v.id for v in get_versions_by_template_id(1) if v.is_published]
        self.assertEqual(published, [3])

    def test_delete_published_version_promotes_newest(self):
        DocumentService.delete_version(1)
        versions = get_versions_by_template_id(1)
        self.assertEqual([v.version_number for v in versions], [2, 1])
        self.assertTrue(versions[0].is_published)
        self.assertEqual(document_templates.get_by_id(1).latest_version_number, 2)

    def test_delete_template_removes_versions(self):
        DocumentService.delete_template(1)
        self.assertIsNone(document_templates.get_by_id(1))
        self.assertEqual(get_versions_by_template_id(1), [])

    def test_add_tag(self):
        count = DocumentService.add_tag([1, 2], ' Priority ')
        self.assertEqual(count, 2)
        self.assertIn('priority', document_templates.get_by_id(2).tags)
        DocumentService.add_tag([1], 'priority')
        self.assertEqual(document_templates.get_by_id(1).tags.count('priority'), 1)


class TemplateUploadFormTestCase(SimpleTestCase):

    def test_required_fields(self):
        form = TemplateUploadForm(data={}, files={})
        self.assertEqual(form.errors['title'], ['Title is required'])
        self.assertEqual(form.errors['category'], ['Category is required'])
        self.assertEqual(form.errors['file'], ['File is required'])

    def test_file_type_error(self):
        form = TemplateUploadForm(
            data={'title': 'Quote', 'category': 'Other'},
            files={'file': SimpleUploadedFile('quote.xlsx', b'PK')}
        )
        self.assertEqual(form.errors['file'], ['Only PDF and DOCX files are allowed'])

    def test_tags_are_normalised(self):
        form = TemplateUploadForm(
            data={'title': 'Quote', 'category': 'Other', 'tags': 'Quote, pricing,quote,'},
            files={'file': pdf()}
        )
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['tags'], ['quote', 'pricing'])


class DocumentViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_documents()

    def test_list(self):
        response = self.client.get(reverse('documents:template_list'), {'search': 'safety'})
        self.assertEqual([row['template'].id for row in response.context['rows']], [6])
        self.assertContains(response, 'Safety Compliance Checklist')

    def test_detail_lists_versions(self):
        response = self.client.get(reverse('documents:template_detail', args=[1]))
        self.assertContains(response, 'AMC_Service_Agreement_v2.pdf')
        self.assertEqual(len(response.context['versions']), 3)

    def test_upload(self):
        response = self.client.post(reverse('documents:template_upload'), {
            'title': 'Earthing Test Report', 'category': 'Report', 'file': pdf('Earthing.pdf'),
        })
        template = document_templates.all()[0]
        self.assertEqual(template.title, 'Earthing Test Report')
        self.assertRedirects(response, reverse('documents:template_detail', args=[template.id]))

    def test_new_version(self):
        self.client.post(reverse('documents:version_create', args=[2]), {'file': pdf('Cover_v3.pdf'), 'publish': 'on'})
        self.assertEqual(current_version(2).version_number, 3)

    def test_publish(self):
        self.client.post(reverse('documents:version_publish', args=[2]))
        self.assertEqual(current_version(1).id, 2)

    def test_download_uploaded_version(self):
        version = DocumentService.add_version(5, pdf('Report_v2.pdf', b'%PDF report'))
        response = self.client.get(reverse('documents:version_download', args=[version.id]))
        self.assertEqual(response.content, b'%PDF report')
        self.assertIn('Report_v2.pdf', response['Content-Disposition'])

    def test_download_seed_version_warns(self):
        response = self.client.get(reverse('documents:version_download', args=[8]), follow=True)
        self.assertContains(response, 'has no stored file to download')

    def test_delete_version(self):
        response = self.client.post(reverse('documents:version_delete', args=[5]))
        self.assertRedirects(response, reverse('documents:template_detail', args=[2]))
        self.assertIsNone(document_versions.get_by_id(5))

    def test_delete_template(self):
        self.client.post(reverse('documents:template_delete', args=[2]))
        self.assertIsNone(document_templates.get_by_id(2))
        self.assertEqual(get_versions_by_template_id(2), [])

    def test_bulk_tag(self):
        self.client.post(reverse('documents:template_bulk_tag'), {'ids': ['3', '4'], 'tag': 'Finance'})
        self.assertIn('finance', document_templates.get_by_id(3).tags)
