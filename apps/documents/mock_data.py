"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock document templates and their uploaded versions.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, stamp


class DocumentCategory(models.TextChoices):
    AMC = 'AMC', _('AMC')
    TENDER = 'Tender', _('Tender')
    INVOICE = 'Invoice', _('Invoice')
    CONTRACT = 'Contract', _('Contract')
    REPORT = 'Report', _('Report')
    OTHER = 'Other', _('Other')


@dataclass
class DocumentTemplate:
    id: int
    title: str
    category: str
    tags: List[str] = field(default_factory=list)
    latest_version_number: int = 1
    created_by: str = 'Admin'
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        return self.title


@dataclass
class DocumentVersion:
    id: int
    template_id: int
    version_number: int
    file_name: str
    file_type: str
    file_size: int
    is_published: bool = False
    uploaded_by: str = 'Admin'
    uploaded_at: Optional[datetime] = None
    notes: str = ''
    # Uploaded bytes; seed versions carry none
    content: bytes = b''


def _seed_templates() -> List[DocumentTemplate]:
    rows = [
        (1, 'AMC Service Agreement Template', DocumentCategory.AMC, ['agreement', 'service', 'contract'],
         3, 'Admin User', '2025-01-15T10:00:00Z', '2025-10-20T14:30:00Z'),
        (2, 'Tender Submission Cover Letter', DocumentCategory.TENDER, ['tender', 'cover-letter', 'submission'],
         2, 'John Doe', '2025-02-01T09:00:00Z', '2025-09-15T11:20:00Z'),
        (3, 'Invoice Template - Standard', DocumentCategory.INVOICE, ['invoice', 'billing', 'payment'],
         5, 'Finance Team', '2024-11-10T08:00:00Z', '2025-10-28T16:45:00Z'),
        (4, 'Employee Contract Template', DocumentCategory.CONTRACT, ['employee', 'hr', 'contract'],
         4, 'HR Manager', '2025-03-05T12:00:00Z', '2025-10-10T10:15:00Z'),
        (5, 'Monthly Performance Report', DocumentCategory.REPORT, ['report', 'performance', 'monthly'],
         1, 'Manager', '2025-10-01T07:30:00Z', '2025-10-01T07:30:00Z'),
        (6, 'Safety Compliance Checklist', DocumentCategory.OTHER, ['safety', 'compliance', 'checklist'],
         2, 'Safety Officer', '2025-05-20T14:00:00Z', '2025-08-25T09:40:00Z'),
    ]
    return [
        DocumentTemplate(pk, title, category, tags, latest, created_by, stamp(created), stamp(updated))
        for pk, title, category, tags, latest, created_by, created, updated in rows
    ]


def _seed_versions() -> List[DocumentVersion]:
    rows = [
        (1, 1, 3, 'AMC_Service_Agreement_v3.pdf', 'pdf', 245760, True, 'Admin User',
         '2025-10-20T14:30:00Z', 'Updated payment terms section'),
        (2, 1, 2, 'AMC_Service_Agreement_v2.pdf', 'pdf', 238400, False, 'Admin User',
         '2025-06-10T11:15:00Z', 'Added service level agreements'),
        (3, 1, 1, 'AMC_Service_Agreement_v1.docx', 'docx', 156800, False, 'John Doe',
         '2025-01-15T10:00:00Z', ''),
        (4, 2, 2, 'Tender_Cover_Letter_v2.docx', 'docx', 89600, True, 'John Doe',
         '2025-09-15T11:20:00Z', 'Updated company details'),
        (5, 2, 1, 'Tender_Cover_Letter_v1.docx', 'docx', 87040, False, 'Jane Smith',
         '2025-02-01T09:00:00Z', ''),
        # Only the current version of the remaining templates is kept
        (6, 3, 5, 'Invoice_Standard_v5.docx', 'docx', 64512, True, 'Finance Team',
         '2025-10-28T16:45:00Z', 'GST breakup added'),
        (7, 4, 4, 'Employee_Contract_v4.docx', 'docx', 118784, True, 'HR Manager',
         '2025-10-10T10:15:00Z', 'Revised notice period clause'),
        (8, 5, 1, 'Monthly_Performance_Report_v1.pdf', 'pdf', 204800, True, 'Manager',
         '2025-10-01T07:30:00Z', ''),
        (9, 6, 2, 'Safety_Checklist_v2.pdf', 'pdf', 97280, True, 'Safety Officer',
         '2025-08-25T09:40:00Z', 'Added height-work checks'),
    ]
    return [
        DocumentVersion(pk, template_id, number, file_name, file_type, size, published, by, stamp(at), notes)
        for pk, template_id, number, file_name, file_type, size, published, by, at, notes in rows
    ]


document_templates: MockRepository[DocumentTemplate] = MockRepository(
    'Document template', DocumentTemplate, _seed_templates
)
document_versions: MockRepository[DocumentVersion] = MockRepository(
    'Document version', DocumentVersion, _seed_versions
)


def get_template_by_id(pk: int) -> Optional[DocumentTemplate]:
    return document_templates.get_by_id(pk)


def get_versions_by_template_id(template_id: int) -> List[DocumentVersion]:
    """Versions of a template, newest first."""
    return sorted(
        document_versions.filter(template_id=template_id),
        key=lambda v: v.version_number,
        reverse=True
    )
