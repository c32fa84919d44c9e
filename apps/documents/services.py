"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Document template services: upload validation, versioning
             and publishing.
-------------------------------------------------------------------------
"""
import os
from typing import Iterable, List, Optional

from django.conf import settings
from django.utils import timezone

from apps.core.exceptions import InvalidFileException
from apps.core.logging import ConsoleLogger


def max_upload_bytes() -> int:
    return settings.DOCUMENT_MAX_UPLOAD_MB * 1024 * 1024


def validate_upload(uploaded_file) -> str:
    """
    Check an uploaded template file.

    Returns:
        str: The file type, ``pdf`` or ``docx``.

    Raises:
        InvalidFileException: If the extension is not allowed or the file
                              is larger than DOCUMENT_MAX_UPLOAD_MB.
    """
    extension = os.path.splitext(uploaded_file.name)[1].lower()
    if extension not in settings.DOCUMENT_ALLOWED_EXTENSIONS:
        raise InvalidFileException(
            'Only PDF and DOCX files are allowed',
            details={'file_name': uploaded_file.name}
        )
    if uploaded_file.size > max_upload_bytes():
        raise InvalidFileException(
            f"File size must be less than {settings.DOCUMENT_MAX_UPLOAD_MB}MB",
            details={'file_name': uploaded_file.name, 'file_size': uploaded_file.size}
        )
    return extension.lstrip('.')


def filter_templates(template_list: Iterable, search: str = '', category: str = 'all') -> List:
    """Search matches the title or any tag."""
    search = (search or '').strip().lower()
    filtered = []
    for template in template_list:
        if search and search not in template.title.lower() \
                and not any(search in tag.lower() for tag in template.tags):
            continue
        if category not in ('', 'all') and template.category != category:
            continue
        filtered.append(template)
    return filtered


def current_version(template_id: int):
    """The published version, or the newest one when none is published."""
    from apps.documents.mock_data import get_versions_by_template_id

    versions = get_versions_by_template_id(template_id)
    for version in versions:
        if version.is_published:
            return version
    return versions[0] if versions else None


class DocumentService:
    """
    Service class for template uploads and version management.
    """

    @staticmethod
    def _store_version(template, uploaded_file, notes: str, uploaded_by: str, publish: bool):
        from apps.documents.mock_data import document_versions

        file_type = validate_upload(uploaded_file)
        version = document_versions.create(
            template_id=template.id,
            version_number=template.latest_version_number,
            file_name=uploaded_file.name,
            file_type=file_type,
            file_size=uploaded_file.size,
            is_published=False,
            uploaded_by=uploaded_by,
            uploaded_at=timezone.now(),
            notes=notes,
            content=uploaded_file.read(),
        )
        if publish:
            DocumentService.publish_version(version.id)
        return version

    @staticmethod
    def upload_template(title: str, category: str, uploaded_file, notes: str = '',
                        tags: Optional[List[str]] = None, uploaded_by: str = 'Admin'):
        """
        Create a template with its first (published) version.

        Raises:
            InvalidFileException: If the file fails validation; nothing is created.
        """
        from apps.documents.mock_data import document_templates

        validate_upload(uploaded_file)
        template = document_templates.create(
            title=title,
            category=category,
            tags=tags or [],
            latest_version_number=1,
            created_by=uploaded_by,
        )
        version = DocumentService._store_version(template, uploaded_file, notes, uploaded_by, publish=True)
        ConsoleLogger.log_record_created('Document template', template, template.title)
        return template, version

    @staticmethod
    def add_version(template_id: int, uploaded_file, notes: str = '',
                    publish: bool = True, uploaded_by: str = 'Admin'):
        """
        Upload the next version of a template.

        Raises:
            RecordNotFoundException: If the template does not exist.
            InvalidFileException: If the file fails validation.
        """
        from apps.documents.mock_data import document_templates

        template = document_templates.get_or_raise(template_id)
        validate_upload(uploaded_file)
        document_templates.update(template.id, latest_version_number=template.latest_version_number + 1)
        version = DocumentService._store_version(template, uploaded_file, notes, uploaded_by, publish)
        ConsoleLogger.log_record_created('Document version', version,
                                         f"{template.title} v{version.version_number}")
        return version

    @staticmethod
    def publish_version(version_id: int):
        """Publish one version; every other version of the template is unpublished."""
        from apps.documents.mock_data import document_templates, document_versions

        version = document_versions.get_or_raise(version_id)
        for sibling in document_versions.filter(template_id=version.template_id):
            sibling.is_published = sibling.id == version.id
        document_templates.update(version.template_id)
        ConsoleLogger.log_record_updated('Document version', version, f"v{version.version_number} published")
        return version

    @staticmethod
    def delete_version(version_id: int):
        """
        Delete one version. When the published version goes, the newest
        remaining version is published in its place.
        """
        from apps.documents.mock_data import (
            document_templates, document_versions, get_versions_by_template_id
        )

        version = document_versions.delete(version_id)
        remaining = get_versions_by_template_id(version.template_id)
        if version.is_published and remaining:
            remaining[0].is_published = True
        template = document_templates.get_by_id(version.template_id)
        if template is not None:
            document_templates.update(
                template.id,
                latest_version_number=remaining[0].version_number if remaining else 0
            )
        return version

    @staticmethod
    def delete_template(template_id: int):
        """Delete a template and all its versions."""
        from apps.documents.mock_data import document_templates, document_versions

        template = document_templates.delete(template_id)
        for version in document_versions.filter(template_id=template.id):
            document_versions.delete(version.id)
        return template

    @staticmethod
    def add_tag(template_ids: Iterable[int], tag: str) -> int:
        """Add a lower-cased tag to each template; returns how many were tagged."""
        from apps.documents.mock_data import document_templates

        tag = tag.strip().lower()
        count = 0
        for template_id in template_ids:
            template = document_templates.get_by_id(template_id)
            if template is None:
                continue
            if tag not in template.tags:
                document_templates.update(template.id, tags=template.tags + [tag])
            count += 1
        return count
