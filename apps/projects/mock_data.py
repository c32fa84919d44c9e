"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock client projects.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class ProjectStatus(models.TextChoices):
    PLANNED = 'Planned', _('Planned')
    IN_PROGRESS = 'In Progress', _('In Progress')
    ON_HOLD = 'On Hold', _('On Hold')
    COMPLETED = 'Completed', _('Completed')
    CANCELED = 'Canceled', _('Canceled')


@dataclass
class Project:
    id: int
    client_id: int
    name: str
    description: str = ''
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = ProjectStatus.PLANNED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def client_name(self) -> str:
        from apps.clients.mock_data import get_client_name
        return get_client_name(self.client_id)

    def __str__(self) -> str:
        return self.name


def _seed_projects() -> List[Project]:
    return [
        Project(
            id=1,
            client_id=1,
            name='BSNL Network Expansion',
            description='Installation of HT panels and network equipment',
            start_date=day('2025-01-15'),
            end_date=day('2025-06-15'),
            status=ProjectStatus.IN_PROGRESS,
            created_at=stamp('2025-01-10T10:00:00Z'),
            updated_at=stamp('2025-01-10T10:00:00Z'),
        ),
        Project(
            id=2,
            client_id=2,
            name='DataNet Server Room Setup',
            description='Complete server room infrastructure setup',
            start_date=day('2025-02-01'),
            end_date=day('2025-04-30'),
            status=ProjectStatus.PLANNED,
            created_at=stamp('2025-01-20T10:00:00Z'),
            updated_at=stamp('2025-01-20T10:00:00Z'),
        ),
        Project(
            id=3,
            client_id=3,
            name='PowerGrid Transformer Maintenance',
            description='Annual maintenance of transformers',
            start_date=day('2024-11-01'),
            end_date=day('2024-12-31'),
            status=ProjectStatus.COMPLETED,
            created_at=stamp('2024-10-25T10:00:00Z'),
            updated_at=stamp('2025-01-05T10:00:00Z'),
        ),
    ]


projects: MockRepository[Project] = MockRepository('Project', Project, _seed_projects)


def get_project_by_id(pk: int) -> Optional[Project]:
    return projects.get_by_id(pk)


def get_projects_by_client_id(client_id: int) -> List[Project]:
    return projects.filter(client_id=client_id)


def get_project_name(pk: Optional[int]) -> str:
    project = projects.get_by_id(pk) if pk else None
    return project.name if project else ''
