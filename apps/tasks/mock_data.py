"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Mock field tasks with the resources consumed, attachments
             and the activity feed of each task.
-------------------------------------------------------------------------
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.repository import MockRepository, day, stamp


class TaskStatus(models.TextChoices):
    OPEN = 'Open', _('Open')
    IN_PROGRESS = 'In Progress', _('In Progress')
    COMPLETED = 'Completed', _('Completed')
    APPROVED = 'Approved', _('Approved')
    REJECTED = 'Rejected', _('Rejected')
    CANCELED = 'Canceled', _('Canceled')


class TaskPriority(models.TextChoices):
    LOW = 'Low', _('Low')
    MEDIUM = 'Medium', _('Medium')
    HIGH = 'High', _('High')
    URGENT = 'Urgent', _('Urgent')


class ActivityType(models.TextChoices):
    CREATED = 'Created', _('Created')
    STATUS_CHANGED = 'Status Changed', _('Status Changed')
    RESOURCE_UPDATED = 'Resource Updated', _('Resource Updated')
    EDITED = 'Edited', _('Edited')
    APPROVED = 'Approved', _('Approved')
    REJECTED = 'Rejected', _('Rejected')
    NOTE_ADDED = 'Note Added', _('Note Added')


@dataclass
class Task:
    id: int
    employee_name: str
    description: str
    date: date
    location: str
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    employee_id: Optional[int] = None
    time_taken_minutes: int = 0
    estimated_time_minutes: Optional[int] = None
    status: str = TaskStatus.OPEN
    priority: str = TaskPriority.MEDIUM
    assigned_by: str = 'Owner'
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    internal_notes: str = ''
    is_new: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def client_name(self) -> str:
        from apps.clients.mock_data import get_client_name
        return get_client_name(self.client_id) if self.client_id else ''

    @property
    def project_name(self) -> str:
        from apps.projects.mock_data import get_project_name
        return get_project_name(self.project_id)

    @property
    def hours_taken(self) -> float:
        return round(self.time_taken_minutes / 60, 1)


@dataclass
class TaskResource:
    id: int
    task_id: int
    resource_name: str
    quantity: Decimal
    unit: str = 'pcs'
    unit_cost: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    notes: str = ''
    created_at: Optional[datetime] = None


@dataclass
class TaskAttachment:
    id: int
    task_id: int
    file_name: str
    file_url: str
    file_type: str
    file_size: int
    uploaded_by: str
    uploaded_at: datetime


@dataclass
class TaskActivity:
    id: int
    task_id: int
    activity_type: str
    description: str
    performed_by: str
    created_at: Optional[datetime] = None


def _seed_tasks() -> List[Task]:
    return [
        Task(
            id=1, employee_id=1, employee_name='Rajesh Kumar', client_id=1, project_id=1,
            description='Installation of 15 CCTV cameras at Zone A traffic junction with cable routing',
            date=day('2025-11-01'), location='Zone A, Traffic Junction, MG Road',
            time_taken_minutes=480, estimated_time_minutes=420,
            status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH, is_new=True,
            created_at=stamp('2025-11-01T09:00:00'), updated_at=stamp('2025-11-01T17:00:00'),
        ),
        Task(
            id=2, employee_id=2, employee_name='Priya Sharma', client_id=2, project_id=2,
            description='Network cabling for Building B - floors 3-5',
            date=day('2025-11-01'), location='Tech Park, Building B',
            time_taken_minutes=360, estimated_time_minutes=360,
            status=TaskStatus.APPROVED, priority=TaskPriority.MEDIUM,
            approved_by='Admin', approved_at=stamp('2025-11-01T19:00:00'), is_new=False,
            created_at=stamp('2025-11-01T08:30:00'), updated_at=stamp('2025-11-01T19:00:00'),
        ),
        Task(
            id=3, employee_id=1, employee_name='Rajesh Kumar', client_id=1, project_id=1,
            description='Fiber optic cable laying - 500 meters along main corridor',
            date=day('2025-10-31'), location='Main Corridor, City Center',
            time_taken_minutes=540, estimated_time_minutes=480,
            status=TaskStatus.IN_PROGRESS, priority=TaskPriority.URGENT, is_new=True,
            created_at=stamp('2025-10-31T07:00:00'), updated_at=stamp('2025-10-31T16:00:00'),
        ),
        Task(
            id=4, employee_id=3, employee_name='Amit Singh', client_id=3, project_id=3,
            description='Installation of DVR and NVR systems at control room',
            date=day('2025-10-30'), location='Metro Station 5, Control Room',
            time_taken_minutes=300, estimated_time_minutes=240,
            status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH, is_new=False,
            created_at=stamp('2025-10-30T09:00:00'), updated_at=stamp('2025-10-30T14:00:00'),
        ),
        Task(
            id=5, employee_id=2, employee_name='Priya Sharma', client_id=2, project_id=2,
            description='Router configuration and switch setup for Building A',
            date=day('2025-10-29'), location='Tech Park, Building A, Server Room',
            time_taken_minutes=240, estimated_time_minutes=240,
            status=TaskStatus.APPROVED, priority=TaskPriority.MEDIUM,
            approved_by='Admin', approved_at=stamp('2025-10-29T18:00:00'), is_new=False,
            created_at=stamp('2025-10-29T10:00:00'), updated_at=stamp('2025-10-29T18:00:00'),
        ),
        Task(
            id=6, employee_id=4, employee_name='Sunita Verma', client_id=4,
            description='Access control installation at main entrance and emergency exits',
            date=day('2025-10-28'), location='City Hospital, Main Campus',
            time_taken_minutes=420, estimated_time_minutes=360,
            status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH, is_new=True,
            created_at=stamp('2025-10-28T08:00:00'), updated_at=stamp('2025-10-28T15:00:00'),
        ),
    ]


def _resource(pk, task_id, name, quantity, unit, unit_cost=None, created_at='', notes=''):
    unit_cost = Decimal(unit_cost) if unit_cost is not None else None
    quantity = Decimal(quantity)
    return TaskResource(
        id=pk, task_id=task_id, resource_name=name, quantity=quantity, unit=unit,
        unit_cost=unit_cost,
        total_cost=unit_cost * quantity if unit_cost is not None else None,
        notes=notes, created_at=stamp(created_at),
    )


def _seed_resources() -> List[TaskResource]:
    return [
        _resource(1, 1, 'CCTV Camera (2MP Bullet)', 15, 'pcs', 3500, '2025-11-01T09:30:00'),
        _resource(2, 1, 'Cat6 Cable', 200, 'm', 25, '2025-11-01T09:30:00'),
        _resource(3, 1, 'Cable Tray', 50, 'm', 150, '2025-11-01T09:30:00'),
        _resource(4, 1, 'Junction Box', 15, 'pcs', 120, '2025-11-01T09:30:00'),
        _resource(5, 2, 'Cat6A Cable', 500, 'm', 35, '2025-11-01T08:45:00'),
        _resource(6, 2, 'RJ45 Connectors', 100, 'pcs', 8, '2025-11-01T08:45:00'),
        _resource(7, 2, 'Network Patch Panel', 3, 'pcs', 2500, '2025-11-01T08:45:00'),
        _resource(8, 3, 'Fiber Optic Cable (Single Mode)', 500, 'm', 45, '2025-10-31T07:30:00'),
        _resource(9, 3, 'Fiber Splice Tray', 10, 'pcs', 350, '2025-10-31T07:30:00'),
        _resource(10, 3, 'Conduit Pipe (2 inch)', 100, 'm', 80, '2025-10-31T07:30:00',
                  notes='PVC conduit for cable protection'),
        _resource(11, 4, '16 Channel DVR', 2, 'pcs', 12000, '2025-10-30T09:15:00'),
        _resource(12, 4, '32 Channel NVR', 1, 'pcs', 25000, '2025-10-30T09:15:00'),
        _resource(13, 4, 'Hard Disk (4TB)', 4, 'pcs', 8500, '2025-10-30T09:15:00'),
        _resource(14, 5, 'Enterprise Router', 2, 'pcs', 15000, '2025-10-29T10:30:00'),
        _resource(15, 5, 'Managed Switch (24 Port)', 3, 'pcs', 12000, '2025-10-29T10:30:00'),
        # Unit costs not yet entered for two of the task 6 items
        _resource(16, 6, 'Access Control Panel', 3, 'pcs', None, '2025-10-28T08:30:00',
                  notes='Biometric + RFID'),
        _resource(17, 6, 'Magnetic Door Lock', 5, 'pcs', 4500, '2025-10-28T08:30:00'),
        _resource(18, 6, 'RFID Card Reader', 8, 'pcs', None, '2025-10-28T08:30:00'),
    ]


def _seed_attachments() -> List[TaskAttachment]:
    rows = [
        (1, 1, 'camera_installation_photo1.jpg', 'task1_photo1.jpg', 'image', 2458624, 'Rajesh Kumar', '2025-11-01T12:30:00'),
        (2, 1, 'cable_routing_plan.pdf', 'task1_plan.pdf', 'pdf', 1024000, 'Rajesh Kumar', '2025-11-01T10:00:00'),
        (3, 1, 'junction_wiring.jpg', 'task1_photo2.jpg', 'image', 1987456, 'Rajesh Kumar', '2025-11-01T15:45:00'),
        (4, 2, 'network_floor_plan.pdf', 'task2_plan.pdf', 'pdf', 3145728, 'Priya Sharma', '2025-11-01T11:00:00'),
        (5, 2, 'patch_panel_config.jpg', 'task2_photo1.jpg', 'image', 1456789, 'Priya Sharma', '2025-11-01T14:30:00'),
        (6, 3, 'fiber_splice_documentation.pdf', 'task3_doc.pdf', 'pdf', 987654, 'Rajesh Kumar', '2025-10-31T10:00:00'),
        (7, 3, 'cable_route_photo.jpg', 'task3_photo1.jpg', 'image', 3145728, 'Rajesh Kumar', '2025-10-31T13:00:00'),
        (8, 4, 'dvr_installation.jpg', 'task4_photo1.jpg', 'image', 2234567, 'Amit Singh', '2025-10-30T11:30:00'),
        (9, 5, 'router_config_backup.pdf', 'task5_backup.pdf', 'pdf', 512000, 'Priya Sharma', '2025-10-29T12:00:00'),
        (10, 5, 'network_topology.jpg', 'task5_topology.jpg', 'image', 1876543, 'Priya Sharma', '2025-10-29T13:30:00'),
        (11, 6, 'access_control_installed.jpg', 'task6_photo1.jpg', 'image', 2567890, 'Sunita Verma', '2025-10-28T11:00:00'),
        (12, 6, 'door_lock_testing.jpg', 'task6_photo2.jpg', 'image', 1987654, 'Sunita Verma', '2025-10-28T13:30:00'),
    ]
    return [
        TaskAttachment(pk, task_id, name, f'/attachments/{url}', file_type, size, by, stamp(at))
        for pk, task_id, name, url, file_type, size, by, at in rows
    ]


def _seed_activities() -> List[TaskActivity]:
    rows = [
        (1, 1, ActivityType.CREATED, 'Task created by Rajesh Kumar', 'Rajesh Kumar', '2025-11-01T09:00:00'),
        (2, 1, ActivityType.STATUS_CHANGED, 'Status changed from Open to In Progress', 'Rajesh Kumar', '2025-11-01T09:15:00'),
        (3, 1, ActivityType.RESOURCE_UPDATED, 'Added 4 resources (CCTV cameras, cables, trays)', 'Rajesh Kumar', '2025-11-01T09:30:00'),
        (4, 1, ActivityType.STATUS_CHANGED, 'Status changed from In Progress to Completed', 'Rajesh Kumar', '2025-11-01T17:00:00'),
        (5, 2, ActivityType.CREATED, 'Task created by Priya Sharma', 'Priya Sharma', '2025-11-01T08:30:00'),
        (6, 2, ActivityType.EDITED, 'Updated resource quantities', 'Admin', '2025-11-01T16:00:00'),
        (7, 2, ActivityType.APPROVED, 'Task approved with payment confirmation', 'Admin', '2025-11-01T19:00:00'),
        (8, 3, ActivityType.CREATED, 'Task assigned to Rajesh Kumar', 'Owner', '2025-10-31T07:00:00'),
        (9, 3, ActivityType.STATUS_CHANGED, 'Status changed from Open to In Progress', 'Rajesh Kumar', '2025-10-31T07:30:00'),
        (10, 4, ActivityType.CREATED, 'Task created by Amit Singh', 'Amit Singh', '2025-10-30T09:00:00'),
        (11, 4, ActivityType.STATUS_CHANGED, 'Status changed from Open to Completed', 'Amit Singh', '2025-10-30T14:00:00'),
        (12, 5, ActivityType.CREATED, 'Task created by Priya Sharma', 'Priya Sharma', '2025-10-29T10:00:00'),
        (13, 5, ActivityType.APPROVED, 'Task approved', 'Admin', '2025-10-29T18:00:00'),
        (14, 6, ActivityType.CREATED, 'Task created by Sunita Verma', 'Sunita Verma', '2025-10-28T08:00:00'),
        (15, 6, ActivityType.NOTE_ADDED, 'Owner added note: Unit costs pending for some resources', 'Admin', '2025-10-28T16:00:00'),
    ]
    return [
        TaskActivity(pk, task_id, activity_type, description, by, stamp(at))
        for pk, task_id, activity_type, description, by, at in rows
    ]


tasks: MockRepository[Task] = MockRepository('Task', Task, _seed_tasks)
task_resources: MockRepository[TaskResource] = MockRepository('Task resource', TaskResource, _seed_resources)
task_attachments: MockRepository[TaskAttachment] = MockRepository(
    'Task attachment', TaskAttachment, _seed_attachments
)
task_activities: MockRepository[TaskActivity] = MockRepository('Task activity', TaskActivity, _seed_activities)


def get_task_by_id(pk: int) -> Optional[Task]:
    return tasks.get_by_id(pk)


def get_tasks_by_project_id(project_id: int) -> List[Task]:
    return tasks.filter(project_id=project_id)


def get_tasks_by_client_id(client_id: int) -> List[Task]:
    return tasks.filter(client_id=client_id)


def get_resources_by_task_id(task_id: int) -> List[TaskResource]:
    return sorted(task_resources.filter(task_id=task_id), key=lambda r: r.id)


def get_attachments_by_task_id(task_id: int) -> List[TaskAttachment]:
    return task_attachments.filter(task_id=task_id)


def get_activities_by_task_id(task_id: int) -> List[TaskActivity]:
    return sorted(task_activities.filter(task_id=task_id), key=lambda a: a.created_at)
