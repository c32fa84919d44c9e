"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Task services: resource costing, list filtering and
             summary stats, resource consumption across tasks and the
             approval workflow.
-------------------------------------------------------------------------
"""
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from apps.core.exceptions import TaskApprovalException
from apps.core.logging import ConsoleLogger

PERIOD_CHOICES = [
    ('today', 'Today'),
    ('week', 'This Week'),
    ('month', 'This Month'),
    ('all', 'All'),
]


def calculate_task_resource_cost(task_id: int) -> Decimal:
    """Sum of resource totals for a task; resources without a cost count as zero."""
    from apps.tasks.mock_data import get_resources_by_task_id

    return sum(
        (r.total_cost for r in get_resources_by_task_id(task_id) if r.total_cost is not None),
        Decimal('0')
    )


def has_missing_unit_costs(task_id: int) -> bool:
    from apps.tasks.mock_data import get_resources_by_task_id

    return any(not r.unit_cost for r in get_resources_by_task_id(task_id))


def in_period(task_date: date, period: str, today: Optional[date] = None) -> bool:
    """
    Whether a task date falls in the selected period.

    Weeks start on Monday. Unknown periods behave like ``all``.
    """
    today = today or timezone.localdate()
    if period == 'today':
        return task_date == today
    if period == 'week':
        week_start = today - timedelta(days=today.weekday())
        return week_start <= task_date <= week_start + timedelta(days=6)
    if period == 'month':
        return (task_date.year, task_date.month) == (today.year, today.month)
    return True


def filter_tasks(task_list: Iterable, search: str = '', status: str = 'all',
                 priority: str = 'all', period: str = 'all',
                 today: Optional[date] = None) -> List:
    """Apply the period, status, priority and search filters, newest date first."""
    search = (search or '').strip().lower()
    filtered = []
    for task in task_list:
        if not in_period(task.date, period, today):
            continue
        if status not in ('', 'all') and task.status != status:
            continue
        if priority not in ('', 'all') and task.priority != priority:
            continue
        if search:
            haystack = (task.employee_name, task.client_name, task.project_name,
                        task.location, task.description)
            if not any(search in (value or '').lower() for value in haystack):
                continue
        filtered.append(task)
    return sorted(filtered, key=lambda t: t.date, reverse=True)


def task_stats(task_list: Iterable) -> Dict[str, Any]:
    """
    Summary cards for the task list.

    Returns:
        dict: {
            'total': int, 'pending': int, 'approved': int,
            'total_minutes': int, 'total_hours': float,
            'total_resource_cost': Decimal,
        }
    """
    from apps.tasks.mock_data import TaskStatus

    task_list = list(task_list)
    total_minutes = sum(t.time_taken_minutes for t in task_list)
    return {
        'total': len(task_list),
        'pending': len([t for t in task_list if t.status == TaskStatus.COMPLETED and not t.approved_by]),
        'approved': len([t for t in task_list if t.status == TaskStatus.APPROVED]),
        'total_minutes': total_minutes,
        'total_hours': round(total_minutes / 60, 1),
        'total_resource_cost': sum(
            (calculate_task_resource_cost(t.id) for t in task_list), Decimal('0')
        ),
    }


# =====================================================================
# RESOURCE CONSUMPTION
# =====================================================================


def task_resource_summaries(task_list: Iterable, search: str = '') -> List[Dict[str, Any]]:
    """
    One row per task that used resources, newest task first.

    Search matches employee, client, project or location. Resources
    without a unit cost are listed but add nothing to the task cost.
    """
    from apps.tasks.mock_data import get_resources_by_task_id

    search = (search or '').strip().lower()
    summaries = []
    for task in sorted(task_list, key=lambda t: (t.date, t.id), reverse=True):
        resources = get_resources_by_task_id(task.id)
        if not resources:
            continue
        if search:
            haystack = (task.employee_name, task.client_name, task.project_name, task.location)
            if not any(search in (value or '').lower() for value in haystack):
                continue
        summaries.append({
            'task': task,
            'resources': resources,
            'resource_count': len(resources),
            'total_cost': calculate_task_resource_cost(task.id),
            'missing_costs': any(not r.unit_cost for r in resources),
        })
    return summaries


def resource_summary_stats(summaries: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Task count, resource lines, total cost and the average cost per task in whole rupees."""
    total_cost = sum((s['total_cost'] for s in summaries), Decimal('0'))
    return {
        'total_tasks': len(summaries),
        'total_resources': sum(s['resource_count'] for s in summaries),
        'total_cost': total_cost,
        'average_cost': (
            (total_cost / len(summaries)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
            if summaries else Decimal('0')
        ),
        'missing_cost_tasks': len([s for s in summaries if s['missing_costs']]),
    }


def resource_consumption(summaries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Quantity and cost per resource name and unit across the tasks,
    highest cost first.
    """
    totals: Dict[tuple, Dict[str, Any]] = {}
    for summary in summaries:
        for resource in summary['resources']:
            key = (resource.resource_name, resource.unit)
            row = totals.setdefault(key, {
                'resource_name': resource.resource_name,
                'unit': resource.unit,
                'quantity': Decimal('0'),
                'total_cost': Decimal('0'),
                'task_count': 0,
            })
            row['quantity'] += resource.quantity
            row['total_cost'] += resource.total_cost or Decimal('0')
            row['task_count'] += 1
    return sorted(totals.values(), key=lambda r: (-r['total_cost'], r['resource_name']))


class TaskService:
    """
    Service class for the task approval workflow and resource entry.
    """

    @staticmethod
    def log_activity(task_id: int, activity_type: str, description: str,
                     performed_by: str = 'Admin'):
        from apps.tasks.mock_data import task_activities

        return task_activities.create(
            task_id=task_id,
            activity_type=activity_type,
            description=description,
            performed_by=performed_by,
        )

    @staticmethod
    def create_task(data: Dict[str, Any]):
        from apps.tasks.mock_data import ActivityType, tasks

        task = tasks.create(**data)
        TaskService.log_activity(task.id, ActivityType.CREATED,
                                 f"Task created for {task.employee_name}", task.assigned_by)
        ConsoleLogger.log_record_created('Task', task, task.employee_name)
        return task

    @staticmethod
    def update_task(task_id: int, data: Dict[str, Any]):
        from apps.tasks.mock_data import ActivityType, tasks

        task = tasks.get_or_raise(task_id)
        old_status = task.status
        tasks.update(task.id, **data)
        if task.status != old_status:
            TaskService.log_activity(task.id, ActivityType.STATUS_CHANGED,
                                     f"Status changed from {old_status} to {task.status}")
        else:
            TaskService.log_activity(task.id, ActivityType.EDITED, 'Task details edited')
        ConsoleLogger.log_record_updated('Task', task, task.employee_name)
        return task

    @staticmethod
    def approve_task(task_id: int, approved_by: str = 'Admin'):
        """
        Approve a completed task.

        Returns:
            tuple: (task, missing_costs) where ``missing_costs`` is True when
                   some resources still have no unit cost.

        Raises:
            TaskApprovalException: If the task is not in Completed status.
        """
        from apps.tasks.mock_data import ActivityType, TaskStatus, tasks

        task = tasks.get_or_raise(task_id)
        if task.status != TaskStatus.COMPLETED:
            raise TaskApprovalException(
                f"Task #{task.id} is {task.status}; only completed tasks can be approved.",
                details={'task_id': task.id, 'status': task.status}
            )
        tasks.update(
            task.id,
            status=TaskStatus.APPROVED,
            approved_by=approved_by,
            approved_at=timezone.now(),
            is_new=False,
        )
        TaskService.log_activity(task.id, ActivityType.APPROVED, 'Task approved', approved_by)
        ConsoleLogger.log_record_updated('Task', task, 'approved')
        return task, has_missing_unit_costs(task.id)

    @staticmethod
    def reject_task(task_id: int, reason: str, rejected_by: str = 'Admin'):
        """
        Reject a completed task; the reason is appended to the internal notes.

        Raises:
            TaskApprovalException: If the task is not in Completed status.
        """
        from apps.tasks.mock_data import ActivityType, TaskStatus, tasks

        task = tasks.get_or_raise(task_id)
        if task.status != TaskStatus.COMPLETED:
            raise TaskApprovalException(
                f"Task #{task.id} is {task.status}; only completed tasks can be rejected.",
                details={'task_id': task.id, 'status': task.status}
            )
        notes = f"{task.internal_notes}\n\nRejection reason: {reason}".strip()
        tasks.update(task.id, status=TaskStatus.REJECTED, internal_notes=notes, is_new=False)
        TaskService.log_activity(task.id, ActivityType.REJECTED, f"Task rejected: {reason}", rejected_by)
        ConsoleLogger.log_record_updated('Task', task, 'rejected')
        return task

    @staticmethod
    def add_resource(task_id: int, resource_name: str, quantity: Decimal, unit: str,
                     unit_cost: Optional[Decimal] = None, notes: str = ''):
        """Add a resource line; the total is only known when the unit cost is."""
        from apps.tasks.mock_data import ActivityType, task_resources, tasks

        task = tasks.get_or_raise(task_id)
        resource = task_resources.create(
            task_id=task.id,
            resource_name=resource_name,
            quantity=quantity,
            unit=unit,
            unit_cost=unit_cost,
            total_cost=quantity * unit_cost if unit_cost is not None else None,
            notes=notes,
        )
        TaskService.log_activity(task.id, ActivityType.RESOURCE_UPDATED,
                                 f"Added resource {resource_name} ({quantity} {unit})")
        ConsoleLogger.log_record_created('Task resource', resource, resource_name)
        return resource

    @staticmethod
    def set_unit_cost(resource_id: int, unit_cost: Decimal):
        from apps.tasks.mock_data import ActivityType, task_resources

        resource = task_resources.get_or_raise(resource_id)
        task_resources.update(resource.id, unit_cost=unit_cost, total_cost=resource.quantity * unit_cost)
        TaskService.log_activity(resource.task_id, ActivityType.RESOURCE_UPDATED,
                                 f"Unit cost set for {resource.resource_name}")
        ConsoleLogger.log_record_updated('Task resource', resource, resource.resource_name)
        return resource

    @staticmethod
    def delete_task(task_id: int):
        """Delete a task with its resources, attachments and activity."""
        from apps.tasks.mock_data import task_activities, task_attachments, task_resources, tasks

        task = tasks.delete(task_id)
        for repo in (task_resources, task_attachments, task_activities):
            for child in repo.filter(task_id=task.id):
                repo.delete(child.id)
        return task
