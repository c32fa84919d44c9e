"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Task views: filtered list with stats and CSV export,
             resource consumption summary with its CSV export,
             detail with resources and activity, create/edit, resource
             entry and the approve/reject workflow.
-------------------------------------------------------------------------
"""
import csv
from typing import Any, Dict

from django.shortcuts import redirect
from django.urls import reverse
from django.http import HttpResponse
from django.utils import timezone
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_error, show_success, show_warning
from apps.core.exceptions import TaskApprovalException
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView
from apps.tasks.forms import TaskForm, TaskRejectForm, TaskResourceForm, UnitCostForm
from apps.tasks.mock_data import (
    TaskPriority, TaskStatus, get_activities_by_task_id, get_attachments_by_task_id,
    get_resources_by_task_id, task_resources, tasks
)
from apps.tasks.services import (
    PERIOD_CHOICES, TaskService, calculate_task_resource_cost, filter_tasks,
    has_missing_unit_costs, resource_consumption, resource_summary_stats,
    task_resource_summaries, task_stats
)


class TaskFilterMixin:
    """Reads the period/status/priority/search query parameters."""

    def get_filters(self) -> Dict[str, str]:
        params = self.request.GET
        return {
            'search': params.get('search', '').strip(),
            'status': params.get('status', 'all'),
            'priority': params.get('priority', 'all'),
            'period': params.get('period', 'all'),
        }

    def get_filtered_tasks(self):
        return filter_tasks(tasks.all(), **self.get_filters())


class TaskListView(TaskFilterMixin, TemplateView):
    template_name = 'tasks/task_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        filters = self.get_filters()
        filtered = self.get_filtered_tasks()
        rows = [
            {
                'task': task,
                'resource_cost': calculate_task_resource_cost(task.id),
                'missing_costs': has_missing_unit_costs(task.id),
            }
            for task in filtered
        ]
        context.update({
            'rows': rows,
            'stats': task_stats(filtered),
            'search_query': filters['search'],
            'status_filter': filters['status'],
            'priority_filter': filters['priority'],
            'period_filter': filters['period'],
            'status_choices': TaskStatus.choices,
            'priority_choices': TaskPriority.choices,
            'period_choices': PERIOD_CHOICES,
            'export_query': self.request.GET.urlencode(),
        })
        return context


class TaskExportView(TaskFilterMixin, View):
    """Export the filtered task list to CSV."""

    def get(self, request, *args, **kwargs) -> HttpResponse:
        filename = f"tasks_{timezone.localdate().isoformat()}.csv"
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'

        # Add UTF-8 BOM for Excel compatibility
        response.write('\ufeff')

        writer = csv.writer(response)
        writer.writerow([
            'Date', 'Employee', 'Client/Project', 'Description',
            'Time (hrs)', 'Status', 'Resource Cost (Rs)'
        ])
        for task in self.get_filtered_tasks():
            writer.writerow([
                task.date.strftime('%d/%m/%Y'),
                task.employee_name,
                task.client_name or task.project_name or '-',
                task.description,
                task.hours_taken,
                task.status,
                float(calculate_task_resource_cost(task.id)),
            ])
        return response


class ResourceSummaryView(TemplateView):
    """Resource consumption per task and per resource, with cost totals."""
    template_name = 'tasks/resource_summary.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        search = self.request.GET.get('search', '').strip()
        summaries = task_resource_summaries(tasks.all(), search)
        context.update({
            'summaries': summaries,
            'stats': resource_summary_stats(summaries),
            'consumption': resource_consumption(summaries),
            'search_query': search,
            'export_query': self.request.GET.urlencode(),
        })
        return context


class ResourceSummaryExportView(View):
    """Export the task resource summary to CSV."""

    def get(self, request, *args, **kwargs) -> HttpResponse:
        filename = f"task_resources_{timezone.localdate().isoformat()}.csv"
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'

        # Add UTF-8 BOM for Excel compatibility
        response.write('\ufeff')

        writer = csv.writer(response)
        writer.writerow([
            'Task ID', 'Date', 'Employee', 'Client', 'Project', 'Location',
            'Resources Used', 'Total Cost (Rs)'
        ])
        for summary in task_resource_summaries(tasks.all(), request.GET.get('search', '')):
            task = summary['task']
            writer.writerow([
                task.id,
                task.date.strftime('%d/%m/%Y'),
                task.employee_name,
                task.client_name or '',
                task.project_name or '',
                task.location,
                summary['resource_count'],
                float(summary['total_cost']),
            ])
        return response


class TaskDetailView(RecordMixin, TemplateView):
    template_name = 'tasks/task_detail.html'
    repository = tasks
    context_object_name = 'task'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        task = self.get_object()
        context.update({
            'resources': get_resources_by_task_id(task.id),
            'attachments': get_attachments_by_task_id(task.id),
            'activities': get_activities_by_task_id(task.id),
            'resource_cost': calculate_task_resource_cost(task.id),
            'missing_costs': has_missing_unit_costs(task.id),
            'resource_form': TaskResourceForm(),
            'reject_form': TaskRejectForm(),
            'can_review': task.status == TaskStatus.COMPLETED,
        })
        return context


class TaskCreateView(FormView):
    template_name = 'tasks/task_form.html'
    form_class = TaskForm

    def form_valid(self, form):
        task = TaskService.create_task(form.cleaned_data)
        show_success(self.request, 'Task Created', f"Task for {task.employee_name} created.")
        return redirect('tasks:task_detail', pk=task.id)

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('task_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'New Task'
        return context


class TaskUpdateView(RecordMixin, FormView):
    template_name = 'tasks/task_form.html'
    form_class = TaskForm
    repository = tasks
    context_object_name = 'task'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        task = TaskService.update_task(self.get_object().id, form.cleaned_data)
        show_success(self.request, 'Task Updated', f"Task #{task.id} updated.")
        return redirect('tasks:task_detail', pk=task.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = f"Edit Task #{self.get_object().id}"
        return context


class TaskDeleteView(RecordDeleteView):
    repository = tasks
    item_label = 'this task'

    def get_success_url(self) -> str:
        return reverse('tasks:task_list')

    def perform_delete(self, record) -> None:
        TaskService.delete_task(record.id)


class TaskApproveView(RecordMixin, View):
    repository = tasks

    def post(self, request, *args, **kwargs):
        task = self.get_object()
        try:
            task, missing_costs = TaskService.approve_task(task.id)
        except TaskApprovalException as e:
            show_error(request, 'Cannot Approve', e.message)
            return redirect('tasks:task_detail', pk=task.id)

        show_success(request, 'Task Approved', f"Task #{task.id} approved.")
        if missing_costs:
            show_warning(request, 'Missing Unit Costs',
                         'Some resources have no unit cost. Resource totals are understated.')
        return redirect('tasks:task_detail', pk=task.id)


class TaskRejectView(RecordMixin, View):
    repository = tasks

    def post(self, request, *args, **kwargs):
        task = self.get_object()
        form = TaskRejectForm(request.POST)
        if not form.is_valid():
            show_error(request, 'Reason Required', 'Please provide a reason for rejection.')
            return redirect('tasks:task_detail', pk=task.id)

        try:
            TaskService.reject_task(task.id, form.cleaned_data['reason'])
        except TaskApprovalException as e:
            show_error(request, 'Cannot Reject', e.message)
        else:
            show_success(request, 'Task Rejected', f"Task #{task.id} rejected.")
        return redirect('tasks:task_detail', pk=task.id)


class TaskResourceCreateView(RecordMixin, View):
    repository = tasks

    def post(self, request, *args, **kwargs):
        task = self.get_object()
        form = TaskResourceForm(request.POST)
        if not form.is_valid():
            ConsoleLogger.log_validation_error('task_resource', form.errors.get_json_data(),
                                               {'task_id': task.id})
            first_error = next(iter(form.errors.values()))[0]
            show_error(request, 'Resource Not Added', first_error)
            return redirect('tasks:task_detail', pk=task.id)

        resource = TaskService.add_resource(task.id, **form.cleaned_data)
        show_success(request, 'Resource Added', f"{resource.resource_name} added.")
        return redirect('tasks:task_detail', pk=task.id)


class UnitCostUpdateView(RecordMixin, View):
    """Fill in the unit cost of an existing resource line."""
    repository = task_resources
    pk_url_kwarg = 'resource_id'

    def post(self, request, *args, **kwargs):
        resource = self.get_object()
        form = UnitCostForm(request.POST)
        if form.is_valid():
            TaskService.set_unit_cost(resource.id, form.cleaned_data['unit_cost'])
            show_success(request, 'Unit Cost Updated', f"{resource.resource_name} updated.")
        else:
            show_error(request, 'Invalid Unit Cost', 'Enter a unit cost of 0 or more.')
        return redirect('tasks:task_detail', pk=resource.task_id)
