"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Staff views: employees and contract workers (list, detail
             with payroll history, create/edit, delete) and the
             contract-worker CSV import.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.shortcuts import redirect
from django.urls import reverse
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_error, show_success
from apps.core.exceptions import WorkerImportException
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView
from apps.employees.forms import ContractWorkerForm, EmployeeForm, WorkerImportForm
from apps.employees.mock_data import (
    EmployeeStatus, WorkerStatus, contract_workers, employees
)
from apps.employees.services import (
    WORKER_COLUMNS, ContractWorkerService, EmployeeService, distinct_values,
    employee_stats, filter_employees, filter_workers, payroll_history, worker_stats
)


# =====================================================================
# EMPLOYEE VIEWS
# =====================================================================


class EmployeeListView(TemplateView):
    template_name = 'employees/employee_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        params = self.request.GET
        search = params.get('search', '').strip()
        department = params.get('department', 'all')
        status = params.get('status', 'all')
        all_employees = employees.all()
        context.update({
            'employees': filter_employees(all_employees, search, department, status),
            'stats': employee_stats(all_employees),
            'search_query': search,
            'department_filter': department,
            'status_filter': status,
            'department_choices': distinct_values(all_employees, 'department'),
            'status_choices': EmployeeStatus.choices,
        })
        return context


class EmployeeDetailView(RecordMixin, TemplateView):
    """Employee profile with payroll history and recent attendance."""
    template_name = 'employees/employee_detail.html'
    repository = employees
    context_object_name = 'employee'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        from apps.attendance.mock_data import get_attendance_by_employee_id

        context = super().get_context_data(**kwargs)
        employee = self.get_object()
        context.update({
            'payroll_records': payroll_history(employee_id=employee.id),
            'recent_attendance': get_attendance_by_employee_id(employee.id)[:10],
        })
        return context


class EmployeeCreateView(FormView):
    template_name = 'administration/setup_form.html'
    form_class = EmployeeForm

    def form_valid(self, form):
        employee = EmployeeService.create_employee(form.cleaned_data)
        show_success(self.request, 'Employee Added', f"{employee.name} added as {employee.employee_code}.")
        return redirect('employees:employee_detail', pk=employee.id)

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('employee_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Add Employee'
        context['back_url'] = reverse('employees:employee_list')
        return context


class EmployeeUpdateView(RecordMixin, FormView):
    template_name = 'administration/setup_form.html'
    form_class = EmployeeForm
    repository = employees
    context_object_name = 'employee'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        employee = EmployeeService.update_employee(self.get_object().id, form.cleaned_data)
        show_success(self.request, 'Employee Updated', f"{employee.name} updated.")
        return redirect('employees:employee_detail', pk=employee.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        employee = self.get_object()
        context['title'] = f"Edit Employee {employee.employee_code}"
        context['back_url'] = reverse('employees:employee_detail', args=[employee.id])
        return context


class EmployeeDeleteView(RecordDeleteView):
    repository = employees

    def get_item_label(self) -> str:
        return self.get_object().name

    def perform_delete(self, record) -> None:
        EmployeeService.delete_employee(record.id)

    def get_success_url(self) -> str:
        return reverse('employees:employee_list')


# =====================================================================
# CONTRACT WORKER VIEWS
# =====================================================================


class ContractWorkerListView(TemplateView):
    template_name = 'employees/worker_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        params = self.request.GET
        search = params.get('search', '').strip()
        skill = params.get('skill', 'all')
        status = params.get('status', 'all')
        all_workers = contract_workers.all()
        context.update({
            'workers': filter_workers(all_workers, search, skill, status),
            'stats': worker_stats(all_workers),
            'search_query': search,
            'skill_filter': skill,
            'status_filter': status,
            'skill_choices': distinct_values(all_workers, 'skill'),
            'status_choices': WorkerStatus.choices,
        })
        return context


class ContractWorkerDetailView(RecordMixin, TemplateView):
    template_name = 'employees/worker_detail.html'
    repository = contract_workers
    context_object_name = 'worker'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['payroll_records'] = payroll_history(contract_worker_id=self.get_object().id)
        return context


class ContractWorkerCreateView(FormView):
    template_name = 'administration/setup_form.html'
    form_class = ContractWorkerForm

    def form_valid(self, form):
        worker = ContractWorkerService.create_worker(form.cleaned_data)
        show_success(self.request, 'Worker Added', f"{worker.name} added as {worker.worker_code}.")
        return redirect('employees:worker_list')

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('worker_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Add Contract Worker'
        context['back_url'] = reverse('employees:worker_list')
        return context


class ContractWorkerUpdateView(RecordMixin, FormView):
    template_name = 'administration/setup_form.html'
    form_class = ContractWorkerForm
    repository = contract_workers
    context_object_name = 'worker'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        worker = ContractWorkerService.update_worker(self.get_object().id, form.cleaned_data)
        show_success(self.request, 'Worker Updated', f"{worker.name} updated.")
        return redirect('employees:worker_detail', pk=worker.id)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        worker = self.get_object()
        context['title'] = f"Edit Worker {worker.worker_code}"
        context['back_url'] = reverse('employees:worker_detail', args=[worker.id])
        return context


class ContractWorkerDeleteView(RecordDeleteView):
    repository = contract_workers

    def get_item_label(self) -> str:
        return self.get_object().name

    def perform_delete(self, record) -> None:
        ContractWorkerService.delete_worker(record.id)

    def get_success_url(self) -> str:
        return reverse('employees:worker_list')


class WorkerImportView(FormView):
    """Bulk import contract workers; row errors are listed and nothing is imported."""
    template_name = 'employees/worker_import.html'
    form_class = WorkerImportForm

    def form_valid(self, form):
        try:
            created, row_errors = ContractWorkerService.import_workers(form.cleaned_data['file'])
        except WorkerImportException as e:
            ConsoleLogger.log_error('worker_import', e, e.details)
            show_error(self.request, 'Import Failed', e.message)
            return self.render_to_response(self.get_context_data(form=form))

        if row_errors:
            show_error(self.request, 'Import Failed',
                       f"{len(row_errors)} row(s) have errors. No workers were imported.")
            return self.render_to_response(self.get_context_data(form=form, row_errors=row_errors))

        show_success(self.request, 'Import Complete', f"{len(created)} worker(s) imported.")
        return redirect('employees:worker_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['worker_columns'] = WORKER_COLUMNS
        return context
