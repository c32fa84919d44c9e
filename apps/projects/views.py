"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Project views: searchable list, detail with tasks,
             create/edit and delete.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.shortcuts import redirect
from django.urls import reverse
from django.views.generic import FormView, TemplateView

from apps.core.alerts import show_success
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin, SearchFilterMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView
from apps.projects.forms import ProjectForm
from apps.projects.mock_data import ProjectStatus, projects


class ProjectListView(SearchFilterMixin, TemplateView):
    template_name = 'projects/project_list.html'
    search_fields = ('name',)
    filter_fields = {'status': 'status'}

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context.update(self.get_filter_context())
        context['projects'] = self.apply_filters(projects.all())
        context['status_choices'] = ProjectStatus.choices
        return context


class ProjectDetailView(RecordMixin, TemplateView):
    template_name = 'projects/project_detail.html'
    repository = projects
    context_object_name = 'project'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        from apps.tasks.mock_data import get_tasks_by_project_id

        context = super().get_context_data(**kwargs)
        context['tasks'] = get_tasks_by_project_id(self.get_object().id)
        return context


class ProjectCreateView(FormView):
    template_name = 'projects/project_form.html'
    form_class = ProjectForm

    def form_valid(self, form):
        project = projects.create(**form.cleaned_data)
        ConsoleLogger.log_record_created('Project', project, project.name)
        show_success(self.request, 'Project Created', f"{project.name} created.")
        return redirect('projects:project_list')

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('project_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Create Project'
        return context


class ProjectUpdateView(RecordMixin, FormView):
    template_name = 'projects/project_form.html'
    form_class = ProjectForm
    repository = projects
    context_object_name = 'project'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        project = projects.update(self.get_object().id, **form.cleaned_data)
        ConsoleLogger.log_record_updated('Project', project, project.name)
        show_success(self.request, 'Project Updated', f"{project.name} updated.")
        return redirect('projects:project_list')

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = 'Edit Project'
        return context


class ProjectDeleteView(RecordDeleteView):
    repository = projects
    item_label = 'this project'

    def get_success_url(self) -> str:
        return reverse('projects:project_list')

    def perform_delete(self, record) -> None:
        from apps.tasks.mock_data import get_tasks_by_project_id, tasks

        # Tasks stay on record, detached from the deleted project
        for task in get_tasks_by_project_id(record.id):
            tasks.update(task.id, project_id=None)
        super().perform_delete(record)
