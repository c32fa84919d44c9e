"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Client views: filtered list with quick stats, detail with
             AMCs and projects, create/edit, delete and the bulk
             export/delete actions.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.http import HttpResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.utils import timezone
from django.views import View
from django.views.generic import FormView, TemplateView

from apps.amcs.mock_data import get_amcs_by_client_id
from apps.amcs.services import amc_stats
from apps.clients.forms import ClientForm
from apps.clients.mock_data import clients
from apps.clients.services import (
    ClientService, client_overview, client_row, filter_clients, filter_options,
    write_clients_csv
)
from apps.core.alerts import show_success, show_warning
from apps.core.logging import ConsoleLogger
from apps.core.mixins import RecordMixin
from apps.core.repository import as_dict
from apps.core.views import RecordDeleteView
from apps.projects.mock_data import get_projects_by_client_id


class ClientListView(TemplateView):
    template_name = 'clients/client_list.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        params = self.request.GET
        filters = {
            'search': params.get('search', '').strip(),
            'city': params.get('city', 'all'),
            'state': params.get('state', 'all'),
            'has_amc': params.get('has_amc', 'all'),
            'tag': params.get('tag', 'all'),
        }
        all_clients = clients.all()
        rows = [client_row(client) for client in all_clients]
        context.update(filter_options(all_clients))
        context.update({
            'rows': filter_clients(rows, **filters),
            'overview': client_overview(rows),
            'search_query': filters['search'],
            'city_filter': filters['city'],
            'state_filter': filters['state'],
            'has_amc_filter': filters['has_amc'],
            'tag_filter': filters['tag'],
            'view_mode': 'grid' if params.get('view') == 'grid' else 'table',
        })
        return context


class ClientDetailView(RecordMixin, TemplateView):
    template_name = 'clients/client_detail.html'
    repository = clients
    context_object_name = 'client'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        client = self.get_object()
        context.update({
            'row': client_row(client),
            'amc_rows': [{'amc': amc, 'stats': amc_stats(amc)} for amc in get_amcs_by_client_id(client.id)],
            'projects': get_projects_by_client_id(client.id),
        })
        return context


class ClientCreateView(FormView):
    """Create a client; "Save & Add AMC" continues to the AMC form."""
    template_name = 'clients/client_form.html'
    form_class = ClientForm

    def form_valid(self, form):
        client = clients.create(**form.cleaned_data)
        ConsoleLogger.log_record_created('Client', client, client.name)
        show_success(self.request, 'Client Created', f"{client.name} created successfully.")
        if 'save_and_add_amc' in self.request.POST:
            return redirect(f"{reverse('amcs:amc_create')}?client={client.id}")
        return redirect('clients:client_detail', pk=client.id)

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('client_create', form.errors.get_json_data(), {})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context.update({'title': 'New Client', 'allow_add_amc': True})
        return context


class ClientUpdateView(RecordMixin, FormView):
    template_name = 'clients/client_form.html'
    form_class = ClientForm
    repository = clients
    context_object_name = 'client'

    def get_initial(self) -> Dict[str, Any]:
        return as_dict(self.get_object())

    def form_valid(self, form):
        client = clients.update(self.get_object().id, **form.cleaned_data)
        ConsoleLogger.log_record_updated('Client', client, client.name)
        show_success(self.request, 'Client Updated', f"{client.name} updated successfully.")
        return redirect('clients:client_detail', pk=client.id)

    def form_invalid(self, form):
        ConsoleLogger.log_validation_error('client_update', form.errors.get_json_data(),
                                           {'client_id': self.get_object().id})
        return super().form_invalid(form)

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['title'] = f"Edit Client - {self.get_object().name}"
        return context


class ClientDeleteView(RecordDeleteView):
    repository = clients

    def get_item_label(self) -> str:
        return self.get_object().name

    def get_success_url(self) -> str:
        return reverse('clients:client_list')

    def perform_delete(self, record) -> None:
        ClientService.delete_client(record.id)


class ClientBulkActionView(View):
    """
    Bulk actions on the selected clients.

    POST ``action`` is ``export`` (CSV download) or ``delete``; ``ids``
    carries the selected client IDs.
    """

    def post(self, request, *args, **kwargs):
        ids = {int(pk) for pk in request.POST.getlist('ids') if pk.isdigit()}
        selected = [client for client in clients.all() if client.id in ids]
        if not selected:
            show_warning(request, 'No Clients Selected', 'Select at least one client first.')
            return redirect('clients:client_list')

        action = request.POST.get('action')
        if action == 'export':
            return self._export_csv(selected)
        if action == 'delete':
            for client in selected:
                ClientService.delete_client(client.id)
                ConsoleLogger.log_record_deleted('Client', client, client.name)
            show_success(request, 'Deleted', f"{len(selected)} client(s) deleted.")
            return redirect('clients:client_list')

        show_warning(request, 'Unknown Action', 'Choose export or delete.')
        return redirect('clients:client_list')

    def _export_csv(self, selected) -> HttpResponse:
        filename = f"clients-export-{timezone.localdate().isoformat()}.csv"
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'

        # Add UTF-8 BOM for Excel compatibility
        response.write('\ufeff')
        write_clients_csv(response, [client_row(client) for client in selected])
        return response
