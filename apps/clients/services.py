"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Client services: list rows with AMC/project figures,
             list filters, CSV export and cascading delete.
-------------------------------------------------------------------------
"""
import csv
from decimal import Decimal
from typing import Any, Dict, Iterable, List

CSV_HEADERS = [
    'Name', 'Business Name', 'City', 'State', 'Contact Email',
    'Contact Phone', 'AMC Count', 'Outstanding',
]


def client_row(client) -> Dict[str, Any]:
    """A client with its AMC count, open projects and outstanding billing."""
    from apps.amcs.services import client_amc_summary
    from apps.projects.mock_data import ProjectStatus, get_projects_by_client_id

    summary = client_amc_summary(client.id)
    closed = (ProjectStatus.COMPLETED, ProjectStatus.CANCELED)
    return {
        'client': client,
        'amc_count': summary['amc_count'],
        'active_amc_count': summary['active_amc_count'],
        'open_projects': len([p for p in get_projects_by_client_id(client.id) if p.status not in closed]),
        'outstanding': summary['outstanding_amount'],
    }


def filter_options(client_list: Iterable) -> Dict[str, List[str]]:
    """Distinct cities, states and tags for the filter dropdowns."""
    client_list = list(client_list)
    return {
        'cities': sorted({c.city for c in client_list}),
        'states': sorted({c.state for c in client_list}),
        'tags': sorted({tag for c in client_list for tag in c.tags}),
    }


def filter_clients(rows: Iterable[Dict[str, Any]], search: str = '', city: str = 'all',
                   state: str = 'all', has_amc: str = 'all', tag: str = 'all') -> List[Dict[str, Any]]:
    """
    Filter client rows.

    Search matches name, city, state, contact name and email
    case-insensitively, and the contact phone as typed.
    ``has_amc`` is ``yes``/``no``/``all``.
    """
    search = (search or '').strip()
    needle = search.lower()
    filtered = []
    for row in rows:
        client = row['client']
        if search:
            text_fields = (client.name, client.city, client.state,
                           client.primary_contact_name, client.primary_contact_email)
            if not any(needle in value.lower() for value in text_fields) \
                    and search not in client.primary_contact_phone:
                continue
        if city not in ('', 'all') and client.city != city:
            continue
        if state not in ('', 'all') and client.state != state:
            continue
        if has_amc == 'yes' and row['amc_count'] == 0:
            continue
        if has_amc == 'no' and row['amc_count'] > 0:
            continue
        if tag not in ('', 'all') and tag not in client.tags:
            continue
        filtered.append(row)
    return filtered


def client_overview(rows: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    rows = list(rows)
    return {
        'total': len(rows),
        'with_amc': len([r for r in rows if r['amc_count'] > 0]),
        'open_projects': sum(r['open_projects'] for r in rows),
        'outstanding': sum((r['outstanding'] for r in rows), Decimal('0')),
    }


def write_clients_csv(stream, rows: Iterable[Dict[str, Any]]) -> None:
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADERS)
    for row in rows:
        client = row['client']
        writer.writerow([
            client.name,
            client.business_name,
            client.city,
            client.state,
            client.primary_contact_email,
            client.primary_contact_phone,
            row['amc_count'],
            float(row['outstanding']),
        ])


class ClientService:
    """
    Service class for client removal.
    """

    @staticmethod
    def delete_client(client_id: int):
        """
        Delete a client together with its AMCs (and their bills) and
        projects. Tasks are kept but detached from the client and its
        projects.

        Raises:
            RecordNotFoundException: If the client does not exist.
        """
        from apps.amcs.mock_data import amc_billings, amcs, get_amcs_by_client_id
        from apps.clients.mock_data import clients
        from apps.projects.mock_data import get_projects_by_client_id, projects
        from apps.tasks.mock_data import get_tasks_by_client_id, get_tasks_by_project_id, tasks

        client = clients.get_or_raise(client_id)
        for amc in get_amcs_by_client_id(client.id):
            for bill in amc_billings.filter(amc_id=amc.id):
                amc_billings.delete(bill.id)
            amcs.delete(amc.id)
        for project in get_projects_by_client_id(client.id):
            for task in get_tasks_by_project_id(project.id):
                tasks.update(task.id, project_id=None)
            projects.delete(project.id)
        for task in get_tasks_by_client_id(client.id):
            tasks.update(task.id, client_id=None)

        clients.delete(client.id)
        return client
