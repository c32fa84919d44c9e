"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for client validation, list figures and filters,
             cascading delete and the client views.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.test import SimpleTestCase
from django.urls import reverse

from apps.amcs.mock_data import amc_billings, amcs, get_amcs_by_client_id
from apps.clients.forms import ClientForm
from apps.clients.mock_data import clients, get_client_name
from apps.clients.services import ClientService, client_overview, client_row, filter_clients, filter_options
from apps.projects.mock_data import get_projects_by_client_id, projects
from apps.tasks.mock_data import tasks


def reset_all():
    for repository in (clients, amcs, amc_billings, projects, tasks):
        repository.reset()


def client_data(**overrides):
    data = {
        'name': 'Sunrise Hotels',
        'city': 'Goa',
        'state': 'Goa',
        'primary_contact_email': 'ops@sunrise.in',
        'primary_contact_phone': '98765 43210',
        'tags': 'hospitality, new',
    }
    data.update(overrides)
    return data


class ClientFormTestCase(SimpleTestCase):
    """Test cases for client field validation."""

    def test_valid(self):
        form = ClientForm(data=client_data())
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['tags'], ['hospitality', 'new'])
        self.assertEqual(form.cleaned_data['country'], 'India')

    def test_required_messages(self):
        form = ClientForm(data={})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['name'], ['Client name is required'])
        self.assertEqual(form.errors['primary_contact_email'], ['Email is required'])
        self.assertEqual(form.errors['primary_contact_phone'], ['Phone is required'])
        self.assertEqual(form.errors['city'], ['City is required'])
        self.assertEqual(form.errors['state'], ['State is required'])

    def test_invalid_email(self):
        for email in ('ops@sunrise', 'ops sunrise@x.in', 'ops.sunrise.in'):
            form = ClientForm(data=client_data(primary_contact_email=email))
            self.assertFalse(form.is_valid())
            self.assertEqual(form.errors['primary_contact_email'], ['Invalid email format'])

    def test_phone_digits(self):
        self.assertTrue(ClientForm(data=client_data(primary_contact_phone='(987) 654-3210')).is_valid())
        form = ClientForm(data=client_data(primary_contact_phone='+91 98765 43210'))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['primary_contact_phone'], ['Phone must be 10 digits'])

    def test_tags_shown_comma_separated(self):
        form = ClientForm(initial={'tags': ['premium', 'long-term']})
        self.assertEqual(form.initial['tags'], 'premium, long-term')


class ClientServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_all()

    def rows(self):
        return [client_row(client) for client in clients.all()]

    def test_row_figures(self):
        row = client_row(clients.get_by_id(1))
        self.assertEqual(row['amc_count'], 3)
        self.assertEqual(row['active_amc_count'], 2)
        self.assertEqual(row['open_projects'], 1)
        self.assertEqual(row['outstanding'], Decimal('125000'))

    def test_completed_project_not_open(self):
        self.assertEqual(client_row(clients.get_by_id(3))['open_projects'], 0)

    def test_overview(self):
        overview = client_overview(self.rows())
        self.assertEqual(overview['total'], 4)
        self.assertEqual(overview['with_amc'], 2)
        self.assertEqual(overview['open_projects'], 2)
        self.assertEqual(overview['outstanding'], Decimal('150000'))

    def test_search(self):
        names = [r['client'].name for r in filter_clients(self.rows(), search='pune')]
        self.assertEqual(names, ['XYZ Industries'])
        names = [r['client'].name for r in filter_clients(self.rows(), search='9543210987')]
        self.assertEqual(names, ['Metro Mall Services'])

    def test_filters(self):
        self.assertEqual(len(filter_clients(self.rows(), state='Maharashtra')), 2)
        self.assertEqual(len(filter_clients(self.rows(), has_amc='no')), 2)
        self.assertEqual([r['client'].id for r in filter_clients(self.rows(), tag='tech')], [3])

    def test_filter_options(self):
        options = filter_options(clients.all())
        self.assertEqual(options['cities'], ['Bangalore', 'Delhi', 'Mumbai', 'Pune'])
        self.assertIn('premium', options['tags'])

    def test_delete_cascades(self):
        ClientService.delete_client(1)
        self.assertIsNone(clients.get_by_id(1))
        self.assertEqual(get_amcs_by_client_id(1), [])
        self.assertEqual(amc_billings.filter(amc_id=1), [])
        self.assertEqual(get_projects_by_client_id(1), [])
        self.assertIsNone(tasks.get_by_id(1).client_id)
        self.assertIsNone(tasks.get_by_id(1).project_id)
        self.assertEqual(get_client_name(1), 'Unknown Client')


class ClientViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_all()

    def test_list(self):
        response = self.client.get(reverse('clients:client_list'))
        self.assertContains(response, 'ABC Power Solutions Ltd')
        self.assertEqual(len(response.context['rows']), 4)

    def test_list_filter(self):
        response = self.client.get(reverse('clients:client_list'), {'has_amc': 'yes'})
        self.assertEqual({r['client'].id for r in response.context['rows']}, {1, 2})

    def test_detail(self):
        response = self.client.get(reverse('clients:client_detail', args=[1]))
        self.assertEqual(len(response.context['amc_rows']), 3)
        self.assertContains(response, 'BSNL Network Expansion')

    def test_create(self):
        response = self.client.post(reverse('clients:client_create'), client_data())
        self.assertRedirects(response, reverse('clients:client_detail', args=[5]))
        self.assertEqual(clients.get_by_id(5).tags, ['hospitality', 'new'])

    def test_create_and_add_amc(self):
        data = client_data(save_and_add_amc='1')
        response = self.client.post(reverse('clients:client_create'), data)
        self.assertRedirects(response, f"{reverse('amcs:amc_create')}?client=5")

    def test_create_invalid(self):
        response = self.client.post(reverse('clients:client_create'), client_data(primary_contact_phone='123'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Phone must be 10 digits')
        self.assertEqual(clients.count(), 4)

    def test_update(self):
        data = client_data(name='XYZ Industries Pvt Ltd')
        self.client.post(reverse('clients:client_update', args=[2]), data)
        self.assertEqual(clients.get_by_id(2).name, 'XYZ Industries Pvt Ltd')

    def test_delete_confirmation(self):
        response = self.client.get(reverse('clients:client_delete', args=[4]))
        self.assertContains(response, 'Do you want to delete Metro Mall Services?')

    def test_bulk_export(self):
        response = self.client.post(reverse('clients:client_bulk'), {'action': 'export', 'ids': ['1', '3']})
        content = response.content.decode('utf-8')
        self.assertIn('Name,Business Name,City', content)
        self.assertIn('ABC Power Solutions Ltd,ABC Power,Mumbai', content)
        self.assertIn('TechCorp Solutions', content)
        self.assertNotIn('XYZ Industries', content)

    def test_bulk_delete(self):
        response = self.client.post(reverse('clients:client_bulk'), {'action': 'delete', 'ids': ['3', '4']})
        self.assertRedirects(response, reverse('clients:client_list'))
        self.assertEqual(clients.count(), 2)

    def test_bulk_without_selection(self):
        response = self.client.post(reverse('clients:client_bulk'), {'action': 'delete'})
        self.assertRedirects(response, reverse('clients:client_list'))
        self.assertEqual(clients.count(), 4)
