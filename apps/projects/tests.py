"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for the project form and views.
-------------------------------------------------------------------------
"""
from django.test import SimpleTestCase
from django.urls import reverse

from apps.projects.forms import ProjectForm
from apps.projects.mock_data import ProjectStatus, get_projects_by_client_id, projects
from apps.tasks.mock_data import tasks


class ProjectFormTestCase(SimpleTestCase):

    def setUp(self):
        projects.reset()

    def _data(self, **overrides):
        data = {
            'client_id': '1',
            'name': 'Street Lighting Retrofit',
            'start_date': '2025-03-01',
            'end_date': '2025-05-31',
            'status': ProjectStatus.PLANNED,
        }
        data.update(overrides)
        return data

    def test_valid(self):
        form = ProjectForm(data=self._data())
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['client_id'], 1)

    def test_unknown_client_rejected(self):
        form = ProjectForm(data=self._data(client_id='42'))
        self.assertFalse(form.is_valid())
        self.assertIn('client_id', form.errors)

    def test_name_required(self):
        form = ProjectForm(data=self._data(name='   '))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['name'], ['Project name is required'])

    def test_end_before_start_rejected(self):
        form = ProjectForm(data=self._data(end_date='2025-02-01'))
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['end_date'], ['End date cannot be before start date'])

    def test_same_day_allowed(self):
        form = ProjectForm(data=self._data(end_date='2025-03-01'))
        self.assertTrue(form.is_valid())

    def test_dates_optional(self):
        form = ProjectForm(data=self._data(start_date='', end_date=''))
        self.assertTrue(form.is_valid())


class ProjectViewTestCase(SimpleTestCase):

    def setUp(self):
        projects.reset()
        tasks.reset()

    def test_list(self):
        response = self.client.get(reverse('projects:project_list'))
        self.assertContains(response, 'BSNL Network Expansion')
        self.assertEqual(len(response.context['projects']), 3)

    def test_list_search(self):
        response = self.client.get(reverse('projects:project_list'), {'search': 'datanet'})
        self.assertEqual([p.id for p in response.context['projects']], [2])

    def test_list_status_filter(self):
        response = self.client.get(reverse('projects:project_list'), {'status': ProjectStatus.COMPLETED})
        self.assertEqual([p.id for p in response.context['projects']], [3])

    def test_detail_lists_tasks(self):
        response = self.client.get(reverse('projects:project_detail', args=[1]))
        self.assertEqual({t.id for t in response.context['tasks']}, {1, 3})

    def test_create(self):
        response = self.client.post(reverse('projects:project_create'), {
            'client_id': '4', 'name': 'Mall Fire Alarm Upgrade', 'status': ProjectStatus.PLANNED,
        })
        self.assertRedirects(response, reverse('projects:project_list'))
        self.assertEqual(len(get_projects_by_client_id(4)), 1)

    def test_update(self):
        self.client.post(reverse('projects:project_update', args=[2]), {
            'client_id': '2', 'name': 'DataNet Server Room Setup',
            'status': ProjectStatus.IN_PROGRESS,
        })
        self.assertEqual(projects.get_by_id(2).status, ProjectStatus.IN_PROGRESS)

    def test_delete_detaches_tasks(self):
        response = self.client.get(reverse('projects:project_delete', args=[1]))
        self.assertContains(response, 'Are you sure?')
        self.client.post(reverse('projects:project_delete', args=[1]))
        self.assertIsNone(projects.get_by_id(1))
        self.assertIsNone(tasks.get_by_id(1).project_id)
