"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for task resource costing, list filters, the
             approval workflow and the task views.
-------------------------------------------------------------------------
"""
from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase
from django.urls import reverse

from apps.core.exceptions import TaskApprovalException
from apps.tasks.mock_data import (
    ActivityType, TaskStatus, get_activities_by_task_id, get_resources_by_task_id,
    get_tasks_by_project_id, task_activities, task_attachments, task_resources, tasks
)
from apps.tasks.services import (
    TaskService, calculate_task_resource_cost, filter_tasks, has_missing_unit_costs,
    in_period, resource_consumption, resource_summary_stats, task_resource_summaries,
    task_stats
)


def reset_tasks():
    for repository in (tasks, task_resources, task_attachments, task_activities):
        repository.reset()


class TaskCostTestCase(SimpleTestCase):

    def setUp(self):
        reset_tasks()

    def test_resource_cost(self):
        # 15 x 3500 + 200 x 25 + 50 x 150 + 15 x 120
        self.assertEqual(calculate_task_resource_cost(1), Decimal('66800'))

    def test_missing_unit_costs_count_as_zero(self):
        self.assertEqual(calculate_task_resource_cost(6), Decimal('22500'))
        self.assertTrue(has_missing_unit_costs(6))
        self.assertFalse(has_missing_unit_costs(1))

    def test_task_without_resources(self):
        self.assertEqual(calculate_task_resource_cost(99), Decimal('0'))

    def test_tasks_by_project(self):
        self.assertEqual({t.id for t in get_tasks_by_project_id(1)}, {1, 3})


class TaskFilterTestCase(SimpleTestCase):
    """Test cases for period/status/search filtering and stats."""

    today = date(2025, 11, 1)

    def setUp(self):
        reset_tasks()

    def test_period(self):
        self.assertTrue(in_period(date(2025, 10, 27), 'week', self.today))
        self.assertFalse(in_period(date(2025, 10, 26), 'week', self.today))
        self.assertTrue(in_period(date(2025, 11, 30), 'month', self.today))
        self.assertTrue(in_period(date(2020, 1, 1), 'all', self.today))

    def test_today_filter(self):
        result = filter_tasks(tasks.all(), period='today', today=self.today)
        self.assertEqual({t.id for t in result}, {1, 2})

    def test_newest_first(self):
        result = filter_tasks(tasks.all())
        self.assertEqual(result[0].date, date(2025, 11, 1))
        self.assertEqual(result[-1].id, 6)

    def test_search_matches_employee_and_client(self):
        self.assertEqual({t.id for t in filter_tasks(tasks.all(), search='priya')}, {2, 5})
        self.assertEqual([t.id for t in filter_tasks(tasks.all(), search='TechCorp')], [4])

    def test_status_filter(self):
        result = filter_tasks(tasks.all(), status=TaskStatus.APPROVED)
        self.assertEqual({t.id for t in result}, {2, 5})

    def test_stats(self):
        stats = task_stats(tasks.all())
        self.assertEqual(stats['total'], 6)
        self.assertEqual(stats['pending'], 3)
        self.assertEqual(stats['approved'], 2)
        self.assertEqual(stats['total_minutes'], 2340)
        self.assertEqual(stats['total_hours'], 39.0)
        self.assertEqual(stats['total_resource_cost'], Decimal('298100'))


class TaskServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_tasks()

    def test_approve_completed_task(self):
        task, missing_costs = TaskService.approve_task(1)
        self.assertEqual(task.status, TaskStatus.APPROVED)
        self.assertEqual(task.approved_by, 'Admin')
        self.assertIsNotNone(task.approved_at)
        self.assertFalse(missing_costs)
        self.assertEqual(get_activities_by_task_id(1)[-1].activity_type, ActivityType.APPROVED)

    def test_approve_flags_missing_costs(self):
        _, missing_costs = TaskService.approve_task(6)
        self.assertTrue(missing_costs)

    def test_approve_requires_completed(self):
        with self.assertRaises(TaskApprovalException):
            TaskService.approve_task(3)
        self.assertEqual(tasks.get_by_id(3).status, TaskStatus.IN_PROGRESS)

    def test_reject_keeps_reason(self):
        task = TaskService.reject_task(4, 'Photos missing')
        self.assertEqual(task.status, TaskStatus.REJECTED)
        self.assertIn('Rejection reason: Photos missing', task.internal_notes)

    def test_add_resource_with_cost(self):
        resource = TaskService.add_resource(3, 'Cable Ties', Decimal('2'), 'pack', Decimal('100'))
        self.assertEqual(resource.total_cost, Decimal('200'))
        self.assertEqual(calculate_task_resource_cost(3), Decimal('34200'))

    def test_add_resource_without_cost(self):
        resource = TaskService.add_resource(3, 'Labels', Decimal('10'), 'pcs')
        self.assertIsNone(resource.total_cost)
        self.assertTrue(has_missing_unit_costs(3))

    def test_set_unit_cost(self):
        TaskService.set_unit_cost(16, Decimal('9000'))
        self.assertEqual(task_resources.get_by_id(16).total_cost, Decimal('27000'))
        self.assertEqual(calculate_task_resource_cost(6), Decimal('49500'))

    def test_delete_cascades(self):
        TaskService.delete_task(1)
        self.assertIsNone(tasks.get_by_id(1))
        self.assertEqual(get_resources_by_task_id(1), [])


class TaskViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_tasks()

    def test_list(self):
        response = self.client.get(reverse('tasks:task_list'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Rajesh Kumar')
        self.assertEqual(response.context['stats']['total'], 6)

    def test_list_filtered(self):
        response = self.client.get(reverse('tasks:task_list'), {'status': TaskStatus.COMPLETED})
        self.assertEqual(len(response.context['rows']), 3)

    def test_export_csv(self):
        response = self.client.get(reverse('tasks:task_export'), {'search': 'Sunita'})
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        content = response.content.decode('utf-8')
        self.assertIn('Date,Employee,Client/Project', content)
        self.assertIn('28/10/2025,Sunita Verma,Metro Mall Services', content)
        self.assertNotIn('Rajesh Kumar', content)

    def test_detail(self):
        response = self.client.get(reverse('tasks:task_detail', args=[6]))
        self.assertContains(response, 'Access Control Panel')
        self.assertTrue(response.context['missing_costs'])

    def test_detail_missing(self):
        self.assertEqual(self.client.get(reverse('tasks:task_detail', args=[99])).status_code, 404)

    def test_approve(self):
        response = self.client.post(reverse('tasks:task_approve', args=[4]))
        self.assertRedirects(response, reverse('tasks:task_detail', args=[4]))
        self.assertEqual(tasks.get_by_id(4).status, TaskStatus.APPROVED)

    def test_reject_requires_reason(self):
        self.client.post(reverse('tasks:task_reject', args=[4]), {'reason': ''})
        self.assertEqual(tasks.get_by_id(4).status, TaskStatus.COMPLETED)

    def test_add_resource(self):
        self.client.post(reverse('tasks:resource_add', args=[3]), {
            'resource_name': 'Conduit Bend', 'quantity': '4', 'unit': 'pcs', 'unit_cost': '50',
        })
        self.assertEqual(calculate_task_resource_cost(3), Decimal('34200'))

    def test_create(self):
        response = self.client.post(reverse('tasks:task_create'), {
            'employee_name': 'Amit Singh',
            'client_id': '3',
            'project_id': '3',
            'description': 'Camera alignment',
            'date': '2025-11-02',
            'location': 'Metro Station 2',
            'time_taken_minutes': '90',
            'status': TaskStatus.OPEN,
            'priority': 'Low',
        })
        self.assertRedirects(response, reverse('tasks:task_detail', args=[7]))
        self.assertEqual(tasks.get_by_id(7).client_id, 3)

    def test_create_rejects_project_of_other_client(self):
        response = self.client.post(reverse('tasks:task_create'), {
            'employee_name': 'Amit Singh', 'client_id': '1', 'project_id': '2',
            'description': 'x', 'date': '2025-11-02', 'location': 'y',
            'time_taken_minutes': '0', 'status': TaskStatus.OPEN, 'priority': 'Low',
        })
        self.assertEqual(response.status_code, 200)
        self.assertIn('project_id', response.context['form'].errors)


class ResourceSummaryTestCase(SimpleTestCase):

    def setUp(self):
        reset_tasks()

    def test_summaries_newest_first(self):
        summaries = task_resource_summaries(tasks.all())
        self.assertEqual([s['task'].id for s in summaries], [2, 1, 3, 4, 5, 6])
        first = summaries[1]
        self.assertEqual(first['resource_count'], 4)
        self.assertEqual(first['total_cost'], Decimal('66800'))
        self.assertFalse(first['missing_costs'])
        self.assertTrue(summaries[-1]['missing_costs'])

    def test_tasks_without_resources_left_out(self):
        for resource in get_resources_by_task_id(3):
            task_resources.delete(resource.id)
        ids = [s['task'].id for s in task_resource_summaries(tasks.all())]
        self.assertNotIn(3, ids)

    def test_search(self):
        self.assertEqual([s['task'].id for s in task_resource_summaries(tasks.all(), 'priya')], [2, 5])
        self.assertEqual([s['task'].id for s in task_resource_summaries(tasks.all(), 'hospital')], [6])

    def test_stats(self):
        stats = resource_summary_stats(task_resource_summaries(tasks.all()))
        self.assertEqual(stats['total_tasks'], 6)
        self.assertEqual(stats['total_resources'], 18)
        self.assertEqual(stats['total_cost'], Decimal('298100'))
        # 298100 / 6 = 49683.33
        self.assertEqual(stats['average_cost'], Decimal('49683'))
        self.assertEqual(stats['missing_cost_tasks'], 1)
        self.assertEqual(resource_summary_stats([])['average_cost'], Decimal('0'))

    def test_consumption(self):
        task_resources.create(task_id=2, resource_name='Cat6 Cable', quantity=Decimal('100'), unit='m',
                              unit_cost=Decimal('25'), total_cost=Decimal('2500'))
        rows = resource_consumption(task_resource_summaries(tasks.all()))
        self.assertEqual(rows[0]['resource_name'], 'CCTV Camera (2MP Bullet)')
        self.assertEqual(rows[0]['total_cost'], Decimal('52500'))
        cable = next(r for r in rows if r['resource_name'] == 'Cat6 Cable')
        self.assertEqual(cable['quantity'], Decimal('300'))
        self.assertEqual(cable['total_cost'], Decimal('7500'))
        self.assertEqual(cable['task_count'], 2)
        # Resources without a unit cost sort last
        self.assertEqual(rows[-1]['resource_name'], 'RFID Card Reader')
        self.assertEqual(rows[-1]['total_cost'], Decimal('0'))


class ResourceSummaryViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_tasks()

    def test_summary_page(self):
        response = self.client.get(reverse('tasks:resource_summary'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['stats']['total_tasks'], 6)
        self.assertContains(response, 'Consumption by Resource')
        self.assertContains(response, 'Magnetic Door Lock')

    def test_summary_search(self):
        response = self.client.get(reverse('tasks:resource_summary'), {'search': 'metro station'})
        self.assertEqual([s['task'].id for s in response.context['summaries']], [4])
        self.assertEqual(response.context['stats']['total_cost'], Decimal('83000'))

    def test_export_csv(self):
        response = self.client.get(reverse('tasks:resource_summary_export'), {'search': 'Sunita'})
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        self.assertIn('task_resources_', response['Content-Disposition'])
        lines = response.content.decode('utf-8-sig').strip().splitlines()
        self.assertEqual(
            lines[0], 'Task ID,Date,Employee,Client,Project,Location,Resources Used,Total Cost (Rs)'
        )
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[1].startswith('6,28/10/2025,Sunita Verma,'))
        self.assertTrue(lines[1].endswith(',3,22500.0'))
