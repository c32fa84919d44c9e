"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for employee and contract-worker filters, stats and
             numbering, the staff forms, deletion links, the worker CSV
             import and the staff views.
-------------------------------------------------------------------------
"""
import io
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase
from django.urls import reverse

from apps.attendance.mock_data import attendance_records
from apps.core.exceptions import WorkerImportException
from apps.employees.forms import ContractWorkerForm, EmployeeForm, WorkerImportForm
from apps.employees.mock_data import (
    EmployeeStatus, WorkerStatus, contract_workers, employees
)
from apps.employees.services import (
    ContractWorkerService, EmployeeService, distinct_values, employee_stats,
    filter_employees, filter_workers, next_employee_code, next_worker_code,
    payroll_history, phone_digits, read_worker_file, worker_stats
)
from apps.payroll.mock_data import payroll_records

HEADER = 'Name,Phone,Skill,Daily Rate,Status,Assigned To,Address'


def worker_csv(*lines, header=HEADER) -> bytes:
    return ('\n'.join((header,) + lines) + '\n').encode('utf-8')


def reset_staff():
    for repository in (employees, contract_workers, attendance_records, payroll_records):
        repository.reset()


class PhoneDigitsTestCase(SimpleTestCase):

    def test_formats(self):
        self.assertEqual(phone_digits('+91 98765 43210'), '9876543210')
        self.assertEqual(phone_digits('98765-43210'), '9876543210')
        self.assertEqual(phone_digits('919876543210'), '9876543210')

    def test_invalid(self):
        self.assertIsNone(phone_digits('98765'))
        self.assertIsNone(phone_digits(''))
        self.assertIsNone(phone_digits('+44 20 7946 0958 12'))


class StaffListTestCase(SimpleTestCase):

    def setUp(self):
        reset_staff()

    def test_next_codes(self):
        self.assertEqual(next_employee_code(), 'EMP-007')
        self.assertEqual(next_worker_code(), 'CW-006')

    def test_filter_employees(self):
        self.assertEqual([e.name for e in filter_employees(employees.all(), search='emp-003')],
                         ['Amit Patel'])
        self.assertEqual(len(filter_employees(employees.all(), department='Technical')), 3)
        on_leave = filter_employees(employees.all(), status=EmployeeStatus.ON_LEAVE)
        self.assertEqual([e.id for e in on_leave], [106])

    def test_employee_stats(self):
        stats = employee_stats(employees.all())
        self.assertEqual(stats['total'], 6)
        self.assertEqual(stats['active'], 5)
        self.assertEqual(stats['on_leave'], 1)
        # Suresh is on leave and left out of the salary bill
        self.assertEqual(stats['monthly_payroll'], Decimal('175000'))

    def test_filter_workers(self):
        self.assertEqual([w.name for w in filter_workers(contract_workers.all(), search='10101')],
                         ['Ramesh Singh'])
        electricians = filter_workers(contract_workers.all(), skill='Electrician')
        self.assertEqual({w.id for w in electricians}, {202, 204})
        assigned = filter_workers(contract_workers.all(), status=WorkerStatus.ASSIGNED)
        self.assertEqual({w.id for w in assigned}, {201, 205})

    def test_worker_stats(self):
        stats = worker_stats(contract_workers.all())
        self.assertEqual(stats['total'], 5)
        self.assertEqual(stats['available'], 3)
        self.assertEqual(stats['assigned'], 2)
        self.assertEqual(stats['average_daily_rate'], Decimal('804'))
        self.assertEqual(worker_stats([])['average_daily_rate'], Decimal('0'))

    def test_distinct_values(self):
        self.assertEqual(distinct_values(employees.all(), 'department'),
                         ['Administration', 'Finance', 'Sales', 'Technical'])

    def test_payroll_history(self):
        self.assertEqual([r.id for r in payroll_history(employee_id=101)], [1])
        self.assertEqual([r.id for r in payroll_history(contract_worker_id=203)], [7])
        self.assertEqual(payroll_history(employee_id=106), [])


class EmployeeFormTestCase(SimpleTestCase):

    def form(self, **overrides):
        data = {
            'name': 'Kavita Joshi', 'email': 'kavita@electrocom.in', 'phone': '+91 98765 43270',
            'department': 'Finance', 'role': 'Accounts Assistant', 'joining_date': '2025-11-10',
            'status': EmployeeStatus.ACTIVE, 'salary': '26000', 'address': '', 'emergency_contact': '',
        }
        data.update(overrides)
        return EmployeeForm(data)

    def test_valid(self):
        form = self.form()
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['salary'], Decimal('26000'))

    def test_invalid_email(self):
        form = self.form(email='kavita@')
        self.assertFalse(form.is_valid())
        self.assertIn('Invalid email format', form.errors['email'])

    def test_invalid_phone(self):
        form = self.form(phone='98765')
        self.assertFalse(form.is_valid())
        self.assertIn('Phone must be 10 digits', form.errors['phone'])

    def test_phone_optional(self):
        self.assertTrue(self.form(phone='').is_valid())

    def test_salary_must_be_positive(self):
        form = self.form(salary='0')
        self.assertFalse(form.is_valid())
        self.assertIn('salary', form.errors)


class ContractWorkerFormTestCase(SimpleTestCase):

    def form(self, **overrides):
        data = {
            'name': 'Kiran Patil', 'phone': '+91 98765 40404', 'skill': 'Electrician',
            'daily_rate': '750', 'status': WorkerStatus.AVAILABLE, 'assigned_to': '', 'address': '',
        }
        data.update(overrides)
        return ContractWorkerForm(data)

    def test_valid(self):
        self.assertTrue(self.form().is_valid())

    def test_assigned_needs_assignment(self):
        form = self.form(status=WorkerStatus.ASSIGNED)
        self.assertFalse(form.is_valid())
        self.assertIn('Assigned workers need an assignment', form.errors['assigned_to'])
        self.assertTrue(self.form(status=WorkerStatus.ASSIGNED, assigned_to='Metro Mall').is_valid())

    def test_daily_rate_must_be_positive(self):
        self.assertIn('daily_rate', self.form(daily_rate='-5').errors)

    def test_import_accepts_csv_only(self):
        form = WorkerImportForm(files={'file': SimpleUploadedFile('workers.xlsx', b'data')})
        self.assertFalse(form.is_valid())
        self.assertIn('Only .csv files can be imported', form.errors['file'])


class StaffServiceTestCase(SimpleTestCase):

    def setUp(self):
        reset_staff()

    def test_create_employee_assigns_code(self):
        employee = EmployeeService.create_employee({
            'name': 'Kavita Joshi', 'email': 'kavita@electrocom.in', 'department': 'Finance',
            'role': '', 'joining_date': None, 'salary': Decimal('26000'),
        })
        self.assertEqual(employee.employee_code, 'EMP-007')
        self.assertEqual(employee.status, EmployeeStatus.ACTIVE)

    def test_delete_employee_removes_attendance_and_unlinks_payroll(self):
        self.assertTrue(attendance_records.filter(employee_id=102))
        EmployeeService.delete_employee(102)
        self.assertIsNone(employees.get_by_id(102))
        self.assertEqual(attendance_records.filter(employee_id=102), [])
        record = payroll_records.get_by_id(2)
        self.assertIsNone(record.employee_id)
        self.assertEqual(record.employee_name, 'Priya Sharma')

    def test_delete_worker_unlinks_payroll(self):
        ContractWorkerService.delete_worker(201)
        self.assertIsNone(payroll_records.get_by_id(4).contract_worker_id)


class WorkerImportTestCase(SimpleTestCase):

    def setUp(self):
        reset_staff()

    def test_import(self):
        content = worker_csv(
            'Kiran Patil,+91 98765 40404,Electrician,750,,,Dadar',
            'Nitin Rao,9876550505,Helper,"1,000",Assigned,Metro Mall Services,',
        )
        created, errors = ContractWorkerService.import_workers(io.BytesIO(content))
        self.assertEqual(errors, [])
        self.assertEqual([w.worker_code for w in created], ['CW-006', 'CW-007'])
        self.assertEqual(created[0].status, WorkerStatus.AVAILABLE)
        self.assertEqual(created[0].address, 'Dadar')
        self.assertEqual(created[1].daily_rate, Decimal('1000'))
        self.assertEqual(contract_workers.count(), 7)

    def test_row_errors_import_nothing(self):
        content = worker_csv(
            'Kiran Patil,+91 98765 40404,Electrician,750,,,',
            'Nitin Rao,12345,Helper,600,,,',
            'Arun Das,+91 98765 50505,Plumber,650,,,',
            ',+91 98765 60606,Fitter,700,,,',
            'Vijay Pawar,+91 98765 70707,Welder,abc,,,',
            'Mahesh Gore,+91 98765 80808,Helper,650,Assigned,,',
        )
        created, errors = ContractWorkerService.import_workers(io.BytesIO(content))
        self.assertEqual(created, [])
        self.assertEqual(errors, [
            (3, "Invalid phone number '12345'"),
            (4, "Unknown skill 'Plumber'"),
            (5, 'Name is required'),
            (6, "Invalid daily rate 'abc'"),
            (7, 'Assigned workers need an assignment'),
        ])
        self.assertEqual(contract_workers.count(), 5)

    def test_blank_lines_keep_file_row_numbers(self):
        content = worker_csv(
            'Kiran Patil,+91 98765 40404,Electrician,750,,,',
            '',
            '',
            'Nitin Rao,12345,Helper,600,,,',
        )
        rows = read_worker_file(io.BytesIO(content))
        self.assertEqual([number for number, _ in rows], [2, 5])
        _, errors = ContractWorkerService.import_workers(io.BytesIO(content))
        self.assertEqual(errors, [(5, "Invalid phone number '12345'")])

    def test_missing_columns(self):
        content = worker_csv('Kiran Patil,+91 98765 40404', header='Name,Phone')
        with self.assertRaises(WorkerImportException) as ctx:
            read_worker_file(io.BytesIO(content))
        self.assertEqual(ctx.exception.details['missing_columns'], ['Skill', 'Daily Rate'])
        self.assertIn('Skill, Daily Rate', ctx.exception.message)


class EmployeeViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_staff()

    def test_list(self):
        response = self.client.get(reverse('employees:employee_list'), {'department': 'Technical'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['employees']), 3)
        self.assertEqual(response.context['stats']['total'], 6)
        self.assertContains(response, 'Rajesh Kumar')

    def test_detail(self):
        response = self.client.get(reverse('employees:employee_detail', args=[101]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'EMP-001')
        self.assertEqual([r.id for r in response.context['payroll_records']], [1])
        recent = response.context['recent_attendance']
        self.assertEqual(len(recent), 10)
        self.assertEqual(recent[0].date.isoformat(), '2025-11-04')

    def test_unknown_employee(self):
        response = self.client.get(reverse('employees:employee_detail', args=[999]))
        self.assertEqual(response.status_code, 404)

    def test_create(self):
        response = self.client.post(reverse('employees:employee_create'), {
            'name': 'Kavita Joshi', 'email': 'kavita@electrocom.in', 'phone': '',
            'department': 'Finance', 'role': 'Accounts Assistant', 'joining_date': '2025-11-10',
            'status': EmployeeStatus.ACTIVE, 'salary': '26000',
        })
        self.assertRedirects(response, reverse('employees:employee_detail', args=[107]),
                             fetch_redirect_response=False)
        self.assertEqual(employees.get_by_id(107).employee_code, 'EMP-007')

    def test_create_invalid(self):
        response = self.client.post(reverse('employees:employee_create'), {'name': 'Kavita Joshi'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('email', response.context['form'].errors)
        self.assertEqual(employees.count(), 6)

    def test_update_keeps_code(self):
        response = self.client.get(reverse('employees:employee_update', args=[104]))
        self.assertEqual(response.context['form'].initial['name'], 'Anita Desai')
        response = self.client.post(reverse('employees:employee_update', args=[104]), {
            'name': 'Anita Desai', 'email': 'anita@electrocom.in', 'phone': '+91 98765 43250',
            'department': 'Finance', 'role': 'Senior Accountant', 'joining_date': '2022-07-01',
            'status': EmployeeStatus.ACTIVE, 'salary': '34000',
        })
        self.assertRedirects(response, reverse('employees:employee_detail', args=[104]),
                             fetch_redirect_response=False)
        employee = employees.get_by_id(104)
        self.assertEqual(employee.salary, Decimal('34000'))
        self.assertEqual(employee.employee_code, 'EMP-004')

    def test_delete(self):
        response = self.client.post(reverse('employees:employee_delete', args=[102]))
        self.assertRedirects(response, reverse('employees:employee_list'), fetch_redirect_response=False)
        self.assertIsNone(employees.get_by_id(102))
        self.assertIsNone(payroll_records.get_by_id(2).employee_id)


class ContractWorkerViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_staff()

    def test_list_search_by_phone(self):
        response = self.client.get(reverse('employees:worker_list'), {'search': '10101'})
        self.assertEqual([w.id for w in response.context['workers']], [201])

    def test_detail(self):
        response = self.client.get(reverse('employees:worker_detail', args=[203]))
        self.assertContains(response, 'CW-003')
        self.assertEqual([r.id for r in response.context['payroll_records']], [7])

    def test_create(self):
        response = self.client.post(reverse('employees:worker_create'), {
            'name': 'Kiran Patil', 'phone': '+91 98765 40404', 'skill': 'Electrician',
            'daily_rate': '750', 'status': WorkerStatus.AVAILABLE,
        })
        self.assertRedirects(response, reverse('employees:worker_list'), fetch_redirect_response=False)
        self.assertEqual(contract_workers.get_by_id(206).worker_code, 'CW-006')

    def test_delete(self):
        response = self.client.post(reverse('employees:worker_delete', args=[201]))
        self.assertRedirects(response, reverse('employees:worker_list'), fetch_redirect_response=False)
        self.assertIsNone(payroll_records.get_by_id(4).contract_worker_id)

    def test_import(self):
        upload = SimpleUploadedFile(
            'workers.csv',
            worker_csv('Kiran Patil,+91 98765 40404,Electrician,750,,,'),
            content_type='text/csv'
        )
        response = self.client.post(reverse('employees:worker_import'), {'file': upload})
        self.assertRedirects(response, reverse('employees:worker_list'), fetch_redirect_response=False)
        self.assertEqual(contract_workers.count(), 6)

    def test_import_lists_row_errors(self):
        upload = SimpleUploadedFile(
            'workers.csv',
            worker_csv('Kiran Patil,+91 98765 40404,Electrician,750,,,', '', 'Nitin Rao,12345,Helper,600,,,'),
            content_type='text/csv'
        )
        response = self.client.post(reverse('employees:worker_import'), {'file': upload})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['row_errors'], [(4, "Invalid phone number '12345'")])
        self.assertContains(response, 'Row 4:')
        self.assertEqual(contract_workers.count(), 5)

    def test_import_missing_columns(self):
        upload = SimpleUploadedFile('workers.csv', worker_csv(header='Name,Phone'), content_type='text/csv')
        response = self.client.post(reverse('employees:worker_import'), {'file': upload})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Missing required column(s): Skill, Daily Rate')
