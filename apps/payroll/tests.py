"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for payroll computation, the payroll workflow service
             and the payroll views.
-------------------------------------------------------------------------
"""
from datetime import date
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase
from django.urls import reverse

from apps.attendance.mock_data import AttendanceStatus, attendance_records
from apps.attendance.services import AttendanceService, days_present
from apps.core.exceptions import (
    PayrollAlreadyPaidException, PayrollComputationException, RecordNotFoundException
)
from apps.payroll.mock_data import (
    PaymentMode, PaymentStatus, get_payroll_records_by_period, payroll_records
)
from apps.payroll.services import (
    PayrollService, compute_payroll, filter_payroll_records, summarize_payroll
)


class ComputePayrollTestCase(SimpleTestCase):
    """Test cases for compute_payroll()."""

    def test_full_attendance(self):
        """35000 over 26 days at full attendance."""
        result = compute_payroll(35000, 26, 26)
        self.assertEqual(result.per_day_rate, Decimal('1346'))
        self.assertEqual(result.earned_salary, Decimal('34996'))
        self.assertEqual(result.gross_amount, Decimal('34996'))
        self.assertEqual(result.net_amount, Decimal('34996'))

    def test_partial_attendance_with_allowances_and_deductions(self):
        result = compute_payroll(
            28000, 26, 24,
            allowances=[('Conveyance', 1500), ('HRA', 2800)],
            deductions=[('PF', 1400), ('ESI', 420)],
        )
        self.assertEqual(result.per_day_rate, Decimal('1077'))
        self.assertEqual(result.earned_salary, Decimal('25848'))
        self.assertEqual(result.total_allowances, Decimal('4300'))
        self.assertEqual(result.gross_amount, Decimal('30148'))
        self.assertEqual(result.total_deductions, Decimal('1820'))
        self.assertEqual(result.net_amount, Decimal('28328'))

    def test_per_day_rate_rounds_half_up(self):
        self.assertEqual(compute_payroll(13, 2, 2).per_day_rate, Decimal('7'))

    def test_net_is_gross_minus_deductions(self):
        result = compute_payroll(
            42000, 26, 20,
            allowances=[{'name': 'HRA', 'amount': 4200}],
            deductions=[{'name': 'PF', 'amount': 2100}],
        )
        self.assertEqual(result.net_amount, result.gross_amount - result.total_deductions)

    def test_zero_attendance(self):
        result = compute_payroll(20000, 26, 0, allowances=[('HRA', 1000)])
        self.assertEqual(result.earned_salary, Decimal('0'))
        self.assertEqual(result.gross_amount, Decimal('1000'))

    def test_zero_working_days_rejected(self):
        with self.assertRaises(PayrollComputationException):
            compute_payroll(35000, 0, 0)

    def test_days_present_above_working_days_rejected(self):
        with self.assertRaises(PayrollComputationException) as ctx:
            compute_payroll(35000, 26, 27)
        self.assertEqual(ctx.exception.details['days_present'], 27)

    def test_negative_values_rejected(self):
        with self.assertRaises(PayrollComputationException):
            compute_payroll(-1, 26, 26)
        with self.assertRaises(PayrollComputationException):
            compute_payroll(35000, 26, 26, deductions=[('PF', -10)])

    def test_non_numeric_values_rejected(self):
        cases = [
            (('abc', 26, 26), {}),
            ((35000, 'x', 26), {}),
            ((35000, 26, None), {}),
            ((35000, 26, 26), {'deductions': [('PF', 'NaN')]}),
            ((35000, 26, 26), {'allowances': [('HRA', 'Infinity')]}),
        ]
        for args, kwargs in cases:
            with self.assertRaises(PayrollComputationException):
                compute_payroll(*args, **kwargs)

    def test_fractional_day_counts_rejected(self):
        with self.assertRaises(PayrollComputationException) as ctx:
            compute_payroll(35000, 26.9, 26)
        self.assertEqual(ctx.exception.details['value'], '26.9')
        with self.assertRaises(PayrollComputationException):
            compute_payroll(35000, 26, '25.5')

    def test_whole_valued_day_counts_accepted(self):
        self.assertEqual(compute_payroll(35000, 26.0, '26').working_days, 26)

    def test_per_day_rate_times_working_days_near_base_salary(self):
        for base_salary in (9999, 15000, 28000, 35000, 42000, 87501):
            for working_days in (1, 22, 26, 30, 31):
                result = compute_payroll(base_salary, working_days, working_days)
                drift = abs(result.per_day_rate * working_days - base_salary)
                self.assertLessEqual(drift, Decimal(working_days) / 2)


class PayrollDataTestCase(SimpleTestCase):
    """Seed records must agree with the payroll formula."""

    def setUp(self):
        payroll_records.reset()

    def test_seed_record_figures(self):
        record = payroll_records.get_by_id(1)
        self.assertEqual(record.computation.per_day_rate, Decimal('1346'))
        self.assertEqual(record.gross_amount, Decimal('40496'))
        self.assertEqual(record.deductions, Decimal('2275'))
        self.assertEqual(record.net_amount, Decimal('38221'))

    def test_records_by_period(self):
        self.assertEqual(len(get_payroll_records_by_period(date(2025, 10, 1), date(2025, 10, 31))), 8)
        self.assertEqual(get_payroll_records_by_period(date(2025, 11, 1), date(2025, 11, 30)), [])

    def test_filter_by_status_and_search(self):
        records = payroll_records.all()
        pending = filter_payroll_records(records, status=PaymentStatus.PENDING)
        self.assertEqual({r.employee_name for r in pending},
                         {'Priya Sharma', 'Amit Patel', 'Anita Desai', 'Manoj Kumar'})
        found = filter_payroll_records(records, search='kumar')
        self.assertEqual({r.employee_name for r in found}, {'Rajesh Kumar', 'Manoj Kumar'})

    def test_summary(self):
        records = payroll_records.all()
        summary = summarize_payroll(records)
        self.assertEqual(summary['employee_count'], 5)
        self.assertEqual(summary['contract_count'], 3)
        self.assertEqual(summary['paid_count'], 3)
        self.assertEqual(summary['pending_count'], 4)
        self.assertEqual(
            summary['total_payroll_cost'],
            summary['employee_cost'] + summary['contract_cost']
        )
        self.assertEqual(
            summary['total_payroll_cost'],
            sum((r.net_amount for r in records), Decimal('0'))
        )

    def test_summary_of_nothing(self):
        summary = summarize_payroll([])
        self.assertEqual(summary['total_payroll_cost'], Decimal('0'))
        self.assertEqual(summary['average_net'], Decimal('0'))


class PayrollServiceTestCase(SimpleTestCase):
    """Test cases for PayrollService."""

    def setUp(self):
        payroll_records.reset()

    def test_mark_paid(self):
        PayrollService.mark_paid(2, PaymentMode.UPI, date(2025, 11, 2), 'UPI-778')
        record = payroll_records.get_by_id(2)
        self.assertEqual(record.payment_status, PaymentStatus.PAID)
        self.assertEqual(record.payment_mode, PaymentMode.UPI)
        self.assertEqual(record.payment_date, date(2025, 11, 2))
        self.assertEqual(record.bank_transaction_ref, 'UPI-778')

    def test_mark_paid_twice_rejected(self):
        with self.assertRaises(PayrollAlreadyPaidException):
            PayrollService.mark_paid(1, PaymentMode.CASH, date(2025, 11, 2))

    def test_mark_paid_unknown_record(self):
        with self.assertRaises(RecordNotFoundException):
            PayrollService.mark_paid(999, PaymentMode.CASH, date(2025, 11, 2))

    def test_bulk_mark_paid_skips_paid_records(self):
        paid, skipped = PayrollService.bulk_mark_paid([1, 2, 3], PaymentMode.BANK_TRANSFER, date(2025, 11, 2))
        self.assertEqual([r.id for r in paid], [2, 3])
        self.assertEqual(len(skipped), 1)
        self.assertIn('Rajesh Kumar', skipped[0])

    def test_recalculate_after_attendance_change(self):
        payroll_records.update(7, days_present=26)
        record = PayrollService.recalculate(7)
        self.assertEqual(record.days_absent, 0)
        self.assertEqual(record.computation.per_day_rate, Decimal('769'))
        self.assertEqual(record.net_amount, Decimal('19994'))


class PayrollAttendanceTestCase(SimpleTestCase):
    """Payroll records linked to staff and synced with attendance."""

    def setUp(self):
        payroll_records.reset()
        attendance_records.reset()

    def test_records_link_to_staff(self):
        self.assertEqual(payroll_records.get_by_id(1).employee.employee_code, 'EMP-001')
        self.assertIsNone(payroll_records.get_by_id(1).contract_worker)
        self.assertEqual(payroll_records.get_by_id(4).contract_worker.worker_code, 'CW-001')
        self.assertIsNone(payroll_records.get_by_id(4).employee)

    def test_seed_attendance_matches_days_present(self):
        for record in payroll_records.all():
            if record.employee_id is None:
                continue
            self.assertEqual(
                days_present(record.employee_id, record.period_start, record.period_end),
                record.days_present,
                record.employee_name
            )

    def test_apply_attendance_updates_days_present(self):
        AttendanceService.mark_attendance({
            'employee_id': 102, 'date': date(2025, 10, 30), 'status': AttendanceStatus.PRESENT,
            'check_in': None, 'check_out': None, 'notes': '',
        })
        AttendanceService.mark_attendance({
            'employee_id': 102, 'date': date(2025, 10, 31), 'status': AttendanceStatus.HALF_DAY,
            'check_in': None, 'check_out': None, 'notes': '',
        })
        record = PayrollService.apply_attendance(2)
        self.assertEqual(record.days_present, 25)
        self.assertEqual(record.days_absent, 1)
        self.assertEqual(record.computation.per_day_rate, Decimal('1077'))
        self.assertEqual(record.net_amount, Decimal('29405'))

    def test_apply_attendance_to_paid_record_rejected(self):
        with self.assertRaises(PayrollAlreadyPaidException):
            PayrollService.apply_attendance(1)

    def test_apply_attendance_needs_linked_employee(self):
        with self.assertRaises(PayrollComputationException):
            PayrollService.apply_attendance(4)

    def test_apply_attendance_needs_marked_days(self):
        payroll_records.update(3, period_start=date(2025, 9, 1), period_end=date(2025, 9, 30))
        with self.assertRaises(PayrollComputationException):
            PayrollService.apply_attendance(3)
        self.assertEqual(payroll_records.get_by_id(3).days_present, 26)

    def test_apply_attendance_view(self):
        response = self.client.post(reverse('payroll:apply_attendance', args=[6]))
        self.assertRedirects(response, reverse('payroll:payslip', args=[6]), fetch_redirect_response=False)
        self.assertEqual(payroll_records.get_by_id(6).days_present, 25)

    def test_apply_attendance_view_reports_failure(self):
        response = self.client.post(reverse('payroll:apply_attendance', args=[1]), follow=True)
        self.assertContains(response, 'already paid')

    def test_list_links_to_staff_pages(self):
        response = self.client.get(reverse('payroll:payroll_list'))
        self.assertContains(response, reverse('employees:employee_detail', args=[101]))
        self.assertContains(response, reverse('employees:worker_detail', args=[201]))


class PayrollViewTestCase(SimpleTestCase):
    """Test cases for payroll views."""

    def setUp(self):
        payroll_records.reset()

    def test_list_shows_october_records(self):
        response = self.client.get(reverse('payroll:payroll_list'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['records']), 8)
        self.assertContains(response, 'Rajesh Kumar')

    def test_list_filters(self):
        response = self.client.get(reverse('payroll:payroll_list'), {
            'period_start': '2025-10-01', 'period_end': '2025-10-31',
            'status': PaymentStatus.HOLD, 'search': '',
        })
        self.assertEqual([r.employee_name for r in response.context['records']], ['Ramesh Singh'])

    def test_list_other_period_is_empty(self):
        response = self.client.get(reverse('payroll:payroll_list'), {
            'period_start': '2025-11-01', 'period_end': '2025-11-30',
        })
        self.assertEqual(response.context['records'], [])
        self.assertEqual(response.context['summary']['total_payroll_cost'], Decimal('0'))

    def test_payslip(self):
        response = self.client.get(reverse('payroll:payslip', args=[1]))
        self.assertContains(response, 'Rajesh Kumar')
        self.assertContains(response, 'Conveyance')

    def test_payslip_unknown_record(self):
        response = self.client.get(reverse('payroll:payslip', args=[999]))
        self.assertEqual(response.status_code, 404)

    def test_payslip_pdf_falls_back_to_html(self):
        with mock.patch.dict('sys.modules', {'weasyprint': None}):
            response = self.client.get(reverse('payroll:payslip', args=[1]), {'format': 'pdf'})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response['Content-Type'].startswith('text/html'))
        self.assertContains(response, 'Rajesh Kumar')

    def test_mark_paid(self):
        response = self.client.post(reverse('payroll:mark_paid', args=[2]), {
            'payment_date': '2025-11-03',
            'payment_mode': PaymentMode.BANK_TRANSFER,
            'bank_transaction_ref': 'TXN555',
        })
        self.assertRedirects(response, reverse('payroll:payroll_list'))
        self.assertTrue(payroll_records.get_by_id(2).is_paid)

    def test_mark_paid_invalid_form(self):
        response = self.client.post(reverse('payroll:mark_paid', args=[2]), {
            'payment_date': '', 'payment_mode': PaymentMode.CASH,
        })
        self.assertEqual(response.status_code, 200)
        self.assertFalse(payroll_records.get_by_id(2).is_paid)

    def test_mark_paid_already_paid_redirects(self):
        response = self.client.get(reverse('payroll:mark_paid', args=[1]))
        self.assertRedirects(response, reverse('payroll:payroll_list'))

    def test_bulk_mark_paid(self):
        response = self.client.post(reverse('payroll:bulk_mark_paid'), {
            'record_ids': ['3', '6'],
            'payment_date': '2025-11-03',
            'payment_mode': PaymentMode.CHEQUE,
        })
        self.assertRedirects(response, reverse('payroll:payroll_list'))
        self.assertTrue(payroll_records.get_by_id(3).is_paid)
        self.assertTrue(payroll_records.get_by_id(6).is_paid)
        self.assertFalse(payroll_records.get_by_id(7).is_paid)

    def test_calculator(self):
        response = self.client.post(reverse('payroll:calculator'), {
            'base_salary': '35000',
            'working_days': '26',
            'days_present': '26',
            'allowances': 'HRA: 3500\nConveyance: 2000',
            'deductions': 'PF: 1750',
        })
        self.assertEqual(response.status_code, 200)
        computation = response.context['computation']
        self.assertEqual(computation.gross_amount, Decimal('40496'))
        self.assertEqual(computation.net_amount, Decimal('38746'))

    def test_calculator_rejects_excess_attendance(self):
        response = self.client.post(reverse('payroll:calculator'), {
            'base_salary': '35000', 'working_days': '26', 'days_present': '30',
        })
        self.assertEqual(response.status_code, 200)
        self.assertNotIn('computation', response.context)
        self.assertTrue(response.context['form'].errors)


class PayrollSummaryCommandTestCase(SimpleTestCase):

    def setUp(self):
        payroll_records.reset()

    def test_summary_output(self):
        out = StringIO()
        call_command('payroll_summary', '--details', stdout=out)
        output = out.getvalue()
        self.assertIn('Total Payroll Cost', output)
        self.assertIn('Deepak Verma', output)
        self.assertIn('Contract Worker', output)

    def test_invalid_date(self):
        with self.assertRaises(CommandError):
            call_command('payroll_summary', '--start', 'yesterday', stdout=StringIO())
