"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for report date ranges, the report builders over the
             seed data and the report views and downloads.
-------------------------------------------------------------------------
"""
import io
from datetime import date
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase
from django.urls import reverse
from openpyxl import load_workbook

from apps.amcs.mock_data import amc_billings, amcs
from apps.payroll.mock_data import EmployeeType, payroll_records
from apps.reports.forms import ReportFilterForm
from apps.reports.services import (
    AGING_OVERDUE, aging_bucket, build_report, resolve_date_range
)
from apps.tasks.mock_data import task_resources, tasks
from apps.tenders.mock_data import tender_financials, tenders


def reset_report_data():
    for repository in (amcs, amc_billings, payroll_records, tasks, task_resources,
                       tenders, tender_financials):
        repository.reset()


def summary_of(report):
    return {label: value for label, value, _kind in report.summary}


class DateRangeTestCase(SimpleTestCase):

    def test_months(self):
        self.assertEqual(resolve_date_range('this-month', today=date(2026, 2, 10)),
                         (date(2026, 2, 1), date(2026, 2, 28)))
        self.assertEqual(resolve_date_range('last-month', today=date(2026, 1, 15)),
                         (date(2025, 12, 1), date(2025, 12, 31)))

    def test_quarters(self):
        self.assertEqual(resolve_date_range('this-quarter', today=date(2025, 11, 5)),
                         (date(2025, 10, 1), date(2025, 12, 31)))
        self.assertEqual(resolve_date_range('last-quarter', today=date(2026, 2, 10)),
                         (date(2025, 10, 1), date(2025, 12, 31)))

    def test_year_and_all(self):
        self.assertEqual(resolve_date_range('this-year', today=date(2026, 6, 1)),
                         (date(2026, 1, 1), date(2026, 12, 31)))
        self.assertEqual(resolve_date_range('all'), (None, None))

    def test_custom(self):
        self.assertEqual(resolve_date_range('custom', date_from=date(2025, 10, 1), date_to=date(2025, 10, 1)),
                         (date(2025, 10, 1), date(2025, 10, 1)))
        with self.assertRaises(ValueError):
            resolve_date_range('custom', date_from=date(2025, 10, 1))
        with self.assertRaises(ValueError):
            resolve_date_range('custom', date_from=date(2025, 11, 1), date_to=date(2025, 10, 1))

    def test_unknown_key(self):
        with self.assertRaises(ValueError):
            resolve_date_range('fortnight')

    def test_form_defaults_to_all_time(self):
        form = ReportFilterForm({})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['period'], (None, None))
        self.assertEqual(form.cleaned_data['format'], 'html')

    def test_form_rejects_reversed_range(self):
        form = ReportFilterForm({'date_range': 'custom', 'date_from': '2025-11-01', 'date_to': '2025-10-01'})
        self.assertFalse(form.is_valid())
        self.assertIn('The start date must be on or before the end date', form.non_field_errors())


class ReportBuilderTestCase(SimpleTestCase):

    def setUp(self):
        reset_report_data()

    def test_amc_billing(self):
        report = build_report('amc-billing', None, None)
        self.assertEqual([row[0] for row in report.rows],
                         ['BILL/AMC/2025/001', 'BILL/AMC/2025/002', 'BILL/AMC/2025/003', 'BILL/AMC/2025/010'])
        summary = summary_of(report)
        self.assertEqual(summary['Bills'], 4)
        self.assertEqual(summary['Total Billed'], Decimal('400000'))
        self.assertEqual(summary['Collected'], Decimal('250000'))
        self.assertEqual(summary['Outstanding'], Decimal('150000'))
        self.assertEqual(report.period_label, 'All time')

    def test_amc_billing_range(self):
        report = build_report('amc-billing', date(2025, 4, 1), date(2025, 9, 30))
        self.assertEqual(len(report.rows), 2)
        self.assertEqual(summary_of(report)['Outstanding'], Decimal('125000'))
        self.assertEqual(report.period_label, '01 Apr 2025 - 30 Sep 2025')

    def test_payroll(self):
        report = build_report('payroll', date(2025, 10, 1), date(2025, 10, 31))
        records = payroll_records.all()
        summary = summary_of(report)
        self.assertEqual(summary['Records'], 8)
        self.assertEqual(summary['Total Net Pay'], sum((r.net_amount for r in records), Decimal('0')))
        self.assertEqual(summary['Employee Cost'] + summary['Contract Cost'], summary['Total Net Pay'])
        self.assertEqual(
            summary['Contract Cost'],
            sum((r.net_amount for r in records if r.employee_type == EmployeeType.CONTRACT_WORKER), Decimal('0'))
        )
        unpaid = sum((r.net_amount for r in records if r.id not in (1, 5, 8)), Decimal('0'))
        self.assertEqual(summary['Unpaid'], unpaid)
        self.assertEqual(build_report('payroll', date(2025, 11, 1), date(2025, 11, 30)).rows, [])

    def test_tasks_by_employee(self):
        report = build_report('tasks', None, None)
        self.assertEqual([row[0] for row in report.rows],
                         ['Amit Singh', 'Priya Sharma', 'Rajesh Kumar', 'Sunita Verma'])
        rajesh = report.rows[2]
        # One completed and one in progress; 480 + 540 minutes
        self.assertEqual(rajesh[1:], [2, 1, 0, Decimal('50.0'), 17.0, Decimal('100800')])
        summary = summary_of(report)
        self.assertEqual(summary['Tasks'], 6)
        self.assertEqual(summary['Completion Rate'], Decimal('83.3'))
        self.assertEqual(summary['Resource Cost'], Decimal('298100'))

    def test_tender_pipeline(self):
        report = build_report('tender', None, None)
        self.assertEqual(report.rows[0][0], 'TND/2024/005')
        summary = summary_of(report)
        self.assertEqual(summary['Tenders'], 5)
        # Filed and draft tenders
        self.assertEqual(summary['Pipeline Value'], Decimal('18000000'))
        self.assertEqual(summary['Awarded Value'], Decimal('2500000'))
        self.assertEqual(summary['Success Rate'], Decimal('50.0'))

    def test_tender_success_rate_without_decisions(self):
        report = build_report('tender', date(2025, 1, 1), date(2025, 12, 31))
        self.assertEqual(summary_of(report)['Success Rate'], Decimal('0'))

    def test_outstanding_aging(self):
        report = build_report('outstanding', None, None, today=date(2025, 11, 15))
        self.assertEqual([(row[0], row[5], row[6]) for row in report.rows], [
            ('BILL/AMC/2025/003', 137, AGING_OVERDUE),
            ('BILL/AMC/2025/010', 45, '31-60 days'),
        ])
        summary = summary_of(report)
        self.assertEqual(summary['Total Outstanding'], Decimal('150000'))
        self.assertEqual(summary['0-30 days'], Decimal('0'))
        self.assertEqual(summary['31-60 days'], Decimal('25000'))
        self.assertEqual(summary[AGING_OVERDUE], Decimal('125000'))

    def test_outstanding_aged_to_range_end(self):
        report = build_report('outstanding', date(2025, 10, 1), date(2025, 10, 31), today=date(2025, 11, 15))
        self.assertEqual([(row[0], row[5], row[6]) for row in report.rows],
                         [('BILL/AMC/2025/010', 30, '0-30 days')])

    def test_aging_bucket_limits(self):
        self.assertEqual(aging_bucket(0), '0-30 days')
        self.assertEqual(aging_bucket(31), '31-60 days')
        self.assertEqual(aging_bucket(90), '61-90 days')
        self.assertEqual(aging_bucket(91), AGING_OVERDUE)

    def test_unknown_report(self):
        with self.assertRaises(KeyError):
            build_report('inventory', None, None)


class ReportViewTestCase(SimpleTestCase):

    def setUp(self):
        reset_report_data()

    def test_index(self):
        response = self.client.get(reverse('reports:report_index'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Outstanding Receivables')
        self.assertContains(response, reverse('reports:report_detail', args=['tender']))

    def test_html(self):
        response = self.client.get(reverse('reports:report_detail', args=['amc-billing']))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['report'].rows), 4)
        self.assertContains(response, 'BILL/AMC/2025/003')

    def test_custom_range(self):
        response = self.client.get(reverse('reports:report_detail', args=['tender']), {
            'date_range': 'custom', 'date_from': '2024-09-01', 'date_to': '2024-12-31',
        })
        report = response.context['report']
        self.assertEqual(len(report.rows), 3)
        self.assertEqual(summary_of(report)['Pipeline Value'], Decimal('10000000'))

    def test_invalid_range(self):
        response = self.client.get(reverse('reports:report_detail', args=['tender']), {
            'date_range': 'custom', 'date_from': '2024-12-31', 'date_to': '2024-09-01',
        })
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context['report'])
        self.assertContains(response, 'The start date must be on or before the end date')

    def test_unknown_report(self):
        response = self.client.get(reverse('reports:report_detail', args=['inventory']))
        self.assertEqual(response.status_code, 404)

    def test_csv(self):
        response = self.client.get(reverse('reports:report_detail', args=['amc-billing']), {'format': 'csv'})
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        self.assertIn('amc-billing_report_', response['Content-Disposition'])
        lines = response.content.decode('utf-8-sig').strip().splitlines()
        self.assertEqual(
            lines[0], 'Bill Number,AMC Number,Client,Period,Bill Date,Amount,Status,Payment Date'
        )
        self.assertTrue(lines[1].startswith('BILL/AMC/2025/001,AMC/2024/028,'))
        self.assertTrue(lines[1].endswith(',01/01/2025,125000.0,Paid,15/01/2025'))
        self.assertEqual(lines[5], '')
        self.assertEqual(lines[6:], ['Bills,4', 'Total Billed,400000.0', 'Collected,250000.0',
                                     'Outstanding,150000.0'])

    def test_excel(self):
        response = self.client.get(reverse('reports:report_detail', args=['tasks']), {'format': 'excel'})
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        wb = load_workbook(io.BytesIO(response.content))
        ws = wb['Tasks by Employee']
        self.assertEqual(ws['A1'].value, 'Employee')
        self.assertTrue(ws['A1'].font.bold)
        self.assertEqual(ws.freeze_panes, 'A2')
        self.assertEqual(ws['A2'].value, 'Amit Singh')
        summary = {row[0]: row[1] for row in wb['Summary'].iter_rows(values_only=True) if row[0]}
        self.assertEqual(summary['Period'], 'All time')
        self.assertEqual(summary['Tasks'], 6)
        self.assertEqual(summary['Resource Cost'], 298100)

    def test_pdf_falls_back_to_html(self):
        with mock.patch.dict('sys.modules', {'weasyprint': None}):
            response = self.client.get(reverse('reports:report_detail', args=['tender']), {'format': 'pdf'})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response['Content-Type'].startswith('text/html'))
        self.assertContains(response, 'Tender Pipeline')
