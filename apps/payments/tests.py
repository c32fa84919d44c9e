"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Tests for payment stats, the mark-paid workflow, sheet
             export/import and the payment views.
-------------------------------------------------------------------------
"""
import io
import os
import tempfile
from datetime import date
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase
from django.urls import reverse
from openpyxl import Workbook, load_workbook

from apps.core.exceptions import PaymentAlreadyPaidException, PaymentSheetException
from apps.payments.forms import PaymentForm
from apps.payments.mock_data import PaymentCategory, PaymentStatus, payments
from apps.payments.services import (
    PaymentService, SHEET_COLUMNS, build_payments_workbook, next_payment_number,
    parse_payment_row, payment_stats
)


def sheet_bytes(rows, headers=SHEET_COLUMNS) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(list(headers))
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def sheet_row(**overrides):
    values = {
        'Payment Number': '', 'Category': 'Vendor', 'Payee': 'Volt Traders',
        'Amount': 18500, 'Description': 'Cable drums', 'Due Date': date(2025, 12, 1),
        'Status': 'Pending', 'Payment Mode': '', 'Transaction Reference': '',
        'Paid Date': None, 'Notes': '',
    }
    values.update(overrides)
    return [values[column] for column in SHEET_COLUMNS]


class PaymentStatsTestCase(SimpleTestCase):

    def setUp(self):
        payments.reset()

    def test_stats(self):
        stats = payment_stats(payments.all())
        self.assertEqual(stats['total'], Decimal('117500'))
        self.assertEqual(stats['pending'], Decimal('45000'))
        self.assertEqual(stats['paid'], Decimal('12500'))
        self.assertEqual(stats['overdue'], Decimal('60000'))
        self.assertEqual(stats['overdue_count'], 2)

    def test_empty_stats(self):
        self.assertEqual(payment_stats([])['total'], Decimal('0'))

    def test_next_payment_number(self):
        self.assertEqual(next_payment_number(2025), 'PAY-2025-005')
        self.assertEqual(next_payment_number(2026), 'PAY-2026-001')

    def test_payee_name(self):
        self.assertEqual(payments.get_by_id(1).payee_name, 'ABC Electric Supplies')
        self.assertEqual(payments.get_by_id(2).payee_name, 'Ramesh Kumar')


class PaymentServiceTestCase(SimpleTestCase):

    def setUp(self):
        payments.reset()

    def test_mark_paid(self):
        payment = PaymentService.mark_paid(1, payment_mode='UPI', transaction_reference='UPI/1234')
        self.assertEqual(payment.status, PaymentStatus.PAID)
        self.assertIsNotNone(payment.paid_date)
        self.assertEqual(payment.transaction_reference, 'UPI/1234')

    def test_mark_paid_twice(self):
        with self.assertRaises(PaymentAlreadyPaidException):
            PaymentService.mark_paid(3)

    def test_create_assigns_number_and_payee(self):
        payment = PaymentService.create_payment({
            'payment_number': '', 'category': PaymentCategory.CONTRACTOR, 'payee': 'Mahesh Rao',
            'amount': Decimal('9000'), 'description': 'Trenching', 'due_date': date(2025, 12, 5),
            'status': PaymentStatus.PAID, 'payment_mode': '', 'transaction_reference': '', 'notes': '',
        })
        self.assertTrue(payment.payment_number.startswith('PAY-'))
        self.assertEqual(payment.contractor_name, 'Mahesh Rao')
        self.assertEqual(payment.vendor_name, '')
        self.assertIsNotNone(payment.paid_date)


class PaymentSheetTestCase(SimpleTestCase):
    """Test cases for payment sheet parsing and import."""

    def setUp(self):
        payments.reset()

    def test_parse_row(self):
        values = parse_payment_row(dict(zip(SHEET_COLUMNS, sheet_row(Amount='1,250.50'))))
        self.assertEqual(values['amount'], Decimal('1250.50'))
        self.assertEqual(values['vendor_name'], 'Volt Traders')
        self.assertEqual(values['due_date'], date(2025, 12, 1))

    def test_parse_row_errors(self):
        cases = [
            ({'Category': 'Travel'}, "Unknown category 'Travel'"),
            ({'Payee': None}, 'Payee is required for Vendor payments'),
            ({'Amount': 0}, 'Amount must be greater than 0'),
            ({'Amount': 'abc'}, "Invalid amount 'abc'"),
            ({'Due Date': None}, 'Due date is required'),
            ({'Status': 'Late'}, "Unknown status 'Late'"),
        ]
        for overrides, message in cases:
            with self.assertRaisesMessage(ValueError, message):
                parse_payment_row(dict(zip(SHEET_COLUMNS, sheet_row(**overrides))))

    def test_import(self):
        data = sheet_bytes([sheet_row(), sheet_row(Category='Employee', Payee=None, Description='Bonus')])
        created, errors = PaymentService.import_sheet(io.BytesIO(data))
        self.assertEqual(errors, [])
        self.assertEqual(len(created), 2)
        self.assertEqual(payments.count(), 6)

    def test_import_reports_rows_and_creates_nothing(self):
        data = sheet_bytes([sheet_row(), sheet_row(Amount=-5), sheet_row(**{'Payment Number': 'PAY-2025-001'})])
        created, errors = PaymentService.import_sheet(io.BytesIO(data))
        self.assertEqual(created, [])
        self.assertEqual([row for row, _ in errors], [3, 4])
        self.assertEqual(payments.count(), 4)

    def test_row_numbers_count_blank_lines(self):
        data = sheet_bytes([sheet_row(), [], sheet_row(Amount=-5)])
        created, errors = PaymentService.import_sheet(io.BytesIO(data))
        self.assertEqual(created, [])
        self.assertEqual(errors, [(4, 'Amount must be greater than 0')])

    def test_missing_columns(self):
        data = sheet_bytes([['Volt Traders']], headers=['Payee'])
        with self.assertRaises(PaymentSheetException) as ctx:
            PaymentService.import_sheet(io.BytesIO(data))
        self.assertIn('Category', ctx.exception.message)

    def test_unreadable_file(self):
        with self.assertRaises(PaymentSheetException):
            PaymentService.import_sheet(io.BytesIO(b'not a spreadsheet'))

    def test_exported_workbook_imports_back(self):
        buffer = io.BytesIO()
        build_payments_workbook([payments.get_by_id(3)]).save(buffer)
        payments.delete(3)
        buffer.seek(0)
        created, errors = PaymentService.import_sheet(buffer)
        self.assertEqual(errors, [])
        self.assertEqual(created[0].payment_number, 'PAY-2025-003')
        self.assertEqual(created[0].paid_date, date(2025, 11, 2))


class PaymentFormTestCase(SimpleTestCase):

    def data(self, **overrides):
        data = {
            'category': PaymentCategory.VENDOR, 'payee': 'Volt Traders', 'amount': '500',
            'description': 'Lugs', 'due_date': '2025-12-01', 'status': PaymentStatus.PENDING,
        }
        data.update(overrides)
        return data

    def test_valid(self):
        self.assertTrue(PaymentForm(data=self.data()).is_valid())

    def test_amount_must_be_positive(self):
        form = PaymentForm(data=self.data(amount='0'))
        self.assertEqual(form.errors['amount'], ['Amount must be greater than 0'])

    def test_contractor_name_required(self):
        form = PaymentForm(data=self.data(category=PaymentCategory.CONTRACTOR, payee=''))
        self.assertEqual(form.errors['payee'], ['Contractor name is required'])

    def test_other_category_without_payee(self):
        self.assertTrue(PaymentForm(data=self.data(category=PaymentCategory.OTHER, payee='')).is_valid())


class PaymentViewTestCase(SimpleTestCase):

    def setUp(self):
        payments.reset()

    def test_list_shows_overdue_banner(self):
        response = self.client.get(reverse('payments:payment_list'))
        self.assertContains(response, '2 Overdue Payments')
        self.assertContains(response, 'PAY-2025-001')

    def test_list_filters(self):
        response = self.client.get(reverse('payments:payment_list'), {'category': 'Contractor', 'search': 'sunil'})
        self.assertEqual([p.id for p in response.context['payments']], [4])
        self.assertEqual(response.context['stats']['total'], Decimal('32000'))

    def test_mark_paid(self):
        response = self.client.post(reverse('payments:payment_mark_paid', args=[1]))
        self.assertRedirects(response, reverse('payments:payment_list'))
        self.assertEqual(payments.get_by_id(1).status, PaymentStatus.PAID)

    def test_mark_paid_already_paid_shows_info(self):
        response = self.client.post(reverse('payments:payment_mark_paid', args=[3]), follow=True)
        self.assertContains(response, 'This payment has already been marked as paid')

    def test_create(self):
        response = self.client.post(reverse('payments:payment_create'), {
            'category': PaymentCategory.UTILITY, 'payee': 'City Water Board', 'amount': '2300',
            'description': 'Water charges', 'due_date': '2025-12-10', 'status': PaymentStatus.PENDING,
        })
        self.assertRedirects(response, reverse('payments:payment_list'))
        self.assertEqual(payments.all()[0].vendor_name, 'City Water Board')

    def test_edit_prefills_payee(self):
        response = self.client.get(reverse('payments:payment_update', args=[2]))
        self.assertEqual(response.context['form'].initial['payee'], 'Ramesh Kumar')

    def test_delete(self):
        self.client.post(reverse('payments:payment_delete', args=[4]))
        self.assertIsNone(payments.get_by_id(4))

    def test_export_excel(self):
        response = self.client.get(reverse('payments:payment_export'), {'status': 'Overdue'})
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        ws = load_workbook(io.BytesIO(response.content)).active
        self.assertEqual(ws.max_row, 3)
        self.assertEqual(ws['A2'].value, 'PAY-2025-002')

    def test_export_csv(self):
        response = self.client.get(reverse('payments:payment_export'), {'format': 'csv'})
        content = response.content.decode('utf-8')
        self.assertIn('Payment Number,Category,Payee', content)
        self.assertIn('PAY-2025-003,Utility,Metro Utilities,12500.0', content)

    def test_import(self):
        upload = SimpleUploadedFile('payments.xlsx', sheet_bytes([sheet_row()]))
        response = self.client.post(reverse('payments:payment_import'), {'sheet': upload})
        self.assertRedirects(response, reverse('payments:payment_list'))
        self.assertEqual(payments.count(), 5)

    def test_import_row_errors_listed(self):
        upload = SimpleUploadedFile('payments.xlsx', sheet_bytes([sheet_row(Description=None)]))
        response = self.client.post(reverse('payments:payment_import'), {'sheet': upload})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['row_errors'], [(2, 'Description is required')])

    def test_import_rejects_other_extensions(self):
        upload = SimpleUploadedFile('payments.csv', b'a,b')
        response = self.client.post(reverse('payments:payment_import'), {'sheet': upload})
        self.assertIn('sheet', response.context['form'].errors)


class CheckPaymentSheetCommandTestCase(SimpleTestCase):

    def write_sheet(self, rows):
        handle, path = tempfile.mkstemp(suffix='.xlsx')
        os.close(handle)
        with open(path, 'wb') as f:
            f.write(sheet_bytes(rows))
        self.addCleanup(os.remove, path)
        return path

    def test_valid_sheet(self):
        out = io.StringIO()
        call_command('check_payment_sheet', self.write_sheet([sheet_row()]), stdout=out)
        self.assertIn('All 1 row(s) are valid.', out.getvalue())

    def test_invalid_sheet(self):
        err = io.StringIO()
        with self.assertRaises(CommandError):
            call_command('check_payment_sheet', self.write_sheet([sheet_row(Amount=0)]), stderr=err)
        self.assertIn('Row 2: Amount must be greater than 0', err.getvalue())

    def test_invalid_row_after_blank_line(self):
        err = io.StringIO()
        with self.assertRaises(CommandError):
            call_command('check_payment_sheet', self.write_sheet([sheet_row(), [], sheet_row(Amount=0)]), stderr=err)
        self.assertIn('Row 4: Amount must be greater than 0', err.getvalue())
