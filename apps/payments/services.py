"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Payment services: summary figures, the mark-paid workflow,
             Excel/CSV export and import of payment sheets.

             Payment sheets use one row per payment with the columns in
             SHEET_COLUMNS. Import validates every row first and only
             creates payments when the whole sheet is clean.
-------------------------------------------------------------------------
"""
import csv
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd
from django.utils import timezone

from apps.core.exceptions import PaymentAlreadyPaidException, PaymentSheetException
from apps.core.logging import ConsoleLogger

SHEET_COLUMNS = [
    'Payment Number', 'Category', 'Payee', 'Amount', 'Description',
    'Due Date', 'Status', 'Payment Mode', 'Transaction Reference',
    'Paid Date', 'Notes',
]
REQUIRED_COLUMNS = ['Category', 'Amount', 'Description', 'Due Date']


def payment_stats(payment_list: Iterable) -> Dict[str, Any]:
    """
    Amount totals per status for the summary cards.

    Returns:
        dict: {
            'total': Decimal, 'pending': Decimal, 'paid': Decimal,
            'overdue': Decimal, 'overdue_count': int,
        }
    """
    from apps.payments.mock_data import PaymentStatus

    payment_list = list(payment_list)

    def total_for(status=None):
        return sum(
            (p.amount for p in payment_list if status is None or p.status == status),
            Decimal('0')
        )

    return {
        'total': total_for(),
        'pending': total_for(PaymentStatus.PENDING),
        'paid': total_for(PaymentStatus.PAID),
        'overdue': total_for(PaymentStatus.OVERDUE),
        'overdue_count': len([p for p in payment_list if p.status == PaymentStatus.OVERDUE]),
    }


def next_payment_number(year: Optional[int] = None) -> str:
    """Next ``PAY-<year>-NNN`` number after the highest one used that year."""
    from apps.payments.mock_data import payments

    year = year or timezone.localdate().year
    prefix = f"PAY-{year}-"
    used = [
        int(p.payment_number[len(prefix):]) for p in payments.all()
        if p.payment_number.startswith(prefix) and p.payment_number[len(prefix):].isdigit()
    ]
    return f"{prefix}{max(used, default=0) + 1:03d}"


def payee_fields(category: str, payee: str) -> Dict[str, str]:
    """Contractor payments carry a contractor name; every other category a vendor name."""
    from apps.payments.mock_data import PaymentCategory

    if category == PaymentCategory.CONTRACTOR:
        return {'vendor_name': '', 'contractor_name': payee}
    return {'vendor_name': payee, 'contractor_name': ''}


def export_row(payment) -> List[Any]:
    return [
        payment.payment_number,
        payment.category,
        payment.payee_name if payment.payee_name != '-' else '',
        float(payment.amount),
        payment.description,
        payment.due_date,
        payment.status,
        payment.payment_mode,
        payment.transaction_reference,
        payment.paid_date,
        payment.notes,
    ]


def write_payments_csv(stream, payment_list: Iterable) -> None:
    writer = csv.writer(stream)
    writer.writerow(SHEET_COLUMNS)
    for payment in payment_list:
        row = export_row(payment)
        writer.writerow([
            value.strftime('%Y-%m-%d') if isinstance(value, date) else ('' if value is None else value)
            for value in row
        ])


def build_payments_workbook(payment_list: Iterable):
    """Payment sheet as an openpyxl Workbook, in the layout the importer reads."""
    from openpyxl import Workbook
    from openpyxl.styles import Alignment, Font, PatternFill
    from openpyxl.utils import get_column_letter

    wb = Workbook()
    ws = wb.active
    ws.title = 'Payments'

    header_fill = PatternFill(start_color='366092', end_color='366092', fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF')
    for col_num, header in enumerate(SHEET_COLUMNS, 1):
        cell = ws.cell(row=1, column=col_num)
        cell.value = header
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for row_num, payment in enumerate(payment_list, 2):
        for col_num, value in enumerate(export_row(payment), 1):
            cell = ws.cell(row=row_num, column=col_num)
            cell.value = value
            if isinstance(value, date):
                cell.number_format = 'DD-MM-YYYY'

    for col_num in range(1, len(SHEET_COLUMNS) + 1):
        ws.column_dimensions[get_column_letter(col_num)].width = 18
    ws.freeze_panes = 'A2'
    return wb


def _cell_text(value) -> str:
    if value is None or pd.isna(value):
        return ''
    return str(value).strip()


def _cell_date(value) -> Optional[date]:
    if isinstance(value, str):
        if not value.strip():
            return None
    elif value is None or pd.isna(value):
        return None
    parsed = pd.to_datetime(value, errors='coerce', dayfirst=isinstance(value, str) and '/' in value)
    if pd.isna(parsed):
        raise ValueError(f"Invalid date '{value}'")
    return parsed.date()


def parse_payment_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate one sheet row and turn it into Payment field values.

    Raises:
        ValueError: With a readable message for the first invalid cell.
    """
    from apps.payments.mock_data import PaymentCategory, PaymentMode, PaymentStatus

    category = _cell_text(row.get('Category'))
    if category not in PaymentCategory.values:
        raise ValueError(f"Unknown category '{category}'")

    payee = _cell_text(row.get('Payee'))
    if not payee and category in (PaymentCategory.VENDOR, PaymentCategory.UTILITY,
                                  PaymentCategory.CONTRACTOR):
        raise ValueError(f"Payee is required for {category} payments")

    try:
        amount = Decimal(_cell_text(row.get('Amount')).replace(',', ''))
    except InvalidOperation:
        raise ValueError(f"Invalid amount '{_cell_text(row.get('Amount'))}'")
    if not amount.is_finite() or amount <= 0:
        raise ValueError('Amount must be greater than 0')

    description = _cell_text(row.get('Description'))
    if not description:
        raise ValueError('Description is required')

    due_date = _cell_date(row.get('Due Date'))
    if due_date is None:
        raise ValueError('Due date is required')

    status = _cell_text(row.get('Status')) or PaymentStatus.PENDING
    if status not in PaymentStatus.values:
        raise ValueError(f"Unknown status '{status}'")

    payment_mode = _cell_text(row.get('Payment Mode'))
    if payment_mode and payment_mode not in PaymentMode.values:
        raise ValueError(f"Unknown payment mode '{payment_mode}'")

    paid_date = _cell_date(row.get('Paid Date'))
    if status == PaymentStatus.PAID and paid_date is None:
        paid_date = timezone.localdate()

    values = {
        'payment_number': _cell_text(row.get('Payment Number')),
        'category': category,
        'amount': amount,
        'description': description,
        'due_date': due_date,
        'status': status,
        'payment_mode': payment_mode,
        'transaction_reference': _cell_text(row.get('Transaction Reference')),
        'paid_date': paid_date,
        'notes': _cell_text(row.get('Notes')),
    }
    values.update(payee_fields(category, payee))
    return values


def read_payment_sheet(source) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Read a payment sheet into (sheet row number, row dict) pairs.

    The header is sheet row 1. Blank lines are skipped but still counted.

    Raises:
        PaymentSheetException: If the file is not a readable Excel sheet or
                               required columns are missing.
    """
    try:
        df = pd.read_excel(source, engine='openpyxl', dtype=object)
    except Exception as e:
        raise PaymentSheetException(details={'reason': str(e)})

    df.columns = [str(column).strip() for column in df.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise PaymentSheetException(
            f"Missing required column(s): {', '.join(missing)}",
            details={'missing_columns': missing}
        )

    # Blank lines between blocks of payments are common in hand-kept sheets
    df = df.dropna(how='all')
    return [(int(index) + 2, row.to_dict()) for index, row in df.iterrows()]


class PaymentService:
    """
    Service class for payment workflow.
    """

    @staticmethod
    def create_payment(data: Dict[str, Any]):
        from apps.payments.mock_data import PaymentStatus, payments

        data = dict(data)
        if 'payee' in data:
            data.update(payee_fields(data['category'], data.pop('payee')))
        if not data.get('payment_number'):
            data['payment_number'] = next_payment_number()
        if data.get('status') == PaymentStatus.PAID and not data.get('paid_date'):
            data['paid_date'] = timezone.localdate()

        payment = payments.create(**data)
        ConsoleLogger.log_record_created('Payment', payment, payment.payment_number)
        return payment

    @staticmethod
    def update_payment(payment_id: int, data: Dict[str, Any]):
        from apps.payments.mock_data import PaymentStatus, payments

        payment = payments.get_or_raise(payment_id)
        data = dict(data)
        if not data.get('payment_number'):
            data.pop('payment_number', None)
        if 'payee' in data:
            data.update(payee_fields(data['category'], data.pop('payee')))
        if data.get('status') == PaymentStatus.PAID and not (data.get('paid_date') or payment.paid_date):
            data['paid_date'] = timezone.localdate()

        payments.update(payment.id, **data)
        ConsoleLogger.log_record_updated('Payment', payment, payment.payment_number)
        return payment

    @staticmethod
    def mark_paid(payment_id: int, paid_date: Optional[date] = None,
                  payment_mode: str = '', transaction_reference: str = ''):
        """
        Mark a payment as paid.

        Raises:
            RecordNotFoundException: If the payment does not exist.
            PaymentAlreadyPaidException: If the payment is already paid.
        """
        from apps.payments.mock_data import PaymentStatus, payments

        payment = payments.get_or_raise(payment_id)
        if payment.status == PaymentStatus.PAID:
            raise PaymentAlreadyPaidException(
                'This payment has already been marked as paid',
                details={'payment_id': payment.id}
            )

        values = {
            'status': PaymentStatus.PAID,
            'paid_date': paid_date or timezone.localdate(),
        }
        if payment_mode:
            values['payment_mode'] = payment_mode
        if transaction_reference:
            values['transaction_reference'] = transaction_reference
        payments.update(payment.id, **values)
        ConsoleLogger.log_payment_paid(payment)
        return payment

    @staticmethod
    def import_sheet(source) -> Tuple[List, List[Tuple[int, str]]]:
        """
        Import payments from an Excel sheet.

        Row numbers in the error list are spreadsheet rows (the header is
        row 1). Nothing is created unless every row is valid.

        Returns:
            tuple: (created_payments, row_errors)

        Raises:
            PaymentSheetException: If the sheet itself cannot be read.
        """
        from apps.payments.mock_data import payments

        rows = read_payment_sheet(source)
        parsed, errors = [], []
        seen_numbers = {p.payment_number for p in payments.all()}
        for row_number, row in rows:
            try:
                values = parse_payment_row(row)
            except ValueError as e:
                errors.append((row_number, str(e)))
                continue
            number = values['payment_number']
            if number and number in seen_numbers:
                errors.append((row_number, f"Duplicate payment number '{number}'"))
                continue
            seen_numbers.add(number)
            parsed.append(values)

        if errors:
            ConsoleLogger.log_validation_error(
                'payment_import', {'rows': errors}, {'row_count': len(rows)}
            )
            return [], errors

        created = [PaymentService.create_payment(values) for values in parsed]
        return created, []
