"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Pre-built reports over the mock data: AMC billing, payroll,
             tasks by employee, tender pipeline and outstanding
             receivables. Each report is a titled table with summary
             figures that renders as HTML and exports to CSV, Excel or
             PDF.
-------------------------------------------------------------------------
"""
import csv
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from django.utils import timezone

REPORT_TYPES = [
    {
        'id': 'amc-billing',
        'title': 'AMC Billing Summary',
        'description': 'Overview of AMC billing and outstanding receivables',
        'icon': 'bi-file-earmark-text',
        'color': 'text-blue-600',
    },
    {
        'id': 'payroll',
        'title': 'Payroll Summary',
        'description': 'Monthly payroll costs and employee payments',
        'icon': 'bi-bar-chart',
        'color': 'text-green-600',
    },
    {
        'id': 'tasks',
        'title': 'Tasks by Employee',
        'description': 'Employee productivity and task completion metrics',
        'icon': 'bi-graph-up-arrow',
        'color': 'text-sky-600',
    },
    {
        'id': 'tender',
        'title': 'Tender Pipeline',
        'description': 'Tender status, success rate, and bid analysis',
        'icon': 'bi-file-earmark-spreadsheet',
        'color': 'text-purple-600',
    },
    {
        'id': 'outstanding',
        'title': 'Outstanding Receivables',
        'description': 'Pending payments and aging analysis',
        'icon': 'bi-hourglass-split',
        'color': 'text-red-600',
    },
]

DATE_RANGE_CHOICES = [
    ('this-month', 'This Month'),
    ('last-month', 'Last Month'),
    ('this-quarter', 'This Quarter'),
    ('last-quarter', 'Last Quarter'),
    ('this-year', 'This Year'),
    ('all', 'All Time'),
    ('custom', 'Custom Range'),
]

AGING_BUCKETS = [(30, '0-30 days'), (60, '31-60 days'), (90, '61-90 days')]
AGING_OVERDUE = '90+ days'


@dataclass
class Column:
    label: str
    kind: str = 'text'  # text, date, money, number or percent


@dataclass
class Report:
    """A generated report: one table plus labelled summary figures."""
    report_id: str
    title: str
    first: Optional[date]
    last: Optional[date]
    columns: List[Column]
    rows: List[List[Any]] = field(default_factory=list)
    summary: List[Tuple[str, Any, str]] = field(default_factory=list)

    @property
    def period_label(self) -> str:
        if self.first is None and self.last is None:
            return 'All time'
        return f"{self.first:%d %b %Y} - {self.last:%d %b %Y}"

    def table(self) -> List[List[Tuple[Any, str]]]:
        """Rows as (value, kind) pairs for the HTML table."""
        return [
            [(value, column.kind) for value, column in zip(row, self.columns)]
            for row in self.rows
        ]


def get_report_type(report_id: str) -> Optional[Dict[str, str]]:
    for report_type in REPORT_TYPES:
        if report_type['id'] == report_id:
            return report_type
    return None


def _quarter_start(on: date) -> date:
    return date(on.year, 3 * ((on.month - 1) // 3) + 1, 1)


def resolve_date_range(key: str, today: Optional[date] = None,
                       date_from: Optional[date] = None,
                       date_to: Optional[date] = None) -> Tuple[Optional[date], Optional[date]]:
    """
    Inclusive (first, last) dates for a range key; ``all`` is (None, None).

    Raises:
        ValueError: If the key is unknown, or a custom range is incomplete
                    or reversed.
    """
    today = today or timezone.localdate()
    month_start = today.replace(day=1)
    quarter_start = _quarter_start(today)

    if key == 'this-month':
        return month_start, month_start + relativedelta(months=1) - timedelta(days=1)
    if key == 'last-month':
        first = month_start - relativedelta(months=1)
        return first, month_start - timedelta(days=1)
    if key == 'this-quarter':
        return quarter_start, quarter_start + relativedelta(months=3) - timedelta(days=1)
    if key == 'last-quarter':
        first = quarter_start - relativedelta(months=3)
        return first, quarter_start - timedelta(days=1)
    if key == 'this-year':
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if key == 'all':
        return None, None
    if key == 'custom':
        if date_from is None or date_to is None:
            raise ValueError('A custom range needs both a start and an end date')
        if date_from > date_to:
            raise ValueError('The start date must be on or before the end date')
        return date_from, date_to
    raise ValueError(f"Unknown date range '{key}'")


def _in_range(value: Optional[date], first: Optional[date], last: Optional[date]) -> bool:
    if value is None:
        return False
    if first is not None and value < first:
        return False
    if last is not None and value > last:
        return False
    return True


def _percent(part, whole) -> Decimal:
    if not whole:
        return Decimal('0')
    return (Decimal(part) * 100 / Decimal(whole)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)


def _total(values) -> Decimal:
    return sum(values, Decimal('0'))


# =====================================================================
# REPORT BUILDERS
# =====================================================================


def amc_billing_report(first: Optional[date], last: Optional[date], today: Optional[date] = None) -> Report:
    """AMC bills dated in the range with billed, collected and outstanding totals."""
    from apps.amcs.mock_data import amc_billings, get_amc_by_id

    bills = sorted(
        (b for b in amc_billings.all() if _in_range(b.bill_date, first, last)),
        key=lambda b: (b.bill_date, b.bill_number)
    )
    rows = []
    for bill in bills:
        amc = get_amc_by_id(bill.amc_id)
        rows.append([
            bill.bill_number,
            amc.amc_number if amc else '',
            amc.client_name if amc else '',
            f"{bill.period_from:%d %b %Y} - {bill.period_to:%d %b %Y}",
            bill.bill_date,
            bill.amount,
            'Paid' if bill.paid else 'Unpaid',
            bill.payment_date,
        ])

    billed = _total(b.amount for b in bills)
    collected = _total(b.amount for b in bills if b.paid)
    return Report(
        report_id='amc-billing',
        title='AMC Billing Summary',
        first=first,
        last=last,
        columns=[
            Column('Bill Number'), Column('AMC Number'), Column('Client'), Column('Period'),
            Column('Bill Date', 'date'), Column('Amount', 'money'), Column('Status'),
            Column('Payment Date', 'date'),
        ],
        rows=rows,
        summary=[
            ('Bills', len(bills), 'number'),
            ('Total Billed', billed, 'money'),
            ('Collected', collected, 'money'),
            ('Outstanding', billed - collected, 'money'),
        ],
    )


def payroll_report(first: Optional[date], last: Optional[date], today: Optional[date] = None) -> Report:
    """Payroll records whose period starts in the range."""
    from apps.payroll.mock_data import EmployeeType, PaymentStatus, payroll_records

    records = sorted(
        (r for r in payroll_records.all() if _in_range(r.period_start, first, last)),
        key=lambda r: (r.period_start, r.employee_name)
    )
    rows = [
        [
            r.employee_name,
            r.employee_type,
            f"{r.period_start:%b %Y}",
            r.days_present,
            r.working_days,
            r.gross_amount,
            r.deductions,
            r.net_amount,
            r.payment_status,
        ]
        for r in records
    ]
    return Report(
        report_id='payroll',
        title='Payroll Summary',
        first=first,
        last=last,
        columns=[
            Column('Employee'), Column('Type'), Column('Period'), Column('Days Present', 'number'),
            Column('Working Days', 'number'), Column('Gross', 'money'), Column('Deductions', 'money'),
            Column('Net Pay', 'money'), Column('Status'),
        ],
        rows=rows,
        summary=[
            ('Records', len(records), 'number'),
            ('Employee Cost', _total(r.net_amount for r in records if r.employee_type == EmployeeType.EMPLOYEE), 'money'),
            ('Contract Cost', _total(
                r.net_amount for r in records if r.employee_type == EmployeeType.CONTRACT_WORKER
            ), 'money'),
            ('Total Net Pay', _total(r.net_amount for r in records), 'money'),
            ('Unpaid', _total(r.net_amount for r in records if r.payment_status != PaymentStatus.PAID), 'money'),
        ],
    )


def tasks_by_employee_report(first: Optional[date], last: Optional[date], today: Optional[date] = None) -> Report:
    """
    Task counts, completion rate, hours and resource cost per employee.

    Completed and approved tasks both count as completed.
    """
    from apps.tasks.mock_data import TaskStatus, tasks
    from apps.tasks.services import calculate_task_resource_cost

    done = (TaskStatus.COMPLETED, TaskStatus.APPROVED)
    grouped: Dict[str, List] = {}
    for task in tasks.all():
        if _in_range(task.date, first, last):
            grouped.setdefault(task.employee_name, []).append(task)

    rows = []
    for employee_name in sorted(grouped):
        employee_tasks = grouped[employee_name]
        completed = len([t for t in employee_tasks if t.status in done])
        rows.append([
            employee_name,
            len(employee_tasks),
            completed,
            len([t for t in employee_tasks if t.status == TaskStatus.APPROVED]),
            _percent(completed, len(employee_tasks)),
            round(sum(t.time_taken_minutes for t in employee_tasks) / 60, 1),
            _total(calculate_task_resource_cost(t.id) for t in employee_tasks),
        ])

    all_tasks = [t for group in grouped.values() for t in group]
    completed_total = len([t for t in all_tasks if t.status in done])
    return Report(
        report_id='tasks',
        title='Tasks by Employee',
        first=first,
        last=last,
        columns=[
            Column('Employee'), Column('Tasks', 'number'), Column('Completed', 'number'),
            Column('Approved', 'number'), Column('Completion Rate', 'percent'),
            Column('Hours', 'number'), Column('Resource Cost', 'money'),
        ],
        rows=rows,
        summary=[
            ('Employees', len(rows), 'number'),
            ('Tasks', len(all_tasks), 'number'),
            ('Completion Rate', _percent(completed_total, len(all_tasks)), 'percent'),
            ('Resource Cost', _total(row[-1] for row in rows), 'money'),
        ],
    )


def tender_pipeline_report(first: Optional[date], last: Optional[date], today: Optional[date] = None) -> Report:
    """
    Tenders opened in the range with their EMD.

    Success rate is awarded over decided (awarded plus lost) tenders.
    """
    from apps.tenders.mock_data import TenderStatus, get_financials_by_tender_id, tenders
    from apps.tenders.services import display_amounts

    tender_list = sorted(
        (t for t in tenders.all() if _in_range(t.start_date, first, last)),
        key=lambda t: t.start_date
    )
    rows = [
        [
            t.reference_number,
            t.name,
            t.status,
            t.estimated_value,
            display_amounts(t, get_financials_by_tender_id(t.id)).emd_amount,
            t.filed_date,
            t.end_date,
        ]
        for t in tender_list
    ]
    awarded = [t for t in tender_list if t.status == TenderStatus.AWARDED]
    lost = [t for t in tender_list if t.status == TenderStatus.LOST]
    open_bids = [t for t in tender_list if t.status in (TenderStatus.DRAFT, TenderStatus.FILED)]
    return Report(
        report_id='tender',
        title='Tender Pipeline',
        first=first,
        last=last,
        columns=[
            Column('Reference'), Column('Tender'), Column('Status'), Column('Estimated Value', 'money'),
            Column('EMD', 'money'), Column('Filed Date', 'date'), Column('Closing Date', 'date'),
        ],
        rows=rows,
        summary=[
            ('Tenders', len(tender_list), 'number'),
            ('Pipeline Value', _total(t.estimated_value for t in open_bids), 'money'),
            ('Awarded Value', _total(t.estimated_value for t in awarded), 'money'),
            ('Success Rate', _percent(len(awarded), len(awarded) + len(lost)), 'percent'),
        ],
    )


def aging_bucket(days: int) -> str:
    for limit, label in AGING_BUCKETS:
        if days <= limit:
            return label
    return AGING_OVERDUE


def outstanding_receivables_report(first: Optional[date], last: Optional[date],
                                   today: Optional[date] = None) -> Report:
    """
    Unpaid AMC bills dated in the range, aged from the bill date.

    Aging is measured as of the end of the range, or today when that is
    earlier.
    """
    from apps.amcs.mock_data import amc_billings, get_amc_by_id

    today = today or timezone.localdate()
    as_of = min(last, today) if last else today
    bills = sorted(
        (b for b in amc_billings.all()
         if not b.paid and _in_range(b.bill_date, first, last) and b.bill_date <= as_of),
        key=lambda b: b.bill_date
    )

    rows = []
    buckets: Dict[str, Decimal] = {label: Decimal('0') for _limit, label in AGING_BUCKETS}
    buckets[AGING_OVERDUE] = Decimal('0')
    for bill in bills:
        amc = get_amc_by_id(bill.amc_id)
        days = (as_of - bill.bill_date).days
        bucket = aging_bucket(days)
        buckets[bucket] += bill.amount
        rows.append([
            bill.bill_number,
            amc.client_name if amc else '',
            amc.amc_number if amc else '',
            bill.bill_date,
            bill.amount,
            days,
            bucket,
        ])

    return Report(
        report_id='outstanding',
        title='Outstanding Receivables',
        first=first,
        last=last,
        columns=[
            Column('Bill Number'), Column('Client'), Column('AMC Number'), Column('Bill Date', 'date'),
            Column('Amount', 'money'), Column('Days Outstanding', 'number'), Column('Aging'),
        ],
        rows=rows,
        summary=[('Total Outstanding', _total(b.amount for b in bills), 'money')]
        + [(label, amount, 'money') for label, amount in buckets.items()],
    )


REPORT_BUILDERS: Dict[str, Callable[..., Report]] = {
    'amc-billing': amc_billing_report,
    'payroll': payroll_report,
    'tasks': tasks_by_employee_report,
    'tender': tender_pipeline_report,
    'outstanding': outstanding_receivables_report,
}


def build_report(report_id: str, first: Optional[date], last: Optional[date],
                 today: Optional[date] = None) -> Report:
    """
    Raises:
        KeyError: If the report id is unknown.
    """
    return REPORT_BUILDERS[report_id](first, last, today=today)


# =====================================================================
# EXPORT
# =====================================================================


def _export_value(value: Any, kind: str) -> Any:
    if value is None:
        return ''
    if kind in ('money', 'percent') or isinstance(value, Decimal):
        return float(value)
    return value


def write_report_csv(stream, report: Report) -> None:
    """Write the report table, then a blank line and the summary figures."""
    writer = csv.writer(stream)
    writer.writerow([column.label for column in report.columns])
    for row in report.rows:
        writer.writerow([
            value.strftime('%d/%m/%Y') if isinstance(value, date) else _export_value(value, column.kind)
            for value, column in zip(row, report.columns)
        ])
    writer.writerow([])
    for label, value, kind in report.summary:
        writer.writerow([label, _export_value(value, kind)])


def build_report_workbook(report: Report):
    """Report as an openpyxl Workbook: a styled table sheet and a summary sheet."""
    from openpyxl import Workbook
    from openpyxl.styles import Alignment, Font, PatternFill
    from openpyxl.utils import get_column_letter

    wb = Workbook()
    ws = wb.active
    ws.title = report.title[:31]

    header_fill = PatternFill(start_color='366092', end_color='366092', fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF')
    for col_num, column in enumerate(report.columns, 1):
        cell = ws.cell(row=1, column=col_num)
        cell.value = column.label
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for row_num, row in enumerate(report.rows, 2):
        for col_num, (value, column) in enumerate(zip(row, report.columns), 1):
            cell = ws.cell(row=row_num, column=col_num)
            cell.value = _export_value(value, column.kind) if value is not None else None
            if isinstance(value, date):
                cell.number_format = 'DD-MM-YYYY'
            elif column.kind == 'money':
                cell.number_format = '#,##0'

    for col_num in range(1, len(report.columns) + 1):
        ws.column_dimensions[get_column_letter(col_num)].width = 20
    ws.freeze_panes = 'A2'

    summary = wb.create_sheet('Summary')
    summary.append(['Report', report.title])
    summary.append(['Period', report.period_label])
    summary.append([])
    for label, value, kind in report.summary:
        summary.append([label, _export_value(value, kind)])
    summary.column_dimensions['A'].width = 24
    summary.column_dimensions['B'].width = 24
    for cell in summary['A']:
        cell.font = Font(bold=True)
    return wb
