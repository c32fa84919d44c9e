"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Management command printing the payroll summary for a
             period, optionally with the per-record breakdown.
-------------------------------------------------------------------------
"""
from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date

from apps.payroll.mock_data import payroll_records
from apps.payroll.services import filter_payroll_records, summarize_payroll


class Command(BaseCommand):
    """
    Print payroll totals for a pay period.

    Usage:
        python manage.py payroll_summary --start 2025-10-01 --end 2025-10-31 --details
    """

    help = 'Prints the payroll summary (totals per worker type and status) for a period.'

    def add_arguments(self, parser) -> None:
        parser.add_argument('--start', type=str, default='2025-10-01', help='Period start (YYYY-MM-DD).')
        parser.add_argument('--end', type=str, default='2025-10-31', help='Period end (YYYY-MM-DD).')
        parser.add_argument('--status', type=str, default='all', help='Pending, Paid, Hold or all.')
        parser.add_argument('--details', action='store_true', help='List every payroll record.')

    def _parse(self, value: str, option: str) -> date:
        parsed = parse_date(value)
        if parsed is None:
            raise CommandError(f"--{option} must be a date in YYYY-MM-DD format, got '{value}'.")
        return parsed

    def handle(self, *args, **options) -> None:
        start = self._parse(options['start'], 'start')
        end = self._parse(options['end'], 'end')
        if end < start:
            raise CommandError('--end must be on or after --start.')

        records = filter_payroll_records(payroll_records.all(), start, end, options['status'])
        summary = summarize_payroll(records)

        self.stdout.write(self.style.NOTICE(f'Payroll summary {start:%d %b %Y} - {end:%d %b %Y}'))

        if options['details']:
            for record in records:
                self.stdout.write(
                    f"  {record.employee_name:<20} {record.employee_type:<16} "
                    f"{record.days_present:>2}/{record.working_days:<2} "
                    f"Gross {record.gross_amount:>8}  Ded {record.deductions:>6}  "
                    f"Net {record.net_amount:>8}  {record.payment_status}"
                )

        self.stdout.write(self.style.SUCCESS(
            f"\n  Records: {len(records)}\n"
            f"  Employees: {summary['employee_count']} (Rs {summary['employee_cost']})\n"
            f"  Contract Workers: {summary['contract_count']} (Rs {summary['contract_cost']})\n"
            f"  Pending: {summary['pending_count']}  Paid: {summary['paid_count']}\n"
            f"  Total Payroll Cost: Rs {summary['total_payroll_cost']}"
        ))
