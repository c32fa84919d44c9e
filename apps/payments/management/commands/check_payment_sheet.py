"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Management command that validates a payment sheet before
             it is uploaded through the console.
-------------------------------------------------------------------------
"""
import os

from django.core.management.base import BaseCommand, CommandError

from apps.core.exceptions import PaymentSheetException
from apps.payments.services import parse_payment_row, read_payment_sheet


class Command(BaseCommand):
    """
    Check every row of a payment sheet and report the problems found.

    Usage:
        python manage.py check_payment_sheet payments.xlsx
    """

    help = 'Validates a payment sheet (.xlsx) and lists row-level errors.'

    def add_arguments(self, parser) -> None:
        parser.add_argument('file_path', type=str, help='Path to the Excel file')

    def handle(self, *args, **options) -> None:
        file_path = options['file_path']
        if not os.path.exists(file_path):
            raise CommandError(f"File not found: {file_path}")

        self.stdout.write("Reading Excel file...")
        try:
            rows = read_payment_sheet(file_path)
        except PaymentSheetException as e:
            raise CommandError(e.message)

        error_count = 0
        for row_number, row in rows:
            try:
                parse_payment_row(row)
            except ValueError as e:
                error_count += 1
                self.stderr.write(self.style.ERROR(f"  Row {row_number}: {e}"))

        if error_count:
            raise CommandError(f"{error_count} of {len(rows)} row(s) have errors.")
        self.stdout.write(self.style.SUCCESS(f"All {len(rows)} row(s) are valid."))
