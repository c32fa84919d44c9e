"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Custom exceptions for the ERP Console. These provide
             specific error codes for lookup, payroll, payment and
             upload violations.
-------------------------------------------------------------------------
"""
from typing import Optional


class ConsoleException(Exception):
    """Base exception for all ERP Console specific errors."""

    error_code: str = "ERR_CONSOLE_GENERIC"
    default_message: str = "An error occurred in the ERP Console."

    def __init__(self, message: Optional[str] = None, details: Optional[dict] = None) -> None:
        """
        Initialize console exception.

        Args:
            message: Custom error message. If None, uses default_message.
            details: Additional context dictionary for debugging.
        """
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


# Lookup Exceptions
class RecordNotFoundException(ConsoleException):
    """Raised when a mock record cannot be found by its ID."""

    error_code = "ERR_RECORD_NOT_FOUND"
    default_message = "The requested record does not exist or has been removed."


# Payroll Exceptions
class PayrollComputationException(ConsoleException):
    """Raised when payroll inputs cannot produce a valid computation."""

    error_code = "ERR_PAYROLL_INPUT"
    default_message = "Payroll could not be computed from the given attendance and salary."


class PayrollAlreadyPaidException(ConsoleException):
    """Raised when a payroll record that is already paid is paid again."""

    error_code = "ERR_PAYROLL_ALREADY_PAID"
    default_message = "This payroll record has already been marked as paid."


# Payment Exceptions
class PaymentAlreadyPaidException(ConsoleException):
    """Raised when marking a payment that is already paid."""

    error_code = "ERR_PAYMENT_ALREADY_PAID"
    default_message = "This payment has already been marked as paid."


class PaymentSheetException(ConsoleException):
    """Raised when an uploaded payment sheet cannot be read."""

    error_code = "ERR_PAYMENT_SHEET"
    default_message = "The payment sheet could not be read. Please upload a valid Excel file."


# Staff Exceptions
class WorkerImportException(ConsoleException):
    """Raised when an uploaded contract-worker file cannot be read."""

    error_code = "ERR_WORKER_IMPORT"
    default_message = "The worker file could not be read. Please upload a valid CSV file."


# Tender Exceptions
class EMDRefundException(ConsoleException):
    """Raised when an EMD refund is recorded for a non-refundable deposit."""

    error_code = "ERR_EMD_NOT_REFUNDABLE"
    default_message = "The EMD for this tender is not refundable."


# Workflow Exceptions
class TaskApprovalException(ConsoleException):
    """Raised when a task is approved before it is completed."""

    error_code = "ERR_TASK_NOT_COMPLETED"
    default_message = "Only completed tasks can be approved."


# Upload Exceptions
class InvalidFileException(ConsoleException):
    """Raised when an uploaded document has a disallowed type or size."""

    error_code = "ERR_INVALID_FILE"
    default_message = "Only PDF and DOCX files are allowed."
