"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Centralized logging for console operations.
-------------------------------------------------------------------------
"""
import logging
from typing import Any, Dict

logger = logging.getLogger('apps.console')


class ConsoleLogger:
    """Centralized logging for in-memory record operations"""

    @staticmethod
    def log_record_created(entity: str, record, label: str = ''):
        """Log record creation"""
        logger.info(
            f"{entity} created: #{record.id} {label}".rstrip(),
            extra={'entity': entity, 'record_id': record.id}
        )

    @staticmethod
    def log_record_updated(entity: str, record, label: str = ''):
        """Log record update"""
        logger.info(
            f"{entity} updated: #{record.id} {label}".rstrip(),
            extra={'entity': entity, 'record_id': record.id}
        )

    @staticmethod
    def log_record_deleted(entity: str, record, label: str = ''):
        """Log record deletion"""
        logger.warning(
            f"{entity} deleted: #{record.id} {label}".rstrip(),
            extra={'entity': entity, 'record_id': record.id}
        )

    @staticmethod
    def log_payroll_paid(record):
        """Log payroll payment with full context"""
        logger.info(
            f"Payroll paid: #{record.id} | "
            f"Employee: {record.employee_name} | "
            f"Net: Rs {record.net_amount} | "
            f"Mode: {record.payment_mode} | "
            f"Ref: {record.bank_transaction_ref or '-'}",
            extra={
                'payroll_id': record.id,
                'net_amount': str(record.net_amount),
                'payment_mode': record.payment_mode,
            }
        )

    @staticmethod
    def log_payment_paid(payment):
        """Log vendor/contractor payment"""
        logger.info(
            f"Payment paid: {payment.payment_number} | "
            f"Payee: {payment.payee_name} | "
            f"Amount: Rs {payment.amount}",
            extra={
                'payment_id': payment.id,
                'amount': str(payment.amount),
            }
        )

    @staticmethod
    def log_email_sent(template_name: str, recipients):
        """Log an email rendered from a template"""
        logger.info(
            f"Email sent: {template_name} | To: {', '.join(recipients)}",
            extra={'template': template_name, 'recipient_count': len(recipients)}
        )

    @staticmethod
    def log_error(operation: str, error: Exception, context: Dict[str, Any]):
        """Log errors with context"""
        logger.error(
            f"Console error in {operation}: {str(error)}",
            extra=context,
            exc_info=True
        )

    @staticmethod
    def log_validation_error(operation: str, errors: Dict[str, Any], context: Dict[str, Any]):
        """Log validation errors"""
        logger.warning(
            f"Validation error in {operation}: {errors}",
            extra={**context, 'validation_errors': errors}
        )
