"""
Custom template filters for the ERP Console.

Formatting helpers for rupee amounts and the CSS class helpers used for
status and expiry badges.
"""
from decimal import Decimal, InvalidOperation

from django import template

register = template.Library()


# Badge palette shared by every module's status field
BADGE_CLASSES = {
    'green': 'bg-green-100 text-green-800 dark:bg-green-900/30 dark:text-green-400',
    'yellow': 'bg-yellow-100 text-yellow-800 dark:bg-yellow-900/30 dark:text-yellow-400',
    'red': 'bg-red-100 text-red-800 dark:bg-red-900/30 dark:text-red-400',
    'blue': 'bg-blue-100 text-blue-800 dark:bg-blue-900/30 dark:text-blue-400',
    'sky': 'bg-sky-100 text-sky-700 dark:bg-sky-900/30 dark:text-sky-400',
    'orange': 'bg-orange-100 text-orange-800 dark:bg-orange-900/30 dark:text-orange-400',
    'gray': 'bg-gray-100 text-gray-800 dark:bg-gray-700 dark:text-gray-300',
}

STATUS_COLORS = {
    # AMC
    'Active': 'green',
    'Pending': 'yellow',
    'Expired': 'red',
    'Canceled': 'gray',
    # Tender
    'Draft': 'gray',
    'Filed': 'blue',
    'Awarded': 'green',
    'Lost': 'red',
    'Closed': 'gray',
    # Project / Task
    'Planned': 'blue',
    'In Progress': 'sky',
    'On Hold': 'yellow',
    'Completed': 'green',
    'Open': 'blue',
    'Approved': 'green',
    'Rejected': 'red',
    # Payroll / Payment
    'Paid': 'green',
    'Hold': 'orange',
    'Overdue': 'red',
    'Cancelled': 'gray',
    # Holiday
    'Public': 'green',
    'Optional': 'blue',
    'Restricted': 'yellow',
    # Employee / Contract worker
    'On Leave': 'yellow',
    'Terminated': 'red',
    'Available': 'green',
    'Assigned': 'blue',
    'Inactive': 'gray',
    # Attendance
    'Present': 'green',
    'Absent': 'red',
    'Leave': 'blue',
    'Half Day': 'yellow',
}


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@register.filter(name='currency')
def currency(value):
    """
    Format number with thousand separators and 2 decimal places.

    Usage: {{ amount|currency }}
    Result: 1,234,567.89
    """
    try:
        if value is None:
            return '0.00'
        return '{:,.2f}'.format(_to_decimal(value))
    except (ValueError, TypeError, InvalidOperation):
        return value


@register.filter(name='rupees')
def rupees(value):
    """
    Whole-rupee amount with thousand separators.

    Usage: {{ record.net_amount|rupees }}
    Result: ₹41,500
    """
    try:
        if value is None:
            return '₹0'
        return '₹{:,}'.format(int(_to_decimal(value)))
    except (ValueError, TypeError, InvalidOperation):
        return value


@register.filter(name='lakhs')
def lakhs(value):
    """
    Amount in lakhs with two decimals, as shown on summary cards.

    Usage: {{ stats.total_value|lakhs }}
    Result: ₹100.00L
    """
    try:
        if value is None:
            return '₹0.00L'
        return '₹{:.2f}L'.format(_to_decimal(value) / Decimal('100000'))
    except (ValueError, TypeError, InvalidOperation):
        return value


@register.filter(name='status_badge')
def status_badge(status):
    """
    CSS classes for a status badge.

    Usage: <span class="{{ amc.status|status_badge }}">
    """
    return BADGE_CLASSES[STATUS_COLORS.get(str(status), 'gray')]


@register.filter(name='expiry_badge')
def expiry_badge(days):
    """CSS classes for the days-to-expiry badge (<=7 red, <=15 orange, <=30 yellow)."""
    try:
        days = int(days)
    except (ValueError, TypeError):
        return BADGE_CLASSES['gray']
    if days <= 7:
        return BADGE_CLASSES['red']
    if days <= 15:
        return BADGE_CLASSES['orange']
    if days <= 30:
        return BADGE_CLASSES['yellow']
    return BADGE_CLASSES['gray']


@register.filter(name='filesize')
def filesize(value):
    """Human readable file size (KB/MB)."""
    try:
        size = int(value)
    except (ValueError, TypeError):
        return value
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MB"
    return f"{size / 1024:.1f} KB"


@register.filter(name='get_item')
def get_item(dictionary, key):
    """
    Access dictionary item by key in templates.

    Usage: {{ my_dict|get_item:key_var }}
    """
    if dictionary is None:
        return None
    return dictionary.get(key)
