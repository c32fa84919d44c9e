"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Alert and confirmation dialog wrappers. Alerts are queued
             through django.contrib.messages and rendered by the base
             layout as dialogs; confirmations are rendered from the
             context built here.
-------------------------------------------------------------------------
"""
from typing import Dict, Optional

from django.contrib import messages

# Dialog icon -> message level
ICON_LEVELS = {
    'success': messages.SUCCESS,
    'error': messages.ERROR,
    'warning': messages.WARNING,
    'info': messages.INFO,
    'question': messages.INFO,
}


def _compose(title: str, text: Optional[str]) -> str:
    return f"{title}: {text}" if text else title


def show_alert(request, title: str, text: Optional[str] = None, icon: str = 'info') -> None:
    """
    Queue an alert dialog for the next rendered page.

    Args:
        request: Current HttpRequest.
        title: Dialog title.
        text: Optional body text.
        icon: One of success, error, warning, info, question.
    """
    if icon not in ICON_LEVELS:
        raise ValueError(f"Unknown alert icon: {icon}")
    messages.add_message(request, ICON_LEVELS[icon], _compose(title, text), extra_tags=icon)


def show_success(request, title: str, text: Optional[str] = None) -> None:
    show_alert(request, title, text, icon='success')


def show_error(request, title: str, text: Optional[str] = None) -> None:
    show_alert(request, title, text, icon='error')


def show_warning(request, title: str, text: Optional[str] = None) -> None:
    show_alert(request, title, text, icon='warning')


def show_info(request, title: str, text: Optional[str] = None) -> None:
    show_alert(request, title, text, icon='info')


def confirm_context(
    title: str,
    text: Optional[str] = None,
    confirm_button_text: str = 'Yes',
    cancel_button_text: str = 'Cancel'
) -> Dict[str, str]:
    """Build template context for a confirmation dialog."""
    return {
        'title': title,
        'text': text or '',
        'icon': 'question',
        'confirm_button_text': confirm_button_text,
        'cancel_button_text': cancel_button_text,
    }


def delete_confirm_context(item_name: str = 'this item') -> Dict[str, str]:
    """Confirmation dialog context for destructive delete actions."""
    return confirm_context(
        'Are you sure?',
        f"Do you want to delete {item_name}? This action cannot be undone.",
        'Yes, delete it',
        'Cancel'
    )
