"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Form for marking an employee's attendance for a day.
-------------------------------------------------------------------------
"""
from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.attendance.mock_data import AttendanceStatus


def employee_choices():
    from apps.employees.mock_data import EmployeeStatus, employees

    active = [e for e in employees.all() if e.status != EmployeeStatus.TERMINATED]
    return [('', _('Select employee'))] + [
        (e.id, f"{e.name} ({e.employee_code})") for e in sorted(active, key=lambda e: e.name)
    ]


class MarkAttendanceForm(forms.Form):
    """
    Mark attendance for one employee and date.

    Check-in and check-out times only apply to days worked.
    """

    employee_id = forms.TypedChoiceField(
        label=_('Employee'),
        coerce=int,
        error_messages={'required': _('Employee is required')},
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    date = forms.DateField(
        initial=timezone.localdate,
        error_messages={'required': _('Date is required')},
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    status = forms.ChoiceField(
        choices=AttendanceStatus.choices,
        initial=AttendanceStatus.PRESENT,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    check_in = forms.TimeField(
        required=False,
        widget=forms.TimeInput(attrs={'class': 'form-control', 'type': 'time'})
    )
    check_out = forms.TimeField(
        required=False,
        widget=forms.TimeInput(attrs={'class': 'form-control', 'type': 'time'})
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['employee_id'].choices = employee_choices()

    def clean_date(self):
        value = self.cleaned_data['date']
        if value > timezone.localdate():
            raise forms.ValidationError(_('Attendance cannot be marked for a future date'))
        return value

    def clean(self) -> dict:
        cleaned_data = super().clean()
        status = cleaned_data.get('status')
        check_in = cleaned_data.get('check_in')
        check_out = cleaned_data.get('check_out')

        if status in (AttendanceStatus.ABSENT, AttendanceStatus.LEAVE):
            cleaned_data['check_in'] = None
            cleaned_data['check_out'] = None
        elif check_in and check_out and check_out <= check_in:
            self.add_error('check_out', _('Check-out must be after check-in'))
        elif check_out and not check_in:
            self.add_error('check_in', _('Check-in is required when check-out is given'))
        return cleaned_data
