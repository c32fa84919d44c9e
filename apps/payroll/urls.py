"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: URL routing for payroll app.
-------------------------------------------------------------------------
"""
from django.urls import path
from apps.payroll import views

app_name = 'payroll'

urlpatterns = [
    path('', views.PayrollListView.as_view(), name='payroll_list'),
    path('calculator/', views.PayrollCalculatorView.as_view(), name='calculator'),
    path('bulk-pay/', views.BulkMarkPaidView.as_view(), name='bulk_mark_paid'),
    path('<int:pk>/payslip/', views.PayslipView.as_view(), name='payslip'),
    path('<int:pk>/pay/', views.MarkPaidView.as_view(), name='mark_paid'),
    path('<int:pk>/recalculate/', views.RecalculateView.as_view(), name='recalculate'),
    path('<int:pk>/apply-attendance/', views.ApplyAttendanceView.as_view(), name='apply_attendance'),
]
