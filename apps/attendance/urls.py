"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: URL routing for the attendance app.
-------------------------------------------------------------------------
"""
from django.urls import path
from apps.attendance import views

app_name = 'attendance'

urlpatterns = [
    path('', views.AttendanceListView.as_view(), name='attendance_list'),
    path('export/', views.AttendanceExportView.as_view(), name='attendance_export'),
    path('mark/', views.MarkAttendanceView.as_view(), name='attendance_mark'),
    path('<int:pk>/approve/', views.AttendanceApproveView.as_view(), name='attendance_approve'),
    path('<int:pk>/delete/', views.AttendanceDeleteView.as_view(), name='attendance_delete'),
]
