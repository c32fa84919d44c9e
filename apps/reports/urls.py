"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: URL routing for the reports app.
-------------------------------------------------------------------------
"""
from django.urls import path
from apps.reports import views

app_name = 'reports'

urlpatterns = [
    path('', views.ReportIndexView.as_view(), name='report_index'),
    path('<slug:report_id>/', views.ReportView.as_view(), name='report_detail'),
]
