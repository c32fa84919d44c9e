"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: URL routing for core app (dashboard, theme toggle).
-------------------------------------------------------------------------
"""
from django.urls import path
from apps.core.views import DashboardView, ThemeToggleView

app_name = 'core'

urlpatterns = [
    path('', DashboardView.as_view(), name='dashboard'),
    path('theme/toggle/', ThemeToggleView.as_view(), name='theme_toggle'),
]
