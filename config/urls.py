"""
URL configuration for the ERP Console project.

Each business module owns its own URLconf, mounted under a path prefix
matching the sidebar navigation.
"""
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('', include('apps.core.urls')),
    path('clients/', include('apps.clients.urls')),
    path('amcs/', include('apps.amcs.urls')),
    path('tenders/', include('apps.tenders.urls')),
    path('projects/', include('apps.projects.urls')),
    path('tasks/', include('apps.tasks.urls')),
    path('payroll/', include('apps.payroll.urls')),
    path('payments/', include('apps.payments.urls')),
    path('documents/', include('apps.documents.urls')),
    path('notifications/', include('apps.notifications.urls')),
    path('administration/', include('apps.administration.urls')),
    path('employees/', include('apps.employees.urls')),
    path('attendance/', include('apps.attendance.urls')),
    path('reports/', include('apps.reports.urls')),
    path('home/', RedirectView.as_view(url='/', permanent=False), name='home'),
]
