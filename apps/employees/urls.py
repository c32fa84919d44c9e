"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: URL routing for the employees app.
-------------------------------------------------------------------------
"""
from django.urls import path
from apps.employees import views

app_name = 'employees'

urlpatterns = [
    path('', views.EmployeeListView.as_view(), name='employee_list'),
    path('new/', views.EmployeeCreateView.as_view(), name='employee_create'),
    path('<int:pk>/', views.EmployeeDetailView.as_view(), name='employee_detail'),
    path('<int:pk>/edit/', views.EmployeeUpdateView.as_view(), name='employee_update'),
    path('<int:pk>/delete/', views.EmployeeDeleteView.as_view(), name='employee_delete'),

    path('workers/', views.ContractWorkerListView.as_view(), name='worker_list'),
    path('workers/new/', views.ContractWorkerCreateView.as_view(), name='worker_create'),
    path('workers/import/', views.WorkerImportView.as_view(), name='worker_import'),
    path('workers/<int:pk>/', views.ContractWorkerDetailView.as_view(), name='worker_detail'),
    path('workers/<int:pk>/edit/', views.ContractWorkerUpdateView.as_view(), name='worker_update'),
    path('workers/<int:pk>/delete/', views.ContractWorkerDeleteView.as_view(), name='worker_delete'),
]
