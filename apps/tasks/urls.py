from django.urls import path
from apps.tasks import views

app_name = 'tasks'

urlpatterns = [
    path('', views.TaskListView.as_view(), name='task_list'),
    path('export/', views.TaskExportView.as_view(), name='task_export'),
    path('resources/', views.ResourceSummaryView.as_view(), name='resource_summary'),
    path('resources/export/', views.ResourceSummaryExportView.as_view(), name='resource_summary_export'),
    path('new/', views.TaskCreateView.as_view(), name='task_create'),
    path('<int:pk>/', views.TaskDetailView.as_view(), name='task_detail'),
    path('<int:pk>/edit/', views.TaskUpdateView.as_view(), name='task_update'),
    path('<int:pk>/delete/', views.TaskDeleteView.as_view(), name='task_delete'),
    path('<int:pk>/approve/', views.TaskApproveView.as_view(), name='task_approve'),
    path('<int:pk>/reject/', views.TaskRejectView.as_view(), name='task_reject'),
    path('<int:pk>/resources/', views.TaskResourceCreateView.as_view(), name='resource_add'),
    path('resources/<int:resource_id>/cost/', views.UnitCostUpdateView.as_view(), name='resource_cost'),
]
