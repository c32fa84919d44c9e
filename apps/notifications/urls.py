from django.urls import path
from apps.notifications import views

app_name = 'notifications'

urlpatterns = [
    path('', views.NotificationListView.as_view(), name='notification_list'),
    path('new/', views.NotificationCreateView.as_view(), name='notification_create'),
    path('read-all/', views.NotificationMarkAllReadView.as_view(), name='notification_mark_all_read'),
    path('<int:pk>/read/', views.NotificationMarkReadView.as_view(), name='notification_mark_read'),
    path('<int:pk>/delete/', views.NotificationDeleteView.as_view(), name='notification_delete'),
]
