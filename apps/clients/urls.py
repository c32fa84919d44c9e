from django.urls import path
from apps.clients import views

app_name = 'clients'

urlpatterns = [
    path('', views.ClientListView.as_view(), name='client_list'),
    path('new/', views.ClientCreateView.as_view(), name='client_create'),
    path('bulk/', views.ClientBulkActionView.as_view(), name='client_bulk'),
    path('<int:pk>/', views.ClientDetailView.as_view(), name='client_detail'),
    path('<int:pk>/edit/', views.ClientUpdateView.as_view(), name='client_update'),
    path('<int:pk>/delete/', views.ClientDeleteView.as_view(), name='client_delete'),
]
