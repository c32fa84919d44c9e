from django.urls import path
from apps.tenders import views

app_name = 'tenders'

urlpatterns = [
    path('', views.TenderListView.as_view(), name='tender_list'),
    path('new/', views.TenderCreateView.as_view(), name='tender_create'),
    path('<int:pk>/', views.TenderDetailView.as_view(), name='tender_detail'),
    path('<int:pk>/edit/', views.TenderUpdateView.as_view(), name='tender_update'),
    path('<int:pk>/delete/', views.TenderDeleteView.as_view(), name='tender_delete'),
    path('<int:pk>/emd-refund/', views.EMDRefundView.as_view(), name='emd_refund'),
]
