from django.urls import path
from apps.amcs import views

app_name = 'amcs'

urlpatterns = [
    path('', views.AMCListView.as_view(), name='amc_list'),
    path('new/', views.AMCCreateView.as_view(), name='amc_create'),
    path('<int:pk>/', views.AMCDetailView.as_view(), name='amc_detail'),
    path('<int:pk>/edit/', views.AMCUpdateView.as_view(), name='amc_update'),
    path('<int:pk>/delete/', views.AMCDeleteView.as_view(), name='amc_delete'),
    path('<int:pk>/generate-bill/', views.GenerateBillView.as_view(), name='generate_bill'),
    path('bills/<int:bill_id>/pay/', views.BillPaymentView.as_view(), name='bill_pay'),
]
