from django.urls import path
from apps.payments import views

app_name = 'payments'

urlpatterns = [
    path('', views.PaymentListView.as_view(), name='payment_list'),
    path('new/', views.PaymentCreateView.as_view(), name='payment_create'),
    path('export/', views.PaymentExportView.as_view(), name='payment_export'),
    path('import/', views.PaymentImportView.as_view(), name='payment_import'),
    path('<int:pk>/edit/', views.PaymentUpdateView.as_view(), name='payment_update'),
    path('<int:pk>/delete/', views.PaymentDeleteView.as_view(), name='payment_delete'),
    path('<int:pk>/pay/', views.PaymentMarkPaidView.as_view(), name='payment_mark_paid'),
]
