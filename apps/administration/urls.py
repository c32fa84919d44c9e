from django.urls import path
from apps.administration import views

app_name = 'administration'

urlpatterns = [
    # Bank accounts
    path('bank-accounts/', views.BankAccountListView.as_view(), name='bank_account_list'),
    path('bank-accounts/new/', views.BankAccountCreateView.as_view(), name='bank_account_create'),
    path('bank-accounts/<int:pk>/edit/', views.BankAccountUpdateView.as_view(), name='bank_account_update'),
    path('bank-accounts/<int:pk>/delete/', views.BankAccountDeleteView.as_view(), name='bank_account_delete'),

    # Holiday calendar
    path('holidays/', views.HolidayListView.as_view(), name='holiday_list'),
    path('holidays/new/', views.HolidayCreateView.as_view(), name='holiday_create'),
    path('holidays/<int:pk>/edit/', views.HolidayUpdateView.as_view(), name='holiday_update'),
    path('holidays/<int:pk>/delete/', views.HolidayDeleteView.as_view(), name='holiday_delete'),

    # Email templates
    path('email-templates/', views.EmailTemplateListView.as_view(), name='email_template_list'),
    path('email-templates/new/', views.EmailTemplateCreateView.as_view(), name='email_template_create'),
    path('email-templates/<int:pk>/', views.EmailTemplatePreviewView.as_view(), name='email_template_preview'),
    path('email-templates/<int:pk>/edit/', views.EmailTemplateUpdateView.as_view(), name='email_template_update'),
    path('email-templates/<int:pk>/delete/', views.EmailTemplateDeleteView.as_view(), name='email_template_delete'),
]
