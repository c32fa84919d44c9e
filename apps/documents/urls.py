from django.urls import path
from apps.documents import views

app_name = 'documents'

urlpatterns = [
    path('', views.TemplateListView.as_view(), name='template_list'),
    path('upload/', views.TemplateUploadView.as_view(), name='template_upload'),
    path('tags/', views.TemplateBulkTagView.as_view(), name='template_bulk_tag'),
    path('<int:pk>/', views.TemplateDetailView.as_view(), name='template_detail'),
    path('<int:pk>/versions/', views.TemplateVersionCreateView.as_view(), name='version_create'),
    path('<int:pk>/delete/', views.TemplateDeleteView.as_view(), name='template_delete'),
    path('versions/<int:version_id>/publish/', views.VersionPublishView.as_view(), name='version_publish'),
    path('versions/<int:version_id>/download/', views.VersionDownloadView.as_view(), name='version_download'),
    path('versions/<int:version_id>/delete/', views.VersionDeleteView.as_view(), name='version_delete'),
]
