from django.apps import AppConfig


class AmcsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.amcs'
    verbose_name = 'Annual Maintenance Contracts'
