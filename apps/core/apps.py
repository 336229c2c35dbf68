from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Organization model (multi-tenancy)
        - Tenant scope builder used by every query
        - Dashboard view and metrics
        - Session route middleware
        - Display formatting helpers
        - import_store_export management command
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
