from django.apps import AppConfig


class ProspectsConfig(AppConfig):
    """
    Configuration for Prospects application

    This app contains:
        - Prospect, Interaction and Property models
        - Kanban grouping and filtered prospect listing (with demo fallback)
        - Prospect quick-update view and REST endpoints
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.prospects'
    verbose_name = 'Prospects'
