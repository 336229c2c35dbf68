from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AccountsConfig(AppConfig):
    """
    Configuration class for accounts app

    This app contains:
        - User model (email login, sign-up metadata)
        - Profile model (organization membership and role)
        - Session resolution with auto-healing (services.resolve_profile)
        - Login / signup / logout views

    Profiles are not created by signals: they are created lazily the
    first time a user hits the dashboard.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'

    # Human-readable app name (shown in admin panel)
    verbose_name = _('Accounts')
