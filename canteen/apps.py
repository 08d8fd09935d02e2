"""
Canteen app configuration.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class CanteenConfig(AppConfig):
    """Canteen application configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "canteen"
    verbose_name = _("食堂采购")

    def ready(self):
        """Import signal handlers when app is ready."""
        # Import handlers to register them
        from canteen.signals import handlers  # noqa: F401
