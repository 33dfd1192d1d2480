import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"

    def ready(self):
        """
        Connect the profile signal receiver.
        """
        import authentication.domain.models.profile  # noqa: F401

        logger.debug("Authentication app ready")
