import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marketplace"

    def ready(self):
        # Register the Prometheus collectors once per process
        import marketplace.infra.observability.metrics  # noqa: F401

        logger.debug("Marketplace app ready")
