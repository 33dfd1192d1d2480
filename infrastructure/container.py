"""
Dependency Injection Container
================================

Service locator giving views, consumers and other services a single place to
obtain storage and domain services.

Usage:
    from infrastructure.container import container

    orders = container.order_service()
    storage = container.storage()
"""

import logging
from typing import Optional

from .storage import StorageFactory, StorageInterface


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Lazily builds and caches infrastructure and domain services.

    Singleton: every ``ServiceContainer()`` call returns the same instance.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._services = {}
            self._storage: Optional[StorageInterface] = None
            self._initialized = True
            logger.info("Service container initialized")

    def _get(self, name, builder):
        if name not in self._services:
            self._services[name] = builder()
            logger.debug(f"Created {type(self._services[name]).__name__}")
        return self._services[name]

    def storage(self) -> StorageInterface:
        """Get the configured storage backend (cached)."""
        if self._storage is None:
            self._storage = StorageFactory.create()
            logger.debug(f"Created storage service: {type(self._storage).__name__}")
        return self._storage

    def notification_service(self):
        from notifications.domain.services.notification_service import NotificationService

        return self._get("notification_service", NotificationService)

    def auth_service(self):
        from authentication.domain.services.auth_service import AuthService

        return self._get("auth_service", AuthService)

    def profile_service(self):
        from authentication.domain.services.profile_service import ProfileService

        return self._get("profile_service", lambda: ProfileService(storage=self.storage()))

    def catalog_service(self):
        from marketplace.services import CatalogService

        return self._get("catalog_service", CatalogService)

    def order_service(self):
        from marketplace.services import OrderService

        return self._get("order_service", lambda: OrderService(notifications=self.notification_service()))

    def trade_offer_service(self):
        from marketplace.services import TradeOfferService

        return self._get(
            "trade_offer_service", lambda: TradeOfferService(notifications=self.notification_service())
        )

    def seller_rating_service(self):
        from marketplace.services import SellerRatingService

        return self._get("seller_rating_service", SellerRatingService)

    def review_service(self):
        from marketplace.services import ReviewService

        return self._get(
            "review_service",
            lambda: ReviewService(
                seller_rating_service=self.seller_rating_service(),
                notifications=self.notification_service(),
            ),
        )

    def message_service(self):
        from messaging.domain.services.message_service import MessageService

        return self._get(
            "message_service",
            lambda: MessageService(storage=self.storage(), notifications=self.notification_service()),
        )

    def reset(self):
        """
        Drop all cached instances.

        Tests call this so patched settings or mocks are picked up.
        """
        self._services = {}
        self._storage = None
        logger.info("Service container reset")


container = ServiceContainer()
