"""
Marketplace Service Layer

Business logic for the marketplace app, one service per bounded context.

Services:
- CatalogService: Product browsing, search, CRUD and likes
- OrderService: Order placement and the pickup lifecycle
- TradeOfferService: Trade offer negotiation
- ReviewService: Seller reviews
- SellerRatingService: Seller rating aggregation

Usage:
    from infrastructure.container import container

    result = container.order_service().update_status(order_id, user, "confirmed")
    if not result.ok:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .catalog_service import CatalogService
from .order_service import OrderService
from .review_service import ReviewService
from .seller_rating_service import SellerRatingService
from .trade_offer_service import TradeOfferService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
    # Services
    "CatalogService",
    "OrderService",
    "TradeOfferService",
    "ReviewService",
    "SellerRatingService",
]
