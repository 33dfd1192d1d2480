from marketplace.catalog.domain.models import Category, Product, ProductImage, ProductLike
from marketplace.ordering.domain.models import Order
from marketplace.reviews.domain.models import Review
from marketplace.trading.domain.models import TradeOffer


__all__ = [
    "Category",
    "Product",
    "ProductImage",
    "ProductLike",
    "Order",
    "TradeOffer",
    "Review",
]
