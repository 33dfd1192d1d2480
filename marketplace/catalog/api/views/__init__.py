from .category_views import CategoryViewSet
from .product_views import ProductViewSet


__all__ = ["CategoryViewSet", "ProductViewSet"]
