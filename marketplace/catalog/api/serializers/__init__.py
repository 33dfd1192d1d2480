from .category_serializers import CategorySerializer
from .product_serializers import (
    LikeStatusSerializer,
    ProductImageInputSerializer,
    ProductImageSerializer,
    ProductSerializer,
    ProductSummarySerializer,
    ProductWriteSerializer,
    primary_image_url,
)


__all__ = [
    "CategorySerializer",
    "LikeStatusSerializer",
    "ProductImageInputSerializer",
    "ProductImageSerializer",
    "ProductSerializer",
    "ProductSummarySerializer",
    "ProductWriteSerializer",
    "primary_image_url",
]
