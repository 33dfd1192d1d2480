from .review_serializers import (
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
    SellerReviewPageSerializer,
)


__all__ = ["ReviewSerializer", "ReviewCreateSerializer", "ReviewUpdateSerializer", "SellerReviewPageSerializer"]
