"""
ReviewService - buyer reviews of sellers.

Every create, update and delete recomputes the seller's rating.
"""

import math
from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.db import transaction

from marketplace.models import Order, Product, Review
from utils.rbac import is_user_id

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .seller_rating_service import SellerRatingService


User = get_user_model()

SORT_ORDERING = {
    "recent": ("-created_at", "-id"),
    "highest": ("-rating", "-created_at", "-id"),
    "lowest": ("rating", "-created_at", "-id"),
}


class ReviewService(BaseService):
    """
    Service for seller reviews.

    Dependencies:
    - SellerRatingService: recomputes the profile rating after each change
    - NotificationService: tells the seller about new reviews
    """

    def __init__(self, seller_rating_service: SellerRatingService = None, notifications=None):
        super().__init__()
        self.seller_rating_service = seller_rating_service or SellerRatingService()
        self.notifications = notifications

    def _base_queryset(self):
        return Review.objects.select_related("reviewer", "reviewer__profile", "seller", "product", "order")

    @BaseService.log_performance
    def list_reviews(self) -> ServiceResult:
        return service_ok(self._base_queryset().order_by("-created_at", "-id"))

    @BaseService.log_performance
    def get_review(self, review_id) -> ServiceResult[Review]:
        try:
            return service_ok(self._base_queryset().get(id=review_id))
        except (Review.DoesNotExist, ValueError):
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, f"Review {review_id} not found")

    @BaseService.log_performance
    def list_for_seller(self, seller_id) -> ServiceResult:
        if not is_user_id(seller_id):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid seller id '{seller_id}'")
        return service_ok(self._base_queryset().filter(seller_id=seller_id).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def list_written(self, reviewer_id) -> ServiceResult:
        if not is_user_id(reviewer_id):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid reviewer id '{reviewer_id}'")
        return service_ok(self._base_queryset().filter(reviewer_id=reviewer_id).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def list_for_product(self, product_id) -> ServiceResult:
        if not str(product_id).isdigit():
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid product id '{product_id}'")
        return service_ok(self._base_queryset().filter(product_id=product_id).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def seller_detailed(self, seller_id, page: int = 0, size: int = 10, sort: str = "recent") -> ServiceResult[Dict]:
        """
        Page through a seller's reviews together with the rating summary.

        Args:
            seller_id: Seller user id
            page: Zero-based page index
            size: Page size
            sort: ``recent`` (default), ``highest`` or ``lowest``
        """
        if not is_user_id(seller_id):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid seller id '{seller_id}'")
        if page < 0 or size < 1:
            return service_err(ErrorCodes.VALIDATION_ERROR, "page must be >= 0 and size >= 1")

        ordering = SORT_ORDERING.get(sort, SORT_ORDERING["recent"])
        queryset = self._base_queryset().filter(seller_id=seller_id).order_by(*ordering)
        total = queryset.count()
        reviews = list(queryset[page * size : (page + 1) * size])
        summary = self.seller_rating_service.summary(seller_id).value

        return service_ok(
            {
                "reviews": reviews,
                "page": page,
                "size": size,
                "total": total,
                "total_pages": math.ceil(total / size) if total else 0,
                "average_rating": summary["average_rating"],
                "total_reviews": summary["total_reviews"],
            }
        )

    @BaseService.log_performance
    def create_review(self, reviewer, data: Dict[str, Any]) -> ServiceResult[Review]:
        """
        Create a review of ``data["seller"]``.

        When ``order`` is given it must be completed, unreviewed, bought by the
        reviewer and sold by the reviewed seller.
        """
        rating = data.get("rating")
        if rating is None or not 1 <= int(rating) <= 5:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Rating must be between 1 and 5")

        order = None
        seller_id = data.get("seller")
        product_id = data.get("product")

        if data.get("order") is not None:
            order = Order.objects.select_related("seller", "buyer").filter(id=data["order"]).first()
            if order is None:
                return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order not found with ID: {data['order']}")
            if order.status != Order.COMPLETED:
                return service_err(
                    ErrorCodes.INVALID_STATE,
                    f"Reviews can only be submitted for completed orders. Current status: {order.status}",
                )
            if Review.objects.filter(order=order).exists():
                return service_err(ErrorCodes.REVIEW_EXISTS, "A review already exists for this order")
            if order.buyer_id != reviewer.id:
                return service_err(ErrorCodes.PERMISSION_DENIED, "Only the buyer of the order can submit a review")
            if seller_id is None:
                seller_id = order.seller_id
            elif str(order.seller_id) != str(seller_id):
                return service_err(ErrorCodes.VALIDATION_ERROR, "Seller mismatch with order")
            product_id = product_id or order.product_id

        if seller_id is None:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Seller is required")
        if str(seller_id) == str(reviewer.id):
            return service_err(ErrorCodes.VALIDATION_ERROR, "You cannot review yourself")

        seller = User.objects.filter(id=seller_id).first() if is_user_id(seller_id) else None
        if seller is None:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Seller {seller_id} not found")

        product = None
        if product_id is not None:
            product = Product.objects.filter(id=product_id).first()
            if product is None:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        with transaction.atomic():
            review = Review.objects.create(
                reviewer=reviewer,
                seller=seller,
                product=product,
                order=order,
                rating=int(rating),
                comment=data.get("comment", ""),
            )
            self.seller_rating_service.recalculate(seller.id)

        self.logger.info(f"Review {review.id} by {reviewer.id} for seller {seller.id}: {review.rating} stars")

        if self.notifications is not None:
            try:
                self.notifications.notify_review(review)
            except Exception as e:
                self.logger.error(f"Failed to notify seller {seller.id} about review {review.id}: {e}", exc_info=True)

        return service_ok(review)

    @BaseService.log_performance
    @transaction.atomic
    def update_review(self, review_id, user, data: Dict[str, Any]) -> ServiceResult[Review]:
        try:
            review = Review.objects.select_for_update().get(id=review_id)
        except (Review.DoesNotExist, ValueError):
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, f"Review {review_id} not found")

        if review.reviewer_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only edit your own reviews")

        if "rating" in data:
            if not 1 <= int(data["rating"]) <= 5:
                return service_err(ErrorCodes.VALIDATION_ERROR, "Rating must be between 1 and 5")
            review.rating = int(data["rating"])
        if "comment" in data:
            review.comment = data["comment"]

        review.save(update_fields=["rating", "comment", "updated_at"])
        self.seller_rating_service.recalculate(review.seller_id)
        return service_ok(review)

    @BaseService.log_performance
    @transaction.atomic
    def delete_review(self, review_id, user) -> ServiceResult[bool]:
        try:
            review = Review.objects.select_for_update().get(id=review_id)
        except (Review.DoesNotExist, ValueError):
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, f"Review {review_id} not found")

        if review.reviewer_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own reviews")

        seller_id = review.seller_id
        review.delete()
        self.seller_rating_service.recalculate(seller_id)
        return service_ok(True)
