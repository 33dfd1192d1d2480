"""
SellerRatingService - keeps ``Profile.seller_rating`` and ``total_reviews`` in step with stored reviews.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from django.db.models import Avg, Count

from authentication.models import Profile
from marketplace.models import Review

from .base import BaseService, ServiceResult, service_ok


TWO_PLACES = Decimal("0.01")


def round_rating(value) -> Decimal:
    """Average rating rounded HALF_UP to two decimals; no reviews is 0.00."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class SellerRatingService(BaseService):
    @BaseService.log_performance
    def summary(self, seller_id) -> ServiceResult[Dict]:
        stats = Review.objects.filter(seller_id=seller_id).aggregate(average=Avg("rating"), total=Count("id"))
        return service_ok({"average_rating": round_rating(stats["average"]), "total_reviews": stats["total"]})

    @BaseService.log_performance
    def recalculate(self, seller_id) -> ServiceResult[Dict]:
        """
        Recompute the seller's rating from their reviews and store it on the profile.

        Example:
            >>> seller_rating_service.recalculate(seller.id).value
            {'average_rating': Decimal('4.67'), 'total_reviews': 3}
        """
        summary = self.summary(seller_id).value
        updated = Profile.objects.filter(user_id=seller_id).update(
            seller_rating=summary["average_rating"], total_reviews=summary["total_reviews"]
        )
        if not updated:
            self.logger.warning(f"No profile to store rating for seller {seller_id}")
        else:
            self.logger.info(
                f"Seller {seller_id} rating now {summary['average_rating']} over {summary['total_reviews']} reviews"
            )
        return service_ok(summary)
