from decimal import Decimal

import pytest

from marketplace.services import SellerRatingService
from marketplace.services.seller_rating_service import round_rating
from marketplace.tests.factories import ReviewFactory, UserFactory


@pytest.mark.unit
class TestRoundRating:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, Decimal("0.00")),
            (4, Decimal("4.00")),
            (4.125, Decimal("4.13")),
            (Decimal("4.665"), Decimal("4.67")),
            (Decimal("4.664"), Decimal("4.66")),
            (3.3333333, Decimal("3.33")),
        ],
    )
    def test_half_up_to_two_places(self, value, expected):
        assert round_rating(value) == expected


@pytest.mark.unit
@pytest.mark.django_db
class TestSellerRatingService:
    def test_recalculate_stores_average_on_profile(self):
        seller = UserFactory()
        for rating in (5, 4, 5):
            ReviewFactory(seller=seller, rating=rating)

        result = SellerRatingService().recalculate(seller.id)

        assert result.ok
        assert result.value == {"average_rating": Decimal("4.67"), "total_reviews": 3}
        seller.profile.refresh_from_db()
        assert seller.profile.seller_rating == Decimal("4.67")
        assert seller.profile.total_reviews == 3

    def test_no_reviews_is_zero(self):
        seller = UserFactory()
        seller.profile.seller_rating = Decimal("3.00")
        seller.profile.total_reviews = 2
        seller.profile.save()

        SellerRatingService().recalculate(seller.id)

        seller.profile.refresh_from_db()
        assert seller.profile.seller_rating == Decimal("0.00")
        assert seller.profile.total_reviews == 0
