from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Order, Review
from marketplace.tests.factories import OrderFactory, ProductFactory, ReviewFactory, UserFactory
from notifications.models import Notification


class ReviewViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = UserFactory()
        self.buyer = UserFactory(first_name="Ana", last_name="Silva")
        self.product = ProductFactory(seller=self.seller, name="Desk lamp")
        self.order = OrderFactory(buyer=self.buyer, product=self.product, status=Order.COMPLETED)
        self.list_url = reverse("marketplace:review-list")

    def review_order(self, rating=4, user=None, **extra):
        self.client.force_authenticate(user=user or self.buyer)
        payload = {"order": self.order.id, "rating": rating, "comment": "Great seller", **extra}
        return self.client.post(self.list_url, payload, format="json")

    def test_review_completed_order_updates_rating_and_notifies(self):
        response = self.review_order(rating=4)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["seller"], str(self.seller.id))
        self.assertEqual(response.data["product"], self.product.id)
        self.seller.profile.refresh_from_db()
        self.assertEqual(self.seller.profile.seller_rating, Decimal("4.00"))
        self.assertEqual(self.seller.profile.total_reviews, 1)
        notification = Notification.objects.get(recipient=self.seller)
        self.assertEqual(notification.type, Notification.REVIEW)
        self.assertEqual(notification.message, "Ana Silva left you a 4-star review for 'Desk lamp'")

    def test_order_must_be_completed(self):
        self.order.status = Order.CONFIRMED
        self.order.save()

        response = self.review_order()

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(
            response.data["detail"],
            "Reviews can only be submitted for completed orders. Current status: confirmed",
        )

    def test_one_review_per_order(self):
        self.review_order()
        response = self.review_order()

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["detail"], "A review already exists for this order")

    def test_only_buyer_may_review_order(self):
        response = self.review_order(user=UserFactory())

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["detail"], "Only the buyer of the order can submit a review")

    def test_seller_must_match_order(self):
        response = self.review_order(seller=str(UserFactory().id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Seller mismatch with order")

    def test_missing_order(self):
        self.client.force_authenticate(user=self.buyer)
        response = self.client.post(self.list_url, {"order": 424242, "rating": 5}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Order not found with ID: 424242")

    def test_rating_out_of_range(self):
        response = self.review_order(rating=6)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Review.objects.exists())

    def test_cannot_review_yourself(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.post(self.list_url, {"seller": str(self.seller.id), "rating": 5}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "You cannot review yourself")

    def test_update_and_delete_recompute_rating(self):
        ReviewFactory(seller=self.seller, rating=5)
        review_id = self.review_order(rating=4).data["id"]
        self.seller.profile.refresh_from_db()
        self.assertEqual(self.seller.profile.seller_rating, Decimal("4.50"))

        detail_url = reverse("marketplace:review-detail", kwargs={"pk": review_id})
        updated = self.client.patch(detail_url, {"rating": 2}, format="json")
        self.assertEqual(updated.status_code, status.HTTP_200_OK)
        self.seller.profile.refresh_from_db()
        self.assertEqual(self.seller.profile.seller_rating, Decimal("3.50"))

        deleted = self.client.delete(detail_url)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.seller.profile.refresh_from_db()
        self.assertEqual(self.seller.profile.total_reviews, 1)

    def test_only_reviewer_may_edit(self):
        review = ReviewFactory(seller=self.seller, reviewer=self.buyer)
        self.client.force_authenticate(user=UserFactory())

        response = self.client.patch(
            reverse("marketplace:review-detail", kwargs={"pk": review.id}), {"rating": 1}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_lists_by_seller_reviewer_and_product(self):
        self.review_order()
        ReviewFactory(seller=self.seller)

        for_seller = self.client.get(reverse("marketplace:review-for-seller", kwargs={"seller_id": self.seller.id}))
        written = self.client.get(reverse("marketplace:review-written", kwargs={"reviewer_id": self.buyer.id}))
        for_product = self.client.get(
            reverse("marketplace:review-for-product", kwargs={"product_id": self.product.id})
        )

        self.assertEqual(len(for_seller.data), 2)
        self.assertEqual(len(written.data), 1)
        self.assertEqual(len(for_product.data), 1)

    def test_seller_detailed_pages_and_sorts(self):
        for rating in (3, 5, 1):
            ReviewFactory(seller=self.seller, rating=rating)
        url = reverse("marketplace:review-seller-detailed", kwargs={"seller_id": self.seller.id})

        response = self.client.get(url, {"page": 0, "size": 2, "sort": "highest"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([review["rating"] for review in response.data["reviews"]], [5, 3])
        self.assertEqual(response.data["total"], 3)
        self.assertEqual(response.data["total_pages"], 2)
        self.assertEqual(response.data["average_rating"], "3.00")
        self.assertEqual(response.data["total_reviews"], 3)

        last_page = self.client.get(url, {"page": 1, "size": 2, "sort": "highest"})
        self.assertEqual([review["rating"] for review in last_page.data["reviews"]], [1])

    def test_seller_detailed_rejects_bad_paging(self):
        url = reverse("marketplace:review-seller-detailed", kwargs={"seller_id": self.seller.id})
        self.assertEqual(self.client.get(url, {"size": 0}).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.get(url, {"page": "x"}).status_code, status.HTTP_400_BAD_REQUEST)

    def test_malformed_ids_are_rejected_not_server_errors(self):
        urls = [
            reverse("marketplace:review-for-seller", kwargs={"seller_id": "not-a-uuid"}),
            reverse("marketplace:review-seller-detailed", kwargs={"seller_id": "not-a-uuid"}),
            reverse("marketplace:review-written", kwargs={"reviewer_id": "not-a-uuid"}),
            reverse("marketplace:review-for-product", kwargs={"product_id": "abc"}),
        ]

        for url in urls:
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, url)
            self.assertIn("Invalid", response.data["detail"])
