from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Product, ProductLike
from marketplace.tests.factories import (
    AdminFactory,
    CategoryFactory,
    ProductFactory,
    ProductImageFactory,
    ProductLikeFactory,
    UserFactory,
)


@override_settings(PLACEHOLDER_IMAGE_URL="https://img.campus.test/placeholder.png")
class ProductViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = UserFactory()
        self.buyer = UserFactory()
        self.category = CategoryFactory(name="Books")
        self.product = ProductFactory(seller=self.seller, category=self.category, name="Calculus textbook")
        self.list_url = reverse("marketplace:product-list")

    def detail_url(self, product):
        return reverse("marketplace:product-detail", kwargs={"pk": product.id})

    def test_list_only_available_products_newest_first(self):
        newer = ProductFactory(seller=self.seller, category=self.category)
        ProductFactory(seller=self.seller, is_available=False)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [item["id"] for item in response.data]
        self.assertEqual(ids, [newer.id, self.product.id])

    def test_list_filters_by_category_name_and_id(self):
        ProductFactory(seller=self.seller, category=CategoryFactory(name="Electronics"))

        by_name = self.client.get(self.list_url, {"category": "books"})
        by_id = self.client.get(self.list_url, {"category": str(self.category.id)})

        self.assertEqual([item["id"] for item in by_name.data], [self.product.id])
        self.assertEqual([item["id"] for item in by_id.data], [self.product.id])

    def test_retrieve_increments_view_count(self):
        response = self.client.get(self.detail_url(self.product))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["view_count"], 1)
        self.product.refresh_from_db()
        self.assertEqual(self.product.view_count, 1)

    def test_retrieve_missing_product_returns_404(self):
        response = self.client.get(reverse("marketplace:product-detail", kwargs={"pk": 99999}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("detail", response.data)

    def test_primary_image_falls_back_to_placeholder(self):
        response = self.client.get(self.detail_url(self.product))
        self.assertEqual(response.data["primary_image"], "https://img.campus.test/placeholder.png")

    def test_primary_image_uses_first_image_when_none_flagged(self):
        first = ProductImageFactory(product=self.product, order=0)
        ProductImageFactory(product=self.product, order=1)

        response = self.client.get(self.detail_url(self.product))

        self.assertEqual(response.data["primary_image"], first.image_url)

    def test_search_matches_name_and_description(self):
        ProductFactory(seller=self.seller, name="Desk lamp", description="Bright LED lamp")

        response = self.client.get(reverse("marketplace:product-search"), {"q": "CALCULUS"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [self.product.id])

    def test_search_without_query_returns_400(self):
        response = self.client.get(reverse("marketplace:product-search"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_seller_products_filter_by_availability(self):
        removed = ProductFactory(seller=self.seller, is_available=False)
        url = reverse("marketplace:product-seller-products", kwargs={"seller_id": self.seller.id})

        everything = self.client.get(url)
        only_removed = self.client.get(url, {"available": "false"})

        self.assertEqual(len(everything.data), 2)
        self.assertEqual([item["id"] for item in only_removed.data], [removed.id])

    def test_seller_products_with_malformed_seller_id_returns_400(self):
        url = reverse("marketplace:product-seller-products", kwargs={"seller_id": "not-a-uuid"})

        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_like_endpoints_with_non_numeric_id_return_404(self):
        self.client.force_authenticate(user=self.buyer)

        liked = self.client.get(reverse("marketplace:product-liked", kwargs={"pk": "abc"}))
        like = self.client.post(reverse("marketplace:product-like", kwargs={"pk": "abc"}))

        self.assertEqual(liked.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(like.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_product_marks_first_image_primary(self):
        self.client.force_authenticate(user=self.seller)
        payload = {
            "name": "Graphing calculator",
            "description": "TI-84, works fine",
            "price": "40.00",
            "category": self.category.id,
            "images": [{"imageUrl": "https://img.campus.test/a.jpg"}, {"imageUrl": "https://img.campus.test/b.jpg"}],
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["seller"]["id"], str(self.seller.id))
        self.assertEqual(response.data["listing_type"], "for_sale")
        primaries = [image["is_primary"] for image in response.data["images"]]
        self.assertEqual(primaries, [True, False])
        self.assertEqual(response.data["primary_image"], "https://img.campus.test/a.jpg")

    def test_create_product_keeps_flagged_primary(self):
        self.client.force_authenticate(user=self.seller)
        payload = {
            "name": "Bike",
            "description": "City bike",
            "price": "80.00",
            "images": [
                {"image_url": "https://img.campus.test/a.jpg"},
                {"image_url": "https://img.campus.test/b.jpg", "is_primary": True},
            ],
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["primary_image"], "https://img.campus.test/b.jpg")

    def test_create_trade_only_product_stores_null_price(self):
        self.client.force_authenticate(user=self.seller)
        payload = {"name": "Poster", "description": "Band poster", "price": "5.00", "tradeOnly": True}

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data["price"])
        self.assertEqual(response.data["listing_type"], "trade_only")

    def test_create_for_sale_product_requires_price(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.post(self.list_url, {"name": "Chair", "description": "Wooden"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_requires_authentication(self):
        response = self.client.post(self.list_url, {"name": "Chair", "description": "Wooden"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_owner_can_update_and_replace_images(self):
        ProductImageFactory(product=self.product, is_primary=True)
        self.client.force_authenticate(user=self.seller)

        response = self.client.patch(
            self.detail_url(self.product),
            {"price": "30.00", "images": [{"image_url": "https://img.campus.test/new.jpg"}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["price"], "30.00")
        self.assertEqual(self.product.images.count(), 1)
        self.assertEqual(response.data["primary_image"], "https://img.campus.test/new.jpg")

    def test_non_owner_cannot_update(self):
        self.client.force_authenticate(user=self.buyer)
        response = self.client.patch(self.detail_url(self.product), {"price": "1.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_destroy_soft_removes_and_drops_likes(self):
        ProductLikeFactory(product=self.product, user=self.buyer)
        self.client.force_authenticate(user=self.seller)

        response = self.client.delete(self.detail_url(self.product))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.product.refresh_from_db()
        self.assertFalse(self.product.is_available)
        self.assertTrue(Product.objects.filter(id=self.product.id).exists())
        self.assertFalse(ProductLike.objects.filter(product=self.product).exists())

    def test_like_toggles_and_recounts(self):
        self.client.force_authenticate(user=self.buyer)
        like_url = reverse("marketplace:product-like", kwargs={"pk": self.product.id})
        liked_url = reverse("marketplace:product-liked", kwargs={"pk": self.product.id})

        first = self.client.post(like_url)
        self.assertEqual(first.data, {"liked": True, "like_count": 1})
        self.assertEqual(self.client.get(liked_url).data, {"liked": True})

        second = self.client.post(like_url)
        self.assertEqual(second.data, {"liked": False, "like_count": 0})
        self.assertEqual(self.client.get(liked_url).data, {"liked": False})

    def test_like_count_matches_stored_likes(self):
        for _ in range(3):
            user = UserFactory()
            self.client.force_authenticate(user=user)
            self.client.post(reverse("marketplace:product-like", kwargs={"pk": self.product.id}))

        self.product.refresh_from_db()
        self.assertEqual(self.product.like_count, 3)
        self.assertEqual(ProductLike.objects.filter(product=self.product).count(), 3)


class CategoryViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.list_url = reverse("marketplace:category-list")

    def test_anyone_can_list_categories(self):
        CategoryFactory(name="Books")
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["name"], "Books")

    def test_regular_user_cannot_create_category(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.post(self.list_url, {"name": "Furniture"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_create_category(self):
        self.client.force_authenticate(user=AdminFactory())
        response = self.client.post(self.list_url, {"name": "Furniture", "description": "Desks"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["name"], "Furniture")
