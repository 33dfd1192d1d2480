"""
CatalogService - products, images and likes.

Listing queries only ever return available products; a removed product keeps
its row (and its order history) with ``is_available=False``.
"""

from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import F, Q

from marketplace.infra.observability.metrics import product_likes_total
from marketplace.models import Category, Product, ProductImage, ProductLike
from utils.rbac import is_user_id

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


User = get_user_model()

PRODUCT_FIELDS = (
    "name",
    "description",
    "price",
    "brand_type",
    "condition",
    "contact_info",
    "stock",
    "trade_only",
    "is_available",
)

PRICE_REQUIRED = "Price is required unless the product is trade-only"


class CatalogService(BaseService):
    """
    Service for the product catalog.

    Responsibilities:
    - Browse, filter and search available products
    - Create, update and soft-remove products (owner only)
    - Keep the primary-image invariant on image sets
    - Toggle likes and keep ``like_count`` equal to the stored likes
    """

    def _base_queryset(self):
        return Product.objects.select_related("seller", "seller__profile", "category").prefetch_related("images")

    @BaseService.log_performance
    def list_products(self, category: Optional[str] = None) -> ServiceResult:
        queryset = self._base_queryset().filter(is_available=True)
        if category:
            if str(category).isdigit():
                queryset = queryset.filter(category_id=int(category))
            else:
                queryset = queryset.filter(category__name__iexact=category)
        return service_ok(queryset.order_by("-created_at", "-id"))

    @BaseService.log_performance
    def get_product(self, product_id, track_view: bool = True) -> ServiceResult[Product]:
        """
        Get product details by ID.

        Args:
            product_id: Product primary key
            track_view: Whether to increment ``view_count`` (default: True)
        """
        try:
            product = self._base_queryset().get(id=product_id)
        except (Product.DoesNotExist, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        if track_view:
            Product.objects.filter(id=product.id).update(view_count=F("view_count") + 1)
            product.view_count += 1

        return service_ok(product)

    @BaseService.log_performance
    def list_seller_products(self, seller_id, available: Optional[bool] = None) -> ServiceResult:
        if not is_user_id(seller_id):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid seller id '{seller_id}'")
        queryset = self._base_queryset().filter(seller_id=seller_id)
        if available is not None:
            queryset = queryset.filter(is_available=available)
        return service_ok(queryset.order_by("-created_at", "-id"))

    @BaseService.log_performance
    def search_products(self, query: str) -> ServiceResult:
        """Case-insensitive match on name or description among available products."""
        query = (query or "").strip()
        if not query:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Search query is required")

        queryset = self._base_queryset().filter(is_available=True).filter(
            Q(name__icontains=query) | Q(description__icontains=query)
        )
        return service_ok(queryset.order_by("-created_at", "-id"))

    @BaseService.log_performance
    @transaction.atomic
    def create_product(self, seller, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Create a listing owned by ``seller``.

        Args:
            seller: The authenticated user; never taken from the payload
            data: Validated product fields, optionally ``category`` and
                  ``images`` as ``[{"image_url": ..., "is_primary": bool}]``

        Example:
            >>> result = catalog_service.create_product(
            ...     seller=user,
            ...     data={"name": "Calculus textbook", "description": "8th edition",
            ...           "price": Decimal("25.00"), "images": [{"image_url": "https://..."}]},
            ... )
        """
        fields = {field: data[field] for field in PRODUCT_FIELDS if field in data}
        if fields.get("trade_only"):
            fields["price"] = None
        elif fields.get("price") is None:
            return service_err(ErrorCodes.VALIDATION_ERROR, PRICE_REQUIRED)

        product = Product.objects.create(seller=seller, category=data.get("category"), **fields)
        self._replace_images(product, data.get("images") or [])

        self.logger.info(f"Created product {product.id} ({product.listing_type}) for seller {seller.id}")
        return service_ok(product)

    @BaseService.log_performance
    @transaction.atomic
    def update_product(self, product_id, user, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Update an existing product (owner only).

        ``images``, when present, replaces the whole image set.
        """
        try:
            product = Product.objects.select_for_update().get(id=product_id)
        except (Product.DoesNotExist, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        if product.seller_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only edit your own products")

        updated_fields = []
        for field in PRODUCT_FIELDS:
            if field in data:
                setattr(product, field, data[field])
                updated_fields.append(field)

        if "category" in data:
            product.category = data["category"]
            updated_fields.append("category")

        if product.trade_only and product.price is not None:
            product.price = None
            updated_fields.append("price")
        elif not product.trade_only and product.price is None:
            return service_err(ErrorCodes.VALIDATION_ERROR, PRICE_REQUIRED)

        if updated_fields:
            product.save(update_fields=list(set(updated_fields)) + ["updated_at"])

        if "images" in data:
            self._replace_images(product, data["images"] or [])

        self.logger.info(f"Updated product {product.id}, fields={updated_fields}")
        return service_ok(product)

    @BaseService.log_performance
    @transaction.atomic
    def delete_product(self, product_id, user) -> ServiceResult[bool]:
        """
        Remove a product from the catalog (owner only).

        Soft removal: the row stays for order and review history, likes are dropped.
        """
        try:
            product = Product.objects.select_for_update().get(id=product_id)
        except (Product.DoesNotExist, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        if product.seller_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own products")

        ProductLike.objects.filter(product=product).delete()
        product.is_available = False
        product.like_count = 0
        product.save(update_fields=["is_available", "like_count", "updated_at"])

        self.logger.info(f"Soft deleted product {product.id}")
        return service_ok(True)

    @BaseService.log_performance
    @transaction.atomic
    def toggle_like(self, product_id, user) -> ServiceResult[Dict[str, Any]]:
        """Like or unlike ``product_id`` for ``user`` and return the fresh count."""
        try:
            product = Product.objects.select_for_update().get(id=product_id)
        except (Product.DoesNotExist, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        deleted, _ = ProductLike.objects.filter(product=product, user=user).delete()
        liked = not deleted
        if liked:
            try:
                with transaction.atomic():
                    ProductLike.objects.create(product=product, user=user)
            except IntegrityError:
                self.logger.info(f"Concurrent like for product {product.id} by {user.id}")

        product.like_count = ProductLike.objects.filter(product=product).count()
        product.save(update_fields=["like_count"])

        product_likes_total.labels(action="like" if liked else "unlike").inc()
        return service_ok({"liked": liked, "like_count": product.like_count})

    @BaseService.log_performance
    def is_liked(self, product_id, user) -> ServiceResult[bool]:
        if not str(product_id).isdigit() or not Product.objects.filter(id=product_id).exists():
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        return service_ok(ProductLike.objects.filter(product_id=product_id, user=user).exists())

    @BaseService.log_performance
    def list_categories(self) -> ServiceResult[List[Category]]:
        return service_ok(list(Category.objects.order_by("name")))

    def _replace_images(self, product: Product, images: List[Dict[str, Any]]) -> None:
        """
        Store ``images`` in order, making exactly one of them primary.

        The first flagged image wins; with no flag the first image is primary.
        """
        product.images.all().delete()
        urls = [image for image in images if image.get("image_url")]
        if not urls:
            return

        primary_index = next((index for index, image in enumerate(urls) if image.get("is_primary")), 0)
        ProductImage.objects.bulk_create(
            [
                ProductImage(
                    product=product,
                    image_url=image["image_url"],
                    is_primary=index == primary_index,
                    order=index,
                )
                for index, image in enumerate(urls)
            ]
        )
