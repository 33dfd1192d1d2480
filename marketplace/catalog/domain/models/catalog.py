from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from .category import Category


class Product(models.Model):
    CONDITION_CHOICES = [
        ("new", "New"),
        ("like_new", "Like New"),
        ("good", "Good"),
        ("fair", "Fair"),
        ("poor", "Poor"),
    ]

    LISTING_FOR_SALE = "for_sale"
    LISTING_TRADE_ONLY = "trade_only"

    # Basic Information
    name = models.CharField(max_length=255)
    description = models.TextField()
    brand_type = models.CharField(max_length=100, blank=True)
    condition = models.CharField(max_length=50, choices=CONDITION_CHOICES, blank=True)
    contact_info = models.TextField(blank=True)

    # Seller and Category
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name="products")

    # Pricing and Inventory; trade-only listings carry no price
    price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    stock = models.PositiveIntegerField(default=1)

    # Status
    trade_only = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)

    # Metrics
    view_count = models.PositiveIntegerField(default=0)
    like_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["is_available", "-created_at"], name="product_available_recent_idx"),
            models.Index(fields=["seller", "is_available"], name="product_seller_available_idx"),
            models.Index(fields=["category", "is_available"], name="product_category_avail_idx"),
        ]

    @property
    def listing_type(self) -> str:
        return self.LISTING_TRADE_ONLY if self.trade_only else self.LISTING_FOR_SALE

    def get_primary_image(self):
        """Primary-flagged image, else the first one, else None."""
        images = list(self.images.all())
        for image in images:
            if image.is_primary:
                return image
        return images[0] if images else None

    def __str__(self):
        return self.name


class ProductImage(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    # Remote URL, storage URL or an inline data URL
    image_url = models.TextField()
    is_primary = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order", "id"]
        app_label = "marketplace"

    def __str__(self):
        return f"Image {self.order} of {self.product_id}"
