from django.conf import settings
from rest_framework import serializers

from authentication.api.serializers import PublicUserSerializer
from marketplace.models import Category, Product, ProductImage


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ["id", "image_url", "is_primary", "order"]


class ProductImageInputSerializer(serializers.Serializer):
    image_url = serializers.CharField()
    is_primary = serializers.BooleanField(default=False)


def primary_image_url(product) -> str:
    """Primary image, else the first image, else the placeholder."""
    image = product.get_primary_image()
    return image.image_url if image else settings.PLACEHOLDER_IMAGE_URL


class ProductSummarySerializer(serializers.ModelSerializer):
    """Compact product card embedded in orders, offers and conversations."""

    primary_image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ["id", "name", "price", "trade_only", "is_available", "primary_image"]

    def get_primary_image(self, obj) -> str:
        return primary_image_url(obj)


class ProductSerializer(serializers.ModelSerializer):
    seller = PublicUserSerializer(read_only=True)
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    images = ProductImageSerializer(many=True, read_only=True)
    primary_image = serializers.SerializerMethodField()
    listing_type = serializers.ReadOnlyField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "category",
            "category_name",
            "brand_type",
            "condition",
            "contact_info",
            "stock",
            "trade_only",
            "listing_type",
            "is_available",
            "view_count",
            "like_count",
            "seller",
            "images",
            "primary_image",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_primary_image(self, obj) -> str:
        return primary_image_url(obj)


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), required=False, allow_null=True)
    brand_type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    condition = serializers.ChoiceField(choices=Product.CONDITION_CHOICES, required=False, allow_blank=True)
    contact_info = serializers.CharField(required=False, allow_blank=True)
    stock = serializers.IntegerField(min_value=0, required=False)
    trade_only = serializers.BooleanField(required=False)
    is_available = serializers.BooleanField(required=False)
    images = ProductImageInputSerializer(many=True, required=False)


class LikeStatusSerializer(serializers.Serializer):
    liked = serializers.BooleanField()
    like_count = serializers.IntegerField(required=False)
