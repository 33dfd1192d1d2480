from rest_framework import serializers

from authentication.api.serializers import PublicUserSerializer
from marketplace.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    reviewer = PublicUserSerializer(read_only=True)
    seller = serializers.UUIDField(source="seller_id", read_only=True)
    seller_name = serializers.CharField(source="seller.display_name", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True, default=None)

    class Meta:
        model = Review
        fields = [
            "id",
            "reviewer",
            "seller",
            "seller_name",
            "product",
            "product_name",
            "order",
            "rating",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    seller = serializers.UUIDField(required=False)
    product = serializers.IntegerField(required=False, allow_null=True)
    order = serializers.IntegerField(required=False, allow_null=True)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs.get("seller") is None and attrs.get("order") is None:
            raise serializers.ValidationError("Either seller or order is required")
        return attrs


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(required=False, allow_blank=True)


class SellerReviewPageSerializer(serializers.Serializer):
    reviews = ReviewSerializer(many=True)
    page = serializers.IntegerField()
    size = serializers.IntegerField()
    total = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    average_rating = serializers.DecimalField(max_digits=3, decimal_places=2)
    total_reviews = serializers.IntegerField()
