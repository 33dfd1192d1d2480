from rest_framework import serializers

from authentication.api.serializers import PublicUserSerializer
from marketplace.catalog.api.serializers import ProductSummarySerializer
from marketplace.models import TradeOffer


class TradeOfferSerializer(serializers.ModelSerializer):
    offerer = PublicUserSerializer(read_only=True)
    product = ProductSummarySerializer(read_only=True)
    seller = PublicUserSerializer(source="product.seller", read_only=True)
    available_actions = serializers.SerializerMethodField()

    class Meta:
        model = TradeOffer
        fields = [
            "id",
            "product",
            "seller",
            "offerer",
            "offered_price",
            "trade_description",
            "item_name",
            "item_estimated_value",
            "item_condition",
            "item_image_url",
            "cash_component",
            "status",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_available_actions(self, obj):
        request = self.context.get("request")
        if request is None:
            return []
        return obj.available_actions(request.user)


class TradeOfferCreateSerializer(serializers.Serializer):
    product = serializers.IntegerField()
    offered_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    trade_description = serializers.CharField(required=False, allow_blank=True)
    item_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    item_estimated_value = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    item_condition = serializers.CharField(max_length=50, required=False, allow_blank=True)
    item_image_url = serializers.CharField(required=False, allow_blank=True)
    cash_component = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class TradeOfferStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)
