from rest_framework import serializers

from authentication.api.serializers import PublicUserSerializer
from marketplace.catalog.api.serializers import ProductSummarySerializer
from marketplace.models import Order


class OrderActionSerializer(serializers.Serializer):
    label = serializers.CharField()
    status = serializers.CharField()


class OrderSerializer(serializers.ModelSerializer):
    """
    Order as seen by one of its parties.

    ``available_actions`` and ``counterpart_name`` depend on the requesting
    user, passed in the serializer context.
    """

    buyer = PublicUserSerializer(read_only=True)
    seller = PublicUserSerializer(read_only=True)
    product = ProductSummarySerializer(read_only=True)
    counterpart_name = serializers.SerializerMethodField()
    available_actions = serializers.SerializerMethodField()
    has_review = serializers.SerializerMethodField()
    review_id = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "buyer",
            "seller",
            "product",
            "quantity",
            "total_amount",
            "status",
            "payment_method",
            "pickup_location",
            "delivery_notes",
            "cancellation_reason",
            "counterpart_name",
            "available_actions",
            "has_review",
            "review_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def _viewer(self):
        request = self.context.get("request")
        return getattr(request, "user", None)

    def _review(self, obj):
        return getattr(obj, "review", None)

    def get_counterpart_name(self, obj):
        viewer = self._viewer()
        if viewer is None:
            return None
        return obj.seller.display_name if viewer.id == obj.buyer_id else obj.buyer.display_name

    def get_available_actions(self, obj):
        viewer = self._viewer()
        return obj.available_actions(viewer) if viewer is not None else []

    def get_has_review(self, obj) -> bool:
        return self._review(obj) is not None

    def get_review_id(self, obj):
        review = self._review(obj)
        return review.id if review else None


class OrderCreateSerializer(serializers.Serializer):
    product = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
    pickup_location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    delivery_notes = serializers.CharField(required=False, allow_blank=True)


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=50)
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)
