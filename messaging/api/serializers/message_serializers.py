from rest_framework import serializers

from authentication.api.serializers import PublicUserSerializer
from marketplace.catalog.api.serializers import ProductSummarySerializer
from messaging.domain.models import Message


class MessageSerializer(serializers.ModelSerializer):
    sender = PublicUserSerializer(read_only=True)
    receiver = PublicUserSerializer(read_only=True)
    product = serializers.IntegerField(source="product_id", read_only=True, allow_null=True)
    product_name = serializers.CharField(source="product.name", read_only=True, default=None)

    class Meta:
        model = Message
        fields = [
            "id",
            "sender",
            "receiver",
            "product",
            "product_name",
            "content",
            "image_url",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    receiver = serializers.UUIDField()
    product = serializers.IntegerField(required=False, allow_null=True)
    content = serializers.CharField(required=False, allow_blank=True, default="")
    image_url = serializers.CharField(required=False, allow_blank=True, default="")


class ConversationSerializer(serializers.Serializer):
    """Inbox entry for one (other user, product) conversation."""

    other_user = PublicUserSerializer()
    product = ProductSummarySerializer(allow_null=True)
    last_message = serializers.CharField()
    last_message_image = serializers.CharField()
    last_message_time = serializers.DateTimeField()
    last_message_sender = serializers.UUIDField()
    unread_count = serializers.IntegerField()
    is_archived = serializers.BooleanField()
    is_muted = serializers.BooleanField()


class ConversationTargetSerializer(serializers.Serializer):
    other_user = serializers.UUIDField()
    product = serializers.IntegerField(required=False, allow_null=True)


class ConversationFlagSerializer(ConversationTargetSerializer):
    value = serializers.BooleanField(default=True)


class MessageUnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class ConversationUpdateResultSerializer(serializers.Serializer):
    updated = serializers.IntegerField()


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField(write_only=True)
    image_url = serializers.CharField(read_only=True)
