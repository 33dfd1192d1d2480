from rest_framework import serializers

from notifications.domain.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    recipient = serializers.UUIDField(source="recipient_id", read_only=True)
    recipient_name = serializers.CharField(source="recipient.display_name", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "recipient",
            "recipient_name",
            "type",
            "title",
            "message",
            "related_id",
            "related_type",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields


class UnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class BulkResultSerializer(serializers.Serializer):
    updated = serializers.IntegerField(required=False)
    deleted = serializers.IntegerField(required=False)
