from rest_framework import serializers

from messaging.domain.models import ConversationReport


class ConversationReportSerializer(serializers.ModelSerializer):
    reporter = serializers.UUIDField(source="reporter_id", read_only=True)
    reported_user = serializers.UUIDField(source="reported_user_id")
    product = serializers.IntegerField(source="product_id", required=False, allow_null=True)

    class Meta:
        model = ConversationReport
        fields = ["id", "reporter", "reported_user", "product", "reason", "created_at"]
        read_only_fields = ["id", "reporter", "created_at"]
