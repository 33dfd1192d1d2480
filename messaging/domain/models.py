from django.conf import settings
from django.db import models


class Message(models.Model):
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages")
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_messages"
    )
    # Null for general inquiries not tied to a listing
    product = models.ForeignKey(
        "marketplace.Product", on_delete=models.SET_NULL, null=True, blank=True, related_name="messages"
    )

    # Content; at least one of the two is set
    content = models.TextField(blank=True)
    image_url = models.TextField(blank=True)

    # Meta
    is_read = models.BooleanField(default=False)
    is_deleted = models.BooleanField(default=False)
    is_archived = models.BooleanField(default=False)
    is_muted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        app_label = "messaging"
        indexes = [
            models.Index(fields=["sender", "receiver", "created_at"], name="message_pair_recent_idx"),
            models.Index(fields=["receiver", "is_read"], name="message_receiver_unread_idx"),
        ]

    @property
    def kind(self) -> str:
        return "text" if self.content else "image"

    def __str__(self):
        return f"Message {self.id} from {self.sender_id} to {self.receiver_id}"


class ConversationReport(models.Model):
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="conversation_reports"
    )
    reported_user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reports_received"
    )
    product = models.ForeignKey(
        "marketplace.Product", on_delete=models.SET_NULL, null=True, blank=True, related_name="conversation_reports"
    )
    reason = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "messaging"
        indexes = [
            models.Index(fields=["-created_at"], name="report_recent_idx"),
        ]

    def __str__(self):
        return f"Report {self.id} by {self.reporter_id} on {self.reported_user_id}"
