from django.conf import settings
from django.db import models


class Notification(models.Model):
    MESSAGE = "MESSAGE"
    ORDER_PLACED = "ORDER_PLACED"
    ORDER_CONFIRMED = "ORDER_CONFIRMED"
    ORDER_READY = "ORDER_READY"
    ORDER_COMPLETED = "ORDER_COMPLETED"
    ORDER_CANCELLED = "ORDER_CANCELLED"
    TRADE_OFFER = "TRADE_OFFER"
    REVIEW = "REVIEW"
    PROMOTION = "PROMOTION"

    TYPE_CHOICES = [
        (MESSAGE, "Message"),
        (ORDER_PLACED, "Order Placed"),
        (ORDER_CONFIRMED, "Order Confirmed"),
        (ORDER_READY, "Order Ready"),
        (ORDER_COMPLETED, "Order Completed"),
        (ORDER_CANCELLED, "Order Cancelled"),
        (TRADE_OFFER, "Trade Offer"),
        (REVIEW, "Review"),
        (PROMOTION, "Promotion"),
    ]

    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    type = models.CharField(max_length=50, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    message = models.TextField()
    # Loose pointer to the order/offer/review/message this is about
    related_id = models.BigIntegerField(null=True, blank=True)
    related_type = models.CharField(max_length=50, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        app_label = "notifications"
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_unread_idx"),
            models.Index(fields=["recipient", "-created_at"], name="notif_recipient_recent_idx"),
        ]

    def __str__(self):
        return f"{self.type} for {self.recipient_id}: {self.title}"
