from decimal import Decimal

from django.conf import settings
from django.db import models


class Order(models.Model):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    READY_FOR_PICKUP = "ready_for_pickup"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (CONFIRMED, "Confirmed"),
        (READY_FOR_PICKUP, "Ready for Pickup"),
        (COMPLETED, "Completed"),
        (CANCELLED, "Cancelled"),
    ]

    # Allowed next states; anything missing here is terminal
    TRANSITIONS = {
        PENDING: (CONFIRMED, CANCELLED),
        CONFIRMED: (READY_FOR_PICKUP, CANCELLED),
        READY_FOR_PICKUP: (COMPLETED, CANCELLED),
        COMPLETED: (),
        CANCELLED: (),
    }

    # (label, target status) offered to each party
    SELLER_ACTIONS = {
        PENDING: (("Confirm", CONFIRMED), ("Cancel", CANCELLED)),
        CONFIRMED: (("Mark Ready", READY_FOR_PICKUP), ("Cancel", CANCELLED)),
        READY_FOR_PICKUP: (("Mark Completed", COMPLETED), ("Cancel", CANCELLED)),
    }
    BUYER_ACTIONS = {
        PENDING: (("Cancel", CANCELLED),),
    }

    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sales")
    product = models.ForeignKey("marketplace.Product", on_delete=models.CASCADE, related_name="orders")

    # Order Details
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    quantity = models.PositiveIntegerField(default=1)
    status = models.CharField(max_length=50, choices=STATUS_CHOICES, default=PENDING)

    # Pickup
    payment_method = models.CharField(max_length=50, blank=True)
    pickup_location = models.CharField(max_length=255, blank=True)
    delivery_notes = models.TextField(blank=True)
    cancellation_reason = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["buyer", "-created_at"], name="order_buyer_recent_idx"),
            models.Index(fields=["seller", "-created_at"], name="order_seller_recent_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    @property
    def is_terminal(self) -> bool:
        return not self.TRANSITIONS.get(self.status)

    def is_party(self, user) -> bool:
        return user.id in (self.buyer_id, self.seller_id)

    def can_transition(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, ())

    def can_actor_transition(self, user, new_status: str) -> bool:
        """Whether ``user`` may move this order to ``new_status`` right now."""
        return any(target == new_status for _, target in self.actions_for(user))

    def actions_for(self, user):
        if user.id == self.seller_id:
            return self.SELLER_ACTIONS.get(self.status, ())
        if user.id == self.buyer_id:
            return self.BUYER_ACTIONS.get(self.status, ())
        return ()

    def available_actions(self, user):
        return [{"label": label, "status": target} for label, target in self.actions_for(user)]

    def __str__(self):
        return f"Order {self.id} - {self.product_id} ({self.status})"
