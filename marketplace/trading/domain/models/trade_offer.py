from decimal import Decimal

from django.conf import settings
from django.db import models


class TradeOffer(models.Model):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (ACCEPTED, "Accepted"),
        (REJECTED, "Rejected"),
        (WITHDRAWN, "Withdrawn"),
    ]

    # target status -> party allowed to set it; only PENDING offers move
    TRANSITIONS = {
        PENDING: {ACCEPTED: "seller", REJECTED: "seller", WITHDRAWN: "offerer"},
        ACCEPTED: {},
        REJECTED: {},
        WITHDRAWN: {},
    }

    product = models.ForeignKey("marketplace.Product", on_delete=models.CASCADE, related_name="trade_offers")
    offerer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="trade_offers")

    offered_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    trade_description = models.TextField(blank=True)

    # Item offered in exchange
    item_name = models.CharField(max_length=255, blank=True)
    item_estimated_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    item_condition = models.CharField(max_length=50, blank=True)
    item_image_url = models.TextField(blank=True)
    cash_component = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["offerer", "-created_at"], name="tradeoffer_offerer_recent_idx"),
            models.Index(fields=["product", "status"], name="tradeoffer_product_status_idx"),
        ]

    @staticmethod
    def normalize_status(value) -> str:
        return (value or "").strip().upper()

    @property
    def seller_id(self):
        return self.product.seller_id

    @property
    def is_final(self) -> bool:
        return self.status != self.PENDING

    def is_party(self, user) -> bool:
        return user.id in (self.offerer_id, self.seller_id)

    def role_of(self, user):
        if user.id == self.seller_id:
            return "seller"
        if user.id == self.offerer_id:
            return "offerer"
        return None

    def can_transition(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, {})

    def can_actor_transition(self, user, new_status: str) -> bool:
        required = self.TRANSITIONS.get(self.status, {}).get(new_status)
        return required is not None and required == self.role_of(user)

    def available_actions(self, user):
        """Accept/Reject for the seller and Withdraw for the offerer while pending; Delete once final."""
        role = self.role_of(user)
        if role is None:
            return []
        if self.is_final:
            return [{"label": "Delete", "status": None}]
        labels = {self.ACCEPTED: "Accept", self.REJECTED: "Reject", self.WITHDRAWN: "Withdraw"}
        return [
            {"label": labels[target], "status": target}
            for target, required in self.TRANSITIONS[self.status].items()
            if required == role
        ]

    def __str__(self):
        return f"TradeOffer {self.id} on {self.product_id} ({self.status})"
