from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    reviewer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews_written")
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews_received")
    product = models.ForeignKey(
        "marketplace.Product", on_delete=models.SET_NULL, null=True, blank=True, related_name="reviews"
    )
    order = models.OneToOneField(
        "marketplace.Order", on_delete=models.SET_NULL, null=True, blank=True, related_name="review"
    )
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["seller", "-created_at"], name="review_seller_recent_idx"),
            models.Index(fields=["reviewer", "-created_at"], name="review_reviewer_recent_idx"),
        ]

    def __str__(self):
        return f"Review by {self.reviewer_id} for {self.seller_id} ({self.rating})"
