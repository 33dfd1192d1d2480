from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models.signals import post_save
from django.dispatch import receiver

from .user import CustomUser


class Profile(models.Model):
    ACADEMIC_LEVEL_CHOICES = [
        ("freshman", "Freshman"),
        ("sophomore", "Sophomore"),
        ("junior", "Junior"),
        ("senior", "Senior"),
        ("graduate", "Graduate"),
        ("faculty", "Faculty"),
        ("staff", "Staff"),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")

    phone_number = models.CharField(max_length=20, blank=True, default="")
    instagram_handle = models.CharField(max_length=50, blank=True, default="")
    academic_level = models.CharField(max_length=20, choices=ACADEMIC_LEVEL_CHOICES, blank=True, default="")
    bio = models.TextField(blank=True, default="", max_length=500)
    profile_picture = models.CharField(max_length=500, blank=True, default="", help_text="Storage URL of the picture")

    # Seller reputation, recomputed from reviews by SellerRatingService
    seller_rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    total_reviews = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"

    def __str__(self):
        return f"{self.user.email}'s Profile"


@receiver(post_save, sender=CustomUser)
def create_user_profile(sender, instance, created, **kwargs):
    if created:
        Profile.objects.get_or_create(user=instance)
