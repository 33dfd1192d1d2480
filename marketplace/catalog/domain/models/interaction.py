from django.conf import settings
from django.db import models

from .catalog import Product


class ProductLike(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="likes")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="product_likes")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ["product", "user"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.user_id} likes {self.product_id}"
