# products/models/favorite.py

import uuid

from django.conf import settings
from django.db import models

from .product import Product


class Favorite(models.Model):
    """
    A product bookmarked by a user ("heart" on the storefront).
    One row per (user, product).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorites",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="favorites",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"],
                name="unique_favorite_per_user",
            )
        ]

    def __str__(self):
        return f"{self.user} ♥ {self.product.name}"
