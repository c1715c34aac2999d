"""
PATH: cart/models/cart.py

CART MODEL

- Exactly one cart per user (created lazily on first access).
- Lines live in CartItem; prices are always read from the product,
  so totals follow the current catalog price.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="cart",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]

    def lines(self):
        return self.items.select_related("product").order_by("created_at")

    @property
    def total_items(self) -> int:
        return sum(int(item.quantity) for item in self.lines())

    @property
    def total_price(self) -> Decimal:
        total = sum((item.line_total for item in self.lines()), Decimal("0.00"))
        return total.quantize(Decimal("0.01"))

    def __str__(self):
        return f"Cart {self.id} | {self.user}"
