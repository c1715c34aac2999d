# products/models/product.py

import uuid
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Product(models.Model):
    """
    Represents a sellable product of the storefront catalog.

    STOCK MODEL:
    - stock is a plain unit count kept on the product (admin-managed)
    - stock_level is derived for dashboard badges (high / medium / low)

    MEDIA:
    - images holds public object-storage URLs, first one is the cover image
    """

    class Category(models.TextChoices):
        PREMIUM = "premium", "Premium"
        SIGNATURE = "signature", "Signature"
        GOURMET = "gourmet", "Gourmet"
        LUXE = "luxe", "Luxe"

    class StockLevel(models.TextChoices):
        HIGH = "high", "High"
        MEDIUM = "medium", "Medium"
        LOW = "low", "Low"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField()

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    # Strike-through price shown next to a promotion
    original_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.PREMIUM,
        db_index=True,
    )

    stock = models.PositiveIntegerField(default=100)

    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("4.5"),
        validators=[
            MinValueValidator(Decimal("0.0")),
            MaxValueValidator(Decimal("5.0")),
        ],
    )

    ingredients = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="product_active_category_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.category})"

    def clean(self):
        if self.price is None or Decimal(self.price) <= 0:
            raise ValidationError({"price": "Price must be greater than zero"})

        if self.original_price is not None and Decimal(self.original_price) <= 0:
            raise ValidationError(
                {"original_price": "Original price must be greater than zero"}
            )

        if not isinstance(self.ingredients, list) or not all(
            isinstance(i, str) for i in self.ingredients
        ):
            raise ValidationError({"ingredients": "ingredients must be a list of strings"})

        if not isinstance(self.images, list) or not all(
            isinstance(i, str) for i in self.images
        ):
            raise ValidationError({"images": "images must be a list of URLs"})

    @property
    def stock_level(self) -> str:
        stock = int(self.stock or 0)
        if stock > settings.HIGH_STOCK_THRESHOLD:
            return self.StockLevel.HIGH
        if stock > settings.LOW_STOCK_THRESHOLD:
            return self.StockLevel.MEDIUM
        return self.StockLevel.LOW

    @property
    def discount_percent(self):
        """
        Whole percent off when original_price is above price, else None.
        """
        if self.original_price is None or self.price is None:
            return None

        original = Decimal(self.original_price)
        price = Decimal(self.price)
        if original <= price:
            return None

        pct = ((original - price) / original) * Decimal("100")
        return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else ""
