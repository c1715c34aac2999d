# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: admin read/write representation (dashboard CRUD).
  Accepts JSON or multipart; files under "uploaded_images" are pushed to
  object storage and their public URLs are appended to images.
- ProductListSerializer: compact dashboard table rows.
- PublicProductSerializer: storefront read-only view (no admin fields).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from rest_framework import serializers

from products.models import Product
from products.services.storage import upload_images

logger = logging.getLogger(__name__)


class ProductSerializer(serializers.ModelSerializer):
    ingredients = serializers.ListField(
        child=serializers.CharField(allow_blank=True, max_length=255),
        required=False,
    )
    images = serializers.ListField(
        child=serializers.URLField(max_length=500),
        required=False,
    )
    uploaded_images = serializers.ListField(
        child=serializers.FileField(allow_empty_file=False, use_url=False),
        write_only=True,
        required=False,
    )

    # Form input reads a missing checkbox as False.
    is_active = serializers.BooleanField(default=True)

    stock_level = serializers.CharField(read_only=True)
    discount_percent = serializers.IntegerField(read_only=True, allow_null=True)
    primary_image = serializers.CharField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "original_price",
            "discount_percent",
            "category",
            "stock",
            "stock_level",
            "rating",
            "ingredients",
            "images",
            "primary_image",
            "uploaded_images",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "stock_level",
            "discount_percent",
            "primary_image",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "category": {"required": True},
        }

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_description(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Description is required")
        return value

    def validate_price(self, value):
        if value is None or value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value

    def validate_original_price(self, value):
        if value is not None and value <= Decimal("0"):
            raise serializers.ValidationError("Original price must be greater than zero")
        return value

    def validate_ingredients(self, value):
        return [item.strip() for item in value if item and item.strip()]

    # -----------------------------
    # CREATE / UPDATE
    # -----------------------------
    def _upload(self, files) -> list[str]:
        if not files:
            return []
        return upload_images(files, bucket=settings.OBJECT_STORAGE["PRODUCT_IMAGES_BUCKET"])

    def create(self, validated_data):
        files = validated_data.pop("uploaded_images", [])

        # Upload before any DB write.
        urls = self._upload(files)
        validated_data["images"] = list(validated_data.get("images") or []) + urls

        with transaction.atomic():
            product = Product.objects.create(**validated_data)

        logger.info("Product %s created with %d image(s)", product.pk, len(product.images))
        return product

    def update(self, instance, validated_data):
        files = validated_data.pop("uploaded_images", [])
        if "is_active" not in self.initial_data:
            validated_data.pop("is_active", None)
        urls = self._upload(files)

        if urls:
            base = validated_data.get("images", instance.images) or []
            validated_data["images"] = list(base) + urls

        with transaction.atomic():
            product = super().update(instance, validated_data)

        logger.info("Product %s updated", product.pk)
        return product


class ProductListSerializer(serializers.ModelSerializer):
    stock_level = serializers.CharField(read_only=True)
    primary_image = serializers.CharField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "category",
            "stock",
            "stock_level",
            "is_active",
            "created_at",
            "primary_image",
        ]
        read_only_fields = fields


class PublicProductSerializer(serializers.ModelSerializer):
    """
    Storefront representation.

    is_favorite reads a set of product ids from context["favorite_ids"]
    (empty for anonymous visitors).
    """

    discount_percent = serializers.IntegerField(read_only=True, allow_null=True)
    primary_image = serializers.CharField(read_only=True)
    in_stock = serializers.SerializerMethodField()
    is_favorite = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "original_price",
            "discount_percent",
            "category",
            "rating",
            "ingredients",
            "images",
            "primary_image",
            "in_stock",
            "is_favorite",
        ]
        read_only_fields = fields

    def get_in_stock(self, obj) -> bool:
        return int(obj.stock or 0) > 0

    def get_is_favorite(self, obj) -> bool:
        return obj.pk in self.context.get("favorite_ids", set())
