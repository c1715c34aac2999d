# products/serializers/favorite.py

from rest_framework import serializers


class FavoriteToggleSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(read_only=True)
    is_favorite = serializers.BooleanField(read_only=True)
