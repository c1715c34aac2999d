# products/serializers/__init__.py

from .favorite import FavoriteToggleSerializer
from .product import ProductListSerializer, ProductSerializer, PublicProductSerializer

__all__ = [
    "FavoriteToggleSerializer",
    "ProductListSerializer",
    "ProductSerializer",
    "PublicProductSerializer",
]
