# products/views/__init__.py

"""
Products views package exports.
"""

from .favorite import FavoriteListView, FavoriteToggleView
from .product import ProductViewSet

__all__ = [
    "FavoriteListView",
    "FavoriteToggleView",
    "ProductViewSet",
]
