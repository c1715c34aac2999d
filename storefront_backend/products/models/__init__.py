"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .favorite import Favorite
from .product import Product

__all__ = [
    "Favorite",
    "Product",
]
