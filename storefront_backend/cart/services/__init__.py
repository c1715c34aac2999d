from .cart_service import (
    SkippedItem,
    add_item,
    clear_cart,
    get_cart,
    merge_items,
    remove_item,
    update_quantity,
)
from .exceptions import (
    CartError,
    InsufficientStockError,
    InvalidQuantityError,
    ProductUnavailableError,
)

__all__ = [
    "CartError",
    "InsufficientStockError",
    "InvalidQuantityError",
    "ProductUnavailableError",
    "SkippedItem",
    "add_item",
    "clear_cart",
    "get_cart",
    "merge_items",
    "remove_item",
    "update_quantity",
]
