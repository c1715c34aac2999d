# cart/services/exceptions.py


class CartError(Exception):
    """Base class for cart rule violations."""

    code = "cart_error"


class ProductUnavailableError(CartError):
    code = "product_unavailable"


class InsufficientStockError(CartError):
    code = "insufficient_stock"

    def __init__(self, product, requested: int):
        self.product = product
        self.requested = requested
        self.available = int(product.stock or 0)
        super().__init__(
            f"Only {self.available} unit(s) of {product.name} available "
            f"(requested {requested})."
        )


class InvalidQuantityError(CartError):
    code = "invalid_quantity"
