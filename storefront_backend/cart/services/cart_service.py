# cart/services/cart_service.py

"""
CART SERVICE

Purpose:
- Own every mutation of a user's cart (views stay thin).
- Enforce cart rules in one place:
    - only active products can be added
    - a line never exceeds product.stock
    - quantity <= 0 on update removes the line

Concurrency:
- Mutations run in a transaction holding a row lock on the user's cart,
  so two concurrent "add" calls cannot lose an increment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from django.db import transaction

from cart.models import Cart, CartItem
from products.models import Product

from .exceptions import InsufficientStockError, InvalidQuantityError, ProductUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedItem:
    product_id: str
    reason: str


def get_cart(user) -> Cart:
    cart, _ = Cart.objects.get_or_create(user=user)
    return cart


def _locked_cart(user) -> Cart:
    cart, _ = Cart.objects.select_for_update().get_or_create(user=user)
    return cart


def _to_int_qty(value) -> int:
    if isinstance(value, bool):
        raise InvalidQuantityError("quantity must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidQuantityError("quantity must be a whole number")


def _ensure_available(product: Product) -> None:
    if not product.is_active:
        raise ProductUnavailableError(f"{product.name} is no longer available.")


def _ensure_stock(product: Product, quantity: int) -> None:
    if quantity > int(product.stock or 0):
        raise InsufficientStockError(product, quantity)


@transaction.atomic
def add_item(*, user, product: Product, quantity: int = 1) -> Cart:
    """
    Add quantity of product; an existing line is incremented.
    """
    quantity = _to_int_qty(quantity)
    if quantity < 1:
        raise InvalidQuantityError("quantity must be at least 1")

    _ensure_available(product)

    cart = _locked_cart(user)
    item = CartItem.objects.filter(cart=cart, product=product).first()

    new_quantity = quantity + (item.quantity if item else 0)
    _ensure_stock(product, new_quantity)

    if item:
        item.quantity = new_quantity
        item.save(update_fields=["quantity", "updated_at"])
    else:
        CartItem.objects.create(cart=cart, product=product, quantity=new_quantity)

    cart.save(update_fields=["updated_at"])
    return cart


@transaction.atomic
def update_quantity(*, user, product_id, quantity) -> Cart:
    """
    Set the quantity of an existing line.
    - quantity <= 0 removes the line
    - product not in cart: no-op
    """
    quantity = _to_int_qty(quantity)

    cart = _locked_cart(user)
    item = (
        CartItem.objects.select_related("product")
        .filter(cart=cart, product_id=product_id)
        .first()
    )
    if item is None:
        return cart

    if quantity <= 0:
        item.delete()
    else:
        _ensure_stock(item.product, quantity)
        item.quantity = quantity
        item.save(update_fields=["quantity", "updated_at"])

    cart.save(update_fields=["updated_at"])
    return cart


@transaction.atomic
def remove_item(*, user, product_id) -> Cart:
    cart = _locked_cart(user)
    CartItem.objects.filter(cart=cart, product_id=product_id).delete()
    cart.save(update_fields=["updated_at"])
    return cart


@transaction.atomic
def clear_cart(*, user) -> Cart:
    cart = _locked_cart(user)
    deleted, _ = cart.items.all().delete()
    cart.save(update_fields=["updated_at"])
    logger.debug("Cleared cart %s (%d line(s))", cart.pk, deleted)
    return cart


@transaction.atomic
def merge_items(*, user, items: Iterable[dict]) -> tuple[Cart, list[SkippedItem]]:
    """
    Import a guest cart kept client-side.

    Each entry gets add semantics, capped at available stock.
    Unknown, inactive and out-of-stock products are skipped and reported.
    """
    cart = _locked_cart(user)
    skipped: list[SkippedItem] = []

    for entry in items:
        product_id = entry["product_id"]
        quantity = _to_int_qty(entry.get("quantity", 1))

        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            skipped.append(SkippedItem(str(product_id), "not_found"))
            continue
        if not product.is_active:
            skipped.append(SkippedItem(str(product_id), "product_unavailable"))
            continue

        item = CartItem.objects.filter(cart=cart, product=product).first()
        current = item.quantity if item else 0
        target = min(current + max(quantity, 0), int(product.stock or 0))

        if target <= 0:
            if item:
                item.delete()
            skipped.append(SkippedItem(str(product_id), "insufficient_stock"))
            continue

        if item:
            if target != item.quantity:
                item.quantity = target
                item.save(update_fields=["quantity", "updated_at"])
        else:
            CartItem.objects.create(cart=cart, product=product, quantity=target)

    cart.save(update_fields=["updated_at"])

    if skipped:
        logger.info("Cart merge for user %s skipped %d item(s)", user.pk, len(skipped))

    return cart, skipped
