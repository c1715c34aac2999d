"""
PATH: cart/urls.py

CART URLS (mounted at /api/cart/)
"""

from django.urls import path

from cart.views import (
    CartItemAddView,
    CartItemDetailView,
    CartView,
    ClearCartView,
    MergeCartView,
)

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", CartItemAddView.as_view(), name="add-item"),
    path("items/<uuid:product_id>/", CartItemDetailView.as_view(), name="item"),
    path("clear/", ClearCartView.as_view(), name="clear"),
    path("merge/", MergeCartView.as_view(), name="merge"),
]
