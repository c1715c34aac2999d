# products/urls.py

"""
PRODUCTS URLS (mounted at /api/products/)

- favorites/                     GET  caller's favorites
- favorites/<uuid>/toggle/       POST add/remove a favorite

Admin product CRUD is mounted by the dashboard app.
"""

from django.urls import path

from products.views import FavoriteListView, FavoriteToggleView

app_name = "products"

urlpatterns = [
    path("favorites/", FavoriteListView.as_view(), name="favorites"),
    path(
        "favorites/<uuid:product_id>/toggle/",
        FavoriteToggleView.as_view(),
        name="favorite-toggle",
    ),
]
