# public/urls.py
"""
PUBLIC API URLS (STOREFRONT)

Base path (mounted in backend/urls.py):
    /api/public/

- GET /api/public/products/?category=<all|premium|...>&q=<text>
- GET /api/public/products/<uuid>/
- GET /api/public/categories/
"""

from __future__ import annotations

from django.urls import path

from public.views.catalog import (
    PublicCatalogView,
    PublicCategoryListView,
    PublicProductDetailView,
)

app_name = "public"

urlpatterns = [
    path("products/", PublicCatalogView.as_view(), name="public-catalog"),
    path("products/<uuid:product_id>/", PublicProductDetailView.as_view(), name="public-product"),
    path("categories/", PublicCategoryListView.as_view(), name="public-categories"),
]
