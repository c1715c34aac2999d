# products/services/catalog.py

"""
Catalog queries shared by the public storefront and the dashboard.
"""

from __future__ import annotations

from django.db.models import Q, QuerySet

from products.models import Favorite, Product

CATEGORY_ALL = "all"


class UnknownCategoryError(ValueError):
    pass


def list_categories() -> list[dict]:
    """
    Category filter options, "all" first.
    """
    return [{"id": CATEGORY_ALL, "name": "All products"}] + [
        {"id": value, "name": label} for value, label in Product.Category.choices
    ]


def normalize_category(raw: str | None) -> str:
    value = (raw or CATEGORY_ALL).strip().lower() or CATEGORY_ALL
    if value != CATEGORY_ALL and value not in Product.Category.values:
        raise UnknownCategoryError(value)
    return value


def filter_catalog(qs: QuerySet, *, category: str | None = None, q: str | None = None) -> QuerySet:
    """
    Narrow a product queryset by category ("all" = no filter) and a
    case-insensitive text match on name or description.
    """
    category = normalize_category(category)
    if category != CATEGORY_ALL:
        qs = qs.filter(category=category)

    q = (q or "").strip()
    if q:
        qs = qs.filter(Q(name__icontains=q) | Q(description__icontains=q))

    return qs


def public_products() -> QuerySet:
    return Product.objects.filter(is_active=True).order_by("-created_at")


def favorite_ids_for(user) -> set:
    if not getattr(user, "is_authenticated", False):
        return set()
    return set(
        Favorite.objects.filter(user=user).values_list("product_id", flat=True)
    )
