# dashboard/services/stats_service.py

"""
DASHBOARD KPI SERVICE

Read-only snapshot for the admin home screen.

Contract:
- counts are ints
- inventory_value is a 2dp decimal string (price x stock over active products)
- products_by_category lists every category, including empty ones
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum

from products.models import Product
from users.models import ROLE_CLIENT

TWOPLACES = Decimal("0.01")


def _q2(amount) -> Decimal:
    return (amount or Decimal("0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def get_dashboard_stats() -> dict:
    products = Product.objects.all()
    active = products.filter(is_active=True)

    inventory_value = active.aggregate(
        total=Sum(
            ExpressionWrapper(
                F("price") * F("stock"),
                output_field=DecimalField(max_digits=14, decimal_places=2),
            )
        )
    )["total"]

    counts = dict(
        products.order_by().values_list("category").annotate(n=Count("id")).values_list("category", "n")
    )

    return {
        "total_products": products.count(),
        "active_products": active.count(),
        "total_clients": get_user_model().objects.filter(role=ROLE_CLIENT).count(),
        "low_stock_products": products.filter(stock__lte=settings.LOW_STOCK_THRESHOLD).count(),
        "inventory_value": str(_q2(inventory_value)),
        "products_by_category": [
            {"category": value, "label": label, "count": int(counts.get(value, 0))}
            for value, label in Product.Category.choices
        ],
    }
