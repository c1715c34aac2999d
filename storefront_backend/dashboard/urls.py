# dashboard/urls.py

"""
DASHBOARD URLS (mounted at /api/dashboard/, admin only)

- stats/                   KPIs
- products/                product CRUD (products.views.ProductViewSet)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from dashboard.views import DashboardStatsView
from products.views import ProductViewSet

app_name = "dashboard"

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("stats/", DashboardStatsView.as_view(), name="stats"),
    path("", include(router.urls)),
]
