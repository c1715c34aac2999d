# dashboard/views.py

"""
PATH: dashboard/views.py

ADMIN DASHBOARD OVERVIEW (KPIs)

Read-only, computed live from the catalog and user tables.
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from dashboard.services.stats_service import get_dashboard_stats
from users.permissions import IsAdmin


class CategoryCountSerializer(serializers.Serializer):
    category = serializers.CharField()
    label = serializers.CharField()
    count = serializers.IntegerField()


class DashboardStatsSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    active_products = serializers.IntegerField()
    total_clients = serializers.IntegerField()
    low_stock_products = serializers.IntegerField()
    inventory_value = serializers.CharField()
    products_by_category = CategoryCountSerializer(many=True)


class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        tags=["Dashboard"],
        responses={
            200: DashboardStatsSerializer,
            401: OpenApiResponse(description="Not authenticated"),
            403: OpenApiResponse(description="Admin access required"),
        },
    )
    def get(self, request):
        return Response(get_dashboard_stats(), status=status.HTTP_200_OK)
