# products/views/favorite.py

"""
FAVORITES

GET  /api/products/favorites/                  -> caller's favorite products
POST /api/products/favorites/<uuid>/toggle/    -> add if absent, remove if present
"""

import logging

from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from products.models import Favorite, Product
from products.serializers import FavoriteToggleSerializer, PublicProductSerializer

logger = logging.getLogger(__name__)


class FavoriteListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Favorites"],
        responses={200: PublicProductSerializer(many=True)},
        description="Products the current user marked as favorite, newest favorite first.",
    )
    def get(self, request):
        favorites = (
            Favorite.objects.filter(user=request.user, product__is_active=True)
            .select_related("product")
            .order_by("-created_at")
        )
        products = [f.product for f in favorites]
        favorite_ids = {p.pk for p in products}
        data = PublicProductSerializer(
            products, many=True, context={"request": request, "favorite_ids": favorite_ids}
        ).data
        return Response({"count": len(data), "results": data}, status=status.HTTP_200_OK)


class FavoriteToggleView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["Favorites"],
        request=None,
        responses={
            200: FavoriteToggleSerializer,
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def post(self, request, product_id):
        product = get_object_or_404(Product, pk=product_id)

        with transaction.atomic():
            deleted, _ = Favorite.objects.filter(user=request.user, product=product).delete()
            is_favorite = not deleted
            if is_favorite:
                try:
                    with transaction.atomic():
                        Favorite.objects.create(user=request.user, product=product)
                except IntegrityError:
                    # concurrent toggle already created it
                    pass

        logger.debug(
            "Favorite %s for user %s -> %s", product.pk, request.user.pk, is_favorite
        )
        return Response(
            {"product_id": str(product.pk), "is_favorite": is_favorite},
            status=status.HTTP_200_OK,
        )
