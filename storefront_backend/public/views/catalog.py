# public/views/catalog.py
"""
PUBLIC CATALOG (STOREFRONT)

GET /api/public/products/?category=<all|premium|signature|gourmet|luxe>&q=<text>
GET /api/public/products/<uuid>/
GET /api/public/categories/

Rules:
- AllowAny (public); a signed-in client additionally gets is_favorite flags
- Only active products are ever returned
- Does NOT expose stock counts or admin fields

Security hardening:
- Throttle to reduce scraping/abuse
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from products.serializers import PublicProductSerializer
from products.services.catalog import (
    CATEGORY_ALL,
    UnknownCategoryError,
    favorite_ids_for,
    filter_catalog,
    list_categories,
    public_products,
)


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


class PublicCatalogQuerySerializer(serializers.Serializer):
    category = serializers.CharField(required=False, allow_blank=True, default=CATEGORY_ALL)
    q = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)


class PublicCategorySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()


class PublicCatalogView(APIView):
    """
    GET /api/public/products/
    """

    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Public"],
        parameters=[
            OpenApiParameter(
                name="category",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Category id or "all" (default).',
            ),
            OpenApiParameter(
                name="q",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive search on name and description.",
            ),
        ],
        responses={
            200: PublicProductSerializer(many=True),
            400: OpenApiResponse(description="Unknown category"),
            429: OpenApiResponse(description="Rate limited"),
        },
        description="Active products, newest first.",
    )
    def get(self, request, *args, **kwargs):
        params = PublicCatalogQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        try:
            qs = filter_catalog(
                public_products(),
                category=params.validated_data["category"],
                q=params.validated_data["q"],
            )
        except UnknownCategoryError as exc:
            return Response(
                {"category": [f'Unknown category "{exc}".']},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = PublicProductSerializer(
            qs,
            many=True,
            context={"request": request, "favorite_ids": favorite_ids_for(request.user)},
        ).data
        return Response({"count": len(data), "results": data}, status=status.HTTP_200_OK)


class PublicProductDetailView(APIView):
    """
    GET /api/public/products/<uuid>/
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Public"],
        responses={
            200: PublicProductSerializer,
            404: OpenApiResponse(description="Unknown or inactive product"),
        },
    )
    def get(self, request, product_id, *args, **kwargs):
        product = get_object_or_404(public_products(), pk=product_id)
        data = PublicProductSerializer(
            product,
            context={"request": request, "favorite_ids": favorite_ids_for(request.user)},
        ).data
        return Response(data, status=status.HTTP_200_OK)


class PublicCategoryListView(APIView):
    """
    GET /api/public/categories/
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(tags=["Public"], responses={200: PublicCategorySerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return Response(list_categories(), status=status.HTTP_200_OK)
