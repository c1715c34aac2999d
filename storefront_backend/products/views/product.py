# products/views/product.py

"""
PRODUCT VIEWSET (ADMIN)

Mounted by the dashboard app at /api/dashboard/products/.

- list:     compact rows, filter by category / is_active, ?search= on name or category
- retrieve: full admin representation
- create:   JSON or multipart; "uploaded_images" files go to object storage
- update:   uploaded images are appended to the existing list
- destroy:  cart lines and favorites cascade; stored images are removed best-effort
"""

import logging

from django.conf import settings
from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import filters, status, viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from backend.responses import error_response
from products.models import Product
from products.serializers.product import ProductListSerializer, ProductSerializer
from products.services.storage import ImageUploadError, InvalidImageError, delete_image
from users.permissions import IsAdmin

logger = logging.getLogger(__name__)


def _upload_error_response(exc: ImageUploadError) -> Response:
    if isinstance(exc, InvalidImageError):
        return error_response(
            code="invalid_image",
            message=str(exc),
            http_status=status.HTTP_400_BAD_REQUEST,
        )
    return error_response(
        code="upload_failed",
        message=str(exc),
        http_status=status.HTTP_502_BAD_GATEWAY,
    )


@extend_schema_view(
    list=extend_schema(tags=["Dashboard"], description="Admin product table"),
    retrieve=extend_schema(tags=["Dashboard"]),
    partial_update=extend_schema(tags=["Dashboard"]),
    update=extend_schema(tags=["Dashboard"]),
    destroy=extend_schema(tags=["Dashboard"]),
)
class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all().order_by("-created_at")
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["category", "is_active"]
    search_fields = ["name", "category"]

    def get_serializer_class(self):
        if self.action == "list":
            return ProductListSerializer
        return ProductSerializer

    @extend_schema(
        tags=["Dashboard"],
        request=ProductSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(description="Validation error or invalid image"),
            502: OpenApiResponse(description="Image upload failed"),
        },
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = serializer.save()
        except ImageUploadError as exc:
            return _upload_error_response(exc)

        return Response(
            {
                "message": "Product created successfully",
                "product": ProductSerializer(product, context=self.get_serializer_context()).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            product = serializer.save()
        except ImageUploadError as exc:
            return _upload_error_response(exc)

        return Response(
            ProductSerializer(product, context=self.get_serializer_context()).data,
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        product_id = product.pk
        images = list(product.images or [])

        with transaction.atomic():
            product.delete()

        bucket = settings.OBJECT_STORAGE["PRODUCT_IMAGES_BUCKET"]
        for url in images:
            delete_image(url, bucket=bucket)

        logger.info("Product %s deleted by %s", product_id, request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
