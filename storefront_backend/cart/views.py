# cart/views.py

"""
CART API VIEWS

All endpoints act on the authenticated user's own cart and return the
full cart representation after the change.

Domain errors are normalized as {"error": {"code", "message"}}:
- product_unavailable  -> 409
- insufficient_stock   -> 409
- invalid_quantity     -> 400
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.responses import error_response
from cart.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    MergeCartInputSerializer,
    SkippedItemSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services import (
    CartError,
    InsufficientStockError,
    ProductUnavailableError,
    add_item,
    clear_cart,
    get_cart,
    merge_items,
    remove_item,
    update_quantity,
)
from products.models import Product

_ERROR_STATUS = {
    ProductUnavailableError: status.HTTP_409_CONFLICT,
    InsufficientStockError: status.HTTP_409_CONFLICT,
}


def _cart_error_response(exc: CartError) -> Response:
    return error_response(
        code=exc.code,
        message=str(exc),
        http_status=_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


def _cart_response(cart, http_status=status.HTTP_200_OK) -> Response:
    return Response(CartSerializer(cart).data, status=http_status)


_CART_ERRORS = {
    400: OpenApiResponse(description="Validation error / invalid_quantity"),
    409: OpenApiResponse(description="product_unavailable / insufficient_stock"),
}


class CartView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(tags=["Cart"], responses={200: CartSerializer})
    def get(self, request):
        return _cart_response(get_cart(request.user))


class CartItemAddView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        tags=["Cart"],
        request=AddCartItemInputSerializer,
        responses={200: CartSerializer, 404: OpenApiResponse(description="Unknown product"), **_CART_ERRORS},
        description="Add a product (increments the quantity when already in the cart).",
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(Product, pk=serializer.validated_data["product_id"])

        try:
            cart = add_item(
                user=request.user,
                product=product,
                quantity=serializer.validated_data["quantity"],
            )
        except CartError as exc:
            return _cart_error_response(exc)

        return _cart_response(cart)


class CartItemDetailView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        tags=["Cart"],
        request=UpdateCartItemInputSerializer,
        responses={200: CartSerializer, **_CART_ERRORS},
        description="Set a line quantity; 0 or less removes the line.",
    )
    def patch(self, request, product_id):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            cart = update_quantity(
                user=request.user,
                product_id=product_id,
                quantity=serializer.validated_data["quantity"],
            )
        except CartError as exc:
            return _cart_error_response(exc)

        return _cart_response(cart)

    @extend_schema(tags=["Cart"], responses={200: CartSerializer})
    def delete(self, request, product_id):
        return _cart_response(remove_item(user=request.user, product_id=product_id))


class ClearCartView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(tags=["Cart"], request=None, responses={200: CartSerializer})
    def post(self, request):
        return _cart_response(clear_cart(user=request.user))


class MergeCartView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        tags=["Cart"],
        request=MergeCartInputSerializer,
        responses={200: CartSerializer},
        description="Import a guest cart; unknown or unavailable products are reported in 'skipped'.",
    )
    def post(self, request):
        serializer = MergeCartInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            cart, skipped = merge_items(
                user=request.user,
                items=serializer.validated_data["items"],
            )
        except CartError as exc:
            return _cart_error_response(exc)

        data = dict(CartSerializer(cart).data)
        data["skipped"] = SkippedItemSerializer(skipped, many=True).data
        return Response(data, status=status.HTTP_200_OK)
