# cart/serializers.py

from decimal import Decimal

from rest_framework import serializers

from cart.models import Cart, CartItem

TWOPLACES = Decimal("0.01")


def _money(value) -> str:
    return str(Decimal(value or 0).quantize(TWOPLACES))


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    unit_price = serializers.SerializerMethodField()
    image = serializers.CharField(source="product.primary_image", read_only=True)
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = [
            "product_id",
            "product_name",
            "unit_price",
            "image",
            "quantity",
            "line_total",
        ]
        read_only_fields = fields

    def get_unit_price(self, obj) -> str:
        return _money(obj.unit_price)

    def get_line_total(self, obj) -> str:
        return _money(obj.line_total)


class CartSerializer(serializers.ModelSerializer):
    items = serializers.SerializerMethodField()
    total_items = serializers.SerializerMethodField()
    total_price = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ["id", "items", "total_items", "total_price"]
        read_only_fields = fields

    def _lines(self, obj):
        # one query per representation, shared by items and totals
        cache = self.context.setdefault("_cart_lines", {})
        if obj.pk not in cache:
            cache[obj.pk] = list(obj.lines())
        return cache[obj.pk]

    def get_items(self, obj):
        return CartItemSerializer(self._lines(obj), many=True).data

    def get_total_items(self, obj) -> int:
        return sum(int(item.quantity) for item in self._lines(obj))

    def get_total_price(self, obj) -> str:
        return _money(sum((item.line_total for item in self._lines(obj)), Decimal("0")))


# =====================================================
# INPUT SERIALIZERS
# =====================================================

class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class MergeCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class MergeCartInputSerializer(serializers.Serializer):
    items = MergeCartItemInputSerializer(many=True, allow_empty=True)


class SkippedItemSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    reason = serializers.CharField()
