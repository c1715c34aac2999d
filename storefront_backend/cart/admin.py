from django.contrib import admin

from .models import Cart, CartItem

# =====================================================
# CART ITEM INLINE (READ-ONLY)
# =====================================================


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product",
        "quantity",
        "unit_price",
        "line_total",
        "created_at",
    )

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# CART ADMIN
# =====================================================


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "total_items",
        "total_price",
        "updated_at",
    )

    readonly_fields = (
        "id",
        "user",
        "created_at",
        "updated_at",
        "total_items",
        "total_price",
    )

    search_fields = ("user__phone", "user__email", "user__name")
    list_filter = ("updated_at",)

    inlines = [CartItemInline]

    def has_add_permission(self, request):
        return False
