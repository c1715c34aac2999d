# products/admin.py

from django.contrib import admin

from products.models import Favorite, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "price",
        "original_price",
        "stock",
        "stock_level",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "category", "created_at")
    search_fields = ("name", "description")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")

    @admin.display(description="Stock level")
    def stock_level(self, obj):
        return obj.stock_level


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ("user", "product", "created_at")
    search_fields = ("user__phone", "user__email", "product__name")
    ordering = ("-created_at",)
    readonly_fields = ("user", "product", "created_at")

    def has_change_permission(self, request, obj=None):
        return False
