# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (audit-safe stock):

- Product stock fields are read-only here. Stock changes go through the
  API stock endpoints so every change lands in the ledger.
- Saving a product from the admin recomputes low_stock_alert (minimum_stock
  or is_track_stock may have changed).
- StockMovement rows are view-only.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product, StockMovement


# =====================================================
# MOVEMENT INLINE (READ ONLY)
# =====================================================

class StockMovementInline(admin.TabularInline):
    model = StockMovement
    extra = 0
    can_delete = False
    show_change_link = False
    ordering = ("-created_at",)

    fields = (
        "created_at",
        "movement_type",
        "quantity",
        "previous_stock",
        "new_stock",
        "reference",
        "adjusted_by",
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "category",
        "price",
        "current_stock",
        "minimum_stock",
        "low_stock_alert",
        "is_available",
    )
    list_filter = ("category", "is_available", "is_track_stock", "low_stock_alert")
    search_fields = ("sku", "name")
    ordering = ("name",)
    readonly_fields = (
        "current_stock",
        "low_stock_alert",
        "last_stock_update",
        "last_updated_by",
        "created_at",
        "updated_at",
    )

    inlines = [StockMovementInline]

    def save_model(self, request, obj, form, change):
        obj.refresh_low_stock_alert()
        super().save_model(request, obj, form, change)


# =====================================================
# STOCK MOVEMENT (VIEW-ONLY LIST)
# =====================================================

@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "product",
        "movement_type",
        "quantity",
        "previous_stock",
        "new_stock",
        "reference",
        "adjusted_by",
    )
    list_filter = ("movement_type", "created_at")
    search_fields = ("reference", "product__name", "product__sku", "adjusted_by")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
