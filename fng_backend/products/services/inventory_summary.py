# products/services/inventory_summary.py

from __future__ import annotations

from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce

from products.models import Product


def low_stock_products():
    """Tracked products currently flagged, lowest stock first."""
    return Product.objects.filter(is_track_stock=True, low_stock_alert=True).order_by(
        "current_stock", "name"
    )


def inventory_summary() -> dict:
    tracked = Product.objects.filter(is_track_stock=True)

    value_expr = ExpressionWrapper(
        F("current_stock") * F("price"),
        output_field=DecimalField(max_digits=18, decimal_places=2),
    )
    total_value = tracked.aggregate(
        total=Coalesce(
            Sum(value_expr),
            Decimal("0.00"),
            output_field=DecimalField(max_digits=18, decimal_places=2),
        )
    )["total"]

    return {
        "total_products": Product.objects.count(),
        "tracked_products": tracked.count(),
        "low_stock_count": tracked.filter(low_stock_alert=True).count(),
        "out_of_stock_count": tracked.filter(current_stock=0).count(),
        "total_stock_value": Decimal(total_value).quantize(Decimal("0.01")),
    }
