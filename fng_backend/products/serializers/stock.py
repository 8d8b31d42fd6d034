# products/serializers/stock.py

"""
STOCK SERIALIZERS

- StockMovementSerializer: read-only ledger rows.
- StockAdjustmentSerializer: single-product request body.
- BulkStockUpdateSerializer: bulk request body.

Input serializers validate SHAPE only. Business rules (tracking enabled,
non-negative result, product existence) live in the ledger services.
"""

from rest_framework import serializers

from products.models import StockMovement
from products.services.stock_calculator import AdjustmentMode, BulkMode


class StockMovementSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    delta = serializers.IntegerField(read_only=True)

    class Meta:
        model = StockMovement
        fields = [
            "id",
            "product",
            "product_name",
            "product_sku",
            "movement_type",
            "quantity",
            "previous_stock",
            "new_stock",
            "delta",
            "reference",
            "notes",
            "adjusted_by",
            "created_at",
        ]
        read_only_fields = fields


class StockAdjustmentSerializer(serializers.Serializer):
    """
    Either:
      {"new_stock": 12, "adjustment_type": "set", "notes": "..."}
    or (target computed server-side from the locked row):
      {"adjustment_type": "add", "quantity": 5}

    new_stock wins when both are sent.
    """

    new_stock = serializers.IntegerField(required=False)
    adjustment_type = serializers.ChoiceField(
        choices=[m.value for m in AdjustmentMode],
        required=False,
    )
    quantity = serializers.IntegerField(required=False, min_value=0)
    movement_type = serializers.ChoiceField(
        choices=StockMovement.MovementType.choices,
        required=False,
    )
    reference = serializers.CharField(required=False, allow_blank=True, max_length=128)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs.get("new_stock") is not None:
            return attrs

        if not attrs.get("adjustment_type") or attrs.get("quantity") is None:
            raise serializers.ValidationError(
                "Provide new_stock, or adjustment_type together with quantity"
            )
        return attrs


class BulkStockUpdateSerializer(serializers.Serializer):
    product_ids = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=False,
        error_messages={"empty": "No products selected"},
    )
    # "action_type" is accepted as an alias (older clients)
    mode = serializers.ChoiceField(choices=[m.value for m in BulkMode], required=False)
    action_type = serializers.ChoiceField(
        choices=[m.value for m in BulkMode],
        required=False,
        write_only=True,
    )
    quantity = serializers.IntegerField(min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        mode = attrs.pop("action_type", None)
        attrs["mode"] = attrs.get("mode") or mode
        if not attrs["mode"]:
            raise serializers.ValidationError({"mode": "This field is required."})
        return attrs
