# products/models/stock_movement.py

"""
INVENTORY LEDGER

Immutable stock ledger entry.

GUARANTEES:
- Append-only (no updates, no deletes)
- Created ONCE, never edited
- quantity == abs(new_stock - previous_stock)
- Written only by products.services.stock_ledger, in the same transaction
  as the Product.current_stock change it records
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from .product import Product


class StockMovement(models.Model):
    class MovementType(models.TextChoices):
        IN = "in", "Stock In"
        OUT = "out", "Stock Out"
        ADJUSTMENT = "adjustment", "Adjustment"
        INITIAL = "initial", "Initial Stock"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # PROTECT: a product with history cannot be deleted
    product = models.ForeignKey(
        Product, on_delete=models.PROTECT, related_name="stock_movements"
    )

    movement_type = models.CharField(max_length=16, choices=MovementType.choices)

    quantity = models.PositiveIntegerField()
    previous_stock = models.IntegerField()
    new_stock = models.IntegerField()

    reference = models.CharField(max_length=128, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    # user id, email, or the literal "system"
    adjusted_by = models.CharField(max_length=255)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["product", "-created_at"], name="products_st_product_idx"),
            models.Index(fields=["reference"], name="products_st_referen_idx"),
            models.Index(fields=["movement_type"], name="products_st_movemen_idx"),
        ]

    @property
    def delta(self) -> int:
        return int(self.new_stock) - int(self.previous_stock)

    def clean(self):
        if self.previous_stock is None or self.new_stock is None:
            raise ValidationError("previous_stock and new_stock are required")

        if self.new_stock < 0:
            raise ValidationError("new_stock cannot be negative")

        if self.quantity != abs(self.delta):
            raise ValidationError(
                f"quantity must equal |new_stock - previous_stock| ({abs(self.delta)})"
            )

        if not (self.adjusted_by or "").strip():
            raise ValidationError("adjusted_by is required")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("StockMovement records are immutable")

        self.full_clean(exclude=["product"])
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("StockMovement records are immutable and cannot be deleted")

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} | {self.movement_type} | {self.previous_stock} -> {self.new_stock}"
