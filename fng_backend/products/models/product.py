# products/models/product.py

import secrets
import string
import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.services.low_stock import derive_low_stock_alert

SKU_ALPHABET = string.ascii_uppercase + string.digits


class Product(models.Model):
    """
    A menu item (food or drink) with an optional running stock counter.

    STOCK MODEL (IMPORTANT):
    - current_stock is the authoritative running quantity.
    - It is written ONLY by products.services.stock_ledger, which appends a
      StockMovement for every change. Never assign it anywhere else.
    - low_stock_alert is derived (see refresh_low_stock_alert); callers
      never set it directly.
    - When is_track_stock is False all stock operations are rejected.
    """

    class Category(models.TextChoices):
        FOOD = "makanan", "Food"
        DRINK = "minuman", "Drink"

    class Unit(models.TextChoices):
        PCS = "pcs", "Pieces"
        PACK = "pack", "Pack"
        BOX = "box", "Box"
        KG = "kg", "Kilogram"
        GRAM = "gram", "Gram"
        ML = "ml", "Millilitre"
        BOTOL = "botol", "Bottle"
        SACHET = "sachet", "Sachet"

    SKU_PREFIXES = {
        Category.FOOD: "FNG-F",
        Category.DRINK: "FNG-D",
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, db_index=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.CharField(max_length=16, choices=Category.choices)
    description = models.TextField(blank=True, default="")
    is_available = models.BooleanField(default=True)
    image = models.URLField(max_length=500, blank=True, default="")

    sku = models.CharField(max_length=64, unique=True, db_index=True, blank=True)
    unit = models.CharField(max_length=16, choices=Unit.choices, default=Unit.PCS)

    # Stock (service-managed)
    current_stock = models.PositiveIntegerField(default=0)
    minimum_stock = models.PositiveIntegerField(default=5)
    is_track_stock = models.BooleanField(default=True)
    low_stock_alert = models.BooleanField(default=False)

    last_stock_update = models.DateTimeField(null=True, blank=True)
    last_updated_by = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-low_stock_alert", "name"]
        indexes = [
            models.Index(fields=["category"], name="products_pr_categor_idx"),
            models.Index(
                fields=["is_track_stock", "low_stock_alert"],
                name="products_pr_is_trac_idx",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        if self.price is None or Decimal(self.price) <= 0:
            raise ValidationError("Price must be greater than zero")

        if self.category not in self.Category.values:
            raise ValidationError("Invalid category")

    # -----------------------------
    # SKU
    # -----------------------------
    @classmethod
    def generate_sku(cls, category) -> str:
        prefix = cls.SKU_PREFIXES.get(category, "FNG-D")
        while True:
            suffix = "".join(secrets.choice(SKU_ALPHABET) for _ in range(6))
            candidate = f"{prefix}-{suffix}"
            if not cls.objects.filter(sku=candidate).exists():
                return candidate

    def save(self, *args, **kwargs):
        extra_fields = {"low_stock_alert"}
        if not (self.sku or "").strip():
            self.sku = self.generate_sku(self.category)
            extra_fields.add("sku")

        self.refresh_low_stock_alert()

        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = {*update_fields, *extra_fields}
        return super().save(*args, **kwargs)

    # -----------------------------
    # STOCK (derived)
    # -----------------------------
    def refresh_low_stock_alert(self) -> bool:
        """Recompute low_stock_alert in memory; the caller persists it."""
        self.low_stock_alert = derive_low_stock_alert(
            is_track_stock=self.is_track_stock,
            current_stock=self.current_stock,
            minimum_stock=self.minimum_stock,
        )
        return self.low_stock_alert

    @property
    def is_out_of_stock(self) -> bool:
        return bool(self.is_track_stock) and int(self.current_stock or 0) == 0

    @property
    def stock_value(self) -> Decimal:
        """Inventory valuation: quantity x price (tracked products only)."""
        if not self.is_track_stock:
            return Decimal("0.00")
        return Decimal(int(self.current_stock or 0)) * Decimal(self.price or 0)
