"""
======================================================
PATH: products/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Product + StockMovement (stock ledger)

- StockMovement.product is PROTECT: products with history cannot be deleted.
- adjusted_by is a plain string (user id / email / "system"), no FK.
"""

from __future__ import annotations

import uuid

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "category",
                    models.CharField(
                        choices=[("makanan", "Food"), ("minuman", "Drink")],
                        max_length=16,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("is_available", models.BooleanField(default=True)),
                ("image", models.URLField(blank=True, default="", max_length=500)),
                ("sku", models.CharField(blank=True, db_index=True, max_length=64, unique=True)),
                (
                    "unit",
                    models.CharField(
                        choices=[
                            ("pcs", "Pieces"),
                            ("pack", "Pack"),
                            ("box", "Box"),
                            ("kg", "Kilogram"),
                            ("gram", "Gram"),
                            ("ml", "Millilitre"),
                            ("botol", "Bottle"),
                            ("sachet", "Sachet"),
                        ],
                        default="pcs",
                        max_length=16,
                    ),
                ),
                ("current_stock", models.PositiveIntegerField(default=0)),
                ("minimum_stock", models.PositiveIntegerField(default=5)),
                ("is_track_stock", models.BooleanField(default=True)),
                ("low_stock_alert", models.BooleanField(default=False)),
                ("last_stock_update", models.DateTimeField(blank=True, null=True)),
                ("last_updated_by", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-low_stock_alert", "name"],
                "indexes": [
                    models.Index(fields=["category"], name="products_pr_categor_idx"),
                    models.Index(
                        fields=["is_track_stock", "low_stock_alert"],
                        name="products_pr_is_trac_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockMovement",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "movement_type",
                    models.CharField(
                        choices=[
                            ("in", "Stock In"),
                            ("out", "Stock Out"),
                            ("adjustment", "Adjustment"),
                            ("initial", "Initial Stock"),
                        ],
                        max_length=16,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                ("previous_stock", models.IntegerField()),
                ("new_stock", models.IntegerField()),
                ("reference", models.CharField(blank=True, default="", max_length=128)),
                ("notes", models.TextField(blank=True, default="")),
                ("adjusted_by", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movements",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["product", "-created_at"], name="products_st_product_idx"),
                    models.Index(fields=["reference"], name="products_st_referen_idx"),
                    models.Index(fields=["movement_type"], name="products_st_movemen_idx"),
                ],
            },
        ),
    ]
