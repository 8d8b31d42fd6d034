# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Menu CRUD for the back-office.
- Stock fields are READ-ONLY here: current_stock only changes through the
  stock ledger (stock endpoints). The one exception is `initial_stock` on
  create, which is written as an "initial" movement.
- low_stock_alert is recomputed explicitly on every create/update.
"""

from decimal import Decimal

from django.db import transaction
from rest_framework import serializers
from rest_framework.exceptions import APIException

from permissions.roles import actor_id_for
from products.models import Product
from products.services.stock_ledger import record_initial_stock


class ProductNameTaken(APIException):
    status_code = 409
    default_detail = "A product with this name already exists"
    default_code = "product_name_taken"


class ProductSerializer(serializers.ModelSerializer):
    initial_stock = serializers.IntegerField(
        write_only=True,
        required=False,
        min_value=0,
        help_text="Opening stock (create only). Recorded as an 'initial' movement.",
    )

    is_out_of_stock = serializers.BooleanField(read_only=True)
    stock_value = serializers.DecimalField(max_digits=18, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "category",
            "description",
            "is_available",
            "image",
            "sku",
            "unit",
            "current_stock",
            "initial_stock",
            "minimum_stock",
            "is_track_stock",
            "low_stock_alert",
            "is_out_of_stock",
            "stock_value",
            "last_stock_update",
            "last_updated_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "current_stock",
            "low_stock_alert",
            "is_out_of_stock",
            "stock_value",
            "last_stock_update",
            "last_updated_by",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "sku": {"required": False, "allow_blank": True, "validators": []},
        }

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")

        qs = Product.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise ProductNameTaken()
        return value

    def validate_price(self, value):
        if value is None or value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero")
        return value

    def validate_sku(self, value):
        value = (value or "").strip().upper()
        if not value:
            return ""

        qs = Product.objects.filter(sku=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("SKU already in use")
        return value

    def _actor(self):
        request = self.context.get("request")
        return actor_id_for(getattr(request, "user", None))

    # -----------------------------
    # CREATE / UPDATE
    # -----------------------------
    @transaction.atomic
    def create(self, validated_data):
        initial_stock = validated_data.pop("initial_stock", 0) or 0

        product = Product(**validated_data)
        product.refresh_low_stock_alert()
        product.save()

        if initial_stock:
            record_initial_stock(product=product, quantity=initial_stock, actor=self._actor())
            product.refresh_from_db()

        return product

    @transaction.atomic
    def update(self, instance, validated_data):
        validated_data.pop("initial_stock", None)

        # lock so a concurrent stock write is not overwritten by stale fields
        product = Product.objects.select_for_update().get(pk=instance.pk)

        for attr, value in validated_data.items():
            setattr(product, attr, value)

        product.refresh_low_stock_alert()
        product.save(update_fields=[*validated_data.keys(), "low_stock_alert", "updated_at"])
        return product
