# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Menu CRUD (food / drink items)
- Stock endpoints backed by the stock ledger:
    POST|PUT  /products/products/{id}/stock/
    GET       /products/products/{id}/stock-history/?limit=
    POST|PUT  /products/products/bulk-stock-update/
    GET       /products/products/alerts/low-stock/
    GET       /products/products/stock-summary/

Access is capability based (see permissions.roles):
- reads need menu.view / inventory.view (every back-office role)
- menu writes need menu.edit, stock writes need inventory.adjust
"""

from __future__ import annotations

import logging

from django.db.models import ProtectedError
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from activity.services import record_activity
from permissions.roles import (
    CAP_INVENTORY_ADJUST,
    CAP_INVENTORY_VIEW,
    CAP_MENU_EDIT,
    CAP_MENU_VIEW,
    HasCapability,
    actor_id_for,
)
from products.models import Product
from products.serializers import (
    BulkStockUpdateSerializer,
    ProductSerializer,
    StockAdjustmentSerializer,
    StockMovementSerializer,
)
from products.services.bulk_stock import bulk_adjust_stock
from products.services.exceptions import StockLedgerError
from products.services.inventory_summary import inventory_summary, low_stock_products
from products.services.stock_ledger import (
    adjust_stock,
    apply_stock_adjustment,
    get_stock_history,
    make_reference,
)
from products.views.errors import ledger_error_response

logger = logging.getLogger(__name__)


def parse_limit(request):
    """
    ?limit= -> None (use default) | positive int. Raises ValueError otherwise.
    """
    raw = (request.query_params.get("limit") or "").strip()
    if not raw:
        return None
    value = int(raw)
    if value <= 0:
        raise ValueError("limit must be positive")
    return value


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    - CRUD
    - single + bulk stock adjustment
    - stock history, low stock alerts, inventory summary
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, HasCapability]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["category", "is_track_stock", "low_stock_alert", "is_available"]
    search_fields = ["name", "sku", "description"]
    ordering_fields = ["name", "price", "current_stock", "created_at"]

    ACTION_CAPABILITIES = {
        "list": CAP_MENU_VIEW,
        "retrieve": CAP_MENU_VIEW,
        "create": CAP_MENU_EDIT,
        "update": CAP_MENU_EDIT,
        "partial_update": CAP_MENU_EDIT,
        "destroy": CAP_MENU_EDIT,
        "stock": CAP_INVENTORY_ADJUST,
        "bulk_stock_update": CAP_INVENTORY_ADJUST,
        "stock_history": CAP_INVENTORY_VIEW,
        "low_stock_alerts": CAP_INVENTORY_VIEW,
        "stock_summary": CAP_INVENTORY_VIEW,
    }

    def get_queryset(self):
        return Product.objects.all()

    def get_permissions(self):
        self.required_capability = self.ACTION_CAPABILITIES.get(self.action)
        return super().get_permissions()

    # -----------------------------
    # CRUD hooks (activity + logging)
    # -----------------------------
    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(
            "Product created",
            extra={"product_id": str(product.pk), "by": actor_id_for(self.request.user)},
        )
        record_activity(user=self.request.user, action=f"Created product {product.name}")

    def perform_update(self, serializer):
        product = serializer.save()
        record_activity(user=self.request.user, action=f"Updated product {product.name}")

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        name = product.name

        try:
            product.delete()
        except ProtectedError:
            return Response(
                {
                    "detail": "Product has stock history and cannot be deleted. "
                    "Mark it unavailable instead."
                },
                status=status.HTTP_409_CONFLICT,
            )

        logger.info("Product deleted", extra={"product_name": name, "by": actor_id_for(request.user)})
        record_activity(user=request.user, action=f"Deleted product {name}")

        return Response({"message": "Product deleted successfully"}, status=status.HTTP_200_OK)

    # -----------------------------
    # Single adjustment
    # -----------------------------
    @extend_schema(
        tags=["Stock"],
        request=StockAdjustmentSerializer,
        responses={
            200: OpenApiResponse(description="Stock updated"),
            400: OpenApiResponse(description="Invalid argument or tracking disabled"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    @action(detail=True, methods=["post", "put"], url_path="stock")
    def stock(self, request, pk=None):
        """
        POST|PUT /products/products/{id}/stock/

        Body: {"new_stock": 12} or {"adjustment_type": "add", "quantity": 5}
        """
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        actor = actor_id_for(request.user)
        mode = data.get("adjustment_type")

        try:
            if data.get("new_stock") is not None:
                result = adjust_stock(
                    product_id=pk,
                    target_stock=data["new_stock"],
                    actor=actor,
                    movement_type=data.get("movement_type"),
                    reference=data.get("reference") or make_reference("ADJ"),
                    notes=data.get("notes") or f"Manual adjustment: {mode or 'set'}",
                )
            else:
                result = apply_stock_adjustment(
                    product_id=pk,
                    mode=mode,
                    quantity=data["quantity"],
                    actor=actor,
                    notes=data.get("notes", ""),
                    reference=data.get("reference"),
                )
        except StockLedgerError as exc:
            return ledger_error_response(exc)

        movement = result.movement
        record_activity(
            user=request.user,
            action=(
                f"Adjusted stock for {result.product.name}: "
                f"{movement.previous_stock} -> {movement.new_stock}"
            ),
        )

        return Response(
            {
                "message": "Stock updated successfully",
                "old_stock": movement.previous_stock,
                "new_stock": movement.new_stock,
                "difference": result.delta,
                "product": ProductSerializer(result.product, context={"request": request}).data,
                "movement": StockMovementSerializer(movement).data,
            },
            status=status.HTTP_200_OK,
        )

    # -----------------------------
    # History
    # -----------------------------
    @extend_schema(
        tags=["Stock"],
        parameters=[
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Max rows (default STOCK_HISTORY_LIMIT).",
            ),
        ],
        responses={200: StockMovementSerializer(many=True)},
    )
    @action(detail=True, methods=["get"], url_path="stock-history")
    def stock_history(self, request, pk=None):
        product = self.get_object()

        try:
            limit = parse_limit(request)
        except ValueError:
            return Response(
                {"detail": "limit must be a positive integer"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = StockMovementSerializer(get_stock_history(product.pk, limit), many=True).data
        return Response({"product_id": str(product.pk), "count": len(data), "results": data})

    # -----------------------------
    # Bulk adjustment
    # -----------------------------
    @extend_schema(
        tags=["Stock"],
        request=BulkStockUpdateSerializer,
        responses={
            200: OpenApiResponse(description="At least one product updated"),
            400: OpenApiResponse(description="Invalid request"),
            404: OpenApiResponse(description="No valid products found for update"),
        },
    )
    @action(detail=False, methods=["post", "put"], url_path="bulk-stock-update")
    def bulk_stock_update(self, request):
        """
        POST|PUT /products/products/bulk-stock-update/

        Items are independent: one bad id never rolls back the others.
        """
        serializer = BulkStockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            outcome = bulk_adjust_stock(
                product_ids=data["product_ids"],
                mode=data["mode"],
                quantity=data["quantity"],
                actor=actor_id_for(request.user),
                notes=data.get("notes", ""),
            )
        except StockLedgerError as exc:
            return ledger_error_response(exc)

        body = {
            **outcome.as_dict(),
            "mode": data["mode"],
            "quantity": data["quantity"],
        }

        if outcome.updated_count == 0:
            body["detail"] = "No valid products found for update"
            return Response(body, status=status.HTTP_404_NOT_FOUND)

        record_activity(
            user=request.user,
            action=(
                f"Bulk stock {data['mode']} {data['quantity']} for "
                f"{outcome.updated_count}/{outcome.total_count} products"
            ),
        )

        body["message"] = f"Successfully updated {outcome.updated_count} products"
        return Response(body, status=status.HTTP_200_OK)

    # -----------------------------
    # Alerts + summary
    # -----------------------------
    @action(detail=False, methods=["get"], url_path="alerts/low-stock")
    def low_stock_alerts(self, request):
        """
        GET /products/products/alerts/low-stock/
        """
        data = self.get_serializer(low_stock_products(), many=True).data
        return Response({"count": len(data), "results": data})

    @action(detail=False, methods=["get"], url_path="stock-summary")
    def stock_summary(self, request):
        return Response(inventory_summary())
