# products/views/stock_movement.py

"""
STOCK MOVEMENT VIEWSET (READ ONLY)

GET /products/stock-movements/?limit=&product=&movement_type=&reference=

Ledger rows are immutable; there is no write endpoint.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import CAP_INVENTORY_VIEW, HasCapability
from products.models import StockMovement
from products.serializers import StockMovementSerializer
from products.services.stock_ledger import get_recent_stock_movements
from products.views.product import parse_limit


class StockMovementViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = StockMovementSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_INVENTORY_VIEW
    filterset_fields = ["product", "movement_type", "reference"]

    def get_queryset(self):
        return StockMovement.objects.select_related("product").order_by("-created_at")

    @extend_schema(
        parameters=[
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request, *args, **kwargs):
        try:
            limit = parse_limit(request)
        except ValueError:
            return Response(
                {"detail": "limit must be a positive integer"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        qs = self.filter_queryset(self.get_queryset())
        data = self.get_serializer(get_recent_stock_movements(limit, queryset=qs), many=True).data
        return Response({"count": len(data), "results": data})
