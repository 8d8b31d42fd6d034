# products/serializers/__init__.py

from .product import ProductSerializer
from .stock import (
    BulkStockUpdateSerializer,
    StockAdjustmentSerializer,
    StockMovementSerializer,
)

__all__ = [
    "ProductSerializer",
    "StockMovementSerializer",
    "StockAdjustmentSerializer",
    "BulkStockUpdateSerializer",
]
