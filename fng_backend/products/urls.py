# products/urls.py

"""
PRODUCTS URLS

Registered under /api/products/:
    /products/                       menu CRUD + stock actions
    /products/{id}/stock/
    /products/{id}/stock-history/
    /products/bulk-stock-update/
    /products/alerts/low-stock/
    /products/stock-summary/
    /stock-movements/                read-only ledger
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import ProductViewSet, StockMovementViewSet

app_name = "products"

router = DefaultRouter()

router.register(r"products", ProductViewSet, basename="products")
router.register(r"stock-movements", StockMovementViewSet, basename="stock-movements")

urlpatterns = [
    path("", include(router.urls)),
]
