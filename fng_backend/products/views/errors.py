# products/views/errors.py

from rest_framework import status
from rest_framework.response import Response

from products.services.exceptions import (
    InvalidStockArgument,
    PersistenceFailure,
    ProductNotFound,
    StockLedgerError,
    TrackingDisabled,
)

LEDGER_ERROR_STATUS = {
    ProductNotFound: status.HTTP_404_NOT_FOUND,
    TrackingDisabled: status.HTTP_400_BAD_REQUEST,
    InvalidStockArgument: status.HTTP_400_BAD_REQUEST,
    PersistenceFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def ledger_error_response(exc: StockLedgerError) -> Response:
    """
    Canonical API error body for stock ledger failures: {"detail": "..."}.
    """
    http_status = LEDGER_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return Response({"detail": str(exc)}, status=http_status)
