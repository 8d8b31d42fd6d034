# products/services/exceptions.py

"""
STOCK LEDGER ERRORS

Centralized domain errors for stock services. Views translate these into
HTTP responses; bulk runs record them per item.
"""


class StockLedgerError(Exception):
    """Base exception for all stock ledger failures."""


class ProductNotFound(StockLedgerError):
    """Raised when the referenced product id does not exist."""


class TrackingDisabled(StockLedgerError):
    """Raised when a stock operation targets a product with is_track_stock=False."""


class InvalidStockArgument(StockLedgerError):
    """Raised on a bad quantity / mode, or a single adjustment that would go negative."""


class PersistenceFailure(StockLedgerError):
    """Raised when the database rejects the product update or movement insert."""
