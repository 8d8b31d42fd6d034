"""
Products services.

Import from the submodules directly:
- stock_calculator   pure target computation
- low_stock          pure low-stock flag derivation
- stock_ledger       atomic stock writes + movement history
- bulk_stock         per-item bulk orchestration
- inventory_summary  inventory counters + valuation

Nothing is re-exported here: products.models imports low_stock, and the
ledger modules import products.models.
"""
