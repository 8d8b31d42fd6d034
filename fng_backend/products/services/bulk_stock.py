# products/services/bulk_stock.py

"""
BULK STOCK ORCHESTRATOR

One request, many products, same formula (set-all / add-all / restock-all).

Semantics:
- ids are processed in the order supplied, once per occurrence (no dedup)
- every item runs in its OWN transaction; a failure never rolls back or
  blocks the other items (best effort, not all-or-nothing)
- all movements of one call share a single reference tag
- negative targets clamp to 0

Per-item outcome:
- updated  -> {product_id, new_stock, delta}
- skipped  -> product exists but does not track stock
- failed   -> {product_id, error}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from django.db import transaction

from products.services.exceptions import InvalidStockArgument, StockLedgerError
from products.services.stock_calculator import (
    compute_bulk_target,
    parse_bulk_mode,
    to_non_negative_int,
)
from products.services.stock_ledger import lock_product, make_reference, write_locked

logger = logging.getLogger(__name__)

STATUS_UPDATED = "updated"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class BulkItemResult:
    product_id: str
    status: str
    new_stock: Optional[int] = None
    delta: Optional[int] = None
    error: Optional[str] = None

    def as_dict(self) -> dict:
        data = {"product_id": self.product_id, "status": self.status}
        if self.status == STATUS_UPDATED:
            data.update(new_stock=self.new_stock, delta=self.delta)
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class BulkAdjustmentResult:
    reference: str
    total_count: int
    results: list = field(default_factory=list)

    @property
    def updated_count(self) -> int:
        return sum(1 for r in self.results if r.status == STATUS_UPDATED)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.status == STATUS_FAILED)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.status == STATUS_SKIPPED)

    def as_dict(self) -> dict:
        return {
            "reference": self.reference,
            "updated_count": self.updated_count,
            "total_count": self.total_count,
            "results": [r.as_dict() for r in self.results],
        }


def _adjust_one(*, product_id, mode, quantity, actor, reference, notes) -> BulkItemResult:
    with transaction.atomic():
        product = lock_product(product_id)

        if not product.is_track_stock:
            return BulkItemResult(product_id=str(product_id), status=STATUS_SKIPPED)

        target = compute_bulk_target(
            mode=mode,
            current_stock=product.current_stock,
            minimum_stock=product.minimum_stock,
            quantity=quantity,
        )

        result = write_locked(
            product=product,
            target_stock=target,
            actor=actor,
            reference=reference,
            notes=notes,
        )

    return BulkItemResult(
        product_id=str(product_id),
        status=STATUS_UPDATED,
        new_stock=result.product.current_stock,
        delta=result.delta,
    )


def bulk_adjust_stock(*, product_ids, mode, quantity, actor, notes: str = "") -> BulkAdjustmentResult:
    """
    Apply one bulk formula to every listed product.

    Request-level validation (mode, quantity, non-empty ids) raises
    InvalidStockArgument before anything is written. Item-level ledger
    errors are captured in the result list instead.

    Must NOT be called inside an outer transaction.atomic: that would turn
    the per-item savepoints into one all-or-nothing unit.
    """
    mode = parse_bulk_mode(mode)
    qty = to_non_negative_int(quantity)

    ids = list(product_ids or [])
    if not ids:
        raise InvalidStockArgument("product_ids must contain at least one id")

    reference = make_reference(f"BULK-{mode.value.upper()}")
    notes = (notes or "").strip() or f"Bulk {mode.value} to {qty}"

    outcome = BulkAdjustmentResult(reference=reference, total_count=len(ids))

    for product_id in ids:
        try:
            item = _adjust_one(
                product_id=product_id,
                mode=mode,
                quantity=qty,
                actor=actor,
                reference=reference,
                notes=notes,
            )
        except StockLedgerError as exc:
            logger.warning(
                "Bulk stock item failed: %s",
                exc,
                extra={"product_id": str(product_id), "reference": reference},
            )
            item = BulkItemResult(product_id=str(product_id), status=STATUS_FAILED, error=str(exc))

        outcome.results.append(item)

    logger.info(
        "Bulk stock %s: %s/%s updated",
        mode.value,
        outcome.updated_count,
        outcome.total_count,
        extra={"reference": reference},
    )
    return outcome
