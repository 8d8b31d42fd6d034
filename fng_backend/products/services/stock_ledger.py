# products/services/stock_ledger.py

"""
STOCK LEDGER WRITER

Purpose:
- The ONLY code path that changes Product.current_stock.
- Every change appends exactly one immutable StockMovement in the same
  transaction (the ledger is the audit trail).

Rules:
- target stock must be a non-negative integer
- product must exist and have is_track_stock=True
- the product row is locked (select_for_update) for the whole
  read-modify-write, so concurrent writers on one product serialize
- low_stock_alert is recomputed on every write
- movement type, when not pinned by the caller, follows the delta sign:
  in (> 0), out (< 0), adjustment (== 0)
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from products.models import Product, StockMovement
from products.services.exceptions import (
    InvalidStockArgument,
    PersistenceFailure,
    ProductNotFound,
    TrackingDisabled,
)
from products.services.stock_calculator import (
    compute_adjustment_target,
    parse_adjustment_mode,
    to_non_negative_int,
)

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"


@dataclass(frozen=True)
class LedgerResult:
    product: Product
    movement: StockMovement
    delta: int


def make_reference(prefix: str) -> str:
    """Correlation tag: <PREFIX>-<epoch millis>-<4 hex chars>."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(2).upper()}"


def resolve_movement_type(delta: int) -> str:
    if delta > 0:
        return StockMovement.MovementType.IN
    if delta < 0:
        return StockMovement.MovementType.OUT
    return StockMovement.MovementType.ADJUSTMENT


def _clean_movement_type(movement_type) -> str | None:
    if movement_type in (None, ""):
        return None
    value = str(movement_type).strip().lower()
    if value not in StockMovement.MovementType.values:
        choices = ", ".join(StockMovement.MovementType.values)
        raise InvalidStockArgument(f"Invalid movement type '{movement_type}' (expected one of: {choices})")
    return value


def _actor(actor) -> str:
    return (str(actor).strip() if actor is not None else "") or SYSTEM_ACTOR


def lock_product(product_id) -> Product:
    """
    Fetch and row-lock a product. Must run inside transaction.atomic.
    """
    try:
        return Product.objects.select_for_update().get(pk=product_id)
    except (Product.DoesNotExist, ValidationError, ValueError):
        # ValidationError / ValueError: malformed UUID
        raise ProductNotFound(f"Product not found: {product_id}")
    except DatabaseError as exc:
        # lock timeouts and deadlocks surface here
        logger.exception("Stock row lock failed", extra={"product_id": str(product_id)})
        raise PersistenceFailure(f"Could not lock product {product_id}: {exc}") from exc


def write_locked(
    *,
    product: Product,
    target_stock: int,
    actor,
    movement_type=None,
    reference=None,
    notes: str = "",
) -> LedgerResult:
    """
    Persist a new stock level for an already-locked product + its movement.

    Callers must hold the row lock (lock_product) inside transaction.atomic
    and must have checked is_track_stock.
    """
    target = to_non_negative_int(target_stock, field_name="target_stock")
    pinned_type = _clean_movement_type(movement_type)
    adjusted_by = _actor(actor)

    previous = int(product.current_stock or 0)
    delta = target - previous

    product.current_stock = target
    product.last_stock_update = timezone.now()
    product.last_updated_by = adjusted_by
    product.refresh_low_stock_alert()

    try:
        product.save(
            update_fields=[
                "current_stock",
                "low_stock_alert",
                "last_stock_update",
                "last_updated_by",
                "updated_at",
            ]
        )

        movement = StockMovement.objects.create(
            product=product,
            movement_type=pinned_type or resolve_movement_type(delta),
            quantity=abs(delta),
            previous_stock=previous,
            new_stock=target,
            reference=(reference or "").strip(),
            notes=(notes or "").strip(),
            adjusted_by=adjusted_by,
        )
    except DatabaseError as exc:
        logger.exception(
            "Stock write failed",
            extra={"product_id": str(product.pk), "target_stock": target},
        )
        raise PersistenceFailure(f"Could not save stock change: {exc}") from exc

    logger.info(
        "Stock adjusted: %s %s -> %s",
        product.name,
        previous,
        target,
        extra={
            "product_id": str(product.pk),
            "reference": movement.reference,
            "adjusted_by": adjusted_by,
        },
    )

    return LedgerResult(product=product, movement=movement, delta=delta)


@transaction.atomic
def adjust_stock(
    *,
    product_id,
    target_stock,
    actor,
    movement_type=None,
    reference=None,
    notes: str = "",
) -> LedgerResult:
    """
    Set a product's stock to an absolute value with an immutable audit movement.

    Check order (all before any write):
      target_stock >= 0  -> InvalidStockArgument
      product exists     -> ProductNotFound
      tracking enabled   -> TrackingDisabled
    """
    target = to_non_negative_int(target_stock, field_name="target_stock")
    _clean_movement_type(movement_type)

    product = lock_product(product_id)
    if not product.is_track_stock:
        raise TrackingDisabled("Stock tracking is disabled for this product")

    return write_locked(
        product=product,
        target_stock=target,
        actor=actor,
        movement_type=movement_type,
        reference=reference,
        notes=notes,
    )


@transaction.atomic
def apply_stock_adjustment(
    *,
    product_id,
    mode,
    quantity,
    actor,
    notes: str = "",
    reference=None,
) -> LedgerResult:
    """
    Single-product set / add / subtract.

    The target is computed from the LOCKED current stock, so two concurrent
    "add" requests never both read the same starting value. A result below
    zero is rejected (InvalidStockArgument), never clamped.
    """
    mode = parse_adjustment_mode(mode)
    qty = to_non_negative_int(quantity)

    product = lock_product(product_id)
    if not product.is_track_stock:
        raise TrackingDisabled("Stock tracking is disabled for this product")

    target = compute_adjustment_target(
        mode=mode,
        current_stock=product.current_stock,
        quantity=qty,
    )

    return write_locked(
        product=product,
        target_stock=target,
        actor=actor,
        reference=reference or make_reference("ADJ"),
        notes=notes or f"Manual adjustment: {mode.value}",
    )


@transaction.atomic
def record_initial_stock(*, product: Product, quantity, actor) -> LedgerResult | None:
    """
    Opening balance for a freshly created product (0 -> quantity, type "initial").

    No-op for untracked products or a zero opening quantity.
    """
    qty = to_non_negative_int(quantity, field_name="initial_stock")
    if qty == 0 or not product.is_track_stock:
        return None

    locked = lock_product(product.pk)
    return write_locked(
        product=locked,
        target_stock=qty,
        actor=actor,
        movement_type=StockMovement.MovementType.INITIAL,
        reference=make_reference("INIT"),
        notes="Initial stock",
    )


# -----------------------------
# History queries (newest first)
# -----------------------------
MAX_HISTORY_ROWS = 500


def _bounded_limit(limit, default: int) -> int:
    if limit in (None, ""):
        return default
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return min(value, MAX_HISTORY_ROWS)


def get_stock_history(product_id, limit=None):
    cap = int(getattr(settings, "STOCK_HISTORY_LIMIT", 100))
    return (
        StockMovement.objects.filter(product_id=product_id)
        .select_related("product")
        .order_by("-created_at")[: _bounded_limit(limit, cap)]
    )


def get_recent_stock_movements(limit=None, queryset=None):
    cap = int(getattr(settings, "RECENT_MOVEMENTS_LIMIT", 20))
    qs = queryset if queryset is not None else StockMovement.objects.all()
    return qs.select_related("product").order_by("-created_at")[: _bounded_limit(limit, cap)]
