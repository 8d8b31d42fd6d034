# products/services/stock_calculator.py

"""
ADJUSTMENT CALCULATOR

Pure functions: (current product state, requested operation) -> target
absolute stock value. No database access.

Single-product modes (reject negative results):
    set       target = quantity
    add       target = current + quantity
    subtract  target = current - quantity

Bulk modes (clamp negative results to 0):
    set-all      target = quantity
    add-all      target = current + quantity
    restock-all  target = (minimum or 0) + quantity
"""

from __future__ import annotations

from enum import Enum

from products.services.exceptions import InvalidStockArgument


class AdjustmentMode(str, Enum):
    SET = "set"
    ADD = "add"
    SUBTRACT = "subtract"


class BulkMode(str, Enum):
    SET_ALL = "set-all"
    ADD_ALL = "add-all"
    RESTOCK_ALL = "restock-all"


def to_non_negative_int(value, *, field_name: str = "quantity") -> int:
    if value is None or value == "":
        raise InvalidStockArgument(f"{field_name} is required")

    if isinstance(value, bool):
        # bool is an int subclass in Python
        raise InvalidStockArgument(f"{field_name} must be an integer")

    if isinstance(value, float) and not value.is_integer():
        raise InvalidStockArgument(f"{field_name} must be an integer")

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidStockArgument(f"{field_name} must be an integer")

    if number < 0:
        raise InvalidStockArgument(f"{field_name} cannot be negative")

    return number


def parse_adjustment_mode(value) -> AdjustmentMode:
    try:
        return AdjustmentMode(str(getattr(value, "value", value) or "").strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in AdjustmentMode)
        raise InvalidStockArgument(f"Invalid adjustment type '{value}' (expected one of: {choices})")


def parse_bulk_mode(value) -> BulkMode:
    try:
        return BulkMode(str(getattr(value, "value", value) or "").strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in BulkMode)
        raise InvalidStockArgument(f"Invalid bulk action '{value}' (expected one of: {choices})")


def compute_adjustment_target(*, mode, current_stock: int, quantity) -> int:
    """
    Target stock for a single-product adjustment.

    Raises InvalidStockArgument when the result would be negative.
    """
    mode = parse_adjustment_mode(mode)
    qty = to_non_negative_int(quantity)
    current = int(current_stock or 0)

    if mode is AdjustmentMode.SET:
        target = qty
    elif mode is AdjustmentMode.ADD:
        target = current + qty
    else:
        target = current - qty

    if target < 0:
        raise InvalidStockArgument(
            f"Stock cannot be negative. Current: {current}, requested {mode.value}: {qty}"
        )

    return target


def compute_bulk_target(*, mode, current_stock: int, minimum_stock: int, quantity) -> int:
    """
    Target stock for one product of a bulk adjustment. Negative results clamp to 0.
    """
    mode = parse_bulk_mode(mode)
    qty = to_non_negative_int(quantity)
    current = int(current_stock or 0)

    if mode is BulkMode.SET_ALL:
        target = qty
    elif mode is BulkMode.ADD_ALL:
        target = current + qty
    else:
        target = int(minimum_stock or 0) + qty

    return max(target, 0)
