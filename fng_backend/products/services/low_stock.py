# products/services/low_stock.py


def derive_low_stock_alert(*, is_track_stock: bool, current_stock: int, minimum_stock: int) -> bool:
    """
    Low-stock flag for a product.

    True only for tracked products at or below their minimum stock.
    Untracked products never raise the alert.
    """
    if not is_track_stock:
        return False
    return int(current_stock or 0) <= int(minimum_stock or 0)
