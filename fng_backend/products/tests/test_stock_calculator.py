from django.test import SimpleTestCase

from products.services.exceptions import InvalidStockArgument
from products.services.low_stock import derive_low_stock_alert
from products.services.stock_calculator import (
    AdjustmentMode,
    BulkMode,
    compute_adjustment_target,
    compute_bulk_target,
    parse_adjustment_mode,
    parse_bulk_mode,
    to_non_negative_int,
)


class AdjustmentTargetTests(SimpleTestCase):
    """
    Single-product formulas.

    GUARANTEES:
    - set / add / subtract map to the documented targets
    - a negative result is rejected, never clamped
    """

    def test_set_returns_quantity(self):
        self.assertEqual(compute_adjustment_target(mode="set", current_stock=20, quantity=5), 5)

    def test_add_and_subtract(self):
        self.assertEqual(compute_adjustment_target(mode="add", current_stock=20, quantity=5), 25)
        self.assertEqual(
            compute_adjustment_target(mode=AdjustmentMode.SUBTRACT, current_stock=20, quantity=5),
            15,
        )

    def test_subtract_below_zero_is_rejected(self):
        with self.assertRaises(InvalidStockArgument):
            compute_adjustment_target(mode="subtract", current_stock=0, quantity=5)

    def test_unknown_mode_is_rejected(self):
        with self.assertRaises(InvalidStockArgument):
            compute_adjustment_target(mode="multiply", current_stock=1, quantity=1)


class BulkTargetTests(SimpleTestCase):
    def test_bulk_formulas(self):
        self.assertEqual(
            compute_bulk_target(mode="set-all", current_stock=7, minimum_stock=3, quantity=4), 4
        )
        self.assertEqual(
            compute_bulk_target(mode="add-all", current_stock=7, minimum_stock=3, quantity=4), 11
        )
        self.assertEqual(
            compute_bulk_target(mode="restock-all", current_stock=2, minimum_stock=15, quantity=10),
            25,
        )

    def test_restock_treats_missing_minimum_as_zero(self):
        self.assertEqual(
            compute_bulk_target(mode="restock-all", current_stock=2, minimum_stock=None, quantity=10),
            10,
        )

    def test_negative_result_clamps_to_zero(self):
        self.assertEqual(
            compute_bulk_target(mode="add-all", current_stock=-5, minimum_stock=0, quantity=2), 0
        )

    def test_parse_bulk_mode_is_case_insensitive(self):
        self.assertIs(parse_bulk_mode(" RESTOCK-ALL "), BulkMode.RESTOCK_ALL)

    def test_parsed_modes_parse_again_unchanged(self):
        self.assertIs(parse_adjustment_mode(AdjustmentMode.ADD), AdjustmentMode.ADD)
        self.assertIs(parse_bulk_mode(BulkMode.RESTOCK_ALL), BulkMode.RESTOCK_ALL)
        self.assertEqual(
            compute_bulk_target(
                mode=parse_bulk_mode("restock-all"), current_stock=2, minimum_stock=15, quantity=10
            ),
            25,
        )


class QuantityValidationTests(SimpleTestCase):
    def test_accepts_integer_strings_and_whole_floats(self):
        self.assertEqual(to_non_negative_int("12"), 12)
        self.assertEqual(to_non_negative_int(3.0), 3)

    def test_rejects_bad_values(self):
        for bad in (None, "", -1, "abc", 2.5, True):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidStockArgument):
                    to_non_negative_int(bad)


class LowStockFlagTests(SimpleTestCase):
    def test_tracked_product_at_or_below_minimum_is_flagged(self):
        self.assertTrue(derive_low_stock_alert(is_track_stock=True, current_stock=5, minimum_stock=5))
        self.assertTrue(derive_low_stock_alert(is_track_stock=True, current_stock=0, minimum_stock=5))
        self.assertFalse(derive_low_stock_alert(is_track_stock=True, current_stock=6, minimum_stock=5))

    def test_untracked_product_is_never_flagged(self):
        self.assertFalse(
            derive_low_stock_alert(is_track_stock=False, current_stock=0, minimum_stock=5)
        )
