import unittest
from decimal import Decimal

from ledger.errors import InvalidPrice
from ledger.units import MAX_MINOR_UNITS, display_price, scale_price

MAX_PRICE = "115792089237316195423570985008687907853269984665640564039457.584007913129639935"


class ScalePriceTestCase(unittest.TestCase):
    def test_scales_to_eighteen_decimals(self):
        self.assertEqual(scale_price("1.25"), 1_250_000_000_000_000_000)
        self.assertEqual(scale_price("1"), 10**18)
        self.assertEqual(scale_price("0"), 0)
        self.assertEqual(scale_price("0.000000000000000001"), 1)
        self.assertEqual(scale_price(" 2.5 "), 25 * 10**17)

    def test_accepts_decimal_int_and_float(self):
        self.assertEqual(scale_price(Decimal("0.1")), 10**17)
        self.assertEqual(scale_price(3), 3 * 10**18)
        self.assertEqual(scale_price(1.5), 15 * 10**17)

    def test_trailing_zeros_beyond_precision_are_exact(self):
        self.assertEqual(scale_price("1.5000000000000000000000"), 15 * 10**17)
        self.assertEqual(scale_price("1." + "0" * 200), 10**18)

    def test_exponent_form(self):
        self.assertEqual(scale_price("1e-18"), 1)
        self.assertEqual(scale_price("2.5E3"), 2500 * 10**18)
        self.assertEqual(scale_price("0e-2000000"), 0)
        self.assertEqual(scale_price("1e59"), 10**77)

    def test_upper_bound(self):
        self.assertEqual(scale_price(MAX_PRICE), MAX_MINOR_UNITS)

    def test_rejects_bad_input(self):
        bad = [
            "abc",
            "",
            "   ",
            "-1",
            "-0.5",
            "NaN",
            "Infinity",
            "1.2.3",
            "0.0000000000000000001",  # 19 decimals
            "1" + "0" * 60,  # beyond uint256
            "1e1000000",
            "1e-2000000",
            "1e60",
            "2e59",
            "1.5e-18",
            "1." + "0" * 150 + "1",
            True,
        ]
        for value in bad:
            with self.subTest(value=value):
                with self.assertRaises(InvalidPrice):
                    scale_price(value)

    def test_invalid_price_is_a_value_error(self):
        with self.assertRaises(ValueError):
            scale_price("not a price")


class DisplayPriceTestCase(unittest.TestCase):
    def test_display(self):
        self.assertEqual(display_price(15 * 10**17), "1.5")
        self.assertEqual(display_price(10**18), "1")
        self.assertEqual(display_price(0), "0")
        self.assertEqual(display_price(1), "0.000000000000000001")
        self.assertEqual(display_price(100 * 10**18), "100")

    def test_round_trip(self):
        prices = [
            "1.5",
            "0",
            "1",
            "0.001",
            "12.345",
            "100",
            "0.000000000000000001",
            "999999999.123456789012345678",
            MAX_PRICE,
        ]
        for price in prices:
            with self.subTest(price=price):
                self.assertEqual(display_price(scale_price(price)), price)

    def test_round_trip_is_decimal_equal_for_non_canonical_input(self):
        for price in ["1.50", "007", "2.000"]:
            with self.subTest(price=price):
                shown = display_price(scale_price(price))
                self.assertEqual(Decimal(shown), Decimal(price))
