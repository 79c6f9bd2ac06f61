"""Tests for cart total computation."""

from dataclasses import dataclass

from storefront.cart.totals import CartTotals, compute_totals


@dataclass
class _Line:
    quantity: int
    crypto_price: str
    fiat_price: str


class TestComputeTotals:
    def test_empty_cart(self):
        assert compute_totals([]) == CartTotals(total_crypto="0.000000", total_fiat="0.00")

    def test_sums_quantity_times_price_per_currency(self):
        lines = [_Line(2, "0.01", "10.00"), _Line(3, "0.02", "5.00")]

        totals = compute_totals(lines)
        assert totals.total_crypto == "0.080000"
        assert totals.total_fiat == "35.00"

    def test_single_line(self):
        totals = compute_totals([_Line(3, "0.025", "89.99")])
        assert totals.total_crypto == "0.075000"
        assert totals.total_fiat == "269.97"

    def test_crypto_total_is_rounded_to_six_places(self):
        totals = compute_totals([_Line(1, "0.12345678", "1.00")])
        assert totals.total_crypto == "0.123457"

    def test_no_float_drift(self):
        totals = compute_totals([_Line(1, "0.1", "0.10"), _Line(1, "0.2", "0.20")])
        assert totals.total_crypto == "0.300000"
        assert totals.total_fiat == "0.30"
