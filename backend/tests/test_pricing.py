"""Tests for price resolution and order totals."""

from app.services.pricing import calculate_totals, effective_unit_price, line_total


class TestEffectiveUnitPrice:
    def test_uses_product_price_without_variant(self):
        assert effective_unit_price(19.99) == 19.99

    def test_uses_variant_price_when_set(self):
        assert effective_unit_price(19.99, 21.99) == 21.99

    def test_falls_back_when_variant_has_no_price(self):
        assert effective_unit_price(19.99, None) == 19.99

    def test_zero_variant_price_is_a_set_price(self):
        assert effective_unit_price(19.99, 0.0) == 0.0


class TestCalculateTotals:
    def test_example_cart(self):
        totals = calculate_totals([(10.00, 2), (5.00, 1)])
        assert totals.subtotal == 25.00
        assert totals.tax_amount == 2.00
        assert totals.shipping_amount == 0.0
        assert totals.total_amount == 27.00

    def test_empty_cart_is_all_zero(self):
        totals = calculate_totals([])
        assert totals.subtotal == 0
        assert totals.tax_amount == 0
        assert totals.total_amount == 0

    def test_tax_rounds_to_cents(self):
        # 19.99 * 0.08 = 1.5992
        totals = calculate_totals([(19.99, 1)])
        assert totals.tax_amount == 1.60
        assert totals.total_amount == 21.59

    def test_sums_without_float_drift(self):
        totals = calculate_totals([(0.1, 1), (0.2, 1)])
        assert totals.subtotal == 0.3

    def test_total_is_subtotal_plus_tax_plus_shipping(self):
        totals = calculate_totals([(12.5, 3), (7.25, 2)], shipping_amount=4.99)
        assert totals.subtotal == 52.0
        assert totals.tax_amount == 4.16
        assert totals.total_amount == 61.15

    def test_subtotal_is_sum_of_rounded_line_totals(self):
        lines = [(0.335, 1), (0.335, 1)]
        totals = calculate_totals(lines)
        assert totals.subtotal == 0.68
        assert totals.subtotal == sum(line_total(price, qty) for price, qty in lines)

    def test_custom_tax_rate(self):
        totals = calculate_totals([(100.0, 1)], tax_rate=0.2)
        assert totals.tax_amount == 20.0
        assert totals.total_amount == 120.0


def test_line_total():
    assert line_total(19.99, 3) == 59.97
