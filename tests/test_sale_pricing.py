"""Tests for the per-line pricing engine."""

from decimal import Decimal

from app.services.sale_pricing import compute_line_amounts, money2


def test_tablet_packs_are_fractional():
    a = compute_line_amounts(30, 40, 12, 0, "tablet", 30)
    assert a.actual_tablet_count == Decimal("40")
    assert a.number_of_packs.quantize(Decimal("0.0001")) == Decimal("1.3333")
    assert a.price == Decimal("40.00")


def test_tablet_with_zero_packaging_size_is_guarded():
    a = compute_line_amounts(10, 4, 5, 0, "Tablet", 0)
    assert a.number_of_packs == Decimal("4")
    assert a.price == Decimal("40.00")


def test_strip_expands_to_tablets():
    a = compute_line_amounts(100, 2, 12, 0, "strip", 10)
    assert a.actual_tablet_count == Decimal("20")
    assert a.number_of_packs == Decimal("2")
    assert a.price == Decimal("200.00")


def test_other_units_are_priced_one_to_one():
    for label in ("PCS", "Bottle", None, ""):
        a = compute_line_amounts(20, 5, 5, 0, label, 10)
        assert a.price == Decimal("100.00")
        assert a.actual_tablet_count == Decimal("5")
        assert a.number_of_packs == Decimal("5")


def test_tax_is_backed_out_of_mrp():
    a = compute_line_amounts(112, 1, 12, 0, "PCS")
    assert a.tax_amount == Decimal("12.00")
    assert a.amount_without_tax == Decimal("100.00")
    assert a.discount_amount == Decimal("0.00")
    assert a.total_payable_amount == Decimal("112.00")


def test_discount_then_retax():
    a = compute_line_amounts(112, 1, 12, 10, "PCS")
    assert a.discount_amount == Decimal("10.00")
    assert a.amount_with_discount_without_tax == Decimal("90.00")
    assert a.tax_after_discount == Decimal("10.80")
    assert a.total_payable_amount == Decimal("100.80")


def test_zero_tax_rate():
    a = compute_line_amounts(50, 2, 0, 0, "PCS")
    assert a.tax_amount == Decimal("0.00")
    assert a.amount_without_tax == Decimal("100.00")
    assert a.total_payable_amount == Decimal("100.00")


def test_pricing_is_idempotent():
    args = (37.5, 7, 18, 12.5, "tablet", 15)
    assert compute_line_amounts(*args) == compute_line_amounts(*args)


def test_money2_rounds_half_up():
    assert money2(Decimal("2.675")) == Decimal("2.68")
    assert money2(Decimal("1.005")) == Decimal("1.01")
    assert money2(None) == Decimal("0.00")
