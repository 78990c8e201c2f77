from dataclasses import replace
from decimal import Decimal

import pytest

from app.verticals.autoinvoice.calculators.totals import compute_totals
from app.verticals.autoinvoice.engine.context import Invoice, LineItem, TaxBase, Totals


def test_totals_parts_plus_labor(sample_invoice):
    t = compute_totals(sample_invoice)

    # parts = 60 + 2*20 = 100, labor = 2*110 = 220
    assert t.parts == Decimal("100.00")
    assert t.labor == Decimal("220.00")
    assert t.taxable_base == Decimal("320.00")
    assert t.tax == Decimal("19.20")
    assert t.grand == Decimal("344.20")  # 100 + 220 + 19.20 + 5


def test_totals_parts_only_counts_labor_once(sample_invoice):
    inv = replace(sample_invoice, tax_base=TaxBase.PARTS_ONLY)
    t = compute_totals(inv)

    assert t.taxable_base == Decimal("100.00")
    assert t.tax == Decimal("6.00")
    # labor zit niet in de grondslag, maar wel precies 1x in grand
    assert t.grand == Decimal("331.00")  # 100 + 220 + 6 + 5


def test_totals_empty_invoice_is_zero():
    t = compute_totals(Invoice(items=(), labor_hours=Decimal("0"), shop_fee=Decimal("0")))

    assert t == Totals(
        parts=Decimal("0.00"),
        labor=Decimal("0.00"),
        taxable_base=Decimal("0.00"),
        tax=Decimal("0.00"),
        grand=Decimal("0.00"),
    )
    assert str(t.parts) == "0.00"


def test_totals_rounds_per_line_before_summing():
    inv = Invoice(items=(LineItem(quantity=Decimal("2"), unit_price=Decimal("25.005")),))
    assert compute_totals(inv).parts == Decimal("50.01")


def test_totals_line_rounding_checkpoint_differs_from_sum_then_round():
    # 3 regels van 0.005: per regel 0.01 -> 0.03 (niet round(0.015) = 0.02)
    item = LineItem(quantity=Decimal("1"), unit_price=Decimal("0.005"))
    inv = Invoice(items=(item, item, item), tax_percent=Decimal("0"))
    assert compute_totals(inv).parts == Decimal("0.03")


def test_totals_tax_rounds_half_up():
    # 0.50 * 5% = 0.025 -> 0.03
    inv = Invoice(
        items=(LineItem(unit_price=Decimal("0.50")),),
        tax_percent=Decimal("5"),
        tax_base=TaxBase.PARTS_ONLY,
    )
    assert compute_totals(inv).tax == Decimal("0.03")


def test_totals_zero_rates_and_quantities():
    inv = Invoice(
        items=(LineItem(quantity=Decimal("0"), unit_price=Decimal("99.99")),),
        labor_hours=Decimal("3"),
        labor_rate=Decimal("0"),
        tax_percent=Decimal("0"),
    )
    t = compute_totals(inv)
    assert t.parts == Decimal("0.00")
    assert t.labor == Decimal("0.00")
    assert t.grand == Decimal("0.00")


def test_totals_negative_values_do_not_raise():
    inv = Invoice(
        items=(LineItem(quantity=Decimal("-1"), unit_price=Decimal("10.00")),),
        labor_hours=Decimal("-1.5"),
        labor_rate=Decimal("100"),
        tax_percent=Decimal("10"),
        shop_fee=Decimal("-2.00"),
    )
    t = compute_totals(inv)
    assert t.parts == Decimal("-10.00")
    assert t.labor == Decimal("-150.00")
    assert t.tax == Decimal("-16.00")
    assert t.grand == Decimal("-178.00")


def test_totals_is_order_independent():
    a = LineItem(quantity=Decimal("3"), unit_price=Decimal("1.333"))
    b = LineItem(quantity=Decimal("1"), unit_price=Decimal("7.125"))
    c = LineItem(quantity=Decimal("0.5"), unit_price=Decimal("19.99"))

    t1 = compute_totals(Invoice(items=(a, b, c)))
    t2 = compute_totals(Invoice(items=(c, a, b)))
    assert t1 == t2


def test_totals_is_idempotent_and_does_not_mutate(sample_invoice):
    before = replace(sample_invoice)
    assert compute_totals(sample_invoice) == compute_totals(sample_invoice)
    assert sample_invoice == before


@pytest.mark.parametrize(
    "hours,rate,expected",
    [
        (Decimal("2"), Decimal("110.00"), Decimal("220.00")),
        (Decimal("1.25"), Decimal("99.99"), Decimal("124.99")),  # 124.9875
        (Decimal("0.3"), Decimal("115.50"), Decimal("34.65")),
    ],
)
def test_totals_labor_product(hours, rate, expected):
    inv = Invoice(labor_hours=hours, labor_rate=rate)
    assert compute_totals(inv).labor == expected


def test_totals_huge_values_still_compute():
    inv = Invoice(
        items=(LineItem(quantity=Decimal("1E+30"), unit_price=Decimal("1E+30")),),
        tax_percent=Decimal("0"),
    )
    t = compute_totals(inv)
    assert t.parts == Decimal("1E+60")


def test_totals_beyond_64_digits_stay_exact():
    inv = Invoice(
        items=(LineItem(quantity=Decimal("1E+40"), unit_price=Decimal("1E+30")),),
        labor_hours=Decimal("1.5"),
        labor_rate=Decimal("110.00"),
        tax_percent=Decimal("6.00"),
        shop_fee=Decimal("0.01"),
    )
    t = compute_totals(inv)

    assert t.parts == Decimal("1E+70")
    assert t.taxable_base == Decimal(f"{10**70 + 165}.00")
    assert t.tax == Decimal(f"{6 * 10**68 + 9}.90")
    # centen gaan niet verloren naast een getal van 70 cijfers
    assert t.grand == Decimal(f"{106 * 10**68 + 174}.91")
    assert t.grand.as_tuple().exponent == -2
