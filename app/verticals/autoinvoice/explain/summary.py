from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from ..calculators.money import Number, money_context, qmoney, to_decimal
from ..engine.context import Invoice, LaborEstimate, Totals

D = Decimal

NO_DATA = "No data"


@dataclass(frozen=True)
class SummaryRow:
    label: str
    amount: D


def format_number_us(value: Number, decimal_sep: str = ".", thousand_sep: str = ",") -> str:
    # simpele formatter: 12345.67 -> 12,345.67
    d = qmoney(value)
    s = f"{d.copy_abs():.2f}"
    whole, frac = s.split(".")
    parts = []
    while whole:
        parts.append(whole[-3:])
        whole = whole[:-3]
    whole = thousand_sep.join(reversed(parts))
    return f"{whole}{decimal_sep}{frac}"


def format_money(value: Number, currency_symbol: str = "$") -> str:
    d = qmoney(value)
    sign = "-" if d < 0 else ""
    return f"{sign}{currency_symbol}{format_number_us(d)}"


def format_plain(value: Number) -> str:
    """6.00 -> "6", 6.50 -> "6.5" (no exponent notation)."""
    d = to_decimal(value)
    with money_context(d):
        return format(d.normalize(), "f")


def summary_rows(invoice: Invoice, totals: Totals) -> List[SummaryRow]:
    rows = [
        SummaryRow("Parts", totals.parts),
        SummaryRow("Labor", totals.labor),
        SummaryRow(f"Tax ({format_plain(invoice.tax_percent)}%)", totals.tax),
    ]
    # shop fee alleen tonen als hij er is
    if qmoney(invoice.shop_fee) != D("0.00"):
        rows.append(SummaryRow("Shop fee", qmoney(invoice.shop_fee)))
    rows.append(SummaryRow("Grand Total", totals.grand))
    return rows


def format_summary(rows: List[SummaryRow], currency_symbol: str = "$") -> List[str]:
    return [f"{r.label}: {format_money(r.amount, currency_symbol)}" for r in rows]


def format_estimate(est: Optional[LaborEstimate]) -> str:
    if est is None:
        return NO_DATA
    return f"{est.hours} hrs ({est.source}, {est.confidence})"
