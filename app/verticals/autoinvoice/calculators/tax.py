from __future__ import annotations

from decimal import Decimal

from ..engine.context import TaxBase
from .money import Number, money_context, qmoney, to_decimal

D = Decimal


def calc_taxable_base(parts: D, labor: D, tax_base: TaxBase) -> D:
    """
    PARTS_ONLY        -> parts
    PARTS_PLUS_LABOR  -> parts + labor
    """
    if TaxBase(tax_base) is TaxBase.PARTS_ONLY:
        return qmoney(parts)
    with money_context(parts, labor):
        return qmoney(parts + labor)


def calc_tax(taxable_base: D, tax_percent: Number) -> D:
    pct = to_decimal(tax_percent)
    with money_context(taxable_base, pct):
        return qmoney(taxable_base * pct / D("100"))
