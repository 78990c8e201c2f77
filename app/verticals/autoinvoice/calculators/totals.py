from __future__ import annotations

from decimal import Decimal

from ..engine.context import Invoice, Totals
from .labor import calc_labor
from .money import money_context, qmoney, to_decimal
from .parts import calc_parts
from .tax import calc_tax, calc_taxable_base

D = Decimal


def compute_totals(invoice: Invoice) -> Totals:
    """
    Breakdown van een factuur-snapshot.

    Afronding (half-up, 2 decimalen) alleen op de vaste checkpoints:
    regel-totaal, parts-som, labor-product, tax-product, grand-som.

    taxable_base is alleen de grondslag voor tax; grand telt parts en labor
    altijd precies een keer, ongeacht tax_base.
    """
    parts = calc_parts(invoice.items)
    labor = calc_labor(invoice.labor_hours, invoice.labor_rate)
    taxable_base = calc_taxable_base(parts, labor, invoice.tax_base)
    tax = calc_tax(taxable_base, invoice.tax_percent)

    shop_fee = to_decimal(invoice.shop_fee)
    with money_context(parts, labor, tax, shop_fee):
        grand = qmoney(parts + labor + tax + shop_fee)

    return Totals(
        parts=parts,
        labor=labor,
        taxable_base=taxable_base,
        tax=tax,
        grand=grand,
    )
