from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..engine.context import LineItem
from .money import money_context, qmoney, to_decimal

D = Decimal


def line_total(item: LineItem) -> D:
    q = to_decimal(item.quantity)
    u = to_decimal(item.unit_price)
    with money_context(q, u):
        return qmoney(q * u)


def calc_parts(items: Iterable[LineItem]) -> D:
    # elke regel eerst afronden, dan optellen (zoals op de factuur getoond)
    totals = [line_total(item) for item in items]
    with money_context(*totals):
        return qmoney(sum(totals, D("0.00")))
