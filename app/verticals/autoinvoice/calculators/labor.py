from __future__ import annotations

from decimal import Decimal

from .money import Number, money_context, qmoney, to_decimal

D = Decimal


def calc_labor(hours: Number, rate: Number) -> D:
    h = to_decimal(hours)
    r = to_decimal(rate)
    with money_context(h, r):
        return qmoney(h * r)
