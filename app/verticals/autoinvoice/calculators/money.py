from __future__ import annotations

from contextlib import contextmanager
from decimal import MAX_EMAX, MIN_EMIN, Decimal, ROUND_HALF_UP, localcontext
from typing import Iterator, Union

D = Decimal

MONEY = D("0.01")
HOURS = D("0.1")

# ondergrens; money_context schaalt mee met de operanden
PRECISION = 64

Number = Union[Decimal, int, str]


def to_decimal(x: Number) -> D:
    if isinstance(x, Decimal):
        return x
    return D(str(x))


def digits_needed(*values: Number) -> int:
    """
    Aantal cijfers waarmee producten en sommen van `values` exact blijven,
    tot en met de centen.
    """
    total = 0
    for v in values:
        d = to_decimal(v)
        if not d.is_finite():
            continue
        total += d.adjusted() - min(d.as_tuple().exponent, -2) + 1
    return total + 4


@contextmanager
def money_context(*values: Number) -> Iterator[None]:
    with localcontext() as ctx:
        ctx.prec = max(PRECISION, digits_needed(*values))
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.rounding = ROUND_HALF_UP
        yield


def qmoney(x: Number) -> D:
    d = to_decimal(x)
    with money_context(d):
        return d.quantize(MONEY, rounding=ROUND_HALF_UP)


def qhours(x: Number) -> D:
    d = to_decimal(x)
    with money_context(d):
        return d.quantize(HOURS, rounding=ROUND_HALF_UP)
