from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..calculators.money import qmoney

D = Decimal


def parse_decimal(text: Optional[str]) -> Optional[D]:
    """
    Raw form text -> Decimal, or None when the text is not a usable number.

    None means "ignore this keystroke": the form keeps its previous value
    while the user is halfway through typing (e.g. "", "-", "1.").
    """
    if text is None:
        return None
    s = str(text).strip().replace(",", "")
    if not s:
        return None
    try:
        value = D(s)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_money(text: Optional[str]) -> Optional[D]:
    value = parse_decimal(text)
    if value is None:
        return None
    return qmoney(value)


def parse_percent(text: Optional[str]) -> Optional[D]:
    s = None if text is None else str(text).strip().rstrip("%")
    return parse_decimal(s)
