from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Tuple

D = Decimal


def _invoice_number() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M")


# -----------------------------
# Policies / tokens
# -----------------------------


class TaxBase(str, Enum):
    """Which amounts the tax percentage is applied to."""

    PARTS_ONLY = "PARTS_ONLY"
    PARTS_PLUS_LABOR = "PARTS_PLUS_LABOR"


DEFAULT_TAX_BASE = TaxBase.PARTS_PLUS_LABOR


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# -----------------------------
# Party / vehicle
# -----------------------------


@dataclass(frozen=True)
class Customer:
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""


@dataclass(frozen=True)
class Vehicle:
    year: str = ""
    make: str = ""
    model: str = ""
    vin: str = ""
    engine: str = ""


# -----------------------------
# Invoice snapshot
# -----------------------------


@dataclass(frozen=True)
class LineItem:
    description: str = ""
    quantity: D = D("1")
    unit_price: D = D("0")


@dataclass(frozen=True)
class Invoice:
    """
    Immutable snapshot of the invoice draft.

    The form owns the "current draft" reference; every edit produces a new
    Invoice (see engine/draft.py). Calculators only ever read a snapshot.
    """

    items: Tuple[LineItem, ...] = ()
    labor_hours: D = D("0")
    labor_rate: D = D("110.00")
    tax_percent: D = D("6.00")
    shop_fee: D = D("0.00")
    tax_base: TaxBase = DEFAULT_TAX_BASE

    number: str = field(default_factory=_invoice_number)
    customer: Customer = field(default_factory=Customer)
    vehicle: Vehicle = field(default_factory=Vehicle)
    notes: str = ""

    def __post_init__(self) -> None:
        # lists komen binnen vanuit de API; bewaar altijd als tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))


# -----------------------------
# Outputs
# -----------------------------


@dataclass(frozen=True)
class Totals:
    parts: D
    labor: D
    taxable_base: D
    tax: D
    grand: D


@dataclass(frozen=True)
class LaborEstimate:
    hours: D
    source: str
    confidence: str
