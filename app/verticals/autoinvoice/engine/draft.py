from __future__ import annotations

from dataclasses import fields, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .context import Customer, Invoice, LineItem, Vehicle

if TYPE_CHECKING:
    from app.core.settings import Settings

D = Decimal

_LINE_ITEM_FIELDS = {f.name for f in fields(LineItem)}


def new_invoice(settings: "Settings") -> Invoice:
    """Fresh draft with shop defaults and one blank line."""
    return Invoice(
        items=(LineItem(),),
        labor_rate=settings.labor_rate_per_hour,
        tax_percent=settings.tax_rate_percent,
        shop_fee=settings.shop_fee,
        tax_base=settings.tax_base,
    )


def _check_index(invoice: Invoice, idx: int) -> None:
    if not 0 <= idx < len(invoice.items):
        raise IndexError(f"line item index {idx} out of range (0..{len(invoice.items) - 1})")


def add_line_item(invoice: Invoice, item: LineItem | None = None) -> Invoice:
    return replace(invoice, items=invoice.items + (item or LineItem(),))


def update_line_item(invoice: Invoice, idx: int, **changes: Any) -> Invoice:
    _check_index(invoice, idx)
    unknown = set(changes) - _LINE_ITEM_FIELDS
    if unknown:
        raise ValueError(f"unknown line item fields: {sorted(unknown)}")

    items = list(invoice.items)
    items[idx] = replace(items[idx], **changes)
    return replace(invoice, items=tuple(items))


def remove_line_item(invoice: Invoice, idx: int) -> Invoice:
    # het formulier houdt altijd minstens 1 regel over
    _check_index(invoice, idx)
    if len(invoice.items) <= 1:
        return invoice
    items = invoice.items[:idx] + invoice.items[idx + 1 :]
    return replace(invoice, items=items)


def with_labor(invoice: Invoice, hours: D | None = None, rate: D | None = None) -> Invoice:
    return replace(
        invoice,
        labor_hours=invoice.labor_hours if hours is None else hours,
        labor_rate=invoice.labor_rate if rate is None else rate,
    )


def with_tax_percent(invoice: Invoice, tax_percent: D) -> Invoice:
    return replace(invoice, tax_percent=tax_percent)


def with_customer(invoice: Invoice, **changes: str) -> Invoice:
    customer: Customer = replace(invoice.customer, **changes)
    return replace(invoice, customer=customer)


def with_vehicle(invoice: Invoice, **changes: str) -> Invoice:
    if "vin" in changes:
        changes["vin"] = changes["vin"].upper()
    vehicle: Vehicle = replace(invoice.vehicle, **changes)
    return replace(invoice, vehicle=vehicle)
