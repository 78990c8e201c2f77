# app/verticals/autoinvoice/schemas/invoice_v1.py
from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.verticals.autoinvoice.engine.context import (
    Customer,
    Invoice,
    LaborEstimate,
    LineItem,
    TaxBase,
    Totals,
    Vehicle,
)
from app.verticals.autoinvoice.explain.summary import SummaryRow, format_money

if TYPE_CHECKING:
    from app.core.settings import Settings


# -------------------------
# Input
# -------------------------
class CustomerV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""


class VehicleV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    year: str = ""
    make: str = ""
    model: str = ""
    vin: str = ""
    engine: str = ""

    def to_domain(self) -> Vehicle:
        return Vehicle(
            year=self.year,
            make=self.make,
            model=self.model,
            vin=self.vin.upper(),
            engine=self.engine,
        )


class LineItemV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")


class InvoiceInputV1(BaseModel):
    """
    Snapshot van het formulier. Ontbrekende tarieven vallen terug op de
    shop settings.
    """

    model_config = ConfigDict(extra="forbid")

    number: Optional[str] = None
    customer: CustomerV1 = Field(default_factory=CustomerV1)
    vehicle: VehicleV1 = Field(default_factory=VehicleV1)
    items: List[LineItemV1] = Field(default_factory=list)
    labor_hours: Decimal = Decimal("0")
    labor_rate: Optional[Decimal] = None
    tax_percent: Optional[Decimal] = None
    shop_fee: Optional[Decimal] = None
    tax_base: Optional[TaxBase] = None
    notes: str = ""

    def to_domain(self, settings: "Settings") -> Invoice:
        extra = {"number": self.number} if self.number else {}
        return Invoice(
            items=tuple(
                LineItem(description=i.description, quantity=i.quantity, unit_price=i.unit_price)
                for i in self.items
            ),
            labor_hours=self.labor_hours,
            labor_rate=settings.labor_rate_per_hour if self.labor_rate is None else self.labor_rate,
            tax_percent=settings.tax_rate_percent if self.tax_percent is None else self.tax_percent,
            shop_fee=settings.shop_fee if self.shop_fee is None else self.shop_fee,
            tax_base=settings.tax_base if self.tax_base is None else self.tax_base,
            customer=Customer(**self.customer.model_dump()),
            vehicle=self.vehicle.to_domain(),
            notes=self.notes,
            **extra,
        )


class LaborEstimateRequestV1(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle: VehicleV1
    job_name: str = Field(min_length=1)
    op_code: str = ""


# -------------------------
# Output
# -------------------------
class TotalsV1(BaseModel):
    parts: Decimal
    labor: Decimal
    taxable_base: Decimal
    tax: Decimal
    grand: Decimal

    @classmethod
    def from_domain(cls, t: Totals) -> "TotalsV1":
        return cls(parts=t.parts, labor=t.labor, taxable_base=t.taxable_base, tax=t.tax, grand=t.grand)


class SummaryRowV1(BaseModel):
    label: str
    amount: Decimal
    display: str

    @classmethod
    def from_domain(cls, row: SummaryRow, currency_symbol: str = "$") -> "SummaryRowV1":
        return cls(label=row.label, amount=row.amount, display=format_money(row.amount, currency_symbol))


class InvoiceTotalsOutputV1(BaseModel):
    version: Literal["v1"] = "v1"
    number: str
    tax_base: TaxBase
    totals: TotalsV1
    summary: List[SummaryRowV1]


class DraftLineItemV1(BaseModel):
    description: str
    quantity: Decimal
    unit_price: Decimal


class InvoiceDraftOutputV1(BaseModel):
    version: Literal["v1"] = "v1"
    number: str
    items: List[DraftLineItemV1]
    labor_hours: Decimal
    labor_rate: Decimal
    tax_percent: Decimal
    shop_fee: Decimal
    tax_base: TaxBase
    totals: TotalsV1

    @classmethod
    def from_domain(cls, inv: Invoice, totals: Totals) -> "InvoiceDraftOutputV1":
        return cls(
            number=inv.number,
            items=[
                DraftLineItemV1(description=i.description, quantity=i.quantity, unit_price=i.unit_price)
                for i in inv.items
            ],
            labor_hours=inv.labor_hours,
            labor_rate=inv.labor_rate,
            tax_percent=inv.tax_percent,
            shop_fee=inv.shop_fee,
            tax_base=inv.tax_base,
            totals=TotalsV1.from_domain(totals),
        )


class LaborEstimateV1(BaseModel):
    hours: Decimal
    source: str
    confidence: str

    @classmethod
    def from_domain(cls, est: LaborEstimate) -> "LaborEstimateV1":
        return cls(hours=est.hours, source=est.source, confidence=est.confidence)


class LaborEstimateOutputV1(BaseModel):
    status: Literal["ok", "no_data"]
    estimate: Optional[LaborEstimateV1] = None
    message: str
    # side channel: provider diagnostics, los van de uitkomst
    notices: List[str] = Field(default_factory=list)
