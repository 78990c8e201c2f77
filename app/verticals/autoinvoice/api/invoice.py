from __future__ import annotations

from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends

from app.core.logging_config import logger
from app.core.settings import Settings, get_settings
from app.observability.metrics import totals_counter
from app.verticals.autoinvoice.calculators.totals import compute_totals
from app.verticals.autoinvoice.engine.draft import new_invoice
from app.verticals.autoinvoice.explain.summary import NO_DATA, format_estimate, summary_rows
from app.verticals.autoinvoice.labor import build_providers, resolve_with_deadline
from app.verticals.autoinvoice.schemas.invoice_v1 import (
    InvoiceDraftOutputV1,
    InvoiceInputV1,
    InvoiceTotalsOutputV1,
    LaborEstimateOutputV1,
    LaborEstimateRequestV1,
    LaborEstimateV1,
    SummaryRowV1,
    TotalsV1,
)

# ----------------------------
# Routers
# ----------------------------
router = APIRouter(prefix="/autoinvoice", tags=["autoinvoice"])


def get_labor_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Default: echte netwerk-transport. Tests overriden dit met een MockTransport."""
    return None


# ----------------------------
# Endpoints
# ----------------------------
@router.get("/invoices/new", response_model=InvoiceDraftOutputV1)
def invoice_new(settings: Settings = Depends(get_settings)) -> InvoiceDraftOutputV1:
    inv = new_invoice(settings)
    return InvoiceDraftOutputV1.from_domain(inv, compute_totals(inv))


@router.post("/totals", response_model=InvoiceTotalsOutputV1)
def invoice_totals(
    payload: InvoiceInputV1,
    settings: Settings = Depends(get_settings),
) -> InvoiceTotalsOutputV1:
    inv = payload.to_domain(settings)
    totals = compute_totals(inv)
    totals_counter.labels(tax_base=inv.tax_base.value).inc()

    return InvoiceTotalsOutputV1(
        number=inv.number,
        tax_base=inv.tax_base,
        totals=TotalsV1.from_domain(totals),
        summary=[SummaryRowV1.from_domain(r, settings.currency_symbol) for r in summary_rows(inv, totals)],
    )


@router.post("/labor/estimate", response_model=LaborEstimateOutputV1)
async def labor_estimate(
    payload: LaborEstimateRequestV1,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_labor_transport),
) -> LaborEstimateOutputV1:
    notices: List[str] = []
    providers = build_providers(settings, on_error=notices.append, transport=transport)

    est = await resolve_with_deadline(
        payload.vehicle.to_domain(),
        payload.job_name,
        payload.op_code,
        providers,
        settings.labor_estimate_deadline_s,
    )

    if est is None:
        logger.info("labor_estimate_response", status="no_data", providers=[p.name for p in providers])
        return LaborEstimateOutputV1(status="no_data", message=NO_DATA, notices=notices)

    return LaborEstimateOutputV1(
        status="ok",
        estimate=LaborEstimateV1.from_domain(est),
        message=format_estimate(est),
        notices=notices,
    )
