# app/observability/metrics.py
from fastapi import APIRouter
from starlette.responses import Response

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

router = APIRouter(tags=["observability"])

labor_estimate_counter = Counter(
    "autoinvoice_labor_estimate_total",
    "Labor estimate attempts per provider",
    ["source", "result"],  # hit|miss|error
)

labor_resolve_latency_hist = Histogram(
    "autoinvoice_labor_resolve_seconds",
    "Time to resolve a labor estimate over the whole provider chain",
)

totals_counter = Counter(
    "autoinvoice_totals_computed_total",
    "Invoice totals computed via the API",
    ["tax_base"],
)


@router.get("/metrics", include_in_schema=True)
def metrics() -> Response:
    # Prometheus expects text/plain; version=0.0.4
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
