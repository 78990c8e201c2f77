from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, List, Optional, Sequence

import httpx
import structlog

from app.observability.metrics import labor_estimate_counter, labor_resolve_latency_hist

from ..engine.context import LaborEstimate, Vehicle
from .base import LaborProvider, provider_class
from .heuristic import HeuristicLaborProvider
from .remote import ErrorCallback

if TYPE_CHECKING:
    from app.core.settings import Settings

logger = structlog.get_logger(__name__)


async def resolve(
    vehicle: Vehicle,
    job_name: str,
    op_code: str,
    providers: Sequence[LaborProvider],
) -> Optional[LaborEstimate]:
    """
    Ordered fallback chain: await each provider in turn, first non-None wins.

    Geen retry, geen backoff, geen parallelle fan-out: elke provider hooguit
    een keer per call. A provider that raises counts as "no estimate".
    """
    with labor_resolve_latency_hist.time():
        for provider in providers:
            try:
                est = await provider.estimate(vehicle, job_name, op_code)
            except Exception as e:
                logger.exception("labor_provider_failed", provider=provider.name, exc=f"{type(e).__name__}: {e}")
                labor_estimate_counter.labels(source=provider.name, result="error").inc()
                continue

            if est is None:
                labor_estimate_counter.labels(source=provider.name, result="miss").inc()
                continue

            labor_estimate_counter.labels(source=provider.name, result="hit").inc()
            logger.info(
                "labor_estimate_resolved",
                provider=provider.name,
                hours=str(est.hours),
                source=est.source,
                confidence=est.confidence,
            )
            return est

    logger.info("labor_estimate_no_data", job=job_name, op_code=op_code, make=vehicle.make)
    return None


async def resolve_with_deadline(
    vehicle: Vehicle,
    job_name: str,
    op_code: str,
    providers: Sequence[LaborProvider],
    deadline_s: Optional[float],
) -> Optional[LaborEstimate]:
    """resolve() raced against a timer; expiry counts as "no data"."""
    if deadline_s is None:
        return await resolve(vehicle, job_name, op_code, providers)
    try:
        return await asyncio.wait_for(resolve(vehicle, job_name, op_code, providers), timeout=deadline_s)
    except asyncio.TimeoutError:
        logger.warning("labor_estimate_deadline_expired", deadline_s=deadline_s)
        return None


def build_providers(
    settings: "Settings",
    *,
    on_error: Optional[ErrorCallback] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[LaborProvider]:
    """
    Chain in the order of settings.labor_providers, looked up by kind in the
    provider registry. Providers switched off by config are left out; the
    heuristic always closes the chain, exactly once.
    """
    kinds = [k for k in settings.labor_providers if k != HeuristicLaborProvider.kind]
    kinds.append(HeuristicLaborProvider.kind)

    providers: List[LaborProvider] = []
    for kind in kinds:
        provider = provider_class(kind).from_settings(settings, on_error=on_error, transport=transport)
        if provider is not None:
            providers.append(provider)

    logger.debug("labor_providers_built", providers=[p.name for p in providers])
    return providers
