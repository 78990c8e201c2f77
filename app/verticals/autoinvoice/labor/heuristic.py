from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence, Tuple

import structlog

from ..calculators.money import money_context, qhours
from ..engine.context import Confidence, LaborEstimate, Vehicle
from .base import LaborProvider, register

D = Decimal

logger = structlog.get_logger(__name__)

BASE_HOURS = D("1.0")

# eerste match wint (case-insensitive substring op make)
MAKE_MULTIPLIERS: Tuple[Tuple[str, D], ...] = (
    ("ford", D("1.0")),
    ("bmw", D("1.3")),
)
DEFAULT_MULTIPLIER = D("1.1")

SOURCE = "Heuristic"


def make_multiplier(make: str, table: Sequence[Tuple[str, D]] = MAKE_MULTIPLIERS) -> D:
    needle = (make or "").lower()
    for family, factor in table:
        if family in needle:
            return factor
    return DEFAULT_MULTIPLIER


@register
class HeuristicLaborProvider(LaborProvider):
    """Local fallback; always produces an estimate."""

    kind = "heuristic"

    def __init__(self, base_hours: D = BASE_HOURS):
        self.base_hours = base_hours

    async def estimate(self, vehicle: Vehicle, job_name: str, op_code: str = "") -> Optional[LaborEstimate]:
        factor = make_multiplier(vehicle.make)
        with money_context(self.base_hours, factor):
            hours = qhours(self.base_hours * factor)

        logger.debug("heuristic_estimate", make=vehicle.make, factor=str(factor), hours=str(hours))
        return LaborEstimate(hours=hours, source=SOURCE, confidence=Confidence.MEDIUM.value)
