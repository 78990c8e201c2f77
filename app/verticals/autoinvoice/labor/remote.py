from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

import httpx
import structlog

from ..calculators.money import qhours
from ..engine.context import Confidence, LaborEstimate, Vehicle
from .base import LaborProvider, register

if TYPE_CHECKING:
    from app.core.settings import Settings

D = Decimal

logger = structlog.get_logger(__name__)

ErrorCallback = Callable[[str], None]

# geen reparatie duurt langer; meer uren is een kapotte response
MAX_HOURS = D("1000")


@dataclass(frozen=True)
class LaborApiConfig:
    """
    Alles wat we over het schema van de provider weten komt uit config:
    URL, methode, parameternamen en de namen van de response-velden.
    """

    enabled: bool = False
    api_key: str = ""
    base_url: str = "https://api.ari.app"
    path: str = "/v1/labor/estimate"
    method: str = "GET"
    source: str = "ARI"

    connect_timeout_s: float = 8.0
    read_timeout_s: float = 12.0

    param_year: str = "year"
    param_make: str = "make"
    param_model: str = "model"
    param_engine: str = "engine"
    param_job: str = "job"

    hours_field: str = "hours"
    confidence_field: str = "confidence"

    @classmethod
    def from_settings(cls, s: "Settings") -> "LaborApiConfig":
        return cls(
            enabled=s.labor_api_enabled,
            api_key=s.labor_api_key,
            base_url=s.labor_api_base_url,
            path=s.labor_api_path,
            method=s.labor_api_method,
            source=s.labor_api_source,
            connect_timeout_s=s.labor_api_connect_timeout_s,
            read_timeout_s=s.labor_api_read_timeout_s,
            param_year=s.labor_api_param_year,
            param_make=s.labor_api_param_make,
            param_model=s.labor_api_param_model,
            param_engine=s.labor_api_param_engine,
            param_job=s.labor_api_param_job,
            hours_field=s.labor_api_hours_field,
            confidence_field=s.labor_api_confidence_field,
        )

    @property
    def is_post(self) -> bool:
        return self.method.strip().upper() == "POST"

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.path}"

    @property
    def usable(self) -> bool:
        return self.enabled and bool(self.api_key.strip())


# -------------------------
# Response parsing
# -------------------------
def parse_hours(value: Any) -> Optional[D]:
    """Number or numeric string in [0, MAX_HOURS] -> hours (1 decimal, half-up). Anything else -> None."""
    # bool is een int-subclass; "true" is geen aantal uren
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip()
    else:
        return None

    try:
        hours = D(raw)
        if not hours.is_finite() or not D("0") <= hours <= MAX_HOURS:
            return None
        return qhours(hours)
    except InvalidOperation:
        return None


def pick_node(root: Dict[str, Any], hours_field: str) -> Dict[str, Any]:
    # top-level wint; anders een niveau dieper in "data"
    if hours_field in root:
        return root
    data = root.get("data")
    if isinstance(data, dict):
        return data
    return root


def parse_estimate(payload: Any, config: LaborApiConfig) -> Optional[LaborEstimate]:
    if not isinstance(payload, dict):
        return None

    node = pick_node(payload, config.hours_field)
    hours = parse_hours(node.get(config.hours_field))
    if hours is None:
        return None

    confidence = node.get(config.confidence_field)
    if confidence is None:
        confidence = Confidence.HIGH.value

    return LaborEstimate(hours=hours, source=config.source, confidence=str(confidence))


# -------------------------
# Provider
# -------------------------
@register
class RemoteLaborProvider(LaborProvider):
    """
    Labor estimate via a third-party HTTP API.

    Every failure (disabled, timeout, non-2xx, bad JSON, missing or
    unparseable hours) ends as None. Diagnostics go to the log and to the
    optional on_error callback; they never change the return value.
    """

    kind = "remote"

    def __init__(
        self,
        config: LaborApiConfig,
        *,
        on_error: Optional[ErrorCallback] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.on_error = on_error
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        *,
        on_error: Optional[ErrorCallback] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **_: Any,
    ) -> Optional["RemoteLaborProvider"]:
        config = LaborApiConfig.from_settings(settings)
        if not config.usable:
            logger.debug("labor_api_unusable", enabled=config.enabled, source=config.source)
            return None
        return cls(config, on_error=on_error, transport=transport)

    @property
    def name(self) -> str:
        return self.config.source

    def build_params(self, vehicle: Vehicle, job_name: str, op_code: str = "") -> Dict[str, str]:
        cfg = self.config
        params = {
            cfg.param_year: vehicle.year,
            cfg.param_make: vehicle.make,
            cfg.param_model: vehicle.model,
            cfg.param_job: op_code if op_code.strip() else job_name,
        }
        if vehicle.engine.strip():
            params[cfg.param_engine] = vehicle.engine
        return params

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.config.read_timeout_s, connect=self.config.connect_timeout_s)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": "application/json",
        }

    def _report(self, message: str) -> None:
        if self.on_error is None:
            return
        try:
            self.on_error(message)
        except Exception:
            # notificatie is best-effort; de uitkomst blijft None
            logger.exception("labor_api_error_callback_failed")

    async def estimate(self, vehicle: Vehicle, job_name: str, op_code: str = "") -> Optional[LaborEstimate]:
        cfg = self.config
        if not cfg.usable:
            logger.debug("labor_api_disabled", source=cfg.source)
            return None

        params = self.build_params(vehicle, job_name, op_code)
        request_kwargs: Dict[str, Any] = {"headers": self._headers()}
        if cfg.is_post:
            request_kwargs["json"] = params
        else:
            request_kwargs["params"] = params
        method = "POST" if cfg.is_post else "GET"

        try:
            async with httpx.AsyncClient(timeout=self._timeout(), transport=self._transport) as client:
                response = await client.request(method, cfg.url, **request_kwargs)
        except httpx.HTTPError as e:
            logger.warning("labor_api_transport_error", source=cfg.source, url=cfg.url, error=repr(e))
            self._report(f"{cfg.source} failed: {e}")
            return None

        if not response.is_success:
            logger.warning("labor_api_bad_status", source=cfg.source, status_code=response.status_code)
            self._report(f"{cfg.source} failed: HTTP {response.status_code}")
            return None

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("labor_api_malformed_body", source=cfg.source, error=str(e))
            self._report(f"{cfg.source} failed: malformed response")
            return None

        est = parse_estimate(payload, cfg)
        if est is None:
            logger.info("labor_api_no_hours", source=cfg.source, hours_field=cfg.hours_field)
            self._report(f"{cfg.source} failed: no usable '{cfg.hours_field}' in response")
            return None

        logger.info("labor_api_estimate", source=cfg.source, hours=str(est.hours), confidence=est.confidence)
        return est
