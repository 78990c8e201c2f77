# app/core/settings.py
from decimal import Decimal
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.verticals.autoinvoice.engine.context import TaxBase


class Settings(BaseSettings):
    # === Shop ===
    shop_name: str = "Baker's Automotive Repair, LLC"
    shop_address: str = "33860 Groesbeck Hwy, Clinton Township, MI 48035"
    shop_phone: str = "(586) 843-4157"
    shop_email: str = "service@bakersautorepair.com"
    warranty_text: str = "12-month / 12,000-mile parts & labor warranty."
    currency_symbol: str = "$"

    # === Invoice defaults ===
    labor_rate_per_hour: Decimal = Decimal("110.00")
    tax_rate_percent: Decimal = Decimal("6.00")
    shop_fee: Decimal = Decimal("0.00")
    tax_base: TaxBase = TaxBase.PARTS_PLUS_LABOR

    # === Labor estimate chain ===
    # provider kinds in volgorde; heuristic sluit altijd af
    labor_providers: List[str] = Field(default_factory=lambda: ["remote"])

    # === Labor estimate API ===
    labor_api_enabled: bool = False
    labor_api_key: str = ""
    labor_api_base_url: str = "https://api.ari.app"
    labor_api_path: str = "/v1/labor/estimate"
    labor_api_method: str = Field("GET", description="GET | POST")
    labor_api_source: str = "ARI"
    labor_api_connect_timeout_s: float = 8.0
    labor_api_read_timeout_s: float = 12.0

    # veldnamen zoals de provider ze verwacht / teruggeeft
    labor_api_param_year: str = "year"
    labor_api_param_make: str = "make"
    labor_api_param_model: str = "model"
    labor_api_param_engine: str = "engine"
    labor_api_param_job: str = "job"
    labor_api_hours_field: str = "hours"
    labor_api_confidence_field: str = "confidence"

    # None => geen overall deadline, alleen per-provider timeouts
    labor_estimate_deadline_s: Optional[float] = None

    # === Logging ===
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()  # leest .env
