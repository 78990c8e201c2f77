from __future__ import annotations

from decimal import Decimal

import pytest

import app.verticals.autoinvoice.labor  # noqa: F401 (register all providers)

from app.core.settings import Settings
from app.verticals.autoinvoice.engine.context import Invoice, LineItem, TaxBase, Vehicle
from app.verticals.autoinvoice.labor.remote import LaborApiConfig


@pytest.fixture
def anyio_backend():
    # Dwing anyio om alleen asyncio te gebruiken (geen Trio nodig)
    return "asyncio"


@pytest.fixture
def shop_settings():
    # geen .env uit de werkmap meenemen in tests
    return Settings(_env_file=None)


@pytest.fixture
def sample_invoice():
    return Invoice(
        number="20250101-1200",
        items=(
            LineItem(description="Brake pads", quantity=Decimal("1"), unit_price=Decimal("60.00")),
            LineItem(description="Rotor", quantity=Decimal("2"), unit_price=Decimal("20.00")),
        ),
        labor_hours=Decimal("2"),
        labor_rate=Decimal("110.00"),
        tax_percent=Decimal("6.00"),
        shop_fee=Decimal("5.00"),
        tax_base=TaxBase.PARTS_PLUS_LABOR,
    )


@pytest.fixture
def bmw():
    return Vehicle(year="2018", make="BMW", model="330i", engine="2.0L")


@pytest.fixture
def api_config():
    return LaborApiConfig(
        enabled=True,
        api_key="secret-key",
        base_url="https://labor.example.com/",
        path="/v1/labor/estimate",
        method="GET",
        source="ARI",
    )
