import pytest
from fastapi.testclient import TestClient

from app.core.settings import Settings, get_settings
from app.main import app


@pytest.fixture
def anyio_backend():
    # Dwing anyio om alleen asyncio te gebruiken (geen Trio nodig)
    return "asyncio"


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, labor_api_enabled=False)


@pytest.fixture
def client(test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
