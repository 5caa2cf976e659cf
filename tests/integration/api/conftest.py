"""Integration test fixtures for API testing."""
from __future__ import annotations

import pytest
from httpx import AsyncClient, ASGITransport

from backend.src.adapters.inbound.fastapi_app import app
from backend.src.adapters.outbound.clock.system_clock import FixedClock
from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.container import ApplicationContainer

NOW_MS = 1_700_000_000_000


@pytest.fixture
def test_settings():
    """Create test settings with in-memory backends."""
    settings = Settings()
    settings.persistence_backend = "memory"
    settings.app_env = "test"
    settings.firebase.enabled = False
    return settings


@pytest.fixture
def api_clock() -> FixedClock:
    return FixedClock(NOW_MS)


@pytest.fixture
def test_container(test_settings, api_clock):
    """Create a test container with the dev verifier and a fixed clock."""
    container = ApplicationContainer(test_settings)
    container.override("clock", api_clock)
    return container


@pytest.fixture
async def async_client(test_container):
    """Create an async test client for the FastAPI app."""
    app.state.container = test_container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    """Bearer header factory understood by the development verifier."""
    def _headers(uid: str) -> dict:
        return {"Authorization": f"Bearer {uid}"}
    return _headers
