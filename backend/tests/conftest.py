"""Shared test configuration and fixtures.

Every test gets fresh in-memory stores, so nothing leaks between cases. The
API fixtures build a dedicated app around those stores with ``create_app``.
"""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from staybook.auth.jwt import create_access_token
from staybook.config import Settings
from staybook.main import create_app
from staybook.repositories import Repositories, build_memory_repositories
from staybook.reservations.types import PropertyInfo
from staybook.services.notifications import HostNotifier
from staybook.services.reservations import ReservationService

# Calendar "today" for service-level tests; the June 2025 stays they book are
# still in the future.
FIXED_TODAY = date(2025, 5, 1)

HOST_ID = "host-1"
GUEST_ID = "guest-1"
OTHER_GUEST_ID = "guest-2"
ADMIN_ID = "admin-1"


# ---------------------------------------------------------------------------
# Engine fixtures: stores, notifier, service
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        storage_backend="memory",
        environment="test",
        jwt_secret_key="test-secret-key-not-for-production",
    )


@pytest.fixture
def memory_repositories() -> Repositories:
    return build_memory_repositories()


@pytest.fixture
def notifier(memory_repositories: Repositories) -> HostNotifier:
    return HostNotifier(memory_repositories.notifications)


@pytest.fixture
def service(memory_repositories: Repositories, notifier: HostNotifier) -> ReservationService:
    return ReservationService(memory_repositories, notifier, today=lambda: FIXED_TODAY)


@pytest_asyncio.fixture
async def test_property(memory_repositories: Repositories) -> PropertyInfo:
    """Nightly rate 100, capacity 4, hosted by HOST_ID."""
    return await memory_repositories.properties.add(
        host_id=HOST_ID,
        title="Casa Test",
        price_per_night=Decimal("100.00"),
        max_guests=4,
        location="Valencia",
    )


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app(test_settings: Settings, memory_repositories: Repositories) -> FastAPI:
    return create_app(test_settings, memory_repositories)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    await app.state.notifier.drain()


def _headers(config: Settings, user_id: str, role: str = "user") -> dict[str, str]:
    token = create_access_token({"sub": user_id, "role": role}, config=config)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_settings: Settings) -> dict[str, str]:
    """Authorization headers for GUEST_ID."""
    return _headers(test_settings, GUEST_ID)


@pytest.fixture
def other_auth_headers(test_settings: Settings) -> dict[str, str]:
    return _headers(test_settings, OTHER_GUEST_ID)


@pytest.fixture
def host_auth_headers(test_settings: Settings) -> dict[str, str]:
    return _headers(test_settings, HOST_ID, role="host")


@pytest.fixture
def admin_auth_headers(test_settings: Settings) -> dict[str, str]:
    return _headers(test_settings, ADMIN_ID, role="admin")
