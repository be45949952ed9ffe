"""Service test fixtures — per-test app, record store and ASGI client.

Invariants:
    - Every test gets its own app, and with it a fresh in-memory SQLite database
    - `client` talks to an app whose lifecycle is READY
    - `unready_client` talks to an app whose storage was never connected

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency, the async engine
      keeps one shared connection so the table outlives each session
    - Lifecycle driven by hand: httpx's ASGITransport does not run the lifespan
"""

import pytest
from httpx import ASGITransport, AsyncClient

from calculator_api.config import Settings
from calculator_api.main import create_app


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_dir="")


@pytest.fixture
def test_app(test_settings):
    return create_app(test_settings)


@pytest.fixture
async def client(test_app):
    """ASGI client against a READY app."""
    lifecycle = test_app.state.lifecycle
    assert await lifecycle.connect()

    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c

    await lifecycle.shutdown()


@pytest.fixture
async def unready_client(test_app):
    """ASGI client against an app whose storage never connected."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c
