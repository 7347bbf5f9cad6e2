"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.fv_common.database import get_db_session
from src.main import app


async def _stub_session():
    yield MagicMock()


@pytest.fixture
async def client() -> AsyncClient:
    """HTTP client for route-level tests with the DB session stubbed out.

    Services are expected to be monkeypatched by the test; unhandled errors
    come back as 500 responses instead of being re-raised.
    """
    app.dependency_overrides[get_db_session] = _stub_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
