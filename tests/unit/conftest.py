"""Unit-test fixtures: in-memory store and a stand-in AsyncSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ledger_fakes import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def db() -> MagicMock:
    """Stand-in AsyncSession: only commit/rollback are awaited by services."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session
