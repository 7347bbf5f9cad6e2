"""Repository Protocol — dependency inversion for testability.

All methods run inside the caller's transaction. The lock_* methods take a
FOR SHARE row lock so the referenced show / wholesaler cannot be soft-deleted
before the obligation insert commits.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_settlement.domain.models import Obligation


class ObligationRepositoryProtocol(Protocol):
    async def lock_show(self, db: AsyncSession, show_id: str) -> bool:
        """True if the show exists and is ACTIVE (row locked FOR SHARE)."""
        ...

    async def show_exists(self, db: AsyncSession, show_id: str) -> bool: ...

    async def lock_wholesaler(self, db: AsyncSession, wholesaler_id: str) -> bool:
        """True if the wholesaler exists and is ACTIVE (row locked FOR SHARE)."""
        ...

    async def create_manual_obligation(
        self,
        db: AsyncSession,
        show_id: str,
        wholesaler_id: str,
        amount: Decimal,
        description: str,
        due_date: date | None,
        currency: str,
    ) -> Obligation: ...

    async def create_percent_obligation(
        self,
        db: AsyncSession,
        show_id: str,
        wholesaler_id: str,
        rate_percent: Decimal,
        description: str | None,
        due_date: date | None,
        currency: str,
    ) -> Obligation | None:
        """Read the payout (FOR UPDATE), compute, insert. None if no snapshot."""
        ...

    async def get_obligation(
        self, db: AsyncSession, obligation_id: str
    ) -> Obligation | None: ...

    async def list_obligations_by_show(
        self, db: AsyncSession, show_id: str
    ) -> list[Obligation]: ...

    async def soft_delete_obligation(
        self, db: AsyncSession, obligation_id: str
    ) -> bool: ...
