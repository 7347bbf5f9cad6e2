"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock or in-memory store that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_show.domain.models import FinancialSnapshot, Show


class ShowRepositoryProtocol(Protocol):
    async def create_show(
        self,
        db: AsyncSession,
        name: str,
        show_date: date,
        platform: str | None,
        status: str,
        location: str | None,
        external_reference: str | None,
        notes: str | None,
    ) -> Show: ...

    async def get_show(self, db: AsyncSession, show_id: str) -> Show | None: ...

    async def list_shows(
        self,
        db: AsyncSession,
        status: str | None,
        limit: int,
        offset: int,
    ) -> list[Show]: ...

    async def soft_delete_show(self, db: AsyncSession, show_id: str) -> bool: ...

    async def upsert_financials(
        self,
        db: AsyncSession,
        show_id: str,
        payout_after_fees_amount: Decimal,
        gross_sales_amount: Decimal | None,
        currency: str,
    ) -> FinancialSnapshot | None:
        """Insert or replace both amounts, keeping created_at.

        Returns None when the show does not exist or is soft-deleted.
        """
        ...

    async def get_financials(
        self, db: AsyncSession, show_id: str
    ) -> FinancialSnapshot | None: ...
