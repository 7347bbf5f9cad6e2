"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_wholesaler.domain.models import Wholesaler


class WholesalerRepositoryProtocol(Protocol):
    async def create_wholesaler(
        self,
        db: AsyncSession,
        name: str,
        contact_email: str | None,
        contact_phone: str | None,
        tax_id: str | None,
        notes: str | None,
    ) -> Wholesaler: ...

    async def get_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> Wholesaler | None: ...

    async def list_wholesalers(self, db: AsyncSession) -> list[Wholesaler]:
        """All ACTIVE wholesalers ordered by name."""
        ...

    async def soft_delete_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> bool: ...
