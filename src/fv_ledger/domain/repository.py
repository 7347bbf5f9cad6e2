"""Repository Protocol — dependency inversion for testability."""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_ledger.domain.models import Payment
from src.fv_settlement.domain.models import Obligation
from src.fv_wholesaler.domain.models import Wholesaler


class LedgerRepositoryProtocol(Protocol):
    # --- payments ---

    async def lock_wholesaler(self, db: AsyncSession, wholesaler_id: str) -> bool: ...

    async def lock_show(self, db: AsyncSession, show_id: str) -> bool: ...

    async def create_payment(
        self,
        db: AsyncSession,
        wholesaler_id: str,
        show_id: str | None,
        amount: Decimal,
        currency: str,
        payment_date: date,
        payment_method: str,
        reference: str | None,
        notes: str | None,
    ) -> Payment: ...

    async def get_payment(self, db: AsyncSession, payment_id: str) -> Payment | None: ...

    async def list_payments(
        self, db: AsyncSession, wholesaler_id: str | None
    ) -> list[Payment]:
        """Active payments, optionally for one wholesaler, oldest first."""
        ...

    async def soft_delete_payment(self, db: AsyncSession, payment_id: str) -> bool: ...

    # --- ledger reads ---

    async def get_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> Wholesaler | None: ...

    async def list_wholesalers(self, db: AsyncSession) -> list[Wholesaler]: ...

    async def list_obligations(
        self, db: AsyncSession, wholesaler_id: str | None
    ) -> list[Obligation]:
        """Active obligations, optionally for one wholesaler.

        Obligations of a soft-deleted show are still included.
        """
        ...
