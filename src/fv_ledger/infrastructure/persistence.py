"""LedgerRepository — payments CRUD plus the reads the aggregator needs.

Balances and statements are not computed in SQL: this repository only loads
active rows and fv_ledger.domain.aggregator does the arithmetic.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_ledger.domain.models import Payment
from src.fv_settlement.domain.models import Obligation
from src.fv_settlement.infrastructure.persistence import row_to_obligation
from src.fv_wholesaler.domain.models import Wholesaler
from src.fv_wholesaler.infrastructure.persistence import WholesalerRepository

# ---------------------------------------------------------------------------
# SQL: payments
# ---------------------------------------------------------------------------

_PAYMENT_COLUMNS = """
    id, wholesaler_id, show_id, amount, currency, payment_date,
    payment_method, reference, notes, record_state, created_at, updated_at
"""

_LOCK_WHOLESALER_SQL = text("""
    SELECT id FROM wholesalers
    WHERE id = :wholesaler_id AND record_state = 'ACTIVE'
    FOR SHARE
""")

_LOCK_SHOW_SQL = text("""
    SELECT id FROM shows
    WHERE id = :show_id AND record_state = 'ACTIVE'
    FOR SHARE
""")

_INSERT_PAYMENT_SQL = text(f"""
    INSERT INTO payments
        (wholesaler_id, show_id, amount, currency, payment_date,
         payment_method, reference, notes)
    VALUES
        (:wholesaler_id, :show_id, CAST(:amount AS NUMERIC(19, 4)), :currency,
         :payment_date, :payment_method, :reference, :notes)
    RETURNING {_PAYMENT_COLUMNS}
""")

_GET_PAYMENT_SQL = text(f"""
    SELECT {_PAYMENT_COLUMNS}
    FROM payments
    WHERE id = :payment_id AND record_state = 'ACTIVE'
""")

_LIST_PAYMENTS_SQL = text(f"""
    SELECT {_PAYMENT_COLUMNS}
    FROM payments
    WHERE record_state = 'ACTIVE'
      AND (CAST(:wholesaler_id AS UUID) IS NULL
           OR wholesaler_id = CAST(:wholesaler_id AS UUID))
    ORDER BY payment_date ASC, created_at ASC, id ASC
""")

_SOFT_DELETE_PAYMENT_SQL = text("""
    UPDATE payments
    SET record_state = 'DELETED', updated_at = NOW()
    WHERE id = :payment_id AND record_state = 'ACTIVE'
    RETURNING id
""")

# ---------------------------------------------------------------------------
# SQL: obligations (read-only here)
# ---------------------------------------------------------------------------

_LIST_OBLIGATIONS_SQL = text("""
    SELECT id, show_id, wholesaler_id, amount, currency, description, due_date,
           status, calculation_method, rate_bps, base_amount, record_state,
           created_at, updated_at
    FROM owed_line_items
    WHERE record_state = 'ACTIVE'
      AND (CAST(:wholesaler_id AS UUID) IS NULL
           OR wholesaler_id = CAST(:wholesaler_id AS UUID))
    ORDER BY created_at ASC, id ASC
""")


def _row_to_payment(row: Any) -> Payment:
    return Payment(
        id=str(row.id),
        wholesaler_id=str(row.wholesaler_id),
        show_id=str(row.show_id) if row.show_id else None,
        amount=row.amount,
        currency=row.currency,
        payment_date=row.payment_date,
        payment_method=row.payment_method,
        reference=row.reference,
        notes=row.notes,
        record_state=row.record_state,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class LedgerRepository:
    def __init__(self, wholesalers: WholesalerRepository | None = None) -> None:
        self._wholesalers = wholesalers or WholesalerRepository()

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    async def lock_wholesaler(self, db: AsyncSession, wholesaler_id: str) -> bool:
        result = await db.execute(_LOCK_WHOLESALER_SQL, {"wholesaler_id": wholesaler_id})
        return result.fetchone() is not None

    async def lock_show(self, db: AsyncSession, show_id: str) -> bool:
        result = await db.execute(_LOCK_SHOW_SQL, {"show_id": show_id})
        return result.fetchone() is not None

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
    ) -> Payment:
        result = await db.execute(
            _INSERT_PAYMENT_SQL,
            {
                "wholesaler_id": wholesaler_id,
                "show_id": show_id,
                "amount": amount,
                "currency": currency,
                "payment_date": payment_date,
                "payment_method": payment_method,
                "reference": reference,
                "notes": notes,
            },
        )
        return _row_to_payment(result.fetchone())

    async def get_payment(self, db: AsyncSession, payment_id: str) -> Payment | None:
        result = await db.execute(_GET_PAYMENT_SQL, {"payment_id": payment_id})
        row = result.fetchone()
        return _row_to_payment(row) if row else None

    async def list_payments(
        self, db: AsyncSession, wholesaler_id: str | None
    ) -> list[Payment]:
        result = await db.execute(_LIST_PAYMENTS_SQL, {"wholesaler_id": wholesaler_id})
        return [_row_to_payment(row) for row in result.fetchall()]

    async def soft_delete_payment(self, db: AsyncSession, payment_id: str) -> bool:
        result = await db.execute(_SOFT_DELETE_PAYMENT_SQL, {"payment_id": payment_id})
        return result.fetchone() is not None

    # ------------------------------------------------------------------
    # Ledger reads
    # ------------------------------------------------------------------

    async def get_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> Wholesaler | None:
        return await self._wholesalers.get_wholesaler(db, wholesaler_id)

    async def list_wholesalers(self, db: AsyncSession) -> list[Wholesaler]:
        return await self._wholesalers.list_wholesalers(db)

    async def list_obligations(
        self, db: AsyncSession, wholesaler_id: str | None
    ) -> list[Obligation]:
        result = await db.execute(_LIST_OBLIGATIONS_SQL, {"wholesaler_id": wholesaler_id})
        return [row_to_obligation(row) for row in result.fetchall()]
