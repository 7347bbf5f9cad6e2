"""ObligationRepository — raw SQL over owed_line_items.

Locking order inside one transaction (percent path):
  1. shows          FOR SHARE   (lock_show)
  2. wholesalers    FOR SHARE   (lock_wholesaler)
  3. show_financials FOR UPDATE (create_percent_obligation)
  4. INSERT owed_line_items

Step 3 blocks a concurrent financials upsert until the insert commits, so the
stored base_amount is exactly the payout the amount was computed from.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_common.enums import CalculationMethod
from src.fv_settlement.domain.calculator import (
    calculate_percent_payout,
    validate_obligation_fields,
)
from src.fv_settlement.domain.models import Obligation

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_OBLIGATION_COLUMNS = """
    id, show_id, wholesaler_id, amount, currency, description, due_date,
    status, calculation_method, rate_bps, base_amount, record_state,
    created_at, updated_at
"""

_LOCK_SHOW_SQL = text("""
    SELECT id FROM shows
    WHERE id = :show_id AND record_state = 'ACTIVE'
    FOR SHARE
""")

_SHOW_EXISTS_SQL = text("""
    SELECT id FROM shows
    WHERE id = :show_id AND record_state = 'ACTIVE'
""")

_LOCK_WHOLESALER_SQL = text("""
    SELECT id FROM wholesalers
    WHERE id = :wholesaler_id AND record_state = 'ACTIVE'
    FOR SHARE
""")

_LOCK_FINANCIALS_SQL = text("""
    SELECT payout_after_fees_amount
    FROM show_financials
    WHERE show_id = :show_id
    FOR UPDATE
""")

_INSERT_OBLIGATION_SQL = text(f"""
    INSERT INTO owed_line_items
        (show_id, wholesaler_id, amount, currency, description, due_date,
         status, calculation_method, rate_bps, base_amount)
    VALUES
        (:show_id, :wholesaler_id, CAST(:amount AS NUMERIC(19, 4)), :currency,
         :description, :due_date, 'PENDING', :calculation_method, :rate_bps,
         CAST(:base_amount AS NUMERIC(19, 4)))
    RETURNING {_OBLIGATION_COLUMNS}
""")

_GET_OBLIGATION_SQL = text(f"""
    SELECT {_OBLIGATION_COLUMNS}
    FROM owed_line_items
    WHERE id = :obligation_id AND record_state = 'ACTIVE'
""")

_LIST_BY_SHOW_SQL = text(f"""
    SELECT {_OBLIGATION_COLUMNS}
    FROM owed_line_items
    WHERE show_id = :show_id AND record_state = 'ACTIVE'
    ORDER BY created_at ASC, id ASC
""")

_SOFT_DELETE_OBLIGATION_SQL = text("""
    UPDATE owed_line_items
    SET record_state = 'DELETED', updated_at = NOW()
    WHERE id = :obligation_id AND record_state = 'ACTIVE'
    RETURNING id
""")


def row_to_obligation(row: Any) -> Obligation:
    return Obligation(
        id=str(row.id),
        show_id=str(row.show_id),
        wholesaler_id=str(row.wholesaler_id),
        amount=row.amount,
        currency=row.currency,
        description=row.description,
        due_date=row.due_date,
        status=row.status,
        calculation_method=row.calculation_method,
        rate_bps=row.rate_bps,
        base_amount=row.base_amount,
        record_state=row.record_state,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def default_percent_description(rate_bps: int) -> str:
    """'Settlement: 25% of payout' for 2500 bps, '12.35%' for 1235 bps."""
    percent = (Decimal(rate_bps) / 100).normalize()
    return f"Settlement: {percent:f}% of payout"


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ObligationRepository:
    async def lock_show(self, db: AsyncSession, show_id: str) -> bool:
        result = await db.execute(_LOCK_SHOW_SQL, {"show_id": show_id})
        return result.fetchone() is not None

    async def show_exists(self, db: AsyncSession, show_id: str) -> bool:
        result = await db.execute(_SHOW_EXISTS_SQL, {"show_id": show_id})
        return result.fetchone() is not None

    async def lock_wholesaler(self, db: AsyncSession, wholesaler_id: str) -> bool:
        result = await db.execute(_LOCK_WHOLESALER_SQL, {"wholesaler_id": wholesaler_id})
        return result.fetchone() is not None

    async def _insert(
        self,
        db: AsyncSession,
        show_id: str,
        wholesaler_id: str,
        amount: Decimal,
        description: str,
        due_date: date | None,
        currency: str,
        calculation_method: str,
        rate_bps: int | None,
        base_amount: Decimal | None,
    ) -> Obligation:
        amount = validate_obligation_fields(
            amount, description, calculation_method, rate_bps, base_amount
        )
        result = await db.execute(
            _INSERT_OBLIGATION_SQL,
            {
                "show_id": show_id,
                "wholesaler_id": wholesaler_id,
                "amount": amount,
                "currency": currency,
                "description": description.strip(),
                "due_date": due_date,
                "calculation_method": calculation_method,
                "rate_bps": rate_bps,
                "base_amount": base_amount,
            },
        )
        return row_to_obligation(result.fetchone())

    async def create_manual_obligation(
        self,
        db: AsyncSession,
        show_id: str,
        wholesaler_id: str,
        amount: Decimal,
        description: str,
        due_date: date | None,
        currency: str,
    ) -> Obligation:
        return await self._insert(
            db,
            show_id=show_id,
            wholesaler_id=wholesaler_id,
            amount=amount,
            description=description,
            due_date=due_date,
            currency=currency,
            calculation_method=CalculationMethod.MANUAL.value,
            rate_bps=None,
            base_amount=None,
        )

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
        result = await db.execute(_LOCK_FINANCIALS_SQL, {"show_id": show_id})
        row = result.fetchone()
        if row is None:
            return None

        calc = calculate_percent_payout(rate_percent, row.payout_after_fees_amount)
        logger.debug(
            "Percent settlement: show=%s base=%s bps=%d amount=%s",
            show_id, calc.base_amount, calc.rate_bps, calc.amount,
        )
        return await self._insert(
            db,
            show_id=show_id,
            wholesaler_id=wholesaler_id,
            amount=calc.amount,
            description=description or default_percent_description(calc.rate_bps),
            due_date=due_date,
            currency=currency,
            calculation_method=calc.method,
            rate_bps=calc.rate_bps,
            base_amount=calc.base_amount,
        )

    async def get_obligation(
        self, db: AsyncSession, obligation_id: str
    ) -> Obligation | None:
        result = await db.execute(_GET_OBLIGATION_SQL, {"obligation_id": obligation_id})
        row = result.fetchone()
        return row_to_obligation(row) if row else None

    async def list_obligations_by_show(
        self, db: AsyncSession, show_id: str
    ) -> list[Obligation]:
        result = await db.execute(_LIST_BY_SHOW_SQL, {"show_id": show_id})
        return [row_to_obligation(row) for row in result.fetchall()]

    async def soft_delete_obligation(
        self, db: AsyncSession, obligation_id: str
    ) -> bool:
        result = await db.execute(
            _SOFT_DELETE_OBLIGATION_SQL, {"obligation_id": obligation_id}
        )
        return result.fetchone() is not None
