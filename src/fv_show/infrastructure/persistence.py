"""ShowRepository — concrete implementation of ShowRepositoryProtocol.

All queries use raw text() SQL (no ORM). Soft-deleted shows
(record_state = 'DELETED') are invisible to every read.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_show.domain.models import FinancialSnapshot, Show

# ---------------------------------------------------------------------------
# SQL: shows
# ---------------------------------------------------------------------------

_SHOW_COLUMNS = """
    id, name, show_date, platform, status, location,
    external_reference, notes, record_state, created_at, updated_at
"""

_INSERT_SHOW_SQL = text(f"""
    INSERT INTO shows
        (name, show_date, platform, status, location, external_reference, notes)
    VALUES
        (:name, :show_date, :platform, :status, :location, :external_reference, :notes)
    RETURNING {_SHOW_COLUMNS}
""")

_GET_SHOW_SQL = text(f"""
    SELECT {_SHOW_COLUMNS}
    FROM shows
    WHERE id = :show_id AND record_state = 'ACTIVE'
""")

_LIST_SHOWS_SQL = text(f"""
    SELECT {_SHOW_COLUMNS}
    FROM shows
    WHERE record_state = 'ACTIVE'
      AND (CAST(:status AS TEXT) IS NULL OR status = CAST(:status AS TEXT))
    ORDER BY show_date DESC, created_at DESC, id DESC
    LIMIT :limit OFFSET :offset
""")

_SOFT_DELETE_SHOW_SQL = text("""
    UPDATE shows
    SET record_state = 'DELETED', updated_at = NOW()
    WHERE id = :show_id AND record_state = 'ACTIVE'
    RETURNING id
""")

# ---------------------------------------------------------------------------
# SQL: show_financials
# ---------------------------------------------------------------------------

# Single statement: the show check and the upsert cannot interleave with a
# concurrent soft-delete. ON CONFLICT keeps the original created_at.
_UPSERT_FINANCIALS_SQL = text("""
    INSERT INTO show_financials
        (show_id, payout_after_fees_amount, gross_sales_amount, currency)
    SELECT s.id,
           CAST(:payout AS NUMERIC(19, 4)),
           CAST(:gross AS NUMERIC(19, 4)),
           CAST(:currency AS TEXT)
    FROM shows s
    WHERE s.id = :show_id AND s.record_state = 'ACTIVE'
    ON CONFLICT (show_id) DO UPDATE SET
        payout_after_fees_amount = EXCLUDED.payout_after_fees_amount,
        gross_sales_amount       = EXCLUDED.gross_sales_amount,
        updated_at               = NOW()
    RETURNING show_id, payout_after_fees_amount, gross_sales_amount,
              currency, created_at, updated_at
""")

_GET_FINANCIALS_SQL = text("""
    SELECT show_id, payout_after_fees_amount, gross_sales_amount,
           currency, created_at, updated_at
    FROM show_financials
    WHERE show_id = :show_id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_show(row: Any) -> Show:
    return Show(
        id=str(row.id),
        name=row.name,
        show_date=row.show_date,
        platform=row.platform,
        status=row.status,
        location=row.location,
        external_reference=row.external_reference,
        notes=row.notes,
        record_state=row.record_state,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_financials(row: Any) -> FinancialSnapshot:
    return FinancialSnapshot(
        show_id=str(row.show_id),
        payout_after_fees_amount=row.payout_after_fees_amount,
        gross_sales_amount=row.gross_sales_amount,
        currency=row.currency,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ShowRepository:
    """Concrete repository for shows and their financial snapshot."""

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
    ) -> Show:
        result = await db.execute(
            _INSERT_SHOW_SQL,
            {
                "name": name,
                "show_date": show_date,
                "platform": platform,
                "status": status,
                "location": location,
                "external_reference": external_reference,
                "notes": notes,
            },
        )
        return _row_to_show(result.fetchone())

    async def get_show(self, db: AsyncSession, show_id: str) -> Show | None:
        result = await db.execute(_GET_SHOW_SQL, {"show_id": show_id})
        row = result.fetchone()
        return _row_to_show(row) if row else None

    async def list_shows(
        self,
        db: AsyncSession,
        status: str | None,
        limit: int,
        offset: int,
    ) -> list[Show]:
        result = await db.execute(
            _LIST_SHOWS_SQL,
            {"status": status, "limit": limit, "offset": offset},
        )
        return [_row_to_show(row) for row in result.fetchall()]

    async def soft_delete_show(self, db: AsyncSession, show_id: str) -> bool:
        result = await db.execute(_SOFT_DELETE_SHOW_SQL, {"show_id": show_id})
        return result.fetchone() is not None

    async def upsert_financials(
        self,
        db: AsyncSession,
        show_id: str,
        payout_after_fees_amount: Decimal,
        gross_sales_amount: Decimal | None,
        currency: str,
    ) -> FinancialSnapshot | None:
        result = await db.execute(
            _UPSERT_FINANCIALS_SQL,
            {
                "show_id": show_id,
                "payout": payout_after_fees_amount,
                "gross": gross_sales_amount,
                "currency": currency,
            },
        )
        row = result.fetchone()
        return _row_to_financials(row) if row else None

    async def get_financials(
        self, db: AsyncSession, show_id: str
    ) -> FinancialSnapshot | None:
        result = await db.execute(_GET_FINANCIALS_SQL, {"show_id": show_id})
        row = result.fetchone()
        return _row_to_financials(row) if row else None
