"""WholesalerRepository — raw SQL over the wholesalers table."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_wholesaler.domain.models import Wholesaler

_WHOLESALER_COLUMNS = """
    id, name, contact_email, contact_phone, tax_id, notes,
    record_state, created_at, updated_at
"""

_INSERT_WHOLESALER_SQL = text(f"""
    INSERT INTO wholesalers (name, contact_email, contact_phone, tax_id, notes)
    VALUES (:name, :contact_email, :contact_phone, :tax_id, :notes)
    RETURNING {_WHOLESALER_COLUMNS}
""")

_GET_WHOLESALER_SQL = text(f"""
    SELECT {_WHOLESALER_COLUMNS}
    FROM wholesalers
    WHERE id = :wholesaler_id AND record_state = 'ACTIVE'
""")

_LIST_WHOLESALERS_SQL = text(f"""
    SELECT {_WHOLESALER_COLUMNS}
    FROM wholesalers
    WHERE record_state = 'ACTIVE'
    ORDER BY name ASC, id ASC
""")

_SOFT_DELETE_WHOLESALER_SQL = text("""
    UPDATE wholesalers
    SET record_state = 'DELETED', updated_at = NOW()
    WHERE id = :wholesaler_id AND record_state = 'ACTIVE'
    RETURNING id
""")


def _row_to_wholesaler(row: Any) -> Wholesaler:
    return Wholesaler(
        id=str(row.id),
        name=row.name,
        contact_email=row.contact_email,
        contact_phone=row.contact_phone,
        tax_id=row.tax_id,
        notes=row.notes,
        record_state=row.record_state,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class WholesalerRepository:
    async def create_wholesaler(
        self,
        db: AsyncSession,
        name: str,
        contact_email: str | None,
        contact_phone: str | None,
        tax_id: str | None,
        notes: str | None,
    ) -> Wholesaler:
        result = await db.execute(
            _INSERT_WHOLESALER_SQL,
            {
                "name": name,
                "contact_email": contact_email,
                "contact_phone": contact_phone,
                "tax_id": tax_id,
                "notes": notes,
            },
        )
        return _row_to_wholesaler(result.fetchone())

    async def get_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> Wholesaler | None:
        result = await db.execute(_GET_WHOLESALER_SQL, {"wholesaler_id": wholesaler_id})
        row = result.fetchone()
        return _row_to_wholesaler(row) if row else None

    async def list_wholesalers(self, db: AsyncSession) -> list[Wholesaler]:
        result = await db.execute(_LIST_WHOLESALERS_SQL)
        return [_row_to_wholesaler(row) for row in result.fetchall()]

    async def soft_delete_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> bool:
        result = await db.execute(
            _SOFT_DELETE_WHOLESALER_SQL, {"wholesaler_id": wholesaler_id}
        )
        return result.fetchone() is not None
