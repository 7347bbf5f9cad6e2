"""Unit tests for LedgerRepository using MagicMock AsyncSession."""

from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.fv_ledger.infrastructure.persistence import LedgerRepository


def _make_payment_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", "pay-1")
    row.wholesaler_id = "wh-1"
    row.show_id = kwargs.get("show_id")
    row.amount = Decimal("1000.0000")
    row.currency = "USD"
    row.payment_date = date(2025, 8, 15)
    row.payment_method = "OTHER"
    row.reference = "CHK-001"
    row.notes = None
    row.record_state = "ACTIVE"
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


@pytest.fixture
def db():
    return MagicMock()


class TestPayments:
    async def test_create_payment_params(self, db) -> None:
        result = MagicMock()
        result.fetchone.return_value = _make_payment_row()
        db.execute = AsyncMock(return_value=result)

        payment = await LedgerRepository().create_payment(
            db, "wh-1", None, Decimal("1000.0000"), "USD", date(2025, 8, 15),
            "OTHER", "CHK-001", None,
        )

        params = db.execute.call_args.args[1]
        assert params["show_id"] is None
        assert params["payment_method"] == "OTHER"
        assert payment.show_id is None
        assert payment.amount == Decimal("1000.0000")

    async def test_show_id_mapped_to_str(self, db) -> None:
        result = MagicMock()
        result.fetchone.return_value = _make_payment_row(show_id="show-9")
        db.execute = AsyncMock(return_value=result)
        payment = await LedgerRepository().get_payment(db, "pay-1")
        assert payment.show_id == "show-9"

    async def test_list_without_filter(self, db) -> None:
        result = MagicMock()
        result.fetchall.return_value = [_make_payment_row(id="a"), _make_payment_row(id="b")]
        db.execute = AsyncMock(return_value=result)

        payments = await LedgerRepository().list_payments(db, None)

        assert [p.id for p in payments] == ["a", "b"]
        assert db.execute.call_args.args[1] == {"wholesaler_id": None}


class TestLedgerReads:
    async def test_wholesaler_reads_delegate(self, db) -> None:
        wholesalers = AsyncMock()
        wholesalers.list_wholesalers.return_value = []
        repo = LedgerRepository(wholesalers=wholesalers)

        assert await repo.list_wholesalers(db) == []
        wholesalers.list_wholesalers.assert_awaited_once_with(db)

    async def test_list_obligations_filters_active(self, db) -> None:
        result = MagicMock()
        result.fetchall.return_value = []
        db.execute = AsyncMock(return_value=result)

        await LedgerRepository().list_obligations(db, "wh-1")

        sql = str(db.execute.call_args.args[0])
        assert "record_state = 'ACTIVE'" in sql
        assert db.execute.call_args.args[1] == {"wholesaler_id": "wh-1"}
