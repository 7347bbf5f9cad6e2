"""Unit tests for ShowApplicationService (mock repository + in-memory store)."""

from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.fv_common.errors import (
    FinancialsNotFoundError,
    InvalidAmountError,
    ShowNotFoundError,
)
from src.fv_show.application.schemas import CreateShowRequest, UpsertFinancialsRequest
from src.fv_show.application.service import ShowApplicationService
from src.fv_show.domain.models import FinancialSnapshot


def _snapshot(payout: str = "10000", gross: str | None = "12500") -> FinancialSnapshot:
    now = datetime(2025, 8, 1, 12, tzinfo=UTC)
    return FinancialSnapshot(
        show_id="show-1",
        payout_after_fees_amount=Decimal(payout),
        gross_sales_amount=Decimal(gross) if gross is not None else None,
        currency="USD",
        created_at=now,
        updated_at=now,
    )


class TestCreateShowRequest:
    def test_manual_platform_normalized_to_other(self) -> None:
        req = CreateShowRequest(name="Manual Show", show_date=date(2025, 5, 10), platform="MANUAL")
        assert req.platform == "OTHER"

    def test_platform_case_insensitive(self) -> None:
        req = CreateShowRequest(name="x", show_date=date(2025, 5, 10), platform="whatnot")
        assert req.platform == "WHATNOT"

    def test_unknown_platform_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CreateShowRequest(name="x", show_date=date(2025, 5, 10), platform="TIKTOK")

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CreateShowRequest(name="   ", show_date=date(2025, 5, 10))

    def test_status_defaults_to_planned(self) -> None:
        req = CreateShowRequest(name="x", show_date=date(2025, 5, 10))
        assert req.status == "PLANNED"


class TestUpsertFinancials:
    async def test_passes_quantized_amounts_and_commits(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.upsert_financials.return_value = _snapshot()
        svc = ShowApplicationService(repo=mock_repo)
        db = MagicMock()
        db.commit = AsyncMock()

        result = await svc.upsert_financials(
            db, "show-1",
            UpsertFinancialsRequest(payout_after_fees_amount=10000, gross_sales_amount=12500),
        )

        kwargs = mock_repo.upsert_financials.call_args.kwargs
        assert kwargs["payout_after_fees_amount"] == Decimal("10000.0000")
        assert kwargs["gross_sales_amount"] == Decimal("12500.0000")
        assert kwargs["currency"] == "USD"
        db.commit.assert_awaited_once()
        assert result.payout_after_fees_amount == "10000.0000"
        assert result.gross_sales_amount == "12500.0000"

    async def test_missing_show_raises_not_found_and_rolls_back(self) -> None:
        mock_repo = AsyncMock()
        mock_repo.upsert_financials.return_value = None
        svc = ShowApplicationService(repo=mock_repo)
        db = MagicMock()
        db.commit = AsyncMock()
        db.rollback = AsyncMock()

        with pytest.raises(ShowNotFoundError):
            await svc.upsert_financials(
                db, "missing", UpsertFinancialsRequest(payout_after_fees_amount=1)
            )
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_negative_payout_rejected_before_repo(self) -> None:
        mock_repo = AsyncMock()
        svc = ShowApplicationService(repo=mock_repo)

        with pytest.raises(InvalidAmountError):
            await svc.upsert_financials(
                MagicMock(), "show-1",
                UpsertFinancialsRequest(payout_after_fees_amount=Decimal("-1")),
            )
        mock_repo.upsert_financials.assert_not_called()

    async def test_negative_gross_rejected(self) -> None:
        svc = ShowApplicationService(repo=AsyncMock())
        with pytest.raises(InvalidAmountError, match="gross_sales_amount"):
            await svc.upsert_financials(
                MagicMock(), "show-1",
                UpsertFinancialsRequest(
                    payout_after_fees_amount=1, gross_sales_amount=Decimal("-0.5")
                ),
            )

    async def test_upsert_twice_keeps_one_snapshot_and_created_at(self, store, db) -> None:
        svc = ShowApplicationService(repo=store)
        show = await store.create_show(
            db, "August Show", date(2025, 8, 1), "WHATNOT", "PLANNED", None, None, None
        )

        first = await svc.upsert_financials(
            db, show.id,
            UpsertFinancialsRequest(payout_after_fees_amount=10000, gross_sales_amount=12500),
        )
        second = await svc.upsert_financials(
            db, show.id, UpsertFinancialsRequest(payout_after_fees_amount="8000.5")
        )

        assert len(store.financials) == 1
        assert second.payout_after_fees_amount == "8000.5000"
        assert second.gross_sales_amount is None  # omitted gross clears the value
        assert second.created_at == first.created_at
        assert second.updated_at > first.updated_at

    async def test_deleted_show_cannot_take_financials(self, store, db) -> None:
        svc = ShowApplicationService(repo=store)
        show = await store.create_show(
            db, "Gone", date(2025, 8, 1), None, "PLANNED", None, None, None
        )
        await store.soft_delete_show(db, show.id)

        with pytest.raises(ShowNotFoundError):
            await svc.upsert_financials(
                db, show.id, UpsertFinancialsRequest(payout_after_fees_amount=5)
            )


class TestGetFinancials:
    async def test_show_missing(self, store, db) -> None:
        svc = ShowApplicationService(repo=store)
        with pytest.raises(ShowNotFoundError):
            await svc.get_financials(db, "nope")

    async def test_financials_missing(self, store, db) -> None:
        svc = ShowApplicationService(repo=store)
        show = await store.create_show(
            db, "Bare", date(2025, 8, 1), None, "PLANNED", None, None, None
        )
        with pytest.raises(FinancialsNotFoundError):
            await svc.get_financials(db, show.id)


class TestShowCrud:
    async def test_create_get_list_delete(self, store, db) -> None:
        svc = ShowApplicationService(repo=store)
        created = await svc.create_show(
            db,
            CreateShowRequest(
                name="April Live", show_date=date(2025, 4, 1), platform="INSTAGRAM",
                external_reference="ext-1",
            ),
        )
        assert created.platform == "INSTAGRAM"
        assert created.show_date == "2025-04-01"
        db.commit.assert_awaited_once()

        fetched = await svc.get_show(db, created.id)
        assert fetched.name == "April Live"

        listed = await svc.list_shows(db, None, 50, 0)
        assert [s.id for s in listed.items] == [created.id]

        await svc.delete_show(db, created.id)
        with pytest.raises(ShowNotFoundError):
            await svc.get_show(db, created.id)
        assert (await svc.list_shows(db, None, 50, 0)).items == []

    async def test_delete_twice_is_not_found(self, store, db) -> None:
        svc = ShowApplicationService(repo=store)
        created = await svc.create_show(
            db, CreateShowRequest(name="x", show_date=date(2025, 4, 1))
        )
        await svc.delete_show(db, created.id)
        with pytest.raises(ShowNotFoundError):
            await svc.delete_show(db, created.id)
        db.rollback.assert_awaited_once()
