"""ShowApplicationService — shows and the per-show financial snapshot.

Amounts are validated through fv_common.money before they reach SQL; the
NUMERIC(19,4) CHECK constraints in the schema are the second line.
Mutations commit on success and roll back on any failure.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fv_common.errors import FinancialsNotFoundError, ShowNotFoundError
from src.fv_common.money import require_non_negative
from src.fv_show.application.schemas import (
    CreateShowRequest,
    FinancialsResponse,
    ShowListResponse,
    ShowResponse,
    UpsertFinancialsRequest,
)
from src.fv_show.domain.repository import ShowRepositoryProtocol
from src.fv_show.infrastructure.persistence import ShowRepository

logger = logging.getLogger(__name__)


class ShowApplicationService:
    def __init__(self, repo: ShowRepositoryProtocol | None = None) -> None:
        self._repo: ShowRepositoryProtocol = repo or ShowRepository()

    # ------------------------------------------------------------------
    # Shows
    # ------------------------------------------------------------------

    async def create_show(
        self, db: AsyncSession, request: CreateShowRequest
    ) -> ShowResponse:
        try:
            show = await self._repo.create_show(
                db,
                name=request.name,
                show_date=request.show_date,
                platform=request.platform,
                status=request.status.value,
                location=request.location,
                external_reference=request.external_reference,
                notes=request.notes,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Show created: %s (%s)", show.id, show.show_date)
        return ShowResponse.from_domain(show)

    async def list_shows(
        self, db: AsyncSession, status: str | None, limit: int, offset: int
    ) -> ShowListResponse:
        shows = await self._repo.list_shows(db, status, limit, offset)
        return ShowListResponse(items=[ShowResponse.from_domain(s) for s in shows])

    async def get_show(self, db: AsyncSession, show_id: str) -> ShowResponse:
        show = await self._repo.get_show(db, show_id)
        if show is None:
            raise ShowNotFoundError(show_id)
        return ShowResponse.from_domain(show)

    async def delete_show(self, db: AsyncSession, show_id: str) -> None:
        try:
            deleted = await self._repo.soft_delete_show(db, show_id)
            if not deleted:
                raise ShowNotFoundError(show_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Show soft-deleted: %s", show_id)

    # ------------------------------------------------------------------
    # Financial snapshot
    # ------------------------------------------------------------------

    async def upsert_financials(
        self, db: AsyncSession, show_id: str, request: UpsertFinancialsRequest
    ) -> FinancialsResponse:
        payout = require_non_negative(
            request.payout_after_fees_amount, "payout_after_fees_amount"
        )
        gross = (
            require_non_negative(request.gross_sales_amount, "gross_sales_amount")
            if request.gross_sales_amount is not None
            else None
        )
        try:
            snapshot = await self._repo.upsert_financials(
                db,
                show_id=show_id,
                payout_after_fees_amount=payout,
                gross_sales_amount=gross,
                currency=settings.DEFAULT_CURRENCY,
            )
            if snapshot is None:
                raise ShowNotFoundError(show_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Financials upserted for show %s: payout=%s", show_id, payout)
        return FinancialsResponse.from_domain(snapshot)

    async def get_financials(
        self, db: AsyncSession, show_id: str
    ) -> FinancialsResponse:
        if await self._repo.get_show(db, show_id) is None:
            raise ShowNotFoundError(show_id)
        snapshot = await self._repo.get_financials(db, show_id)
        if snapshot is None:
            raise FinancialsNotFoundError(show_id)
        return FinancialsResponse.from_domain(snapshot)
