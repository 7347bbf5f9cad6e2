"""SettlementApplicationService — creates obligations for a show.

Every create runs as one transaction:
    lock show → lock wholesaler → (read payout FOR UPDATE → compute) → insert → commit
Error precedence: unknown show (404) → unknown wholesaler (404) → missing
financials (409). Input validation that needs no database read happens first.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fv_common.enums import CalculationMethod
from src.fv_common.errors import (
    FinancialsRequiredError,
    ObligationNotFoundError,
    ShowNotFoundError,
    WholesalerNotFoundError,
)
from src.fv_common.money import percent_to_bps
from src.fv_settlement.application.schemas import (
    CreateObligationRequest,
    CreateSettlementRequest,
    ObligationListResponse,
    ObligationResponse,
)
from src.fv_settlement.domain.calculator import calculate_manual
from src.fv_settlement.domain.models import Obligation
from src.fv_settlement.domain.repository import ObligationRepositoryProtocol
from src.fv_settlement.infrastructure.persistence import ObligationRepository

logger = logging.getLogger(__name__)

MANUAL_SETTLEMENT_DESCRIPTION = "Settlement (manual)"


class SettlementApplicationService:
    def __init__(self, repo: ObligationRepositoryProtocol | None = None) -> None:
        self._repo: ObligationRepositoryProtocol = repo or ObligationRepository()

    async def _lock_parties(
        self, db: AsyncSession, show_id: str, wholesaler_id: str
    ) -> None:
        if not await self._repo.lock_show(db, show_id):
            raise ShowNotFoundError(show_id)
        if not await self._repo.lock_wholesaler(db, wholesaler_id):
            raise WholesalerNotFoundError(wholesaler_id)

    async def create_settlement(
        self, db: AsyncSession, show_id: str, request: CreateSettlementRequest
    ) -> ObligationResponse:
        wholesaler_id = str(request.wholesaler_id)
        if request.method == CalculationMethod.MANUAL:
            calc = calculate_manual(request.amount)
        else:
            percent_to_bps(request.rate_percent)  # range check before any I/O

        try:
            await self._lock_parties(db, show_id, wholesaler_id)
            obligation: Obligation | None
            if request.method == CalculationMethod.MANUAL:
                obligation = await self._repo.create_manual_obligation(
                    db,
                    show_id=show_id,
                    wholesaler_id=wholesaler_id,
                    amount=calc.amount,
                    description=request.description or MANUAL_SETTLEMENT_DESCRIPTION,
                    due_date=request.due_date,
                    currency=settings.DEFAULT_CURRENCY,
                )
            else:
                obligation = await self._repo.create_percent_obligation(
                    db,
                    show_id=show_id,
                    wholesaler_id=wholesaler_id,
                    rate_percent=request.rate_percent,
                    description=request.description,
                    due_date=request.due_date,
                    currency=settings.DEFAULT_CURRENCY,
                )
                if obligation is None:
                    raise FinancialsRequiredError(show_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Settlement created: %s show=%s wholesaler=%s method=%s amount=%s",
            obligation.id, show_id, wholesaler_id,
            obligation.calculation_method, obligation.amount,
        )
        return ObligationResponse.from_domain(obligation)

    async def create_obligation(
        self, db: AsyncSession, show_id: str, request: CreateObligationRequest
    ) -> ObligationResponse:
        wholesaler_id = str(request.wholesaler_id)
        calc = calculate_manual(request.amount)
        try:
            await self._lock_parties(db, show_id, wholesaler_id)
            obligation = await self._repo.create_manual_obligation(
                db,
                show_id=show_id,
                wholesaler_id=wholesaler_id,
                amount=calc.amount,
                description=request.description,
                due_date=request.due_date,
                currency=settings.DEFAULT_CURRENCY,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Owed line item created: %s show=%s", obligation.id, show_id)
        return ObligationResponse.from_domain(obligation)

    async def list_obligations(
        self, db: AsyncSession, show_id: str
    ) -> ObligationListResponse:
        if not await self._repo.show_exists(db, show_id):
            raise ShowNotFoundError(show_id)
        obligations = await self._repo.list_obligations_by_show(db, show_id)
        return ObligationListResponse(
            items=[ObligationResponse.from_domain(o) for o in obligations]
        )

    async def get_obligation(
        self, db: AsyncSession, obligation_id: str
    ) -> ObligationResponse:
        obligation = await self._repo.get_obligation(db, obligation_id)
        if obligation is None:
            raise ObligationNotFoundError(obligation_id)
        return ObligationResponse.from_domain(obligation)

    async def delete_obligation(self, db: AsyncSession, obligation_id: str) -> None:
        try:
            if not await self._repo.soft_delete_obligation(db, obligation_id):
                raise ObligationNotFoundError(obligation_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Owed line item soft-deleted: %s", obligation_id)
