"""WholesalerApplicationService — thin composition layer over the repository."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_common.errors import WholesalerNotFoundError
from src.fv_wholesaler.application.schemas import (
    CreateWholesalerRequest,
    WholesalerListResponse,
    WholesalerResponse,
)
from src.fv_wholesaler.domain.repository import WholesalerRepositoryProtocol
from src.fv_wholesaler.infrastructure.persistence import WholesalerRepository

logger = logging.getLogger(__name__)


class WholesalerApplicationService:
    def __init__(self, repo: WholesalerRepositoryProtocol | None = None) -> None:
        self._repo: WholesalerRepositoryProtocol = repo or WholesalerRepository()

    async def create_wholesaler(
        self, db: AsyncSession, request: CreateWholesalerRequest
    ) -> WholesalerResponse:
        try:
            wholesaler = await self._repo.create_wholesaler(
                db,
                name=request.name,
                contact_email=request.contact_email,
                contact_phone=request.contact_phone,
                tax_id=request.tax_id,
                notes=request.notes,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Wholesaler created: %s", wholesaler.id)
        return WholesalerResponse.from_domain(wholesaler)

    async def list_wholesalers(self, db: AsyncSession) -> WholesalerListResponse:
        wholesalers = await self._repo.list_wholesalers(db)
        return WholesalerListResponse(
            items=[WholesalerResponse.from_domain(w) for w in wholesalers]
        )

    async def get_wholesaler(
        self, db: AsyncSession, wholesaler_id: str
    ) -> WholesalerResponse:
        wholesaler = await self._repo.get_wholesaler(db, wholesaler_id)
        if wholesaler is None:
            raise WholesalerNotFoundError(wholesaler_id)
        return WholesalerResponse.from_domain(wholesaler)

    async def delete_wholesaler(self, db: AsyncSession, wholesaler_id: str) -> None:
        try:
            if not await self._repo.soft_delete_wholesaler(db, wholesaler_id):
                raise WholesalerNotFoundError(wholesaler_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Wholesaler soft-deleted: %s", wholesaler_id)
