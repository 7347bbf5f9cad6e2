"""fv_wholesaler REST API.

GET /wholesalers/balances and /wholesalers/{id}/statement live in fv_ledger;
that router is included first so the literal path wins over /{wholesaler_id}.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_common.database import get_db_session
from src.fv_common.response import ApiResponse, success_response
from src.fv_gateway.middleware.request_log import get_request_id
from src.fv_wholesaler.application.schemas import CreateWholesalerRequest
from src.fv_wholesaler.application.service import WholesalerApplicationService

router = APIRouter(prefix="/wholesalers", tags=["wholesalers"])

_service = WholesalerApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_wholesaler(
    body: CreateWholesalerRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_wholesaler(db, body)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("")
async def list_wholesalers(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_wholesalers(db)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/{wholesaler_id}")
async def get_wholesaler(
    wholesaler_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_wholesaler(db, str(wholesaler_id))
    return success_response(data.model_dump(), get_request_id(request))


@router.delete("/{wholesaler_id}")
async def delete_wholesaler(
    wholesaler_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_wholesaler(db, str(wholesaler_id))
    return success_response(
        {"id": str(wholesaler_id), "deleted": True}, get_request_id(request)
    )
