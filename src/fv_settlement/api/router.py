"""fv_settlement REST API — settlements and owed line items."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_common.database import get_db_session
from src.fv_common.response import ApiResponse, success_response
from src.fv_gateway.middleware.request_log import get_request_id
from src.fv_settlement.application.schemas import (
    CreateObligationRequest,
    CreateSettlementRequest,
)
from src.fv_settlement.application.service import SettlementApplicationService

router = APIRouter(tags=["settlements"])

_service = SettlementApplicationService()


@router.post("/shows/{show_id}/settlements", status_code=status.HTTP_201_CREATED)
async def create_settlement(
    show_id: UUID,
    body: CreateSettlementRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_settlement(db, str(show_id), body)
    return success_response(data.model_dump(), get_request_id(request))


@router.post("/shows/{show_id}/owed-line-items", status_code=status.HTTP_201_CREATED)
async def create_owed_line_item(
    show_id: UUID,
    body: CreateObligationRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_obligation(db, str(show_id), body)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/shows/{show_id}/owed-line-items")
async def list_owed_line_items(
    show_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_obligations(db, str(show_id))
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/owed-line-items/{obligation_id}")
async def get_owed_line_item(
    obligation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_obligation(db, str(obligation_id))
    return success_response(data.model_dump(), get_request_id(request))


@router.delete("/owed-line-items/{obligation_id}")
async def delete_owed_line_item(
    obligation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_obligation(db, str(obligation_id))
    return success_response(
        {"id": str(obligation_id), "deleted": True}, get_request_id(request)
    )
