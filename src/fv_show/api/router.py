"""fv_show REST API — shows and their financial snapshot."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_common.database import get_db_session
from src.fv_common.enums import ShowStatus
from src.fv_common.response import ApiResponse, success_response
from src.fv_gateway.middleware.request_log import get_request_id
from src.fv_show.application.schemas import CreateShowRequest, UpsertFinancialsRequest
from src.fv_show.application.service import ShowApplicationService

router = APIRouter(prefix="/shows", tags=["shows"])

_service = ShowApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_show(
    body: CreateShowRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_show(db, body)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("")
async def list_shows(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    show_status: ShowStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> ApiResponse:
    data = await _service.list_shows(
        db, show_status.value if show_status else None, limit, offset
    )
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/{show_id}")
async def get_show(
    show_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_show(db, str(show_id))
    return success_response(data.model_dump(), get_request_id(request))


@router.delete("/{show_id}")
async def delete_show(
    show_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_show(db, str(show_id))
    return success_response({"id": str(show_id), "deleted": True}, get_request_id(request))


@router.post("/{show_id}/financials")
async def upsert_financials(
    show_id: UUID,
    body: UpsertFinancialsRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.upsert_financials(db, str(show_id), body)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/{show_id}/financials")
async def get_financials(
    show_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_financials(db, str(show_id))
    return success_response(data.model_dump(), get_request_id(request))
