"""fv_ledger REST API — payments, wholesaler balances, statements."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.fv_common.database import get_db_session
from src.fv_common.response import ApiResponse, success_response
from src.fv_gateway.middleware.request_log import get_request_id
from src.fv_ledger.application.schemas import CreatePaymentRequest
from src.fv_ledger.application.service import LedgerApplicationService

router = APIRouter(tags=["ledger"])

_service = LedgerApplicationService()


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


@router.post("/payments", status_code=status.HTTP_201_CREATED)
async def create_payment(
    body: CreatePaymentRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_payment(db, body)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/payments")
async def list_payments(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    wholesaler_id: UUID | None = Query(None, description="Filter by wholesaler"),
) -> ApiResponse:
    data = await _service.list_payments(
        db, str(wholesaler_id) if wholesaler_id else None
    )
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/payments/{payment_id}")
async def get_payment(
    payment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_payment(db, str(payment_id))
    return success_response(data.model_dump(), get_request_id(request))


@router.delete("/payments/{payment_id}")
async def delete_payment(
    payment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_payment(db, str(payment_id))
    return success_response(
        {"id": str(payment_id), "deleted": True}, get_request_id(request)
    )


# ---------------------------------------------------------------------------
# Ledger views
# ---------------------------------------------------------------------------


@router.get("/wholesalers/balances")
async def wholesaler_balances(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.balances(db)
    return success_response(data.model_dump(), get_request_id(request))


@router.get("/wholesalers/{wholesaler_id}/statement")
async def wholesaler_statement(
    wholesaler_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.statement(db, str(wholesaler_id))
    return success_response(data.model_dump(), get_request_id(request))
