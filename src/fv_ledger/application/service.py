"""LedgerApplicationService — payments plus derived balances and statements.

Payments are recorded independently of obligations. Balances and statements
are rebuilt from active rows on every request by the pure aggregator.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fv_common.errors import (
    PaymentNotFoundError,
    ShowNotFoundError,
    WholesalerNotFoundError,
)
from src.fv_common.money import format_amount, require_positive, to_amount
from src.fv_ledger.application.schemas import (
    BalanceItem,
    BalancesResponse,
    CreatePaymentRequest,
    PaymentListResponse,
    PaymentResponse,
    StatementEntryItem,
    StatementResponse,
)
from src.fv_ledger.domain.aggregator import build_statement, compute_balances
from src.fv_ledger.domain.repository import LedgerRepositoryProtocol
from src.fv_ledger.infrastructure.persistence import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerApplicationService:
    def __init__(self, repo: LedgerRepositoryProtocol | None = None) -> None:
        self._repo: LedgerRepositoryProtocol = repo or LedgerRepository()

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    async def create_payment(
        self, db: AsyncSession, request: CreatePaymentRequest
    ) -> PaymentResponse:
        amount = require_positive(request.amount, "amount")
        wholesaler_id = str(request.wholesaler_id)
        show_id = str(request.show_id) if request.show_id else None
        try:
            if not await self._repo.lock_wholesaler(db, wholesaler_id):
                raise WholesalerNotFoundError(wholesaler_id)
            if show_id is not None and not await self._repo.lock_show(db, show_id):
                raise ShowNotFoundError(show_id)
            payment = await self._repo.create_payment(
                db,
                wholesaler_id=wholesaler_id,
                show_id=show_id,
                amount=amount,
                currency=settings.DEFAULT_CURRENCY,
                payment_date=request.payment_date,
                payment_method=request.payment_method.value,
                reference=request.reference,
                notes=request.notes,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Payment recorded: %s wholesaler=%s amount=%s date=%s",
            payment.id, wholesaler_id, amount, payment.payment_date,
        )
        return PaymentResponse.from_domain(payment)

    async def list_payments(
        self, db: AsyncSession, wholesaler_id: str | None
    ) -> PaymentListResponse:
        payments = await self._repo.list_payments(db, wholesaler_id)
        return PaymentListResponse(items=[PaymentResponse.from_domain(p) for p in payments])

    async def get_payment(self, db: AsyncSession, payment_id: str) -> PaymentResponse:
        payment = await self._repo.get_payment(db, payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return PaymentResponse.from_domain(payment)

    async def delete_payment(self, db: AsyncSession, payment_id: str) -> None:
        try:
            if not await self._repo.soft_delete_payment(db, payment_id):
                raise PaymentNotFoundError(payment_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Payment soft-deleted: %s", payment_id)

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    async def balances(self, db: AsyncSession) -> BalancesResponse:
        wholesalers = await self._repo.list_wholesalers(db)
        obligations = await self._repo.list_obligations(db, None)
        payments = await self._repo.list_payments(db, None)
        result = compute_balances(wholesalers, obligations, payments)
        return BalancesResponse(items=[BalanceItem.from_domain(b) for b in result])

    async def statement(self, db: AsyncSession, wholesaler_id: str) -> StatementResponse:
        wholesaler = await self._repo.get_wholesaler(db, wholesaler_id)
        if wholesaler is None:
            raise WholesalerNotFoundError(wholesaler_id)
        obligations = await self._repo.list_obligations(db, wholesaler_id)
        payments = await self._repo.list_payments(db, wholesaler_id)
        entries = build_statement(obligations, payments)
        closing = entries[-1].running_balance if entries else to_amount(0)
        return StatementResponse(
            wholesaler_id=wholesaler.id,
            wholesaler_name=wholesaler.name,
            entries=[StatementEntryItem.from_domain(e) for e in entries],
            closing_balance=format_amount(closing),
        )
