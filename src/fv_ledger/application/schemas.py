"""Pydantic schemas for fv_ledger API (payments, balances, statement)."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from src.fv_common.enums import PaymentMethod
from src.fv_common.money import amount_to_display, format_amount
from src.fv_ledger.domain.models import Payment, StatementEntry, WholesalerBalance

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreatePaymentRequest(BaseModel):
    wholesaler_id: UUID
    amount: Decimal = Field(..., description="Amount paid, > 0")
    payment_date: date
    payment_method: PaymentMethod = PaymentMethod.OTHER
    show_id: UUID | None = None
    reference: str | None = Field(None, max_length=255)
    notes: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PaymentResponse(BaseModel):
    id: str
    wholesaler_id: str
    show_id: str | None
    amount: str
    currency: str
    payment_date: str
    payment_method: str
    reference: str | None
    notes: str | None
    created_at: str

    @classmethod
    def from_domain(cls, p: Payment) -> "PaymentResponse":
        return cls(
            id=p.id,
            wholesaler_id=p.wholesaler_id,
            show_id=p.show_id,
            amount=format_amount(p.amount),
            currency=p.currency,
            payment_date=p.payment_date.isoformat(),
            payment_method=p.payment_method,
            reference=p.reference,
            notes=p.notes,
            created_at=p.created_at.isoformat() if p.created_at else "",
        )


class PaymentListResponse(BaseModel):
    items: list[PaymentResponse]


class BalanceItem(BaseModel):
    wholesaler_id: str
    wholesaler_name: str
    owed_total: str
    paid_total: str
    balance_owed: str
    balance_owed_display: str
    last_payment_date: str | None

    @classmethod
    def from_domain(cls, b: WholesalerBalance) -> "BalanceItem":
        return cls(
            wholesaler_id=b.wholesaler_id,
            wholesaler_name=b.wholesaler_name,
            owed_total=format_amount(b.owed_total),
            paid_total=format_amount(b.paid_total),
            balance_owed=format_amount(b.balance_owed),
            balance_owed_display=amount_to_display(b.balance_owed),
            last_payment_date=(
                b.last_payment_date.isoformat() if b.last_payment_date else None
            ),
        )


class BalancesResponse(BaseModel):
    items: list[BalanceItem]


class StatementEntryItem(BaseModel):
    type: str
    id: str
    date: str
    amount: str
    running_balance: str
    show_id: str | None
    description: str | None
    reference: str | None

    @classmethod
    def from_domain(cls, e: StatementEntry) -> "StatementEntryItem":
        return cls(
            type=e.type,
            id=e.id,
            date=e.date.isoformat(),
            amount=format_amount(e.amount),
            running_balance=format_amount(e.running_balance),
            show_id=e.show_id,
            description=e.description,
            reference=e.reference,
        )


class StatementResponse(BaseModel):
    wholesaler_id: str
    wholesaler_name: str
    entries: list[StatementEntryItem]
    closing_balance: str
