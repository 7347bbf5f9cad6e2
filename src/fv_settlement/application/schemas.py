"""Pydantic schemas for fv_settlement API (settlements + owed line items)."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from src.fv_common.enums import CalculationMethod
from src.fv_common.money import format_amount
from src.fv_settlement.domain.models import Obligation

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateSettlementRequest(BaseModel):
    """Settle a show with one wholesaler.

    PERCENT_PAYOUT takes rate_percent (0..100) and reads the payout from the
    show's financials; MANUAL takes amount. Supplying the other method's
    parameter is rejected.
    """

    wholesaler_id: UUID
    method: CalculationMethod
    rate_percent: Decimal | None = Field(None, description="PERCENT_PAYOUT only, 0..100")
    amount: Decimal | None = Field(None, description="MANUAL only, > 0")
    description: str | None = Field(None, max_length=500)
    due_date: date | None = None

    @model_validator(mode="after")
    def check_method_parameters(self) -> "CreateSettlementRequest":
        if self.method == CalculationMethod.PERCENT_PAYOUT:
            if self.rate_percent is None:
                raise ValueError("rate_percent is required for PERCENT_PAYOUT")
            if self.amount is not None:
                raise ValueError("amount is not accepted for PERCENT_PAYOUT")
        else:
            if self.amount is None:
                raise ValueError("amount is required for MANUAL")
            if self.rate_percent is not None:
                raise ValueError("rate_percent is not accepted for MANUAL")
        return self


class CreateObligationRequest(BaseModel):
    wholesaler_id: UUID
    amount: Decimal
    description: str = Field(..., min_length=1, max_length=500)
    due_date: date | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ObligationResponse(BaseModel):
    id: str
    show_id: str
    wholesaler_id: str
    amount: str
    currency: str
    description: str
    due_date: str | None
    status: str
    calculation_method: str
    rate_bps: int | None
    base_amount: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, o: Obligation) -> "ObligationResponse":
        return cls(
            id=o.id,
            show_id=o.show_id,
            wholesaler_id=o.wholesaler_id,
            amount=format_amount(o.amount),
            currency=o.currency,
            description=o.description,
            due_date=o.due_date.isoformat() if o.due_date else None,
            status=o.status,
            calculation_method=o.calculation_method,
            rate_bps=o.rate_bps,
            base_amount=format_amount(o.base_amount),
            created_at=o.created_at.isoformat() if o.created_at else "",
            updated_at=o.updated_at.isoformat() if o.updated_at else "",
        )


class ObligationListResponse(BaseModel):
    items: list[ObligationResponse]
