"""Pydantic schemas for fv_show API (shows + financial snapshot)."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.fv_common.enums import ShowPlatform, ShowStatus
from src.fv_common.money import format_amount
from src.fv_show.domain.models import FinancialSnapshot, Show

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateShowRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    show_date: date
    platform: str | None = Field(None, description="WHATNOT | INSTAGRAM | OTHER")
    status: ShowStatus = ShowStatus.PLANNED
    location: str | None = Field(None, max_length=200)
    external_reference: str | None = Field(None, max_length=200)
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("platform")
    @classmethod
    def normalize_platform(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().upper()
        # Shows entered by hand are stored under OTHER
        if v == "MANUAL":
            return ShowPlatform.OTHER.value
        if v not in {p.value for p in ShowPlatform}:
            raise ValueError(f"platform must be one of {[p.value for p in ShowPlatform]}")
        return v


class UpsertFinancialsRequest(BaseModel):
    payout_after_fees_amount: Decimal = Field(
        ..., description="Payout after platform fees, >= 0"
    )
    gross_sales_amount: Decimal | None = Field(
        None, description="Gross sales, >= 0; omitted clears the stored value"
    )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ShowResponse(BaseModel):
    id: str
    name: str
    show_date: str
    platform: str | None
    status: str
    location: str | None
    external_reference: str | None
    notes: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, show: Show) -> "ShowResponse":
        return cls(
            id=show.id,
            name=show.name,
            show_date=show.show_date.isoformat(),
            platform=show.platform,
            status=show.status,
            location=show.location,
            external_reference=show.external_reference,
            notes=show.notes,
            created_at=show.created_at.isoformat() if show.created_at else "",
            updated_at=show.updated_at.isoformat() if show.updated_at else "",
        )


class ShowListResponse(BaseModel):
    items: list[ShowResponse]


class FinancialsResponse(BaseModel):
    show_id: str
    payout_after_fees_amount: str
    gross_sales_amount: str | None
    currency: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, snapshot: FinancialSnapshot) -> "FinancialsResponse":
        return cls(
            show_id=snapshot.show_id,
            payout_after_fees_amount=format_amount(snapshot.payout_after_fees_amount),
            gross_sales_amount=format_amount(snapshot.gross_sales_amount),
            currency=snapshot.currency,
            created_at=snapshot.created_at.isoformat(),
            updated_at=snapshot.updated_at.isoformat(),
        )
