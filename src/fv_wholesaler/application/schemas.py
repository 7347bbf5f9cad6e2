"""Pydantic schemas for fv_wholesaler API."""

from pydantic import BaseModel, Field, field_validator

from src.fv_wholesaler.domain.models import Wholesaler


class CreateWholesalerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact_email: str | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    tax_id: str | None = Field(None, max_length=100)
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class WholesalerResponse(BaseModel):
    id: str
    name: str
    contact_email: str | None
    contact_phone: str | None
    tax_id: str | None
    notes: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, w: Wholesaler) -> "WholesalerResponse":
        return cls(
            id=w.id,
            name=w.name,
            contact_email=w.contact_email,
            contact_phone=w.contact_phone,
            tax_id=w.tax_id,
            notes=w.notes,
            created_at=w.created_at.isoformat() if w.created_at else "",
            updated_at=w.updated_at.isoformat() if w.updated_at else "",
        )


class WholesalerListResponse(BaseModel):
    items: list[WholesalerResponse]
