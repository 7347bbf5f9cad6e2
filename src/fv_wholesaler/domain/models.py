"""Domain models for fv_wholesaler — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Wholesaler:
    id: str
    name: str
    contact_email: str | None = None
    contact_phone: str | None = None
    tax_id: str | None = None
    notes: str | None = None
    record_state: str = "ACTIVE"
    created_at: datetime | None = None
    updated_at: datetime | None = None
