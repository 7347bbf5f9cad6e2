"""Domain models for fv_show — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class Show:
    id: str
    name: str
    show_date: date
    platform: str | None
    status: str
    location: str | None = None
    external_reference: str | None = None
    notes: str | None = None
    record_state: str = "ACTIVE"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class FinancialSnapshot:
    """Payout/gross figures for one show. At most one per show (upsert)."""

    show_id: str
    payout_after_fees_amount: Decimal   # 4 dp, >= 0
    gross_sales_amount: Decimal | None  # 4 dp, >= 0
    currency: str
    created_at: datetime
    updated_at: datetime
