"""Domain models for fv_settlement — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class SettlementCalculation:
    """Result of the settlement calculator, ready to persist as an obligation.

    MANUAL: rate_bps and base_amount are None.
    PERCENT_PAYOUT: base_amount is the payout read at calculation time and is
    never recomputed afterwards.
    """

    method: str
    amount: Decimal
    rate_bps: int | None = None
    base_amount: Decimal | None = None


@dataclass
class Obligation:
    """An owed line item: money owed to one wholesaler for one show."""

    id: str
    show_id: str
    wholesaler_id: str
    amount: Decimal
    currency: str
    description: str
    calculation_method: str
    status: str = "PENDING"
    due_date: date | None = None
    rate_bps: int | None = None
    base_amount: Decimal | None = None
    record_state: str = "ACTIVE"
    created_at: datetime | None = None
    updated_at: datetime | None = None
