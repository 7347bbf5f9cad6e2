"""Domain models for fv_ledger — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class Payment:
    """Money paid to a wholesaler. Summed per wholesaler, never allocated."""

    id: str
    wholesaler_id: str
    amount: Decimal
    currency: str
    payment_date: date
    payment_method: str = "OTHER"
    show_id: str | None = None
    reference: str | None = None
    notes: str | None = None
    record_state: str = "ACTIVE"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class WholesalerBalance:
    """Derived on every query; never stored."""

    wholesaler_id: str
    wholesaler_name: str
    owed_total: Decimal
    paid_total: Decimal
    balance_owed: Decimal  # owed_total - paid_total, may be negative
    last_payment_date: date | None


@dataclass
class StatementEntry:
    type: str  # OWED | PAYMENT
    id: str
    date: date
    amount: Decimal
    running_balance: Decimal
    show_id: str | None = None
    description: str | None = None
    reference: str | None = None
