"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class RecordState(str, Enum):
    """Soft-delete marker. DELETED rows are invisible to every lookup and aggregate."""
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class ShowPlatform(str, Enum):
    WHATNOT = "WHATNOT"
    INSTAGRAM = "INSTAGRAM"
    OTHER = "OTHER"


class ShowStatus(str, Enum):
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CalculationMethod(str, Enum):
    MANUAL = "MANUAL"
    PERCENT_PAYOUT = "PERCENT_PAYOUT"


class LineItemStatus(str, Enum):
    """Obligation status. Always PENDING at creation; transitions are not computed."""
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    ADJUSTED = "ADJUSTED"


class PaymentMethod(str, Enum):
    CHECK = "CHECK"
    WIRE = "WIRE"
    ACH = "ACH"
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    OTHER = "OTHER"


class StatementEntryType(str, Enum):
    OWED = "OWED"
    PAYMENT = "PAYMENT"
