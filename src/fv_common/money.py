"""Fixed-point arithmetic utilities for currency amounts and basis-point rates.

All amounts are Decimal with exactly 4 fractional digits (NUMERIC(19,4) in the
database). No binary float arithmetic: floats are converted through str() before
they become Decimal.

Rounding: ROUND_HALF_UP everywhere an amount or rate is derived (quantization,
percent → bps, percentage of payout). This matches PostgreSQL ROUND(numeric).

Basis points: integers 0..10000, 10000 bps = 100%.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from src.fv_common.errors import InvalidAmountError, InvalidRateError

AMOUNT_PLACES = Decimal("0.0001")
DISPLAY_PLACES = Decimal("0.01")
BPS_SCALE = 10000
MAX_BPS = 10000
MAX_RATE_PERCENT = Decimal("100")
# NUMERIC(19,4) leaves 15 integer digits
_MAX_INTEGER_DIGITS = 15

AmountLike = Decimal | int | float | str


def _to_decimal(value: AmountLike, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(field, "must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        parsed = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(field, f"not a decimal number: {value!r}") from None
    if not parsed.is_finite():
        raise InvalidAmountError(field, "must be a finite number")
    return parsed


def to_amount(value: AmountLike, field: str = "amount") -> Decimal:
    """Parse any numeric input into a 4-decimal amount (ROUND_HALF_UP).

    No upper bound: derived totals (balances, running balances) may exceed
    what a single stored row can hold. Input parsers add the storage check.
    """
    parsed = _to_decimal(value, field)
    try:
        return parsed.quantize(AMOUNT_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(field, "exceeds the maximum supported amount") from None


def _require_storable(amount: Decimal, field: str) -> Decimal:
    # checked after rounding: 999999999999999.99995 rounds to 16 integer digits
    if amount != 0 and amount.adjusted() >= _MAX_INTEGER_DIGITS:
        raise InvalidAmountError(field, "exceeds the maximum supported amount")
    return amount


def require_positive(value: AmountLike, field: str = "amount") -> Decimal:
    """Return the quantized amount, rejecting anything <= 0 after rounding."""
    amount = _require_storable(to_amount(value, field), field)
    if amount <= 0:
        raise InvalidAmountError(field, "must be greater than zero")
    return amount


def require_non_negative(value: AmountLike, field: str = "amount") -> Decimal:
    amount = _require_storable(to_amount(value, field), field)
    if amount < 0:
        raise InvalidAmountError(field, "must not be negative")
    return amount.copy_abs()


def percent_to_bps(rate_percent: AmountLike) -> int:
    """Convert a percentage in [0, 100] to the nearest integer basis points.

    25 → 2500, 12.345 → 1235 (half up).
    """
    try:
        rate = _to_decimal(rate_percent, "rate_percent")
    except InvalidAmountError as exc:
        raise InvalidRateError(exc.message) from None
    if rate < 0 or rate > MAX_RATE_PERCENT:
        raise InvalidRateError(f"rate_percent must be between 0 and 100, got {rate}")
    return int((rate * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def require_bps(rate_bps: int) -> int:
    """Validate that rate_bps is an integer in [0, 10000]."""
    if isinstance(rate_bps, bool) or not isinstance(rate_bps, int):
        raise InvalidRateError(f"rate_bps must be an integer, got {rate_bps!r}")
    if not (0 <= rate_bps <= MAX_BPS):
        raise InvalidRateError(f"rate_bps must be between 0 and {MAX_BPS}, got {rate_bps}")
    return rate_bps


def apply_bps(base_amount: AmountLike, rate_bps: int) -> Decimal:
    """round_half_up(base_amount x rate_bps / 10000, 4 decimals)."""
    base = to_amount(base_amount, "base_amount")
    bps = require_bps(rate_bps)
    return (base * bps / BPS_SCALE).quantize(AMOUNT_PLACES, rounding=ROUND_HALF_UP)


def sum_amounts(values: Iterable[AmountLike]) -> Decimal:
    total = Decimal("0").quantize(AMOUNT_PLACES)
    for value in values:
        total += to_amount(value)
    return total.quantize(AMOUNT_PLACES, rounding=ROUND_HALF_UP)


def format_amount(value: AmountLike | None) -> str | None:
    """Wire format: plain decimal string with 4 fractional digits, e.g. '2500.0000'."""
    if value is None:
        return None
    amount = to_amount(value)
    if amount == 0:
        amount = amount.copy_abs()  # never emit '-0.0000'
    return f"{amount:f}"


def amount_to_display(value: AmountLike) -> str:
    """Convert to display string: 1500 -> '$1,500.00', -12 -> '-$12.00'."""
    cents = to_amount(value).quantize(DISPLAY_PLACES, rounding=ROUND_HALF_UP)
    if cents < 0:
        return f"-${-cents:,.2f}"
    return f"${cents.copy_abs():,.2f}"
