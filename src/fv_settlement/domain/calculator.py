"""Settlement calculator — pure functions, no I/O.

Turns a settlement request into the (method, amount, rate_bps, base_amount)
tuple stored on an obligation:

    MANUAL          amount supplied directly, must be > 0
    PERCENT_PAYOUT  rate_bps = round_half_up(rate_percent * 100)
                    amount   = round_half_up(base * rate_bps / 10000, 4)

validate_obligation_fields() mirrors the owed_line_items CHECK constraints so
an invalid row is rejected as a 400 before the database ever sees it.
"""

from decimal import Decimal

from src.fv_common.enums import CalculationMethod
from src.fv_common.errors import InvalidAmountError, InvalidSettlementError
from src.fv_common.money import (
    AmountLike,
    apply_bps,
    percent_to_bps,
    require_bps,
    require_non_negative,
    require_positive,
    to_amount,
)
from src.fv_settlement.domain.models import SettlementCalculation


def calculate_manual(amount: AmountLike) -> SettlementCalculation:
    return SettlementCalculation(
        method=CalculationMethod.MANUAL.value,
        amount=require_positive(amount, "amount"),
    )


def calculate_percent_payout(
    rate_percent: AmountLike, base_amount: AmountLike
) -> SettlementCalculation:
    """Compute a percent-of-payout settlement against a payout figure.

    Raises:
        InvalidRateError: rate_percent outside [0, 100].
        InvalidAmountError: negative base, or a computed amount of zero
            (0% rate or zero payout), which no obligation may carry.
    """
    rate_bps = percent_to_bps(rate_percent)
    base = require_non_negative(base_amount, "base_amount")
    amount = apply_bps(base, rate_bps)
    if amount <= 0:
        raise InvalidAmountError(
            "amount",
            f"{rate_bps} bps of payout {base} rounds to zero; "
            "an owed line item must be greater than zero",
        )
    return SettlementCalculation(
        method=CalculationMethod.PERCENT_PAYOUT.value,
        amount=amount,
        rate_bps=rate_bps,
        base_amount=base,
    )


def validate_obligation_fields(
    amount: AmountLike,
    description: str,
    calculation_method: str,
    rate_bps: int | None,
    base_amount: AmountLike | None,
) -> Decimal:
    """Check an obligation row before insert. Returns the quantized amount."""
    quantized = require_positive(amount, "amount")
    if not description or not description.strip():
        raise InvalidSettlementError("description must not be empty")

    if calculation_method == CalculationMethod.MANUAL.value:
        if rate_bps is not None or base_amount is not None:
            raise InvalidSettlementError(
                "MANUAL obligations must not carry rate_bps or base_amount"
            )
    elif calculation_method == CalculationMethod.PERCENT_PAYOUT.value:
        if rate_bps is None or base_amount is None:
            raise InvalidSettlementError(
                "PERCENT_PAYOUT obligations require rate_bps and base_amount"
            )
        require_bps(rate_bps)
        expected = apply_bps(base_amount, rate_bps)
        if expected != quantized:
            raise InvalidSettlementError(
                f"amount {quantized} does not match {rate_bps} bps of {to_amount(base_amount)}"
            )
    else:
        raise InvalidSettlementError(f"unknown calculation_method {calculation_method!r}")
    return quantized
