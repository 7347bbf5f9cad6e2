"""Unified error codes and custom exceptions.

Error classes (what the caller should do):
  InvalidInputError  → 400, malformed or out-of-range input
  NotFoundError      → 404, referenced row missing or soft-deleted
  ConflictError      → 409, input is valid but current state forbids it
  InternalError      → 500, storage/transaction failure

Error code ranges:
  1xxx: Validation
  2xxx: Show / Financials
  3xxx: Wholesaler
  4xxx: Settlement / Obligation
  5xxx: Payment
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


class InvalidInputError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 400)


class NotFoundError(AppError):
    def __init__(self, code: int, resource: str, resource_id: str | None = None) -> None:
        message = (
            f"{resource} with id {resource_id} not found"
            if resource_id
            else f"{resource} not found"
        )
        super().__init__(code, message, 404)


class ConflictError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 409)


# --- 1xxx: Validation ---

class RequestValidationFailedError(InvalidInputError):
    def __init__(self, detail: str) -> None:
        super().__init__(1000, f"Invalid request data: {detail}")


class InvalidAmountError(InvalidInputError):
    def __init__(self, field: str, detail: str) -> None:
        super().__init__(1001, f"Invalid {field}: {detail}")


class InvalidRateError(InvalidInputError):
    def __init__(self, detail: str) -> None:
        super().__init__(1002, f"Invalid rate: {detail}")


class InvalidSettlementError(InvalidInputError):
    def __init__(self, detail: str) -> None:
        super().__init__(1003, f"Invalid settlement: {detail}")


# --- 2xxx: Show / Financials ---

class ShowNotFoundError(NotFoundError):
    def __init__(self, show_id: str) -> None:
        super().__init__(2001, "Show", show_id)


class FinancialsNotFoundError(NotFoundError):
    def __init__(self, show_id: str) -> None:
        super().__init__(2002, "Show financials", show_id)


# --- 3xxx: Wholesaler ---

class WholesalerNotFoundError(NotFoundError):
    def __init__(self, wholesaler_id: str) -> None:
        super().__init__(3001, "Wholesaler", wholesaler_id)


# --- 4xxx: Settlement / Obligation ---

class ObligationNotFoundError(NotFoundError):
    def __init__(self, obligation_id: str) -> None:
        super().__init__(4001, "Owed line item", obligation_id)


class FinancialsRequiredError(ConflictError):
    def __init__(self, show_id: str) -> None:
        super().__init__(
            4002,
            f"Show financials not found for show {show_id}; "
            "add financials before creating a percent-of-payout settlement",
        )


# --- 5xxx: Payment ---

class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: str) -> None:
        super().__init__(5001, "Payment", payment_id)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
