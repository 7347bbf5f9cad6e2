"""Unified API response envelope.

Every ledger endpoint returns:
{
    "code": 0,               // 0=success, otherwise an AppError code
    "message": "success",
    "data": { ... },         // null on error
    "timestamp": "...",      // ISO-8601 UTC
    "request_id": "req_..."  // same value as the X-Request-Id response header
}

Monetary values inside data are decimal strings with 4 fractional digits.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=_new_request_id)


def _envelope(code: int, message: str, data: Any, request_id: str | None) -> ApiResponse:
    return ApiResponse(
        code=code,
        message=message,
        data=data,
        request_id=request_id or _new_request_id(),
    )


def success_response(data: Any = None, request_id: str | None = None) -> ApiResponse:
    return _envelope(0, "success", data, request_id)


def error_response(code: int, message: str, request_id: str | None = None) -> ApiResponse:
    return _envelope(code, message, None, request_id)
