"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.fv_common.database import engine
from src.fv_common.errors import AppError, InternalError, RequestValidationFailedError
from src.fv_common.response import error_response
from src.fv_gateway.middleware.request_log import RequestLogMiddleware, get_request_id
from src.fv_ledger.api.router import router as ledger_router
from src.fv_settlement.api.router import router as settlement_router
from src.fv_show.api.router import router as show_router
from src.fv_wholesaler.api.router import router as wholesaler_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB connection. Shutdown: dispose the pool."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, get_request_id(request))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    err = RequestValidationFailedError(detail)
    resp = error_response(err.code, err.message, get_request_id(request))
    return JSONResponse(status_code=err.http_status, content=resp.model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = InternalError()
    resp = error_response(err.code, err.message, get_request_id(request))
    return JSONResponse(status_code=err.http_status, content=resp.model_dump())


# ledger first: /wholesalers/balances must match before /wholesalers/{wholesaler_id}
app.include_router(ledger_router, prefix=settings.API_PREFIX)
app.include_router(show_router, prefix=settings.API_PREFIX)
app.include_router(wholesaler_router, prefix=settings.API_PREFIX)
app.include_router(settlement_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
