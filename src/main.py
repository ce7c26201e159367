"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.bootstrap import build_platform
from src.pt_admin.api.router import router as admin_router
from src.pt_common.errors import AppError
from src.pt_common.response import error_response
from src.pt_gateway.api.router import router as auth_router
from src.pt_gateway.middleware.request_log import RequestLogMiddleware
from src.pt_portfolio.api.router import router as portfolio_router
from src.pt_quote.api.router import router as quote_router
from src.pt_trading.api.router import router as trade_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build the platform and hydrate it from the ledger store. Shutdown: close the store."""
    platform = build_platform(settings)
    await platform.start(admin_email=settings.ADMIN_EMAIL, admin_password=settings.ADMIN_PASSWORD)
    app.state.platform = platform
    yield
    await platform.close()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(quote_router, prefix="/api/v1")
app.include_router(trade_router, prefix="/api/v1")
app.include_router(portfolio_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
