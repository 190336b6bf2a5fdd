"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 3001
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from src.ax_agents.api.router import activities_router, voice_router
from src.ax_agents.api.router import router as agents_router
from src.ax_common.datetime_utils import utc_now
from src.ax_common.errors import AppError, InternalError, InvalidArgumentError
from src.ax_common.request_log import RequestLogMiddleware
from src.ax_common.response import error_response
from src.ax_market.api.router import router as market_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB when the postgres store is used. Shutdown: dispose."""
    if settings.STORAGE_BACKEND == "postgres":
        from sqlalchemy import text

        from src.ax_common.database import engine

        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        yield
        await engine.dispose()
    else:
        logger.info("using in-memory market store; state is lost on restart")
        yield


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    field = str(err["loc"][-1]) if err.get("loc") else "body"
    if err.get("type") in ("missing", "string_too_short"):
        return f"{field} is required"
    return f"{field}: {err.get('msg', 'invalid value')}"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await app_error_handler(request, InvalidArgumentError(_validation_message(exc)))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


app.include_router(market_router, prefix="/api")
app.include_router(agents_router, prefix="/api")
app.include_router(activities_router, prefix="/api")
app.include_router(voice_router, prefix="/api")


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0", "timestamp": utc_now().isoformat()}
