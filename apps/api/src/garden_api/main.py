"""FastAPI application entry point."""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from garden_api.config import settings
from garden_api.errors import ConcurrencyConflict, GameError
from garden_api.routers import auth_router
from garden_api.routes import (
    floors_router,
    gacha_router,
    market_router,
    plots_router,
    seeds_router,
    shop_router,
    state_router,
    visit_router,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="GardenBred API",
    description="Game server for GardenBred - plant, breed, trade and pull seeds",
    version="0.1.0",
)

# CORS middleware - allow frontend origins
origins = list(settings.cors_origins)
if settings.frontend_url and settings.frontend_url not in origins:
    origins.append(settings.frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Full state snapshots are large and repetitive JSON
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(auth_router)
app.include_router(state_router)
app.include_router(shop_router)
app.include_router(floors_router)
app.include_router(plots_router)
app.include_router(seeds_router)
app.include_router(market_router)
app.include_router(gacha_router)
app.include_router(visit_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "garden-api"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    """Render a rejected game command with its status, code and detail.

    Nothing was committed: repositories raise inside their transaction.
    """
    logger.info(
        "Rejected %s %s: %s (%s)", request.method, request.url.path, exc.message, exc.code
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Handle database integrity errors.

    A unique violation here means two commands raced for the same row
    (e.g. the same floor index), so it is reported as a retryable conflict.
    """
    logger.warning(
        f"Database integrity error on {request.method} {request.url}: {exc.orig}"
    )
    error_msg = (str(exc.orig) if exc.orig else str(exc)).lower()

    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=409,
            content=ConcurrencyConflict("Concurrent update, retry").to_dict(),
        )
    if "foreign key" in error_msg:
        detail = "Referenced player or item no longer exists"
    else:
        detail = "Database constraint violation"

    return JSONResponse(
        status_code=409,
        content={"detail": detail, "error_type": "IntegrityError"},
    )


@app.exception_handler(OperationalError)
async def operational_error_handler(request: Request, exc: OperationalError):
    """Handle database operational errors (connection issues, timeouts).

    Returns 503 Service Unavailable for database connectivity issues.
    """
    logger.error(
        f"Database operational error on {request.method} {request.url}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=503,
        content={
            "detail": "Database temporarily unavailable",
            "error_type": "OperationalError",
        },
    )


@app.exception_handler(DataError)
async def data_error_handler(request: Request, exc: DataError):
    """Handle database data errors (invalid data types, out of range values).

    Returns 400 Bad Request for invalid data.
    """
    logger.warning(
        f"Database data error on {request.method} {request.url}: {exc.orig}"
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid data format for database field",
            "error_type": "DataError",
        },
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors that occur in business logic.

    FastAPI handles request validation itself (RequestValidationError); this
    catches errors raised while building responses or in repositories.
    """
    logger.warning(
        f"Validation error on {request.method} {request.url}: {exc}"
    )
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Data validation failed",
            "errors": exc.errors(),
            "error_type": "ValidationError",
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors with their traceback and return a generic 500.

    Internal detail stays in the server log; the client only sees the
    exception type.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url}: {exc}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )
