"""
Vinyl Orders - Main FastAPI Application.

REST layer over the order lifecycle and settlement engine.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.dependencies import get_database_engine, get_settings
from api.routes import admin, health, orders, settlements
from vinyl_orders.domain.exceptions import (
    ConcurrencyConflict,
    Forbidden,
    InvalidTransition,
    NotFound,
    OrderEngineError,
    ValidationError,
)
from vinyl_orders.infrastructure.database import close_database, init_database
from vinyl_orders.infrastructure.logging import configure_logging


# Setup logging
configure_logging(get_settings().engine.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Vinyl Orders - Order Lifecycle API",
    description="""
    Order lifecycle and settlement engine for a vinyl distribution platform.

    Features:
    - Role-checked status transitions with optimistic concurrency
    - Platform fee / distributor payout settlement
    - Order timeline and event log
    - Platform revenue statistics
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

_ERROR_STATUS_CODES = {
    NotFound: 404,
    Forbidden: 403,
    InvalidTransition: 409,
    ValidationError: 422,
    ConcurrencyConflict: 409,
}


@app.exception_handler(OrderEngineError)
async def order_engine_exception_handler(request: Request, exc: OrderEngineError):
    """Translate typed engine errors into HTTP responses."""
    status_code = _ERROR_STATUS_CODES.get(type(exc), 400)
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "detail": str(exc),
            "path": request.url.path,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path,
        },
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Vinyl Orders API starting up...")
    await init_database(get_database_engine())
    logger.info("Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_database()
    logger.info("Vinyl Orders API shutting down...")


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    orders.router,
    prefix="/api/v1/orders",
    tags=["Orders"]
)

app.include_router(
    settlements.router,
    prefix="/api/v1/settlements",
    tags=["Settlements"]
)

app.include_router(
    admin.router,
    prefix="/api/v1/admin",
    tags=["Admin"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Vinyl Orders - Order Lifecycle API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health"
    }
