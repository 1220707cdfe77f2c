"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from valuation_app.config.settings import get_settings
from valuation_app.config.logging_config import setup_logging
from valuation_app.app_context import get_app_context
from valuation_app.repositories.sqlalchemy.database import init_db
from valuation_app.api.rate_limiter import limiter
from valuation_app.api.routers import holdings_router, market_router, admin_router
from valuation_app.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown
    get_app_context().close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Values portfolio holdings in a single reporting currency",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter

# Include routers
API_PREFIX = "/api"
app.include_router(market_router, prefix=API_PREFIX)
app.include_router(holdings_router, prefix=API_PREFIX)
app.include_router(admin_router, prefix=API_PREFIX)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Reject a client that has used up its /api request allowance."""
    logger.warning("Rate limit exceeded for %s on %s", get_remote_address(request), request.url.path)
    return JSONResponse(
        status_code=429,
        content={"error": "RATE_LIMITED", "message": "Too many requests, please try again later"},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
