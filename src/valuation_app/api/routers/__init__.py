"""API routers package."""

from valuation_app.api.routers.holdings import router as holdings_router
from valuation_app.api.routers.market import router as market_router
from valuation_app.api.routers.admin import router as admin_router

__all__ = [
    "holdings_router",
    "market_router",
    "admin_router",
]
