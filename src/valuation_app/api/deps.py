"""Dependency injection for FastAPI."""

import secrets

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from valuation_app.app_context import AppContext, get_app_context
from valuation_app.core.exceptions import UnauthorizedError
from valuation_app.repositories.sqlalchemy.database import get_db
from valuation_app.repositories.sqlalchemy import SqlAlchemyHoldingsRepository
from valuation_app.services import (
    DefaultsUpdater,
    ExchangeRegistry,
    HoldingsService,
    PriceService,
    ValuationEngine,
)


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_holdings_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingsRepository:
    """Provide HoldingsRepository instance."""
    return SqlAlchemyHoldingsRepository(db)


def get_holdings_service(
    holdings_repo: SqlAlchemyHoldingsRepository = Depends(get_holdings_repo),
) -> HoldingsService:
    """Provide HoldingsService instance."""
    return HoldingsService(holdings_repo=holdings_repo)


def get_exchange_registry(context: AppContext = Depends(get_context)) -> ExchangeRegistry:
    """Provide the shared ExchangeRegistry."""
    return context.registry


def get_price_service(context: AppContext = Depends(get_context)) -> PriceService:
    """Provide the shared PriceService (owns the price cache)."""
    return context.prices


def get_valuation_engine(context: AppContext = Depends(get_context)) -> ValuationEngine:
    """Provide the shared ValuationEngine."""
    return context.valuation


def get_defaults_updater(
    context: AppContext = Depends(get_context),
    holdings_service: HoldingsService = Depends(get_holdings_service),
) -> DefaultsUpdater:
    """Provide DefaultsUpdater bound to this request's holdings store."""
    return DefaultsUpdater(
        price_service=context.prices,
        holdings_service=holdings_service,
    )


def require_admin(
    x_admin_token: str = Header(default=""),
    context: AppContext = Depends(get_context),
) -> None:
    """Reject the request unless X-Admin-Token matches the configured token."""
    expected = context.settings.admin_token
    if not expected or not secrets.compare_digest(x_admin_token.encode(), expected.encode()):
        raise UnauthorizedError()
