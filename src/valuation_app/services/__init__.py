"""Service layer - business logic orchestration."""

from valuation_app.services.exchange_registry import ExchangeRegistry
from valuation_app.services.symbol_mapper import map_symbol
from valuation_app.services.currency_normalizer import convert
from valuation_app.services.fx_rate_service import FxRateService
from valuation_app.services.price_service import PriceService
from valuation_app.services.valuation_engine import ValuationEngine
from valuation_app.services.holdings_service import HoldingsService
from valuation_app.services.defaults_updater import DefaultsUpdater

__all__ = [
    "ExchangeRegistry",
    "map_symbol",
    "convert",
    "FxRateService",
    "PriceService",
    "ValuationEngine",
    "HoldingsService",
    "DefaultsUpdater",
]
