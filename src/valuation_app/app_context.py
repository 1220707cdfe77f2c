"""Application context for process-wide services.

The FX and price caches only work if every request sees the same instances,
so they are built once here and handed to the API layer by dependency
injection rather than constructed per request.
"""

import logging
import threading
from decimal import Decimal
from typing import Optional

from valuation_app.config.settings import Settings, get_settings
from valuation_app.core.clock import Clock, MonotonicClock
from valuation_app.domain.models import FxRates, FxSource
from valuation_app.providers import FinnhubQuoteProvider, QuoteProvider, StubQuoteProvider
from valuation_app.services import (
    ExchangeRegistry,
    FxRateService,
    PriceService,
    ValuationEngine,
)

logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> QuoteProvider:
    """Finnhub when an API key is configured, otherwise the offline stub."""
    if settings.finnhub_api_key:
        return FinnhubQuoteProvider(
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )
    logger.warning("FINNHUB_API_KEY not set, using stub quote provider")
    return StubQuoteProvider()


class AppContext:
    """
    Owns the quote provider, exchange registry and both caches.

    Components are created lazily on first access, under a lock so that
    concurrent first requests share one instance. Tests can inject a
    provider, clock or registry.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[QuoteProvider] = None,
        clock: Optional[Clock] = None,
        registry: Optional[ExchangeRegistry] = None,
    ):
        self._settings = settings
        self._provider = provider
        self._clock = clock or MonotonicClock()
        self._registry = registry

        # Re-entrant: properties build their dependencies through each other
        self._lock = threading.RLock()

        # Service instances (lazy initialized)
        self._fx_service: Optional[FxRateService] = None
        self._price_service: Optional[PriceService] = None
        self._valuation_engine: Optional[ValuationEngine] = None

    @property
    def settings(self) -> Settings:
        with self._lock:
            if self._settings is None:
                self._settings = get_settings()
            return self._settings

    @property
    def registry(self) -> ExchangeRegistry:
        """Get the ExchangeRegistry instance."""
        with self._lock:
            if self._registry is None:
                self._registry = ExchangeRegistry.load(self.settings.get_exchanges_path())
                logger.info("Loaded %d exchanges", len(self._registry))
            return self._registry

    @property
    def provider(self) -> QuoteProvider:
        """Get the QuoteProvider instance."""
        with self._lock:
            if self._provider is None:
                self._provider = build_provider(self.settings)
            return self._provider

    @property
    def fx_rates(self) -> FxRateService:
        """Get the FxRateService instance."""
        with self._lock:
            if self._fx_service is None:
                settings = self.settings
                self._fx_service = FxRateService(
                    provider=self.provider,
                    target_currency=settings.target_currency,
                    ttl_seconds=settings.fx_cache_ttl_seconds,
                    clock=self._clock,
                    fallback=FxRates(
                        usd_to_target=Decimal(str(settings.fallback_usd_to_target)),
                        usd_to_eur=Decimal(str(settings.fallback_usd_to_eur)),
                        source=FxSource.FALLBACK,
                    ),
                )
            return self._fx_service

    @property
    def prices(self) -> PriceService:
        """Get the PriceService instance."""
        with self._lock:
            if self._price_service is None:
                settings = self.settings
                self._price_service = PriceService(
                    provider=self.provider,
                    registry=self.registry,
                    fx_service=self.fx_rates,
                    ttl_seconds=settings.price_cache_ttl_seconds,
                    clock=self._clock,
                    max_workers=settings.price_fetch_workers,
                    cache_maxsize=settings.price_cache_maxsize,
                )
            return self._price_service


    @property
    def valuation(self) -> ValuationEngine:
        """Get the ValuationEngine instance."""
        with self._lock:
            if self._valuation_engine is None:
                self._valuation_engine = ValuationEngine(price_service=self.prices)
            return self._valuation_engine

    def close(self) -> None:
        """Clean up resources."""
        close = getattr(self._provider, "close", None)
        if callable(close):
            close()


# Global application context (one per process)
_app_context: Optional[AppContext] = None
_app_context_lock = threading.Lock()


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    with _app_context_lock:
        if _app_context is None:
            _app_context = AppContext()
        return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear, with None) the global application context."""
    global _app_context
    _app_context = context
