"""FX rate service: cached USD and EUR rates into the reporting currency."""

import logging
from decimal import Decimal
from threading import Lock
from typing import Optional

from valuation_app.core.cache import TtlCache
from valuation_app.core.clock import Clock
from valuation_app.domain.models import FxRates, FxSource
from valuation_app.providers.quote_provider import QuoteProvider, guarded
from valuation_app.services.currency_normalizer import to_decimal

logger = logging.getLogger(__name__)

BASE_CURRENCY = "USD"
CROSS_CURRENCY = "EUR"
DEFAULT_FX_TTL_SECONDS = 15 * 60
DEFAULT_FALLBACK_RATES = FxRates(
    usd_to_target=Decimal("0.78"),
    usd_to_eur=Decimal("0.92"),
    source=FxSource.FALLBACK,
)


def positive_rate(value: object) -> Optional[Decimal]:
    """Parse a rate; only finite numbers above zero are usable."""
    rate = to_decimal(value)
    if rate is None or rate <= 0:
        return None
    return rate


class FxRateService:
    """
    Single-entry FX cache with a three-tier lookup.

    On a miss it tries the combined rates call, then two spot-pair calls,
    then the static fallback. Whatever tier answers is cached for the full
    TTL, the fallback included, so an unavailable provider is asked at most
    once per TTL window.
    """

    _CACHE_KEY = BASE_CURRENCY

    def __init__(
        self,
        provider: QuoteProvider,
        target_currency: str = "GBP",
        ttl_seconds: float = DEFAULT_FX_TTL_SECONDS,
        clock: Optional[Clock] = None,
        fallback: FxRates = DEFAULT_FALLBACK_RATES,
    ):
        self._provider = provider
        self._target = target_currency.upper()
        self._cache: TtlCache[FxRates] = TtlCache(ttl_seconds, clock)
        self._fallback = fallback
        self._refresh_lock = Lock()

    @property
    def target_currency(self) -> str:
        return self._target

    def get_rates(self) -> FxRates:
        """Return current rates, refreshing from the provider if the cache is stale."""
        cached = self._cache.get_fresh(self._CACHE_KEY)
        if cached is not None:
            return cached

        with self._refresh_lock:
            # Another thread may have refreshed while we waited
            cached = self._cache.get_fresh(self._CACHE_KEY)
            if cached is not None:
                return cached

            rates = self._from_rates_call() or self._from_spot_calls()
            if rates is None:
                logger.warning(
                    "All FX sources failed, using fallback rates %s/%s",
                    self._fallback.usd_to_target,
                    self._fallback.usd_to_eur,
                )
                rates = self._fallback
            self._cache.put(self._CACHE_KEY, rates)
            return rates

    def invalidate(self) -> None:
        """Drop the cached pair so the next call refreshes."""
        self._cache.clear()

    def _from_rates_call(self) -> Optional[FxRates]:
        payload = guarded("FX rates", lambda: self._provider.get_fx_rates(BASE_CURRENCY))
        if not payload:
            return None
        usd_to_target = positive_rate(payload.get(self._target))
        usd_to_eur = positive_rate(payload.get(CROSS_CURRENCY))
        if usd_to_target is None or usd_to_eur is None:
            logger.warning("FX rates payload missing %s or %s", self._target, CROSS_CURRENCY)
            return None
        return FxRates(usd_to_target, usd_to_eur, FxSource.RATES)

    def _from_spot_calls(self) -> Optional[FxRates]:
        # Spot pairs are quoted as USD per unit; invert to get units per USD
        usd_per_target = positive_rate(
            guarded("FX spot", lambda: self._provider.get_fx_spot(f"{self._target}_{BASE_CURRENCY}"))
        )
        usd_per_eur = positive_rate(
            guarded("FX spot", lambda: self._provider.get_fx_spot(f"{CROSS_CURRENCY}_{BASE_CURRENCY}"))
        )
        if usd_per_target is None or usd_per_eur is None:
            return None
        return FxRates(1 / usd_per_target, 1 / usd_per_eur, FxSource.SPOT)

