"""Price service: per-symbol reporting-currency prices with TTL caching."""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Iterable, Optional

from valuation_app.core.cache import DEFAULT_MAXSIZE, TtlCache
from valuation_app.core.clock import Clock
from valuation_app.domain.models import normalize_code
from valuation_app.providers.quote_provider import QuoteProvider, guarded
from valuation_app.services.currency_normalizer import convert
from valuation_app.services.exchange_registry import ExchangeRegistry
from valuation_app.services.fx_rate_service import FxRateService
from valuation_app.services.symbol_mapper import map_symbol

logger = logging.getLogger(__name__)

DEFAULT_PRICE_TTL_SECONDS = 15 * 60
DEFAULT_MAX_WORKERS = 8
KEY_SEPARATOR = "||"

PriceKey = tuple[str, str]


def price_cache_key(ticker: Optional[str], exchange_code: Optional[str]) -> str:
    """Composite cache key: TICKER||EXCHANGE."""
    return f"{normalize_code(ticker)}{KEY_SEPARATOR}{normalize_code(exchange_code)}"


class PriceService:
    """
    Resolves reporting-currency prices for (ticker, exchange) pairs.

    Successful lookups are cached per key for the TTL. Failures are not
    cached, so the next request retries straight away; the FX service
    rate-limits its own failures separately.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        registry: ExchangeRegistry,
        fx_service: FxRateService,
        ttl_seconds: float = DEFAULT_PRICE_TTL_SECONDS,
        clock: Optional[Clock] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        cache_maxsize: int = DEFAULT_MAXSIZE,
    ):
        self._provider = provider
        self._registry = registry
        self._fx = fx_service
        self._cache: TtlCache[Decimal] = TtlCache(ttl_seconds, clock, maxsize=cache_maxsize)
        self._max_workers = max_workers

    def get_price(self, ticker: Optional[str], exchange_code: Optional[str]) -> Optional[Decimal]:
        """
        Return the reporting-currency price for ticker on exchange_code.

        Returns None if the quote is unavailable or cannot be converted.
        """
        key = price_cache_key(ticker, exchange_code)
        cached = self._cache.get_fresh(key)
        if cached is not None and cached > 0:
            return cached

        symbol = map_symbol(ticker, exchange_code, self._registry)
        if not symbol:
            return None
        rates = self._fx.get_rates()
        logger.debug("Price cache miss for %s, fetching %s", key, symbol)
        raw = guarded(f"Quote {symbol}", lambda: self._provider.get_quote(symbol))
        if raw is None:
            return None

        price = convert(raw, exchange_code, rates, self._registry)
        if price is None or price <= 0:
            logger.info("No usable price for %s (raw=%r)", symbol, raw)
            return None
        self._cache.put(key, price)
        return price

    def get_prices(self, pairs: Iterable[PriceKey]) -> dict[PriceKey, Optional[Decimal]]:
        """
        Resolve many pairs concurrently.

        Pairs are normalized and deduplicated (first occurrence order kept);
        each distinct pair is fetched at most once. Every requested pair is
        present in the result, mapped to its price or None.
        """
        distinct: list[PriceKey] = []
        seen: set[PriceKey] = set()
        for ticker, exchange in pairs:
            pair = (normalize_code(ticker), normalize_code(exchange))
            if pair not in seen:
                seen.add(pair)
                distinct.append(pair)

        if not distinct:
            return {}

        workers = min(self._max_workers, len(distinct))
        results: dict[PriceKey, Optional[Decimal]] = {}
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = {pair: ex.submit(self.get_price, *pair) for pair in distinct}
            for pair, fut in futures.items():
                try:
                    results[pair] = fut.result()
                except Exception:
                    logger.warning("Price lookup for %s failed", pair, exc_info=True)
                    results[pair] = None
        return results

    def clear(self) -> None:
        """Drop all cached prices."""
        self._cache.clear()
