"""Quote provider protocol."""

import logging
from typing import Callable, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuoteProvider(Protocol):
    """
    Protocol for upstream quote providers.

    Every operation returns None when it produced no usable data (timeout,
    HTTP error, malformed payload). Implementations must not raise for
    upstream failures.
    """

    def get_fx_rates(self, base: str) -> Optional[dict[str, float]]:
        """
        Fetch all FX rates for a base currency in one call.

        Returns dict mapping currency code -> units of that currency per
        one unit of base.
        """
        ...

    def get_fx_spot(self, pair: str) -> Optional[float]:
        """
        Fetch the latest spot price of a currency pair such as "GBP_USD".

        The price is quote-currency units per one base-currency unit.
        """
        ...

    def get_quote(self, symbol: str) -> Optional[float]:
        """Fetch the current native-currency price for a provider symbol."""
        ...


def guarded(what: str, call: Callable[[], Optional[T]]) -> Optional[T]:
    """Run a provider call, turning an unexpected exception into 'no data'."""
    try:
        return call()
    except Exception:
        logger.warning("%s lookup raised, treating as unavailable", what, exc_info=True)
        return None
