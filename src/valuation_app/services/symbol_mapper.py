"""Map a bare ticker and exchange code to the quote provider's symbol."""

from typing import Optional

from valuation_app.domain.models import normalize_code
from valuation_app.services.exchange_registry import ExchangeRegistry

# Tickers the provider accepts in their dotted form on every exchange
PASSTHROUGH_TICKERS = frozenset({"BRK.B"})


def map_symbol(
    ticker: Optional[str],
    exchange_code: Optional[str],
    registry: ExchangeRegistry,
) -> str:
    """
    Return the provider symbol for ticker on exchange_code.

    Unknown exchanges leave the ticker unchanged; known ones append
    their suffix (which may be empty).
    """
    symbol = normalize_code(ticker)
    exchange = registry.lookup(exchange_code)
    if exchange is None:
        return symbol
    if symbol in PASSTHROUGH_TICKERS:
        return symbol
    return f"{symbol}{exchange.suffix}"
