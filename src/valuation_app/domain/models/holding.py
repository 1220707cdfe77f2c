"""Portfolio holding model."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

# Reserved ticker for the portfolio's cash balance
CASH_TICKER = "CASH"


def normalize_code(value: Optional[str]) -> str:
    """Strip and uppercase a ticker or exchange code; None becomes ''."""
    if value is None:
        return ""
    return str(value).strip().upper()


@dataclass
class Holding:
    """
    A single line of the portfolio.

    value is an explicit monetary amount and only applies to CASH.
    default_price is the last known reporting-currency price, used when
    a live quote cannot be obtained.
    """

    name: str
    ticker: str
    exchange: str = ""
    shares: Decimal = Decimal("0")
    value: Optional[Decimal] = None
    default_price: Optional[Decimal] = None

    @property
    def is_cash(self) -> bool:
        return self.ticker == CASH_TICKER

    @property
    def price_key(self) -> tuple[str, str]:
        """(ticker, exchange) identity used for price lookups."""
        return (self.ticker, self.exchange)
