"""Domain models package."""

from valuation_app.domain.models.enums import Currency, FxSource
from valuation_app.domain.models.exchange import ExchangeRecord
from valuation_app.domain.models.fx import FxRates
from valuation_app.domain.models.holding import CASH_TICKER, Holding, normalize_code

__all__ = [
    "Currency",
    "FxSource",
    "ExchangeRecord",
    "FxRates",
    "CASH_TICKER",
    "Holding",
    "normalize_code",
]
