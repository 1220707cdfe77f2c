"""Domain layer - pure business models with no external dependencies."""

from valuation_app.domain.models import (
    CASH_TICKER,
    Currency,
    ExchangeRecord,
    FxRates,
    Holding,
    normalize_code,
)

__all__ = [
    "CASH_TICKER",
    "Currency",
    "ExchangeRecord",
    "FxRates",
    "Holding",
    "normalize_code",
]
