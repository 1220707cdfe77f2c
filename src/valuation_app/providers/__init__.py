"""Quote providers module."""

from valuation_app.providers.quote_provider import QuoteProvider, guarded
from valuation_app.providers.finnhub_provider import FinnhubQuoteProvider
from valuation_app.providers.stub_provider import StubQuoteProvider

__all__ = [
    "QuoteProvider",
    "guarded",
    "FinnhubQuoteProvider",
    "StubQuoteProvider",
]
