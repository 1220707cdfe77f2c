"""Enumerations for domain models."""

from enum import Enum


class Currency(str, Enum):
    """Trading currencies an exchange can quote in."""

    USD = "USD"  # Base currency of the FX feed
    EUR = "EUR"  # Crossed via USD
    GBP = "GBP"  # Reporting currency, major unit
    GBX = "GBX"  # Pence, minor unit of GBP

    @classmethod
    def parse(cls, code: str) -> "Currency":
        """Parse a currency code; raises ValueError for codes outside the closed set."""
        return cls(str(code).strip().upper())


class FxSource(str, Enum):
    """Which tier of the FX lookup produced a rate pair."""

    RATES = "rates"
    SPOT = "spot"
    FALLBACK = "fallback"
