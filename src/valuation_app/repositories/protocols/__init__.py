"""Repository protocol definitions (interfaces)."""

from valuation_app.repositories.protocols.holdings_repo import HoldingsRepository

__all__ = [
    "HoldingsRepository",
]
