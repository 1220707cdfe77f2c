"""Repository layer - data access abstractions and implementations."""

from valuation_app.repositories.protocols import HoldingsRepository

__all__ = [
    "HoldingsRepository",
]
