"""SQLAlchemy repository implementations."""

from valuation_app.repositories.sqlalchemy.holdings_repo import SqlAlchemyHoldingsRepository

__all__ = [
    "SqlAlchemyHoldingsRepository",
]
