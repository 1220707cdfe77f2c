"""SQLAlchemy implementation of HoldingsRepository."""

import logging
from decimal import Decimal
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from valuation_app.core.exceptions import StoreError
from valuation_app.domain.models import Holding
from valuation_app.repositories.sqlalchemy.orm_models import HoldingORM

logger = logging.getLogger(__name__)


class SqlAlchemyHoldingsRepository:
    """SQLAlchemy-backed holdings store."""

    def __init__(self, db: Session):
        self._db = db

    def list_all(self) -> list[Holding]:
        """Get all holdings in stored order."""
        try:
            rows = self._db.query(HoldingORM).order_by(HoldingORM.position).all()
        except SQLAlchemyError as e:
            logger.error("Failed to read holdings: %s", e)
            raise StoreError("read", str(e)) from e
        return [self._to_domain(row) for row in rows]

    def replace_all(self, holdings: Sequence[Holding]) -> list[Holding]:
        """Delete every stored row and insert holdings in order, in one transaction."""
        try:
            self._db.query(HoldingORM).delete()
            for position, holding in enumerate(holdings):
                self._db.add(self._to_orm(holding, position))
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Failed to write holdings: %s", e)
            raise StoreError("write", str(e)) from e
        return self.list_all()

    @staticmethod
    def _to_orm(holding: Holding, position: int) -> HoldingORM:
        return HoldingORM(
            position=position,
            name=holding.name,
            ticker=holding.ticker,
            exchange=holding.exchange or "",
            shares=int(holding.shares),
            default_price=holding.default_price,
        )

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM holding to domain model."""
        return Holding(
            name=orm.name,
            ticker=orm.ticker,
            exchange=orm.exchange or "",
            shares=Decimal(orm.shares or 0),
            default_price=(
                Decimal(str(orm.default_price)) if orm.default_price is not None else None
            ),
        )
