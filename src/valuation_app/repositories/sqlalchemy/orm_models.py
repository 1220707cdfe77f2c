"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, Integer, Numeric, String

from valuation_app.repositories.sqlalchemy.database import Base


class HoldingORM(Base):
    """SQLAlchemy model for Holding (one row per portfolio line)."""

    __tablename__ = "holdings"

    holding_id = Column(Integer, primary_key=True, autoincrement=True)
    position = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    ticker = Column(String(20), nullable=False)
    exchange = Column(String(10), nullable=False, default="")
    shares = Column(Integer, nullable=False, default=0)
    default_price = Column(Numeric(precision=18, scale=2), nullable=True)
