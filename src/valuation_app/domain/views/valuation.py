"""View models for valuation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from valuation_app.domain.models import Holding


@dataclass
class ValuationLine:
    """Valued holding: one per input holding, in input order."""

    name: str
    ticker: str
    shares: Decimal
    value: Optional[int]
    weight: Decimal
    price_per_share: Optional[Decimal]
    exchange: str


@dataclass
class ValuationView:
    """Result of valuing a list of holdings."""

    holdings: list[ValuationLine] = field(default_factory=list)
    total: int = 0
    as_of: Optional[datetime] = None


@dataclass
class DefaultsRefreshResult:
    """Summary of a stored-defaults refresh."""

    updated_count: int = 0
    holdings: list[Holding] = field(default_factory=list)
