"""Holdings service: read and replace the stored portfolio."""

import logging
from decimal import Decimal
from typing import Sequence

from valuation_app.core.exceptions import ValidationError
from valuation_app.domain.models import Holding, normalize_code
from valuation_app.repositories.protocols import HoldingsRepository
from valuation_app.services.currency_normalizer import to_decimal
from valuation_app.services.valuation_engine import round_whole

logger = logging.getLogger(__name__)


class HoldingsService:
    """
    Service for the stored holdings list.

    The list is replaced as a whole. An incoming holding without a
    default_price keeps the default already stored for the same ticker,
    so an edit from a form that does not carry defaults does not lose them.
    """

    def __init__(self, holdings_repo: HoldingsRepository):
        self._repo = holdings_repo

    def list_holdings(self) -> list[Holding]:
        return self._repo.list_all()

    def replace_holdings(self, incoming: Sequence[Holding]) -> list[Holding]:
        """
        Clean and store incoming as the new portfolio.

        Names are trimmed, codes uppercased, shares rounded to whole
        non-negative numbers, and explicit values dropped.
        Raises ValidationError if an entry has no name or ticker.
        """
        cleaned = [self._clean(h) for h in incoming]
        for holding in cleaned:
            if not holding.name or not holding.ticker:
                raise ValidationError("Each holding must include name and ticker")

        existing_defaults: dict[str, Decimal] = {}
        for prev in self._repo.list_all():
            ticker = normalize_code(prev.ticker)
            if prev.default_price is not None and ticker not in existing_defaults:
                existing_defaults[ticker] = prev.default_price

        for holding in cleaned:
            if holding.default_price is None:
                holding.default_price = existing_defaults.get(holding.ticker)

        stored = self._repo.replace_all(cleaned)
        logger.info("Stored %d holdings", len(stored))
        return stored

    @staticmethod
    def _clean(holding: Holding) -> Holding:
        shares = to_decimal(holding.shares) or Decimal("0")
        default_price = to_decimal(holding.default_price)
        return Holding(
            name=(holding.name or "").strip(),
            ticker=normalize_code(holding.ticker),
            exchange=normalize_code(holding.exchange),
            shares=Decimal(max(0, round_whole(shares))),
            default_price=default_price if default_price is not None and default_price > 0 else None,
        )
