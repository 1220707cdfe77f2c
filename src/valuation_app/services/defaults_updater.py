"""Refresh the offline fallback price stored on each holding."""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from valuation_app.domain.models import Holding
from valuation_app.domain.views import DefaultsRefreshResult
from valuation_app.services.holdings_service import HoldingsService
from valuation_app.services.price_service import PriceService
from valuation_app.services.valuation_engine import CASH_PRICE, normalize_holding

logger = logging.getLogger(__name__)


class DefaultsUpdater:
    """
    Batch-refreshes default_price from live prices.

    A holding whose live lookup fails keeps its previous default; a known
    fallback is never cleared.
    """

    def __init__(
        self,
        price_service: PriceService,
        holdings_service: Optional[HoldingsService] = None,
    ):
        self._prices = price_service
        self._holdings = holdings_service

    def refresh(self, holdings: Sequence[Holding]) -> list[Holding]:
        """Return copies of holdings with default_price refreshed where possible."""
        normalized = [normalize_holding(h) for h in holdings]
        equity_pairs = [h.price_key for h in normalized if h.ticker and not h.is_cash]
        prices = self._prices.get_prices(equity_pairs)

        updated: list[Holding] = []
        for holding, canonical in zip(holdings, normalized):
            if canonical.is_cash:
                updated.append(replace(holding, default_price=CASH_PRICE))
                continue
            fetched = prices.get(canonical.price_key)
            if fetched is not None and fetched > 0:
                updated.append(replace(holding, default_price=fetched))
            else:
                updated.append(replace(holding))
        return updated

    def refresh_stored(self) -> DefaultsRefreshResult:
        """Refresh the stored portfolio's defaults and write it back."""
        if self._holdings is None:
            raise RuntimeError("DefaultsUpdater was built without a holdings service")
        current = self._holdings.list_holdings()
        updated = self.refresh(current)
        refreshed = sum(
            1 for before, after in zip(current, updated) if before.default_price != after.default_price
        )
        stored = self._holdings.replace_holdings(updated)
        logger.info("Refreshed default prices: %d of %d changed", refreshed, len(stored))
        return DefaultsRefreshResult(updated_count=len(stored), holdings=stored)
