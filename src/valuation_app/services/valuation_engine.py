"""Valuation engine: price a list of holdings and weight them."""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from valuation_app.core.exceptions import ValidationError
from valuation_app.core.timezone import now_reporting
from valuation_app.domain.models import Holding, normalize_code
from valuation_app.domain.views import ValuationLine, ValuationView
from valuation_app.services.currency_normalizer import to_decimal
from valuation_app.services.price_service import PriceService

logger = logging.getLogger(__name__)

CASH_PRICE = Decimal("1")
_WHOLE = Decimal("1")
_TENTH = Decimal("0.1")
_HUNDRED = Decimal("100")


def round_whole(value: Decimal) -> int:
    """Round half-up to a whole number."""
    return int(value.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def weight_percent(value: Optional[int], total: int) -> Decimal:
    """Share of total as a percentage with one decimal; 0 when undefined."""
    if value is None or total <= 0:
        return Decimal("0.0")
    return (Decimal(value) / Decimal(total) * _HUNDRED).quantize(_TENTH, rounding=ROUND_HALF_UP)


def normalize_holding(holding: Holding) -> Holding:
    """Trim the name, canonicalize codes and coerce numbers to Decimal."""
    return Holding(
        name=(holding.name or "").strip(),
        ticker=normalize_code(holding.ticker),
        exchange=normalize_code(holding.exchange),
        shares=to_decimal(holding.shares) or Decimal("0"),
        value=to_decimal(holding.value),
        default_price=to_decimal(holding.default_price),
    )


class ValuationEngine:
    """
    Values holdings in the reporting currency.

    Distinct (ticker, exchange) pairs are priced once each, concurrently.
    A holding without a live price falls back to its default_price; with
    neither its value is None (unknown), which is kept distinct from zero.
    """

    def __init__(self, price_service: PriceService):
        self._prices = price_service

    def value_holdings(self, holdings: Sequence[Holding]) -> ValuationView:
        """
        Value holdings and compute each line's weight of the total.

        Raises ValidationError for an empty list or a holding missing its
        name or ticker; nothing is fetched in that case. Otherwise returns
        one line per input holding, in input order.
        """
        if not holdings:
            raise ValidationError("Holdings array is required")

        normalized = [normalize_holding(h) for h in holdings]
        for holding in normalized:
            if not holding.name or not holding.ticker:
                raise ValidationError("Each holding must include name and ticker")

        equity_pairs = [h.price_key for h in normalized if not h.is_cash]
        prices = self._prices.get_prices(equity_pairs)

        lines = [
            self._cash_line(h) if h.is_cash else self._equity_line(h, prices.get(h.price_key))
            for h in normalized
        ]

        total = sum(line.value for line in lines if line.value is not None)
        for line in lines:
            line.weight = weight_percent(line.value, total)

        unpriced = [line.ticker for line in lines if line.value is None]
        if unpriced:
            logger.info("No price for %d holding(s): %s", len(unpriced), ", ".join(unpriced))

        return ValuationView(holdings=lines, total=total, as_of=now_reporting())

    @staticmethod
    def _cash_line(holding: Holding) -> ValuationLine:
        amount = holding.value if holding.value is not None else holding.shares
        value = max(0, round_whole(amount))
        return ValuationLine(
            name=holding.name,
            ticker=holding.ticker,
            shares=Decimal("0"),
            value=value,
            weight=Decimal("0.0"),
            price_per_share=CASH_PRICE,
            exchange="",
        )

    @staticmethod
    def _equity_line(holding: Holding, live_price: Optional[Decimal]) -> ValuationLine:
        price = live_price
        if price is None and holding.default_price is not None and holding.default_price > 0:
            price = holding.default_price

        value = None
        if price is not None:
            value = max(0, round_whole(price * holding.shares))

        return ValuationLine(
            name=holding.name,
            ticker=holding.ticker,
            shares=holding.shares,
            value=value,
            weight=Decimal("0.0"),
            price_per_share=price,
            exchange=holding.exchange,
        )
