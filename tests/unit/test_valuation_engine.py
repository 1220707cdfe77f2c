"""
Unit tests for ValuationEngine.

Tests cover:
- End-to-end valuation of equities and cash
- default_price fallback and unknown values
- Weight calculation
- Input validation before any fetch
"""

from decimal import Decimal

import pytest

from valuation_app.core.exceptions import ValidationError
from valuation_app.domain.models import Holding
from valuation_app.services.valuation_engine import round_whole, weight_percent

from tests.conftest import make_holding


class TestValueHoldings:
    """Tests for the main valuation flow."""

    def test_equity_and_cash(self, valuation_engine):
        """
        GIVEN 10 AAPL on NASDAQ at 200 USD with 0.8 GBP per USD, and 500 cash
        WHEN valued
        THEN AAPL is 1600, cash is 500, total is 2100 with weights 76.2/23.8
        """
        view = valuation_engine.value_holdings([
            make_holding("AAPL", shares=10, exchange="XNAS", name="Apple"),
            make_holding("CASH", name="Cash", value="500"),
        ])

        apple, cash = view.holdings
        assert apple.value == 1600
        assert apple.price_per_share == Decimal("160.00")
        assert apple.weight == Decimal("76.2")
        assert cash.value == 500
        assert cash.price_per_share == Decimal("1")
        assert cash.weight == Decimal("23.8")
        assert view.total == 2100

    def test_lines_follow_input_order_and_pairs_fetched_once(self, valuation_engine, quote_provider):
        view = valuation_engine.value_holdings([
            make_holding("AAPL", shares=1, exchange="XNAS", name="Apple A"),
            make_holding("CASH", value="10"),
            make_holding("aapl", shares=2, exchange="xnas", name="Apple B"),
        ])

        assert [line.name for line in view.holdings] == ["Apple A", "Cash", "Apple B"]
        assert [line.value for line in view.holdings] == [160, 10, 320]
        assert quote_provider.quote_calls == ["AAPL"]

    def test_codes_normalized_in_output(self, valuation_engine):
        view = valuation_engine.value_holdings([
            Holding(name="  Vodafone ", ticker=" vod ", exchange="xlon", shares=Decimal("100")),
        ])

        line = view.holdings[0]
        assert (line.name, line.ticker, line.exchange) == ("Vodafone", "VOD", "XLON")
        assert line.value == 73

    def test_fractional_and_float_shares(self, valuation_engine):
        view = valuation_engine.value_holdings([
            Holding(name="Apple", ticker="AAPL", exchange="XNAS", shares=Decimal("1.5")),
            Holding(name="Microsoft", ticker="MSFT", exchange="XNAS", shares=2.5),
        ])

        assert [line.value for line in view.holdings] == [240, 800]

    def test_as_of_is_timezone_aware(self, valuation_engine):
        view = valuation_engine.value_holdings([make_holding("CASH", value="1")])

        assert view.as_of is not None
        assert view.as_of.tzinfo is not None


class TestCash:
    """Tests for the CASH line."""

    def test_cash_from_shares_when_no_value(self, valuation_engine):
        view = valuation_engine.value_holdings([make_holding("CASH", shares=250)])

        assert view.holdings[0].value == 250

    def test_cash_ignores_exchange_and_never_fetches(self, valuation_engine, quote_provider):
        view = valuation_engine.value_holdings([
            make_holding("CASH", exchange="XLON", shares=5, value="99.5"),
        ])

        line = view.holdings[0]
        assert line.value == 100
        assert line.shares == 0
        assert line.exchange == ""
        assert quote_provider.quote_calls == []

    def test_negative_cash_clamped_to_zero(self, valuation_engine):
        view = valuation_engine.value_holdings([make_holding("CASH", value="-50")])

        assert view.holdings[0].value == 0
        assert view.total == 0


class TestFallbackAndUnknown:
    """Tests for default_price fallback and unknown values."""

    def test_default_price_used_when_unavailable(self, valuation_engine):
        view = valuation_engine.value_holdings([
            make_holding("NOPE", shares=3, exchange="XNAS", default_price="42"),
        ])

        line = view.holdings[0]
        assert line.price_per_share == Decimal("42")
        assert line.value == 126

    def test_live_price_preferred_over_default(self, valuation_engine):
        view = valuation_engine.value_holdings([
            make_holding("AAPL", shares=1, exchange="XNAS", default_price="42"),
        ])

        assert view.holdings[0].value == 160

    @pytest.mark.parametrize("default_price", [None, "0", "-3"])
    def test_unpriced_value_is_none_not_zero(self, valuation_engine, default_price):
        """
        GIVEN no live price and no usable default
        WHEN valued
        THEN value and price are None and the line is excluded from total
        """
        view = valuation_engine.value_holdings([
            make_holding("NOPE", shares=3, exchange="XNAS", default_price=default_price),
            make_holding("CASH", value="100"),
        ])

        unpriced, cash = view.holdings
        assert unpriced.value is None
        assert unpriced.price_per_share is None
        assert unpriced.weight == Decimal("0.0")
        assert view.total == 100
        assert cash.weight == Decimal("100.0")

    def test_priced_zero_shares_is_zero_value(self, valuation_engine):
        view = valuation_engine.value_holdings([make_holding("AAPL", shares=0, exchange="XNAS")])

        assert view.holdings[0].value == 0
        assert view.holdings[0].price_per_share == Decimal("160.00")

    def test_provider_down_still_values_cash(self, registry, failing_provider, fake_clock):
        from valuation_app.services import FxRateService, PriceService, ValuationEngine

        fx = FxRateService(provider=failing_provider, clock=fake_clock)
        prices = PriceService(failing_provider, registry, fx, clock=fake_clock)
        engine = ValuationEngine(prices)

        view = engine.value_holdings([
            make_holding("AAPL", shares=1, exchange="XNAS"),
            make_holding("CASH", value="10"),
        ])

        assert [line.value for line in view.holdings] == [None, 10]
        assert view.total == 10


class TestWeights:
    """Tests for weight calculation."""

    def test_weights_sum_to_about_100(self, valuation_engine):
        view = valuation_engine.value_holdings([
            make_holding("AAPL", shares=1, exchange="XNAS"),
            make_holding("MSFT", shares=1, exchange="XNAS"),
            make_holding("CASH", value="7"),
        ])

        assert view.total == 487
        assert abs(sum(line.weight for line in view.holdings) - 100) <= Decimal("0.2")

    def test_all_weights_zero_when_total_zero(self, valuation_engine):
        view = valuation_engine.value_holdings([
            make_holding("CASH", value="0"),
            make_holding("NOPE", shares=1, exchange="XNAS"),
        ])

        assert view.total == 0
        assert all(line.weight == Decimal("0.0") for line in view.holdings)

    def test_weight_percent_helper(self):
        assert weight_percent(1, 3) == Decimal("33.3")
        assert weight_percent(2, 3) == Decimal("66.7")
        assert weight_percent(None, 100) == Decimal("0.0")
        assert weight_percent(5, 0) == Decimal("0.0")

    def test_round_whole_half_up(self):
        assert round_whole(Decimal("2.5")) == 3
        assert round_whole(Decimal("1.49")) == 1


class TestValidation:
    """Tests for rejected input."""

    def test_empty_list_rejected_without_fetch(self, valuation_engine, quote_provider):
        with pytest.raises(ValidationError, match="Holdings array is required"):
            valuation_engine.value_holdings([])

        assert quote_provider.fx_calls == 0

    @pytest.mark.parametrize(
        "bad",
        [
            Holding(name="", ticker="AAPL"),
            Holding(name="   ", ticker="AAPL"),
            Holding(name="Apple", ticker=""),
            Holding(name="Apple", ticker=None),
        ],
    )
    def test_missing_name_or_ticker_rejected_without_fetch(self, valuation_engine, quote_provider, bad):
        with pytest.raises(ValidationError, match="name and ticker"):
            valuation_engine.value_holdings([make_holding("AAPL", shares=1, exchange="XNAS"), bad])

        assert quote_provider.quote_calls == []
        assert quote_provider.fx_calls == 0
