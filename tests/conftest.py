"""
Pytest configuration and fixtures for holdings valuation tests.

This module provides:
- A fake clock for TTL tests
- Recording/failing quote providers
- In-memory SQLite database fixtures
- Service and repository fixtures
- API test client wired to the fakes
"""

from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from valuation_app.main import app
from valuation_app.api.rate_limiter import limiter
from valuation_app.app_context import AppContext, set_app_context
from valuation_app.config.settings import Settings, set_settings, reset_settings
from valuation_app.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from valuation_app.repositories.sqlalchemy import orm_models  # noqa: F401
from valuation_app.repositories.sqlalchemy import SqlAlchemyHoldingsRepository
from valuation_app.domain.models import Holding
from valuation_app.services import (
    DefaultsUpdater,
    ExchangeRegistry,
    FxRateService,
    HoldingsService,
    PriceService,
    ValuationEngine,
)


ADMIN_TOKEN = "test-admin-token"


# =============================================================================
# CLOCK
# =============================================================================


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_000.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a fake clock starting at t=1000s."""
    return FakeClock()


# =============================================================================
# QUOTE PROVIDER FIXTURES
# =============================================================================


class RecordingQuoteProvider:
    """
    Deterministic quote provider that records every call.

    Quotes, rates and spot prices are plain dicts; a missing entry (or a
    None value) means "no data" for that call.
    """

    def __init__(
        self,
        quotes: Optional[dict[str, Optional[float]]] = None,
        rates: Optional[dict[str, float]] = None,
        spot: Optional[dict[str, float]] = None,
    ):
        self.quotes = dict(quotes or {})
        self.rates = rates
        self.spot = dict(spot or {})
        self.quote_calls: list[str] = []
        self.rates_calls: list[str] = []
        self.spot_calls: list[str] = []

    def get_fx_rates(self, base: str) -> Optional[dict[str, float]]:
        self.rates_calls.append(base)
        return dict(self.rates) if self.rates is not None else None

    def get_fx_spot(self, pair: str) -> Optional[float]:
        self.spot_calls.append(pair)
        return self.spot.get(pair)

    def get_quote(self, symbol: str) -> Optional[float]:
        self.quote_calls.append(symbol)
        return self.quotes.get(symbol)

    @property
    def fx_calls(self) -> int:
        return len(self.rates_calls) + len(self.spot_calls)


class FailingQuoteProvider:
    """Quote provider that always raises."""

    def __init__(self):
        self.calls = 0

    def get_fx_rates(self, base: str) -> Optional[dict[str, float]]:
        self.calls += 1
        raise ConnectionError("Network unavailable")

    def get_fx_spot(self, pair: str) -> Optional[float]:
        self.calls += 1
        raise ConnectionError("Network unavailable")

    def get_quote(self, symbol: str) -> Optional[float]:
        self.calls += 1
        raise ConnectionError("Network unavailable")


# Rates used throughout: 0.8 GBP per USD, 0.9 EUR per USD
TEST_RATES = {"GBP": 0.8, "EUR": 0.9, "JPY": 150.0}

TEST_QUOTES = {
    "AAPL": 200.0,  # USD -> 160.00 GBP
    "MSFT": 400.0,  # USD -> 320.00 GBP
    "VOD.L": 72.5,  # GBX -> 0.73 GBP
    "SAP.DE": 180.0,  # EUR -> 160.00 GBP
}


@pytest.fixture
def quote_provider() -> RecordingQuoteProvider:
    """Provide a recording provider with fixed quotes and rates."""
    return RecordingQuoteProvider(quotes=TEST_QUOTES, rates=TEST_RATES)


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    """Provide a quote provider that always fails."""
    return FailingQuoteProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def registry() -> ExchangeRegistry:
    """Provide the built-in exchange registry."""
    return ExchangeRegistry.default()


@pytest.fixture
def fx_service(quote_provider, fake_clock) -> FxRateService:
    """Provide FxRateService on the recording provider."""
    return FxRateService(provider=quote_provider, clock=fake_clock)


@pytest.fixture
def price_service(quote_provider, registry, fx_service, fake_clock) -> PriceService:
    """Provide PriceService on the recording provider."""
    return PriceService(
        provider=quote_provider,
        registry=registry,
        fx_service=fx_service,
        clock=fake_clock,
    )


@pytest.fixture
def valuation_engine(price_service) -> ValuationEngine:
    """Provide ValuationEngine."""
    return ValuationEngine(price_service=price_service)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def holdings_repo(test_session) -> SqlAlchemyHoldingsRepository:
    """Provide test HoldingsRepository."""
    return SqlAlchemyHoldingsRepository(test_session)


@pytest.fixture
def holdings_service(holdings_repo) -> HoldingsService:
    """Provide test HoldingsService."""
    return HoldingsService(holdings_repo=holdings_repo)


@pytest.fixture
def defaults_updater(price_service, holdings_service) -> DefaultsUpdater:
    """Provide DefaultsUpdater bound to the test store."""
    return DefaultsUpdater(price_service=price_service, holdings_service=holdings_service)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests: in-memory DB, known admin token, no API key."""
    return Settings(
        database_url="sqlite://",
        admin_token=ADMIN_TOKEN,
        finnhub_api_key="",
    )


@pytest.fixture
def client(test_engine, test_settings, quote_provider, fake_clock, registry) -> TestClient:
    """Provide FastAPI test client with test database and recording provider."""
    set_settings(test_settings)
    reset_database()
    limiter.reset()
    set_app_context(
        AppContext(
            settings=test_settings,
            provider=quote_provider,
            clock=fake_clock,
            registry=registry,
        )
    )
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    limiter.reset()
    set_app_context(None)
    reset_database()
    reset_settings()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Token": ADMIN_TOKEN}


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def make_holding(
    ticker: str,
    shares: int = 0,
    exchange: str = "",
    name: Optional[str] = None,
    value: Optional[str] = None,
    default_price: Optional[str] = None,
) -> Holding:
    """Build a Holding with Decimal fields from short literals."""
    return Holding(
        name=name or ticker.title(),
        ticker=ticker,
        exchange=exchange,
        shares=Decimal(shares),
        value=Decimal(value) if value is not None else None,
        default_price=Decimal(default_price) if default_price is not None else None,
    )
