"""Exchange reference and single-price endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from valuation_app.api.deps import get_context, get_exchange_registry, get_price_service
from valuation_app.api.rate_limiter import api_limit
from valuation_app.api.schemas import ExchangeResponse, ExchangesResponse, PriceResponse
from valuation_app.app_context import AppContext
from valuation_app.core.exceptions import NotFoundError, ValidationError
from valuation_app.domain.models import CASH_TICKER, normalize_code
from valuation_app.services import ExchangeRegistry, PriceService

router = APIRouter(tags=["market"])


@router.get("/exchanges", response_model=ExchangesResponse)
@api_limit
def list_exchanges(
    request: Request,
    registry: ExchangeRegistry = Depends(get_exchange_registry),
) -> ExchangesResponse:
    """Get the exchange reference data."""
    return ExchangesResponse(
        exchanges=[
            ExchangeResponse(
                code=e.code,
                name=e.name,
                suffix=e.suffix,
                currency=e.currency.value,
            )
            for e in registry.all()
        ]
    )


@router.get("/price/{ticker}", response_model=PriceResponse)
@api_limit
def get_price(
    request: Request,
    ticker: str,
    exchange: str = Query("", description="Exchange code, e.g. XLON"),
    prices: PriceService = Depends(get_price_service),
    context: AppContext = Depends(get_context),
) -> PriceResponse:
    """Get one ticker's price in the reporting currency."""
    symbol = normalize_code(ticker)
    exchange_code = normalize_code(exchange)
    currency = context.settings.target_currency
    if not symbol:
        raise ValidationError("Ticker is required")
    if symbol == CASH_TICKER:
        return PriceResponse(ticker=symbol, exchange="", price=1.0, currency=currency)

    price = prices.get_price(symbol, exchange_code)
    if price is None:
        raise NotFoundError("Price", f"{symbol} {exchange_code}".strip())
    return PriceResponse(ticker=symbol, exchange=exchange_code, price=float(price), currency=currency)
