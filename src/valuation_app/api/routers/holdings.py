"""Holdings valuation and storage endpoints."""

from fastapi import APIRouter, Depends, Request

from valuation_app.api.deps import (
    get_defaults_updater,
    get_holdings_service,
    get_valuation_engine,
    require_admin,
)
from valuation_app.api.rate_limiter import api_limit
from valuation_app.api.schemas import (
    DefaultsRefreshResponse,
    HoldingResponse,
    HoldingsCalcRequest,
    HoldingsListResponse,
    HoldingsReplaceRequest,
    ValuationLineResponse,
    ValuationResponse,
)
from valuation_app.domain.models import Holding
from valuation_app.services import DefaultsUpdater, HoldingsService, ValuationEngine

router = APIRouter(prefix="/holdings", tags=["holdings"])


def _holding_response(h: Holding) -> HoldingResponse:
    return HoldingResponse(
        name=h.name,
        ticker=h.ticker,
        exchange=h.exchange,
        shares=float(h.shares),
        default_price=float(h.default_price) if h.default_price is not None else None,
    )


@router.post("/calc", response_model=ValuationResponse)
@api_limit
def calculate(
    request: Request,
    data: HoldingsCalcRequest,
    engine: ValuationEngine = Depends(get_valuation_engine),
) -> ValuationResponse:
    """Value an ad-hoc list of holdings. Does not touch the store."""
    view = engine.value_holdings([h.to_domain() for h in data.holdings])

    return ValuationResponse(
        holdings=[
            ValuationLineResponse(
                name=line.name,
                ticker=line.ticker,
                shares=float(line.shares),
                value=line.value,
                weight=float(line.weight),
                price_per_share=(
                    float(line.price_per_share) if line.price_per_share is not None else None
                ),
                exchange=line.exchange,
            )
            for line in view.holdings
        ],
        total=view.total,
        as_of=view.as_of,
    )


@router.get("", response_model=HoldingsListResponse)
@api_limit
def list_holdings(
    request: Request,
    service: HoldingsService = Depends(get_holdings_service),
) -> HoldingsListResponse:
    """Get the stored holdings."""
    return HoldingsListResponse(
        holdings=[_holding_response(h) for h in service.list_holdings()]
    )


@router.put("", response_model=HoldingsListResponse, dependencies=[Depends(require_admin)])
@api_limit
def replace_holdings(
    request: Request,
    data: HoldingsReplaceRequest,
    service: HoldingsService = Depends(get_holdings_service),
) -> HoldingsListResponse:
    """Replace the stored holdings (admin only)."""
    stored = service.replace_holdings([h.to_domain() for h in data.holdings])
    return HoldingsListResponse(holdings=[_holding_response(h) for h in stored])


@router.post(
    "/defaults",
    response_model=DefaultsRefreshResponse,
    dependencies=[Depends(require_admin)],
)
@api_limit
def refresh_defaults(
    request: Request,
    updater: DefaultsUpdater = Depends(get_defaults_updater),
) -> DefaultsRefreshResponse:
    """Refresh the stored default prices from live quotes (admin only)."""
    result = updater.refresh_stored()
    return DefaultsRefreshResponse(updated_count=result.updated_count)
