"""Pydantic schemas for API request/response."""

from valuation_app.api.schemas.holding import (
    HoldingIn,
    HoldingsCalcRequest,
    HoldingsReplaceRequest,
    ValuationLineResponse,
    ValuationResponse,
    HoldingResponse,
    HoldingsListResponse,
    DefaultsRefreshResponse,
)
from valuation_app.api.schemas.market import (
    ExchangeResponse,
    ExchangesResponse,
    PriceResponse,
    AdminVerifyResponse,
)

__all__ = [
    "HoldingIn",
    "HoldingsCalcRequest",
    "HoldingsReplaceRequest",
    "ValuationLineResponse",
    "ValuationResponse",
    "HoldingResponse",
    "HoldingsListResponse",
    "DefaultsRefreshResponse",
    "ExchangeResponse",
    "ExchangesResponse",
    "PriceResponse",
    "AdminVerifyResponse",
]
