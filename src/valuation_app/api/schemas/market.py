"""Pydantic schemas for exchange and price endpoints."""

from pydantic import BaseModel


class ExchangeResponse(BaseModel):
    """Response schema for one exchange."""

    code: str
    name: str
    suffix: str
    currency: str


class ExchangesResponse(BaseModel):
    """Response schema for the exchange list."""

    exchanges: list[ExchangeResponse]


class PriceResponse(BaseModel):
    """Response schema for a single reporting-currency price."""

    ticker: str
    exchange: str
    price: float
    currency: str


class AdminVerifyResponse(BaseModel):
    ok: bool
