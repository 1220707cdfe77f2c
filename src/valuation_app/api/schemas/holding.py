"""Pydantic schemas for holdings endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from valuation_app.domain.models import Holding


class HoldingIn(BaseModel):
    """Request schema for a single holding."""

    name: str = ""
    ticker: str = ""
    exchange: str = ""
    shares: Decimal = Decimal("0")
    value: Optional[Decimal] = None
    default_price: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("default_price", "defaultPrice"),
    )

    def to_domain(self) -> Holding:
        return Holding(
            name=self.name,
            ticker=self.ticker,
            exchange=self.exchange,
            shares=self.shares,
            value=self.value,
            default_price=self.default_price,
        )


class HoldingsCalcRequest(BaseModel):
    """Request schema for valuing an ad-hoc list of holdings."""

    holdings: list[HoldingIn] = Field(default_factory=list)


class HoldingsReplaceRequest(BaseModel):
    """Request schema for replacing the stored holdings."""

    holdings: list[HoldingIn]


class ValuationLineResponse(BaseModel):
    """Response schema for one valued holding."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    ticker: str
    shares: float
    value: Optional[int] = None
    weight: float
    price_per_share: Optional[float] = Field(default=None, alias="pricePerShare")
    exchange: str


class ValuationResponse(BaseModel):
    """Response schema for a valuation."""

    model_config = ConfigDict(populate_by_name=True)

    holdings: list[ValuationLineResponse]
    total: int
    as_of: Optional[datetime] = Field(default=None, alias="asOf")


class HoldingResponse(BaseModel):
    """Response schema for a stored holding."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    ticker: str
    exchange: str
    shares: float
    default_price: Optional[float] = Field(default=None, alias="defaultPrice")


class HoldingsListResponse(BaseModel):
    """Response schema for the stored holdings list."""

    holdings: list[HoldingResponse]


class DefaultsRefreshResponse(BaseModel):
    """Response schema for a defaults refresh."""

    model_config = ConfigDict(populate_by_name=True)

    updated_count: int = Field(alias="updatedCount")
