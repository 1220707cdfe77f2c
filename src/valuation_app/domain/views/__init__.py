"""View models for service outputs."""

from valuation_app.domain.views.valuation import (
    ValuationLine,
    ValuationView,
    DefaultsRefreshResult,
)

__all__ = [
    "ValuationLine",
    "ValuationView",
    "DefaultsRefreshResult",
]
