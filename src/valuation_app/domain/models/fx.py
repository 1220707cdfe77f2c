"""FX rate pair model."""

from dataclasses import dataclass
from decimal import Decimal

from valuation_app.domain.models.enums import FxSource


@dataclass(frozen=True)
class FxRates:
    """
    Rates needed to bring a native price into the reporting currency.

    Both rates are quoted per one US dollar: usd_to_target is reporting
    currency units per USD, usd_to_eur is EUR per USD. EUR prices are
    crossed through USD as price * usd_to_target / usd_to_eur.
    """

    usd_to_target: Decimal
    usd_to_eur: Decimal
    source: FxSource = FxSource.RATES
