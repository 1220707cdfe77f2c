"""Exchange reference record."""

from dataclasses import dataclass

from valuation_app.domain.models.enums import Currency


@dataclass(frozen=True)
class ExchangeRecord:
    """
    Static reference data for one exchange.

    The suffix is appended to a bare ticker to form the quote provider's
    symbol; an empty suffix means the ticker is used as-is.
    """

    code: str
    name: str
    suffix: str
    currency: Currency
