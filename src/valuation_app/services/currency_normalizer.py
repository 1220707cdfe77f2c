"""Convert native exchange prices into the reporting currency."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable, Optional

from valuation_app.domain.models import Currency, FxRates
from valuation_app.services.exchange_registry import ExchangeRegistry

CENT = Decimal("0.01")
_HUNDRED = Decimal("100")

_CONVERSIONS: dict[Currency, Callable[[Decimal, FxRates], Decimal]] = {
    # Pence are already the reporting currency once divided down
    Currency.GBX: lambda price, rates: price / _HUNDRED,
    Currency.GBP: lambda price, rates: price,
    Currency.USD: lambda price, rates: price * rates.usd_to_target,
    Currency.EUR: lambda price, rates: price * rates.usd_to_target / rates.usd_to_eur,
}

_missing = set(Currency) - set(_CONVERSIONS)
if _missing:
    raise RuntimeError(f"No conversion defined for: {sorted(c.value for c in _missing)}")


def to_decimal(value: object) -> Optional[Decimal]:
    """Parse a finite number into a Decimal; anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, Decimal, str)):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def currency_for(exchange_code: Optional[str], registry: ExchangeRegistry) -> Currency:
    """Trading currency of an exchange; unknown exchanges are assumed to quote in USD."""
    exchange = registry.lookup(exchange_code)
    return exchange.currency if exchange else Currency.USD


def convert(
    native_price: object,
    exchange_code: Optional[str],
    rates: FxRates,
    registry: ExchangeRegistry,
) -> Optional[Decimal]:
    """
    Convert a native price to the reporting currency.

    Returns None when the price is missing, non-numeric, non-finite or not
    positive ("price unavailable"). Results are rounded to 2 dp half-up.
    """
    price = to_decimal(native_price)
    if price is None or price <= 0:
        return None
    currency = currency_for(exchange_code, registry)
    return round_money(_CONVERSIONS[currency](price, rates))
