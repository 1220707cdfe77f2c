"""Stub quote provider for offline/testing use."""

from typing import Optional


# Deterministic fake native prices for common provider symbols
_STUB_PRICES: dict[str, float] = {
    "AAPL": 185.50,
    "MSFT": 378.25,
    "GOOGL": 142.75,
    "AMZN": 178.50,
    "NVDA": 485.25,
    "BRK.B": 408.10,
    "SPY": 485.25,
    "VOD.L": 71.42,  # pence
    "BP.L": 468.90,  # pence
    "HSBA.L": 652.30,  # pence
    "SAP.DE": 171.36,
    "SIE.DE": 168.02,
    "MC.PA": 812.40,
}

_STUB_RATES_USD: dict[str, float] = {
    "USD": 1.0,
    "GBP": 0.78,
    "EUR": 0.92,
}

# Quote-currency units per one base unit
_STUB_SPOT: dict[str, float] = {
    "GBP_USD": 1.0 / 0.78,
    "EUR_USD": 1.0 / 0.92,
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Only the predefined symbols are priced. Anything else has no quote, as
    with a live provider that does not know the symbol.
    """

    def get_fx_rates(self, base: str) -> Optional[dict[str, float]]:
        if base.upper() != "USD":
            return None
        return dict(_STUB_RATES_USD)

    def get_fx_spot(self, pair: str) -> Optional[float]:
        return _STUB_SPOT.get(pair.upper())

    def get_quote(self, symbol: str) -> Optional[float]:
        return _STUB_PRICES.get(symbol.upper())
