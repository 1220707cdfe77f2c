"""Finnhub REST quote provider."""

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class FinnhubQuoteProvider:
    """
    Quote provider backed by the Finnhub REST API.

    Uses one shared requests session with a bounded timeout. Every failure
    (connection error, timeout, HTTP error status, non-JSON body, API error
    payload) is logged and reported as None.
    """

    BASE_URL = "https://finnhub.io/api/v1"

    # Forex candles come from OANDA on Finnhub
    FX_VENUE = "OANDA"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("Finnhub API key required. Set FINNHUB_API_KEY environment variable.")
        self._api_key = api_key
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def _make_request(self, endpoint: str, params: dict[str, Any]) -> Optional[Any]:
        """GET an endpoint and return its decoded JSON body, or None on any failure."""
        url = f"{self._base_url}/{endpoint}"
        query = {**params, "token": self._api_key}
        try:
            response = self._session.get(url, params=query, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            # Exception text can carry the full URL, token included
            logger.warning("Finnhub %s request failed: %s", endpoint, type(e).__name__)
            return None
        except ValueError:
            logger.warning("Finnhub %s returned a non-JSON body", endpoint)
            return None

        if isinstance(data, dict) and data.get("error"):
            logger.warning("Finnhub %s returned an error: %s", endpoint, data["error"])
            return None
        return data

    def get_fx_rates(self, base: str) -> Optional[dict[str, float]]:
        data = self._make_request("forex/rates", {"base": base})
        if not isinstance(data, dict):
            return None
        quote = data.get("quote")
        rates = quote if isinstance(quote, dict) else data
        result: dict[str, float] = {}
        for code, value in rates.items():
            number = _as_number(value)
            if number is not None:
                result[str(code).upper()] = number
        return result or None

    def get_fx_spot(self, pair: str) -> Optional[float]:
        params = {
            "symbol": f"{self.FX_VENUE}:{pair}",
            "resolution": "1",
            "count": "1",
        }
        data = self._make_request("forex/candle", params)
        if not isinstance(data, dict):
            return None
        closes = data.get("c")
        if not isinstance(closes, list) or not closes:
            return None
        return _as_number(closes[0])

    def get_quote(self, symbol: str) -> Optional[float]:
        data = self._make_request("quote", {"symbol": symbol})
        if not isinstance(data, dict):
            return None
        return _as_number(data.get("c"))

    def close(self) -> None:
        self._session.close()


def _as_number(value: Any) -> Optional[float]:
    """Accept JSON numbers only; strings, booleans and nulls are not prices."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
