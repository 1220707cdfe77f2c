"""Exchange reference data: display name, ticker suffix and trading currency per exchange."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from valuation_app.domain.models import Currency, ExchangeRecord, normalize_code

logger = logging.getLogger(__name__)


DEFAULT_EXCHANGES: tuple[ExchangeRecord, ...] = (
    ExchangeRecord("XNAS", "NASDAQ", "", Currency.USD),
    ExchangeRecord("XNYS", "NYSE", "", Currency.USD),
    ExchangeRecord("XASE", "NYSE American", "", Currency.USD),
    ExchangeRecord("ARCX", "NYSE Arca", "", Currency.USD),
    ExchangeRecord("XLON", "London Stock Exchange", ".L", Currency.GBX),
    ExchangeRecord("XETR", "XETRA (Germany)", ".DE", Currency.EUR),
    ExchangeRecord("XFRA", "Frankfurt (Germany)", ".DE", Currency.EUR),
    ExchangeRecord("XPAR", "Euronext Paris", ".PA", Currency.EUR),
)


class ExchangeRegistry:
    """
    Read-only lookup table of exchanges keyed by code.

    Built once at startup. Lookups are case-insensitive and return None for
    unknown codes; callers treat that as "no suffix, no conversion hint".
    """

    def __init__(self, records: Iterable[ExchangeRecord]):
        self._records: list[ExchangeRecord] = []
        self._by_code: dict[str, ExchangeRecord] = {}
        for record in records:
            code = normalize_code(record.code)
            if not code:
                raise ValueError("Exchange code is required")
            if code in self._by_code:
                raise ValueError(f"Duplicate exchange code: {code}")
            self._by_code[code] = record
            self._records.append(record)

    @classmethod
    def default(cls) -> "ExchangeRegistry":
        """Registry built from the built-in exchange set."""
        return cls(DEFAULT_EXCHANGES)

    @classmethod
    def load(cls, path: Optional[Path]) -> "ExchangeRegistry":
        """
        Load exchanges from a JSON array file.

        Falls back to the built-in set if the file is missing, unreadable
        or malformed. Never raises.
        """
        if path is None:
            return cls.default()
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
            return cls(_parse_records(raw))
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Using built-in exchanges, could not load %s: %s", path, e)
            return cls.default()

    def lookup(self, code: Optional[str]) -> Optional[ExchangeRecord]:
        """Return the exchange for code, or None if unknown or empty."""
        key = normalize_code(code)
        if not key:
            return None
        return self._by_code.get(key)

    def all(self) -> list[ExchangeRecord]:
        """All exchanges in source order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.lookup(code) is not None


def _parse_records(raw: Any) -> list[ExchangeRecord]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("exchange source must be a non-empty JSON array")
    return [_parse_record(item) for item in raw]


def _parse_record(item: Any) -> ExchangeRecord:
    if not isinstance(item, dict):
        raise ValueError(f"exchange entry must be an object: {item!r}")
    code = normalize_code(item["code"])
    currency_code = str(item.get("currency") or "")
    try:
        currency = Currency.parse(currency_code)
    except ValueError:
        logger.warning(
            "Exchange %s has unsupported currency %r, treating as USD", code, currency_code
        )
        currency = Currency.USD
    return ExchangeRecord(
        code=code,
        name=str(item.get("name") or code),
        suffix=str(item.get("suffix") or ""),
        currency=currency,
    )
