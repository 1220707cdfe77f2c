"""Core utilities and shared functionality."""

from valuation_app.core.timezone import (
    now_reporting,
    REPORTING_TZ,
)
from valuation_app.core.clock import Clock, MonotonicClock
from valuation_app.core.cache import CacheEntry, TtlCache
from valuation_app.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    StoreError,
)

__all__ = [
    "now_reporting",
    "REPORTING_TZ",
    "Clock",
    "MonotonicClock",
    "CacheEntry",
    "TtlCache",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "StoreError",
]
