"""Clock abstraction used by the TTL caches."""

import time
from typing import Protocol


class Clock(Protocol):
    """Source of monotonic seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()
