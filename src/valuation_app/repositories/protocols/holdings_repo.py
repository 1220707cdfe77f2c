"""Holdings repository protocol."""

from typing import Protocol, Sequence

from valuation_app.domain.models import Holding


class HoldingsRepository(Protocol):
    """
    Interface for the stored portfolio.

    The portfolio is an ordered list that is only ever read and replaced
    in full. Implementations raise StoreError on I/O failure.
    """

    def list_all(self) -> list[Holding]:
        """Get all holdings in stored order."""
        ...

    def replace_all(self, holdings: Sequence[Holding]) -> list[Holding]:
        """Replace the stored list atomically; returns what was stored."""
        ...
