"""Provider protocol for fetching daily high/low ranges."""

from __future__ import annotations

from typing import Any, Protocol

from ..domain import VolatilityQuery


class VolatilityProvider(Protocol):
    """Abstraction for daily range data sources.

    Implementations only normalise shape: they return
    ``{"data": [{"date": <ISO-8601>, "high": <number>, "low": <number>}, ...]}``
    and leave the derived volatility to the caller.
    """

    def fetch_daily_ranges(self, query: VolatilityQuery) -> dict[str, Any]:
        """Fetch the trailing window of daily highs and lows."""
        raise NotImplementedError
