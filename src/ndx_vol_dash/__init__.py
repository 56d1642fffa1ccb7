"""ndx_vol_dash package with UI-agnostic logic for the volatility dashboard."""

from .domain import DailyObservation, Metrics, RefreshState, TimeRange, VolatilityQuery

__all__ = ["DailyObservation", "Metrics", "RefreshState", "TimeRange", "VolatilityQuery"]
