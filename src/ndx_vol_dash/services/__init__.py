"""Service layer entry points."""

from .scheduler import RefreshScheduler, SchedulerState, next_refresh_at
from .session import DashboardSession
from .volatility_service import METRIC_LABELS, build_metric_cards, fetch_series

__all__ = [
    "METRIC_LABELS",
    "DashboardSession",
    "RefreshScheduler",
    "SchedulerState",
    "build_metric_cards",
    "fetch_series",
    "next_refresh_at",
]
