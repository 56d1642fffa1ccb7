"""Rolling daily-range statistics for the summary cards."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..domain import DailyObservation, Metrics
from ..utils import EmptySeries
from .windows import trailing_window

SHORT_WINDOW = 7
MEDIUM_WINDOW = 30
LONG_WINDOW = 100


def _volatilities(series: Sequence[DailyObservation]) -> pd.Series:
    return pd.Series([obs.volatility for obs in series], dtype="float64")


def compute_metrics(series: Sequence[DailyObservation]) -> Metrics:
    """Compute the metrics snapshot for a non-empty series.

    The 7- and 30-day averages always divide by the nominal window length, so
    they read low while fewer observations exist. The 100-day average divides
    by the number of observations actually available.
    """
    if not series:
        raise EmptySeries("cannot compute metrics for an empty series")

    last_7 = _volatilities(trailing_window(series, SHORT_WINDOW))
    last_30 = _volatilities(trailing_window(series, MEDIUM_WINDOW))
    last_100 = _volatilities(trailing_window(series, LONG_WINDOW))

    return Metrics(
        current=float(series[-1].volatility),
        avg_7d=float(last_7.sum()) / SHORT_WINDOW,
        avg_30d=float(last_30.sum()) / MEDIUM_WINDOW,
        avg_100d=float(last_100.mean()),
        max_7d=float(last_7.max()),
        max_30d=float(last_30.max()),
        min_7d=float(last_7.min()),
        min_30d=float(last_30.min()),
    )
