"""Trailing-window selection over a date-ordered series."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..domain import TIME_RANGE_DAYS, DailyObservation, Series, TimeRange

SERIES_COLUMNS = ["date", "high", "low", "volatility"]


def trailing_window(series: Sequence[DailyObservation], size: int) -> Series:
    """Return the most recent ``size`` observations (fewer if the series is shorter)."""
    if size <= 0:
        raise ValueError(f"window size must be positive, got {size}")
    return tuple(series[-size:])


def series_to_frame(series: Sequence[DailyObservation]) -> pd.DataFrame:
    """Convert observations to a date-indexed-ready frame for charting and export."""
    if not series:
        return pd.DataFrame(columns=SERIES_COLUMNS)
    frame = pd.DataFrame(
        {
            "date": pd.to_datetime([obs.date for obs in series]),
            "high": [obs.high for obs in series],
            "low": [obs.low for obs in series],
            "volatility": [obs.volatility for obs in series],
        }
    )
    return frame[SERIES_COLUMNS]


def chart_window(series: Sequence[DailyObservation], time_range: TimeRange) -> pd.DataFrame:
    """Trailing slice of the series for the selected chart range."""
    try:
        days = TIME_RANGE_DAYS[time_range]
    except KeyError as err:
        raise ValueError(f"unknown time range {time_range!r}; expected one of {sorted(TIME_RANGE_DAYS)}") from err
    return series_to_frame(trailing_window(series, days))
