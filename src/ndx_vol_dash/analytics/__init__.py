"""Windowing and metrics over the daily range series."""

from .metrics import compute_metrics
from .windows import chart_window, series_to_frame, trailing_window

__all__ = ["chart_window", "compute_metrics", "series_to_frame", "trailing_window"]
