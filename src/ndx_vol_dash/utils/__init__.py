"""Utility helpers."""

from .errors import DataRetrievalError, EmptySeries, FetchFailed, MalformedObservation
from .logging import get_logger
from .timefmt import format_update_time

__all__ = [
    "DataRetrievalError",
    "EmptySeries",
    "FetchFailed",
    "MalformedObservation",
    "format_update_time",
    "get_logger",
]
