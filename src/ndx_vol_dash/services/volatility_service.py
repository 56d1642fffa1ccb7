"""Service helpers that UI layers call."""

from __future__ import annotations

from ..data.normalization import parse_payload
from ..data.providers import VolatilityProvider
from ..domain import Metrics, Series, VolatilityQuery
from ..utils import FetchFailed

METRIC_LABELS: dict[str, str] = {
    "current": "Daily Range",
    "avg_7d": "7D Average",
    "avg_30d": "30D Average",
    "avg_100d": "100D Average",
    "max_7d": "7D Max",
    "max_30d": "30D Max",
    "min_7d": "7D Min",
    "min_30d": "30D Min",
}


def fetch_series(
    provider: VolatilityProvider, query: VolatilityQuery, *, drop_inverted_ranges: bool = False
) -> Series:
    """Fetch and parse a fresh series; every failure surfaces as FetchFailed."""
    try:
        payload = provider.fetch_daily_ranges(query)
    except FetchFailed:
        raise
    except Exception as err:
        raise FetchFailed(f"Failed to fetch daily ranges: {err}") from err

    try:
        series = parse_payload(payload, drop_inverted_ranges=drop_inverted_ranges)
    except FetchFailed:
        raise
    except Exception as err:
        raise FetchFailed(f"Failed to parse daily ranges: {err}") from err
    if not series:
        raise FetchFailed(f"no usable observations returned for {query.symbol}")
    return series


def build_metric_cards(metrics: Metrics) -> list[tuple[str, float]]:
    """Card title/value pairs in display order."""
    values = metrics.as_dict()
    return [(label, values[key]) for key, label in METRIC_LABELS.items()]
