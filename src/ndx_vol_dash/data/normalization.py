"""Normalize yfinance outputs into the wire payload, and the payload into a series."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

from ..domain import DailyObservation, Series
from ..utils import FetchFailed, MalformedObservation

logger = logging.getLogger(__name__)

RAW_FIELD_NAMES = {"Close", "Adj Close", "Volume", "Open", "High", "Low"}
CANONICAL_COLUMNS = ["date", "high", "low"]


def empty_ranges_frame() -> pd.DataFrame:
    """Return an empty canonical frame."""
    return pd.DataFrame(columns=CANONICAL_COLUMNS)


def normalize_yfinance_frame(raw: pd.DataFrame, symbol: str) -> pd.DataFrame:
    """Reduce a raw yfinance download to ``date, high, low`` rows in date order."""
    if raw is None or raw.empty:
        return empty_ranges_frame()

    df = _ensure_tickers_first(raw)
    if isinstance(df.columns, pd.MultiIndex):
        tickers = df.columns.get_level_values(0).unique()
        key = symbol if symbol in tickers else tickers[0]
        df = df[key]

    rename_map = {"High": "high", "Low": "low", "Date": "date", "Datetime": "date", "index": "date"}
    working = df.reset_index()
    working.columns = [rename_map.get(col, col) if isinstance(col, str) else col for col in working.columns]

    missing = [col for col in CANONICAL_COLUMNS if col not in working.columns]
    if missing:
        raise FetchFailed(f"yfinance frame for {symbol} is missing columns: {missing}")

    working = working[CANONICAL_COLUMNS].copy()
    working[["high", "low"]] = working[["high", "low"]].astype("float64").replace([np.inf, -np.inf], np.nan)
    incomplete = working[["high", "low"]].isna().any(axis=1)
    if incomplete.any():
        logger.info("Dropping %d %s rows without a complete high/low", int(incomplete.sum()), symbol)
        working = working.loc[~incomplete]

    working["date"] = pd.to_datetime(working["date"])
    return working.sort_values("date").reset_index(drop=True)


def frame_to_payload(frame: pd.DataFrame) -> dict[str, Any]:
    """Serialise a canonical frame into the fetcher-to-core payload."""
    rows = []
    for record in frame.itertuples(index=False):
        rows.append(
            {
                "date": _to_utc(pd.Timestamp(record.date)).isoformat(),
                "high": float(record.high),
                "low": float(record.low),
            }
        )
    return {"data": rows}


def parse_payload(payload: Any, *, drop_inverted_ranges: bool = False) -> Series:
    """Turn a fetcher payload into a strictly date-ordered series.

    Missing or mistyped fields fail the whole fetch. Rows with non-finite
    prices are skipped. Rows whose high is below their low are kept (yielding a
    negative range) unless ``drop_inverted_ranges`` is set. When a calendar date
    repeats, the later row wins.
    """
    if not isinstance(payload, Mapping) or "data" not in payload:
        raise FetchFailed("payload is missing the 'data' field")
    rows = payload["data"]
    if not isinstance(rows, list):
        raise FetchFailed(f"payload 'data' must be a list, got {type(rows).__name__}")

    by_date: dict[date, DailyObservation] = {}
    for index, row in enumerate(rows):
        try:
            day = _parse_date(row["date"])
            high = _parse_number(row["high"], "high")
            low = _parse_number(row["low"], "low")
        except (KeyError, TypeError, ValueError, OverflowError) as err:
            raise FetchFailed(f"malformed row {index}: {err!r}") from err

        try:
            check_range(high, low)
        except MalformedObservation as err:
            if not (math.isfinite(high) and math.isfinite(low)) or drop_inverted_ranges:
                logger.warning("Skipping row for %s: %s", day, err)
                continue
            logger.warning("Keeping inverted row for %s: %s", day, err)

        by_date[day] = DailyObservation.from_range(day, high, low)

    return tuple(by_date[day] for day in sorted(by_date))


def check_range(high: float, low: float) -> None:
    if not (math.isfinite(high) and math.isfinite(low)):
        raise MalformedObservation(f"non-finite prices high={high} low={low}")
    if high < low:
        raise MalformedObservation(f"high {high} is below low {low}")


def _parse_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    return float(value)


def _parse_date(value: Any) -> date:
    if not isinstance(value, str):
        raise TypeError(f"date must be an ISO-8601 string, got {type(value).__name__}")
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"unparsable date {value!r}")
    return _to_utc(ts).date()


def _to_utc(ts: pd.Timestamp) -> pd.Timestamp:
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def _ensure_tickers_first(df: pd.DataFrame) -> pd.DataFrame:
    if not isinstance(df.columns, pd.MultiIndex):
        return df

    level0 = df.columns.get_level_values(0)
    level1 = df.columns.get_level_values(1)

    fields_in_level0 = _has_raw_field(level0)
    fields_in_level1 = _has_raw_field(level1)

    if fields_in_level0 and not fields_in_level1:
        return df.swaplevel(0, 1, axis=1)
    return df


def _has_raw_field(level: Any) -> bool:
    try:
        return bool(set(level) & RAW_FIELD_NAMES)
    except TypeError:
        return False
