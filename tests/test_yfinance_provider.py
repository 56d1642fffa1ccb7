from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from ndx_vol_dash.data import YFinanceVolatilityProvider, parse_payload
from ndx_vol_dash.data import yfinance_provider
from ndx_vol_dash.data.normalization import normalize_yfinance_frame
from ndx_vol_dash.domain import VolatilityQuery
from ndx_vol_dash.utils import FetchFailed

DATES = pd.DatetimeIndex(["2024-03-01", "2024-03-04", "2024-03-05"], name="Date")


def _flat_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Open": [95.0, 100.0, 101.0],
            "High": [100.0, 110.0, np.nan],
            "Low": [90.0, 95.0, 100.0],
            "Close": [99.0, 108.0, 102.0],
        },
        index=DATES,
    )


def _grouped_frame(symbol: str = "^NDX") -> pd.DataFrame:
    flat = _flat_frame()
    flat.columns = pd.MultiIndex.from_product([[symbol], flat.columns], names=["Ticker", "Price"])
    return flat


def test_normalize_grouped_frame_drops_incomplete_rows():
    frame = normalize_yfinance_frame(_grouped_frame(), "^NDX")

    assert list(frame.columns) == ["date", "high", "low"]
    assert frame["high"].tolist() == [100.0, 110.0]
    assert frame["date"].dt.day.tolist() == [1, 4]


def test_normalize_field_first_multiindex():
    grouped = _grouped_frame().swaplevel(0, 1, axis=1)

    frame = normalize_yfinance_frame(grouped, "^NDX")

    assert frame["low"].tolist() == [90.0, 95.0]


def test_normalize_empty_frame():
    assert normalize_yfinance_frame(pd.DataFrame(), "^NDX").empty


def test_normalize_missing_columns_fails():
    with pytest.raises(FetchFailed):
        normalize_yfinance_frame(_flat_frame().drop(columns=["Low"]), "^NDX")


def test_fetch_emits_payload_without_volatility(monkeypatch):
    calls = {}

    def fake_download(**kwargs):
        calls.update(kwargs)
        return _flat_frame()

    monkeypatch.setattr(yfinance_provider.yf, "download", fake_download)
    query = VolatilityQuery(symbol="^NDX", window_days=100, end=datetime(2024, 3, 5, 6, 0))

    result = YFinanceVolatilityProvider().fetch_daily_ranges(query)

    assert calls["tickers"] == "^NDX"
    assert calls["interval"] == "1d"
    assert calls["start"] == datetime(2023, 11, 26, 6, 0)
    assert result == {
        "data": [
            {"date": "2024-03-01T00:00:00+00:00", "high": 100.0, "low": 90.0},
            {"date": "2024-03-04T00:00:00+00:00", "high": 110.0, "low": 95.0},
        ]
    }
    assert [obs.volatility for obs in parse_payload(result)] == [10.0, 15.0]


def test_fetch_wraps_download_errors(monkeypatch):
    def failing_download(**kwargs):
        raise ConnectionError("network down")

    monkeypatch.setattr(yfinance_provider.yf, "download", failing_download)

    with pytest.raises(FetchFailed, match="network down"):
        YFinanceVolatilityProvider().fetch_daily_ranges(VolatilityQuery())


def test_fetch_treats_empty_download_as_failure(monkeypatch):
    monkeypatch.setattr(yfinance_provider.yf, "download", lambda **kwargs: pd.DataFrame())

    with pytest.raises(FetchFailed):
        YFinanceVolatilityProvider().fetch_daily_ranges(VolatilityQuery())
