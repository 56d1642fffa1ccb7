from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from ndx_vol_dash.config import Settings
from ndx_vol_dash.domain import DailyObservation


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeProvider:
    """Returns queued payloads in order; queued exceptions are raised."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.queries = []

    def fetch_daily_ranges(self, query):
        self.queries.append(query)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, BaseException):
            raise response
        return response


def payload(*rows: tuple[str, float, float]) -> dict:
    return {"data": [{"date": day, "high": high, "low": low} for day, high, low in rows]}


THREE_DAYS = payload(
    ("2024-03-01T00:00:00.000Z", 100.0, 90.0),
    ("2024-03-04T00:00:00.000Z", 110.0, 95.0),
    ("2024-03-05T00:00:00.000Z", 105.0, 100.0),
)


@pytest.fixture
def make_series():
    def _make(ranges, start: date = date(2024, 1, 1)):
        return tuple(
            DailyObservation.from_range(start + timedelta(days=offset), high, low)
            for offset, (high, low) in enumerate(ranges)
        )

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(symbol="^NDX", refresh_hour=5, window_days=100, drop_inverted_ranges=False, skip_cookie_check=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 5, 6, 0, 0))
