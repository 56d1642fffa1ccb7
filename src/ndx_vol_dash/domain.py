from __future__ import annotations

"""Domain models and configuration types."""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Literal

TimeRange = Literal["7d", "30d", "100d"]

TIME_RANGE_DAYS: dict[str, int] = {"7d": 7, "30d": 30, "100d": 100}


@dataclass(frozen=True, slots=True)
class DailyObservation:
    date: date
    high: float
    low: float
    volatility: float

    @classmethod
    def from_range(cls, day: date, high: float, low: float) -> "DailyObservation":
        """Build an observation, deriving volatility as the high-low range."""
        return cls(date=day, high=high, low=low, volatility=high - low)


Series = tuple[DailyObservation, ...]


@dataclass(frozen=True, slots=True)
class Metrics:
    current: float
    avg_7d: float
    avg_30d: float
    avg_100d: float
    max_7d: float
    max_30d: float
    min_7d: float
    min_30d: float

    @classmethod
    def zero(cls) -> "Metrics":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class RefreshState:
    last_update: datetime | None = None
    next_update: datetime | None = None


@dataclass(slots=True)
class VolatilityQuery:
    symbol: str = "^NDX"
    window_days: int = 100
    end: datetime = field(default_factory=datetime.now)
