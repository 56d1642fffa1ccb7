"""In-memory holder for the current daily range series."""

from __future__ import annotations

from collections.abc import Iterable

from .domain import DailyObservation, Series


class SeriesStore:
    """Owns the ordered observations of one dashboard session.

    The series is replaced wholesale on every successful fetch; there is no
    incremental merge. Readers get the tuple itself, which is immutable.
    """

    def __init__(self, observations: Iterable[DailyObservation] = ()) -> None:
        self._series: Series = ()
        self.replace(observations)

    def replace(self, observations: Iterable[DailyObservation]) -> None:
        series = tuple(observations)
        for previous, current in zip(series, series[1:]):
            if current.date <= previous.date:
                raise ValueError(
                    f"observations must be strictly increasing by date: {previous.date} then {current.date}"
                )
        self._series = series

    def snapshot(self) -> Series:
        return self._series

    @property
    def latest(self) -> DailyObservation | None:
        return self._series[-1] if self._series else None

    def __len__(self) -> int:
        return len(self._series)

    def __bool__(self) -> bool:
        return bool(self._series)
