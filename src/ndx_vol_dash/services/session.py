"""Explicitly owned dashboard session tying the store, metrics and scheduler together."""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Callable
from datetime import datetime

import pandas as pd

from ..analytics import chart_window, compute_metrics
from ..config import Settings
from ..data.providers import VolatilityProvider
from ..data.yfinance_provider import YFinanceVolatilityProvider
from ..domain import Metrics, RefreshState, Series, TimeRange, VolatilityQuery
from ..store import SeriesStore
from ..utils import FetchFailed
from .scheduler import RefreshScheduler, SchedulerState, next_refresh_at
from .volatility_service import fetch_series

logger = logging.getLogger(__name__)


class DashboardSession:
    """State for one dashboard: create, ``start``, then ``dispose``.

    Independent sessions share nothing. Refreshes are serialised, so there is
    one writer at a time; readers get immutable snapshots.
    """

    def __init__(
        self,
        provider: VolatilityProvider | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        if provider is None:
            provider = YFinanceVolatilityProvider(skip_cookie_check=self.settings.skip_cookie_check)
        self.provider = provider
        self._clock = clock
        self._store = SeriesStore()
        self._metrics: Metrics | None = None
        self._refresh_state = RefreshState()
        self._last_error: str | None = None
        self._publish_lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._scheduler = RefreshScheduler(self.refresh, hour=self.settings.refresh_hour, clock=clock)
        # stops the scheduler when the session is dropped without dispose()
        self._finalizer = weakref.finalize(self, self._scheduler.stop)

    def __enter__(self) -> "DashboardSession":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def start(self) -> "DashboardSession":
        self._scheduler.start()
        return self

    def dispose(self) -> None:
        self._finalizer()

    def refresh(self) -> RefreshState:
        """Fetch once, replacing the series on success; always advance the schedule."""
        with self._refresh_lock:
            query = VolatilityQuery(
                symbol=self.settings.symbol, window_days=self.settings.window_days, end=self._clock()
            )
            series: Series | None = None
            error: str | None = None
            try:
                series = fetch_series(
                    self.provider, query, drop_inverted_ranges=self.settings.drop_inverted_ranges
                )
            except FetchFailed as err:
                error = str(err)
                logger.warning("Fetch failed, keeping %d cached observations: %s", len(self._store), err)

            now = self._clock()
            state = RefreshState(last_update=now, next_update=next_refresh_at(now, self.settings.refresh_hour))
            with self._publish_lock:
                if series is not None:
                    self._store.replace(series)
                    self._metrics = compute_metrics(series)
                    logger.info("Loaded %d observations through %s", len(self._store), self._store.latest.date)
                self._last_error = error
                self._refresh_state = state
            return state

    def series(self) -> Series:
        with self._publish_lock:
            return self._store.snapshot()

    def metrics(self) -> Metrics:
        """Latest snapshot, or all zeros before the first successful fetch."""
        with self._publish_lock:
            return self._metrics if self._metrics is not None else Metrics.zero()

    def chart_window(self, time_range: TimeRange = "30d") -> pd.DataFrame:
        return chart_window(self.series(), time_range)

    @property
    def refresh_state(self) -> RefreshState:
        with self._publish_lock:
            return self._refresh_state

    @property
    def last_error(self) -> str | None:
        with self._publish_lock:
            return self._last_error

    @property
    def has_data(self) -> bool:
        return bool(self.series())

    @property
    def scheduler_state(self) -> SchedulerState:
        return self._scheduler.state
