"""Daily refresh scheduling: fetch once on start, then once a day at a fixed hour."""

from __future__ import annotations

import inspect
import logging
import threading
import weakref
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import Enum

from ..domain import RefreshState

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    ARMED = "armed"
    STOPPED = "stopped"


def next_refresh_at(now: datetime, hour: int = 5) -> datetime:
    """Next daily trigger at ``hour:00:00.000`` for the given local time.

    Uses naive local wall-clock time: once the clock reads ``hour`` or later,
    the target moves to the following calendar day.
    """
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if now.hour >= hour:
        target += timedelta(days=1)
    return target


class RefreshScheduler:
    """Runs ``refresh`` immediately, then re-arms for the next daily trigger.

    Cycles run sequentially on one daemon thread, so a slow fetch delays the
    next wait instead of overlapping with it. ``stop`` cancels the pending wait.
    A bound-method callback is held weakly; once its owner is collected the
    loop ends instead of refreshing on its behalf.
    """

    def __init__(
        self,
        refresh: Callable[[], RefreshState | None],
        *,
        hour: int = 5,
        clock: Callable[[], datetime] = datetime.now,
        name: str = "volatility-refresh",
    ) -> None:
        if inspect.ismethod(refresh):
            self._refresh_ref = weakref.WeakMethod(refresh)
        else:
            self._refresh_ref = lambda: refresh
        self._hour = hour
        self._clock = clock
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._state = SchedulerState.IDLE
        self._next_update: datetime | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def next_update(self) -> datetime | None:
        return self._next_update

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._state is SchedulerState.STOPPED:
            raise RuntimeError("scheduler has been stopped and cannot be restarted")
        if self._thread is not None:
            raise RuntimeError("scheduler is already running")
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def run_cycle(self) -> datetime | None:
        """Perform one fetch, then arm and return the next trigger time.

        Returns ``None`` and stops the scheduler when the refresh owner is gone.
        """
        refresh = self._refresh_ref()
        if refresh is None:
            logger.info("Refresh owner for %s was released; stopping", self._name)
            self._stop_event.set()
            self._state = SchedulerState.STOPPED
            return None

        self._state = SchedulerState.FETCHING
        next_update = None
        try:
            result = refresh()
            if result is not None:
                next_update = result.next_update
        except Exception:
            logger.exception("Refresh cycle raised; re-arming for the next trigger")
        finally:
            del refresh

        if next_update is None:
            next_update = next_refresh_at(self._clock(), self._hour)
        self._next_update = next_update

        if not self._stop_event.is_set():
            self._state = SchedulerState.ARMED
            logger.info("Next refresh armed for %s", next_update.isoformat(timespec="seconds"))
        return next_update

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._state is SchedulerState.STOPPED:
            return
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Refresh thread %s still finishing an in-flight fetch", self._name)
        self._state = SchedulerState.STOPPED
        logger.info("Refresh scheduler %s stopped", self._name)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            next_update = self.run_cycle()
            if next_update is None or self._wait_until(next_update):
                break

    def _wait_until(self, target: datetime) -> bool:
        """Block until the wall clock reaches ``target``; True if stopped first.

        ``Event.wait`` runs on the monotonic clock, so an early wake-up against
        the wall clock waits out the remainder instead of firing early.
        """
        while True:
            delay = (target - self._clock()).total_seconds()
            if delay <= 0:
                return False
            if self._stop_event.wait(delay):
                return True
