"""Live-window polling for the selected date.

State is owned by the controller instance: one optional timer handle, the
active date, and a generation counter. Every date selection bumps the
generation; a fetch whose generation is no longer current is discarded when
it completes, so a slow answer for an old date never replaces a newer
selection. In-flight lookups are not aborted.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol

from xsmb.services.clock import TimeService
from xsmb.services.lottery_result import LotteryResult

logger = logging.getLogger(__name__)

IDLE = "idle"
POLLING = "polling"


class TimerHandle(Protocol):
    daemon: bool

    def start(self) -> None: ...

    def cancel(self) -> None: ...


class ResultSource(Protocol):
    def fetch_result(self, date: str) -> LotteryResult: ...


TimerFactory = Callable[..., TimerHandle]
ResultCallback = Callable[[str, LotteryResult, bool], Any]


class PollingController:
    """Idle/Polling state machine around a `ResultSource`."""

    def __init__(
        self,
        pipeline: ResultSource,
        clock: TimeService,
        on_result: ResultCallback,
        *,
        interval: float = 30.0,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._pipeline = pipeline
        self._clock = clock
        self._on_result = on_result
        self._interval = float(interval)
        self._timer_factory = timer_factory

        self._lock = threading.Lock()
        self._timer: TimerHandle | None = None
        self._timer_seq = 0
        self._active_date: str | None = None
        self._generation = 0

    @property
    def state(self) -> str:
        return POLLING if self._timer is not None else IDLE

    @property
    def active_date(self) -> str | None:
        return self._active_date

    @property
    def generation(self) -> int:
        return self._generation

    def _should_poll(self, date: str) -> bool:
        return date == self._clock.current_date_string() and self._clock.is_live_window()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.info("Stopped live polling")

    def _arm_locked(self) -> None:
        self._timer_seq += 1
        timer = self._timer_factory(self._interval, self._on_timer, args=(self._timer_seq,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _reschedule_locked(self, date: str) -> None:
        self._cancel_locked()
        if self._should_poll(date):
            logger.info("Start live polling for %s every %.0fs", date, self._interval)
            self._arm_locked()

    def reschedule(self, date: str) -> None:
        """Cancel any timer, then start one if `date` is live right now."""

        with self._lock:
            self._active_date = date
            self._reschedule_locked(date)

    def tick(self) -> None:
        """Coarse wall-clock re-check, driven by the host."""

        with self._lock:
            if self._active_date is None:
                return
            polling = self._timer is not None
            if polling != self._should_poll(self._active_date):
                self._reschedule_locked(self._active_date)

    def stop(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _commit(self, token: int, date: str, result: LotteryResult, quiet: bool) -> LotteryResult | None:
        with self._lock:
            if token != self._generation or date != self._active_date:
                logger.info("Discarding stale result for %s", date)
                return None
        self._on_result(date, result, quiet)
        return result

    def select_date(self, date: str) -> LotteryResult | None:
        """Make `date` the active date and load it.

        Returns the committed result, or None if another selection happened
        while the lookup was running.
        """

        with self._lock:
            self._generation += 1
            token = self._generation
            self._active_date = date
            self._reschedule_locked(date)

        result = self._pipeline.fetch_result(date)
        return self._commit(token, date, result, quiet=False)

    def refresh(self, *, quiet: bool = False) -> LotteryResult | None:
        with self._lock:
            token = self._generation
            date = self._active_date
        if date is None:
            return None

        result = self._pipeline.fetch_result(date)
        return self._commit(token, date, result, quiet=quiet)

    def _on_timer(self, seq: int) -> None:
        with self._lock:
            if self._timer is None or seq != self._timer_seq:
                return
            token = self._generation
            date = self._active_date
            self._timer = None
            if date is None:
                return
            # Rounds start every interval, independent of fetch time.
            if self._should_poll(date):
                self._arm_locked()
            else:
                logger.info("Live window over for %s", date)

        logger.info("Auto-updating results for %s", date)
        result = self._pipeline.fetch_result(date)
        self._commit(token, date, result, quiet=True)
