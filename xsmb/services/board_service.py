"""The live board: selected date, held result and polling."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from xsmb.errors import ValidationError
from xsmb.services.clock import TimeService
from xsmb.services.lottery_result import LotteryResult
from xsmb.services.polling import POLLING, PollingController, TimerFactory
from xsmb.services.result_pipeline import ResultPipeline
from xsmb.utils.dates import format_human, parse_date, shift_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardSnapshot:
    date: str
    max_date: str
    can_go_next: bool
    loading: bool
    is_live_mode: bool
    polling: bool
    result: LotteryResult | None

    @property
    def label(self) -> str:
        return format_human(self.date)


class BoardService:
    """Navigation plus the most recent result for the selected date."""

    def __init__(
        self,
        pipeline: ResultPipeline,
        clock: TimeService,
        *,
        poll_interval: float = 30.0,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._date = clock.default_date_string()
        self._result: LotteryResult | None = None
        self._loading = False
        self._live_mode = False

        kwargs = {"timer_factory": timer_factory} if timer_factory is not None else {}
        self._controller = PollingController(
            pipeline,
            clock,
            self._store_result,
            interval=poll_interval,
            **kwargs,
        )

    @property
    def controller(self) -> PollingController:
        return self._controller

    @property
    def current_date(self) -> str:
        return self._date

    @property
    def result(self) -> LotteryResult | None:
        return self._result

    def _store_result(self, date: str, result: LotteryResult, quiet: bool) -> None:
        with self._lock:
            if date != self._date:
                logger.info("Ignoring result for %s; board shows %s", date, self._date)
                return
            self._result = result
            self._live_mode = date == self._clock.current_date_string() and self._clock.is_live_window()
        if quiet:
            logger.info("Board auto-updated for %s", date)

    def snapshot(self) -> BoardSnapshot:
        max_date = self._clock.current_date_string()
        with self._lock:
            return BoardSnapshot(
                date=self._date,
                max_date=max_date,
                can_go_next=self._date < max_date,
                loading=self._loading,
                is_live_mode=self._live_mode,
                polling=self._controller.state == POLLING,
                result=self._result,
            )

    def tick(self) -> BoardSnapshot:
        self._controller.tick()
        return self.snapshot()

    def select_date(self, date: str) -> BoardSnapshot:
        """Show `date`; the previous result is dropped while it loads."""

        parse_date(date)
        today = self._clock.current_date_string()
        if date > today:
            raise ValidationError(
                message="Date is in the future",
                details={"date": [f"Must be on or before {today}"]},
            )

        with self._lock:
            self._date = date
            self._result = None
            self._loading = True
        try:
            self._controller.select_date(date)
        finally:
            with self._lock:
                if self._date == date:
                    self._loading = False
        return self.snapshot()

    def shift(self, delta_days: int) -> BoardSnapshot:
        today = self._clock.current_date_string()
        if delta_days > 0 and self._date >= today:
            raise ValidationError(
                message="Already showing the latest date",
                details={"shift": [f"Cannot move past {today}"]},
            )
        return self.select_date(shift_date(self._date, delta_days))

    def refresh(self) -> BoardSnapshot:
        """Reload the selected date with the loading indicator on."""

        with self._lock:
            date = self._date
            self._result = None
            self._loading = True
        if self._controller.active_date != date:
            self._controller.reschedule(date)
        try:
            self._controller.refresh(quiet=False)
        finally:
            with self._lock:
                if self._date == date:
                    self._loading = False
        return self.snapshot()

    def shutdown(self) -> None:
        self._controller.stop()
