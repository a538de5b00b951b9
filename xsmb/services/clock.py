"""Civil clock for the draw timezone.

Results are published around 18:13 Vietnam time and the live draw ends by
18:35. Everything here is computed in the draw timezone regardless of the
host's local timezone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable
from zoneinfo import ZoneInfo

DRAW_TIMEZONE = "Asia/Ho_Chi_Minh"

RESULT_CUTOFF_MINUTES = 18 * 60 + 13
LIVE_HOUR = 18
LIVE_FIRST_MINUTE = 13
LIVE_LAST_MINUTE = 35


@dataclass(frozen=True)
class CivilTime:
    year: int
    month: int
    day: int
    hour: int
    minute: int

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute


def _system_now() -> datetime:
    return datetime.now(timezone.utc)


class TimeService:
    """Civil time, default lottery date and live-window checks."""

    def __init__(self, tz_name: str = DRAW_TIMEZONE, now: Callable[[], datetime] | None = None) -> None:
        self._tz = ZoneInfo(tz_name)
        self._now = now or _system_now

    @property
    def tz_name(self) -> str:
        return str(self._tz.key)

    def instant(self) -> datetime:
        """Current instant as an aware UTC datetime."""

        value = self._now()
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def now(self) -> CivilTime:
        local = self.instant().astimezone(self._tz)
        return CivilTime(
            year=local.year,
            month=local.month,
            day=local.day,
            hour=local.hour,
            minute=local.minute,
        )

    def current_date_string(self) -> str:
        return self.now().date.strftime("%Y-%m-%d")

    def default_date_string(self) -> str:
        """Yesterday before 18:13 civil time, today from 18:13 on."""

        civil = self.now()
        if civil.minutes_of_day < RESULT_CUTOFF_MINUTES:
            return (civil.date - timedelta(days=1)).strftime("%Y-%m-%d")
        return civil.date.strftime("%Y-%m-%d")

    def is_live_window(self) -> bool:
        civil = self.now()
        return civil.hour == LIVE_HOUR and LIVE_FIRST_MINUTE <= civil.minute <= LIVE_LAST_MINUTE
