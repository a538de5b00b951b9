from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import make_clock
from xsmb.services.clock import TimeService


def test_now_is_in_vietnam_time_whatever_the_source_zone() -> None:
    # 2024-11-25 23:30 UTC is already the 26th in Hanoi (UTC+7).
    clock = TimeService(now=lambda: datetime(2024, 11, 25, 23, 30, tzinfo=timezone.utc))
    civil = clock.now()
    assert (civil.year, civil.month, civil.day, civil.hour, civil.minute) == (2024, 11, 26, 6, 30)
    assert clock.current_date_string() == "2024-11-26"


def test_naive_source_is_treated_as_utc() -> None:
    clock = TimeService(now=lambda: datetime(2024, 11, 25, 11, 0))
    assert clock.now().hour == 18


@pytest.mark.parametrize(
    ("hour", "minute", "expected"),
    [
        (0, 0, "2024-11-24"),
        (18, 12, "2024-11-24"),
        (18, 13, "2024-11-25"),
        (18, 14, "2024-11-25"),
        (23, 59, "2024-11-25"),
    ],
)
def test_default_date_switches_at_18_13(hour: int, minute: int, expected: str) -> None:
    clock, _ = make_clock(2024, 11, 25, hour, minute)
    assert clock.default_date_string() == expected


def test_default_date_before_cutoff_on_new_year() -> None:
    clock, _ = make_clock(2025, 1, 1, 9, 0)
    assert clock.default_date_string() == "2024-12-31"


@pytest.mark.parametrize(
    ("hour", "minute", "expected"),
    [
        (18, 12, False),
        (18, 13, True),
        (18, 20, True),
        (18, 35, True),
        (18, 36, False),
        (17, 59, False),
        (19, 13, False),
        (6, 20, False),
    ],
)
def test_live_window(hour: int, minute: int, expected: bool) -> None:
    clock, _ = make_clock(2024, 11, 25, hour, minute)
    assert clock.is_live_window() is expected


def test_instant_is_utc() -> None:
    clock, _ = make_clock(2024, 11, 25, 18, 20)
    assert clock.instant() == datetime(2024, 11, 25, 11, 20, tzinfo=timezone.utc)
    assert clock.tz_name == "Asia/Ho_Chi_Minh"
