"""Pure helpers for `YYYY-MM-DD` calendar-date strings.

All arithmetic is done on the naive calendar date; no timezone conversion
happens here (see `xsmb.services.clock` for the civil clock).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from xsmb.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Indexed 0=Sunday .. 6=Saturday.
VN_WEEKDAYS = ("Chủ Nhật", "Thứ Hai", "Thứ Ba", "Thứ Tư", "Thứ Năm", "Thứ Sáu", "Thứ Bảy")


def parse_date(date_str: str) -> date:
    """Parse a strict `YYYY-MM-DD` string (zero-padded, no surrounding space)."""

    try:
        if not isinstance(date_str, str) or not _DATE_RE.fullmatch(date_str):
            raise ValueError(date_str)
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(
            message="Invalid date",
            details={"date": [f"Expected YYYY-MM-DD, got {date_str!r}"]},
        ) from exc


def to_date_string(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def shift_date(date_str: str, delta_days: int) -> str:
    """Move a date string by `delta_days` calendar days."""

    return to_date_string(parse_date(date_str) + timedelta(days=int(delta_days)))


def weekday_index(date_str: str) -> int:
    """0=Sunday .. 6=Saturday."""

    # date.weekday() is 0=Monday
    return (parse_date(date_str).weekday() + 1) % 7


def format_human(date_str: str) -> str:
    """e.g. "Thứ Hai, 25/11/2024"."""

    d = parse_date(date_str)
    return f"{VN_WEEKDAYS[weekday_index(date_str)]}, {d.day:02d}/{d.month:02d}/{d.year}"


def format_for_lookup(date_str: str) -> str:
    """`dd/mm/yyyy`, the form used in the lookup query."""

    d = parse_date(date_str)
    return f"{d.day:02d}/{d.month:02d}/{d.year}"


def recent_dates(today: str, count: int = 7) -> list[str]:
    """`today` followed by the previous `count - 1` dates, newest first."""

    return [shift_date(today, -i) for i in range(max(0, int(count)))]
