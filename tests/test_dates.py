from __future__ import annotations

import pytest

from xsmb.errors import ValidationError
from xsmb.utils.dates import format_for_lookup, format_human, parse_date, recent_dates, shift_date


@pytest.mark.parametrize(
    ("date", "delta", "expected"),
    [
        ("2024-11-25", 1, "2024-11-26"),
        ("2024-11-30", 1, "2024-12-01"),
        ("2024-12-31", 1, "2025-01-01"),
        ("2024-03-01", -1, "2024-02-29"),
        ("2023-03-01", -1, "2023-02-28"),
        ("2024-01-01", -366, "2022-12-31"),
    ],
)
def test_shift_date_crosses_month_and_year(date: str, delta: int, expected: str) -> None:
    assert shift_date(date, delta) == expected


@pytest.mark.parametrize("delta", [-1000, -31, -1, 0, 1, 29, 365, 1461])
def test_shift_date_is_reversible(delta: int) -> None:
    for d in ("2024-02-29", "2000-01-01", "2025-12-31"):
        assert shift_date(shift_date(d, delta), -delta) == d


def test_format_human_uses_vietnamese_weekdays() -> None:
    assert format_human("2024-11-25") == "Thứ Hai, 25/11/2024"
    assert format_human("2024-11-24") == "Chủ Nhật, 24/11/2024"
    assert format_human("2024-11-30") == "Thứ Bảy, 30/11/2024"


def test_format_for_lookup() -> None:
    assert format_for_lookup("2024-01-05") == "05/01/2024"


def test_recent_dates_newest_first() -> None:
    assert recent_dates("2024-03-02", 3) == ["2024-03-02", "2024-03-01", "2024-02-29"]
    assert len(recent_dates("2024-03-02")) == 7


@pytest.mark.parametrize(
    "bad",
    ["", "2024/11/25", "25-11-2024", "2024-02-30", "yesterday", "2024-9-1", "2024-09-1", " 2024-09-01", "2024-09-01\n", "２０２４-09-01"],
)
def test_parse_date_rejects_bad_input(bad: str) -> None:
    with pytest.raises(ValidationError) as info:
        parse_date(bad)
    assert info.value.status_code == 400
