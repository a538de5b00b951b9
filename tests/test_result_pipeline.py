from __future__ import annotations

import json

import pytest
import requests

from conftest import RAW_RECORD, FakeLookup, make_clock
from xsmb.errors import UpstreamError
from xsmb.services.lottery_result import PRIZE_TIER_LENGTHS, SENTINEL
from xsmb.services.result_pipeline import ResultPipeline


def _pipeline(lookup: FakeLookup, sleeps: list[float], hour: int = 20, minute: int = 0) -> ResultPipeline:
    clock, _ = make_clock(2024, 11, 25, hour, minute)
    return ResultPipeline(lookup, clock, max_attempts=3, retry_delay=1.5, sleep=sleeps.append)


def _assert_empty(result, date: str) -> None:  # type: ignore[no-untyped-def]
    assert result.date == date
    assert result.prize_special == SENTINEL
    assert result.prize1 == SENTINEL
    for name, length in PRIZE_TIER_LENGTHS.items():
        assert getattr(result, name) == (SENTINEL,) * length
    assert result.lo_gan == ()
    assert result.loto_hay_ve == ()
    assert result.loto_head == {d: () for d in range(10)}
    assert result.is_live is False
    assert result.has_data is False


def test_success_on_first_attempt(raw_text: str, sleeps: list[float]) -> None:
    lookup = FakeLookup(raw_text)
    result = _pipeline(lookup, sleeps).fetch_result("2024-11-25")

    assert lookup.calls == ["25/11/2024"]
    assert sleeps == []
    assert result.prize_special == "12345"
    assert result.has_data is True


def test_retries_then_succeeds(raw_text: str, sleeps: list[float]) -> None:
    lookup = FakeLookup(UpstreamError("boom"), "no json here", raw_text)
    result = _pipeline(lookup, sleeps).fetch_result("2024-11-25")

    assert len(lookup.calls) == 3
    assert sleeps == [1.5, 1.5]
    assert result.prize1 == "67890"


@pytest.mark.parametrize(
    "answer",
    [
        "",
        "Không tìm thấy",
        '{"prizeSpecial": ',
        "{not json}",
        json.dumps({"prize1": "12345"}),
        requests.ConnectionError("offline"),
        UpstreamError("Gemini returned no text"),
    ],
)
def test_exhaustion_returns_empty_result(answer: object, sleeps: list[float]) -> None:
    lookup = FakeLookup(answer)
    result = _pipeline(lookup, sleeps).fetch_result("2024-11-25")

    assert len(lookup.calls) == 3
    # The delay also follows the last attempt.
    assert sleeps == [1.5, 1.5, 1.5]
    _assert_empty(result, "2024-11-25")


def test_empty_result_is_not_live_even_in_window(sleeps: list[float]) -> None:
    result = _pipeline(FakeLookup(""), sleeps, hour=18, minute=20).fetch_result("2024-11-25")
    assert result.is_live is False


def test_success_inside_window_is_live(raw_text: str, sleeps: list[float]) -> None:
    result = _pipeline(FakeLookup(raw_text), sleeps, hour=18, minute=20).fetch_result("2024-11-25")
    assert result.is_live is True


def test_unexpected_errors_are_absorbed_too(sleeps: list[float]) -> None:
    result = _pipeline(FakeLookup(KeyError("bug")), sleeps).fetch_result("2024-11-25")
    _assert_empty(result, "2024-11-25")
    assert len(sleeps) == 3


def test_fixed_prize_lengths_for_any_answer(sleeps: list[float]) -> None:
    raw = dict(RAW_RECORD, prize3=["1"] * 20, prize6="oops")
    result = _pipeline(FakeLookup(json.dumps(raw)), sleeps).fetch_result("2024-11-25")
    for name, length in PRIZE_TIER_LENGTHS.items():
        values = getattr(result, name)
        assert len(values) == length
        assert all(v == SENTINEL or v for v in values)


def test_rejects_zero_attempts() -> None:
    clock, _ = make_clock(2024, 11, 25, 20, 0)
    with pytest.raises(ValueError):
        ResultPipeline(FakeLookup(""), clock, max_attempts=0)
