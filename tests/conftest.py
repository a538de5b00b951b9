from __future__ import annotations

import json
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
import requests

from xsmb.services.analysis_result import AnalysisResult, PredictionStat, TomorrowPrediction
from xsmb.services.clock import TimeService

VN = ZoneInfo("Asia/Ho_Chi_Minh")

RAW_RECORD = {
    "prizeSpecial": "12345",
    "prize1": "67890",
    "prize2": ["11122", "33344"],
    "prize3": ["55566", "77788", "99900", "10203", "40506", "70809"],
    "prize4": ["1234", "5678", "9012", "3456"],
    "prize5": ["7890", "1357", "2468", "3579", "4680", "5791"],
    "prize6": ["123", "456", "789"],
    "prize7": ["12", "34", "56", "07"],
    "loGan": [{"number": "5", "days": 14}, {"number": 88, "days": 9}],
    "lotoHayVe": [{"number": "45", "count": 6}],
}


class FakeNow:
    """Settable clock source, in Vietnam civil time."""

    def __init__(self, year: int, month: int, day: int, hour: int, minute: int) -> None:
        self.set(year, month, day, hour, minute)

    def set(self, year: int, month: int, day: int, hour: int, minute: int) -> None:
        self.value = datetime(year, month, day, hour, minute, tzinfo=VN)

    def __call__(self) -> datetime:
        return self.value


def make_clock(year: int, month: int, day: int, hour: int, minute: int) -> tuple[TimeService, FakeNow]:
    now = FakeNow(year, month, day, hour, minute)
    return TimeService(now=now), now


class FakeLookup:
    """Replays canned answers; an Exception instance is raised instead."""

    def __init__(self, *answers: object) -> None:
        self.answers = list(answers)
        self.calls: list[str] = []

    def lookup(self, search_date: str) -> str:
        self.calls.append(search_date)
        answer = self.answers[min(len(self.calls), len(self.answers)) - 1] if self.answers else ""
        if isinstance(answer, Exception):
            raise answer
        return str(answer)


class FakeTimer:
    def __init__(self, interval: float, function, args=None, kwargs=None) -> None:  # type: ignore[no-untyped-def]
        self.interval = interval
        self.function = function
        self.args = tuple(args or ())
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.finished = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.finished = True
        self.function(*self.args)


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function, args=None, kwargs=None) -> FakeTimer:  # type: ignore[no-untyped-def]
        timer = FakeTimer(interval, function, args, kwargs)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not (t.cancelled or t.finished)]


class FakeResponse:
    def __init__(self, payload: object, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response: FakeResponse | Exception) -> None:
        self.response = response
        self.requests: list[dict] = []

    def post(self, url: str, **kwargs):  # type: ignore[no-untyped-def]
        self.requests.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def sample_analysis(bach_thu: str = "88") -> AnalysisResult:
    return AnalysisResult(
        summary="Đầu 4 câm, lô kép 33 về.",
        hot_numbers=["45", "12", "88"],
        lucky_prediction="68",
        tomorrow=TomorrowPrediction(
            bach_thu=bach_thu,
            song_thu="68-86",
            dac_biet="Chạm 5",
            description="Lô rơi từ giải Nhất.",
            detailed_stats=[PredictionStat(category="Bạch Thủ", numbers=bach_thu, trend="Lô rơi", data_ref="Vừa về giải Nhất")],
        ),
    )


class FakeAnalyst:
    def __init__(self, result: AnalysisResult | None = None) -> None:
        self.result = result or sample_analysis()
        self.calls: list[str] = []

    def analyze(self, data):  # type: ignore[no-untyped-def]
        self.calls.append(data.date)
        return self.result


@pytest.fixture
def raw_text() -> str:
    return "Kết quả:\n```json\n" + json.dumps(RAW_RECORD) + "\n```"


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def app_factory(tmp_path, timers):  # type: ignore[no-untyped-def]
    from xsmb import create_app

    def _build(lookup=None, analyst=None, clock=None):  # type: ignore[no-untyped-def]
        app = create_app(
            {
                "TESTING": True,
                "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
                "LOOKUP_RETRY_DELAY_SECONDS": 0.0,
                "BOARD_AUTOLOAD": False,
            },
            lookup=lookup or FakeLookup(""),
            analyst=analyst or FakeAnalyst(),
            clock=clock or make_clock(2024, 11, 25, 10, 0)[0],
            timer_factory=timers,
        )
        return app

    return _build
