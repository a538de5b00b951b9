"""AI analysis records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

FAILED_MARK = "--"


class AnalyzeStatus(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class PredictionStat:
    category: str
    numbers: str
    trend: str
    data_ref: str


@dataclass(frozen=True)
class TomorrowPrediction:
    bach_thu: str
    song_thu: str
    dac_biet: str
    description: str
    detailed_stats: list[PredictionStat] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    hot_numbers: list[str]
    lucky_prediction: str
    tomorrow: TomorrowPrediction


def failed_analysis() -> AnalysisResult:
    """Placeholder returned when the model could not be used."""

    return AnalysisResult(
        summary="Thần tài đang bận đi vắng, chưa thể phân tích lúc này!",
        hot_numbers=[FAILED_MARK, FAILED_MARK, FAILED_MARK],
        lucky_prediction=FAILED_MARK,
        tomorrow=TomorrowPrediction(
            bach_thu=FAILED_MARK,
            song_thu=FAILED_MARK,
            dac_biet=FAILED_MARK,
            description="Hệ thống đang bận, vui lòng thử lại sau.",
            detailed_stats=[],
        ),
    )


def is_failed_analysis(result: AnalysisResult) -> bool:
    return not result.hot_numbers or result.hot_numbers[0] == FAILED_MARK
