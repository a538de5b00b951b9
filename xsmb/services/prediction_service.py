"""AI commentary and next-day prediction for a drawn result."""

from __future__ import annotations

import json
import logging
from typing import Protocol

from marshmallow import ValidationError as MarshmallowValidationError

from xsmb.clients.gemini import GeminiClient
from xsmb.errors import UpstreamError
from xsmb.schemas.analysis import AnalysisResultSchema
from xsmb.services.analysis_result import AnalysisResult, failed_analysis
from xsmb.services.lottery_result import LotteryResult

logger = logging.getLogger(__name__)


def describe_result(data: LotteryResult) -> str:
    """Plain-text rendering of a result for the prompt."""

    lo_gan = ", ".join(f"{i.number}({i.days} ngày)" for i in data.lo_gan) or "Không có dữ liệu"
    hay_ve = ", ".join(f"{i.number}({i.count} lần)" for i in data.loto_hay_ve) or "Không có dữ liệu"
    heads = "\n".join(
        f"Đầu {head}: {','.join(nums) if nums else 'CÂM'}" for head, nums in sorted(data.loto_head.items())
    )

    return "\n".join(
        [
            f"Kết quả Xổ Số Miền Bắc ngày {data.date}:",
            f"Đặc biệt: {data.prize_special}",
            f"Giải Nhất: {data.prize1}",
            f"Giải Nhì: {', '.join(data.prize2)}",
            f"Giải Ba: {', '.join(data.prize3)}",
            f"Giải Tư: {', '.join(data.prize4)}",
            f"Giải Năm: {', '.join(data.prize5)}",
            f"Giải Sáu: {', '.join(data.prize6)}",
            f"Giải Bảy: {', '.join(data.prize7)}",
            "Bảng Lô Tô (Đầu):",
            heads,
            f"Lô Gan: {lo_gan}",
            f"Lô Hay Về (30 ngày): {hay_ve}",
        ]
    )


ANALYSIS_PROMPT = """
Bạn là chuyên gia "Thần Tài" soi cầu XSMB, phân tích dựa trên bạc nhớ, thống kê và xác suất.

Dữ liệu:
{data}

Trả về JSON theo schema: tổng quan ngắn (summary), 3 số lô đẹp (hotNumbers),
một số may mắn (luckyPrediction) và dự đoán ngày mai (tomorrow: bạch thủ,
song thủ, đặc biệt, lời bình, thống kê chi tiết cho từng số).
"""

_STRING = {"type": "STRING"}

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": _STRING,
        "hotNumbers": {"type": "ARRAY", "items": _STRING},
        "luckyPrediction": _STRING,
        "tomorrow": {
            "type": "OBJECT",
            "properties": {
                "bachThu": _STRING,
                "songThu": _STRING,
                "dacBiet": _STRING,
                "description": _STRING,
                "detailedStats": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "category": _STRING,
                            "numbers": _STRING,
                            "trend": _STRING,
                            "dataRef": _STRING,
                        },
                        "required": ["category", "numbers", "trend", "dataRef"],
                    },
                },
            },
            "required": ["bachThu", "songThu", "dacBiet", "description", "detailedStats"],
        },
    },
    "required": ["summary", "hotNumbers", "luckyPrediction", "tomorrow"],
}


class Analyst(Protocol):
    def analyze(self, data: LotteryResult) -> AnalysisResult: ...


class PredictionService:
    """Never raises: any failure becomes `failed_analysis()`."""

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    def analyze(self, data: LotteryResult) -> AnalysisResult:
        try:
            text = self._client.generate(
                ANALYSIS_PROMPT.format(data=describe_result(data)),
                response_schema=ANALYSIS_RESPONSE_SCHEMA,
            )
            return AnalysisResultSchema().load(json.loads(text))
        except (UpstreamError, ValueError, MarshmallowValidationError):
            logger.exception("AI analysis failed for %s", data.date)
            return failed_analysis()
