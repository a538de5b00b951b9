"""Result lookup collaborator and the classification of its answers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol, Union

from xsmb.clients.gemini import GeminiClient


class ResultLookup(Protocol):
    def lookup(self, search_date: str) -> str:
        """Return free-form text containing one JSON result record."""


@dataclass(frozen=True)
class ParsedRecord:
    data: dict[str, Any]


@dataclass(frozen=True)
class MalformedPayload:
    reason: str


@dataclass(frozen=True)
class NoJsonFound:
    text: str


LookupResponse = Union[ParsedRecord, MalformedPayload, NoJsonFound]


def parse_lookup_text(text: str | None) -> LookupResponse:
    """Decode the object between the first `{` and the last `}`."""

    raw = (text or "").strip()
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end < start:
        return NoJsonFound(text=raw[:200])

    try:
        data = json.loads(raw[start : end + 1])
    except json.JSONDecodeError as exc:
        return MalformedPayload(reason=f"JSON parse error: {exc.msg}")

    if not isinstance(data, dict):
        return MalformedPayload(reason=f"Expected an object, got {type(data).__name__}")
    return ParsedRecord(data=data)


LOOKUP_PROMPT = """
Nhiệm vụ: Tra cứu kết quả xổ số miền bắc (XSMB) ngày {search_date}.

Yêu cầu:
1. Dùng Google Search, lấy dữ liệu từ "rongbachkim.net" hoặc "xoso.com.vn".
2. Trích xuất chính xác các giải. Không tự bịa số. Nếu chưa có kết quả, trả về "...".
3. "Lô Gan": top 5 số lâu chưa về nhất.
4. "Lô Hay Về": top 5 số về nhiều nhất trong 30 ngày qua.

Chỉ trả về JSON:
{{
  "prizeSpecial": "string",
  "prize1": "string",
  "prize2": ["string", "string"],
  "prize3": ["string", "string", "string", "string", "string", "string"],
  "prize4": ["string", "string", "string", "string"],
  "prize5": ["string", "string", "string", "string", "string", "string"],
  "prize6": ["string", "string", "string"],
  "prize7": ["string", "string", "string", "string"],
  "loGan": [{{"number": "string (2 chữ số)", "days": 0}}],
  "lotoHayVe": [{{"number": "string (2 chữ số)", "count": 0}}]
}}
"""


class GeminiResultLookup:
    """Ask Gemini, with search grounding, for one day's results."""

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    def lookup(self, search_date: str) -> str:
        return self._client.generate(LOOKUP_PROMPT.format(search_date=search_date), use_search=True)
