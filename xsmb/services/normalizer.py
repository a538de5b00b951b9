"""Turn a loosely-typed lookup record into a `LotteryResult`."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from xsmb.errors import NoResultDataError
from xsmb.services.clock import TimeService
from xsmb.services.lottery_result import (
    HEAD_DIGITS,
    PRIZE_TIER_LENGTHS,
    SENTINEL,
    HeadTable,
    LoGanItem,
    LotoHayVeItem,
    LotteryResult,
)

_LEADING_INT = re.compile(r"^\s*[+-]?\d")


def _clean_text(value: Any) -> str:
    if not value:
        return SENTINEL
    text = str(value).strip()
    return text or SENTINEL


def ensure_array(value: Any, length: int) -> tuple[str, ...]:
    """Coerce `value` into exactly `length` number strings."""

    if not isinstance(value, (list, tuple)):
        return (SENTINEL,) * length

    items = [_clean_text(item) for item in value[:length]]
    items.extend([SENTINEL] * (length - len(items)))
    return tuple(items)


def _as_count(value: Any) -> int:
    # bool is an int subclass but not a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, int(value))


def _clean_number(value: Any) -> str:
    return str(value or "??").rjust(2, "0")


def _clean_stat_items(items: Any, count_key: str) -> list[tuple[str, int]]:
    if not isinstance(items, (list, tuple)):
        return []

    out: list[tuple[str, int]] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        number = _clean_number(item.get("number"))
        if not _LEADING_INT.match(number):
            continue
        out.append((number, _as_count(item.get(count_key))))
    return out


def clean_lo_gan(items: Any) -> tuple[LoGanItem, ...]:
    return tuple(LoGanItem(number=n, days=d) for n, d in _clean_stat_items(items, "days"))


def clean_loto_hay_ve(items: Any) -> tuple[LotoHayVeItem, ...]:
    return tuple(LotoHayVeItem(number=n, count=c) for n, c in _clean_stat_items(items, "count"))


def compute_loto_head(prizes: Iterable[str]) -> HeadTable:
    """Bucket the last two digits of every prize by their leading digit."""

    buckets: dict[int, list[str]] = {d: [] for d in HEAD_DIGITS}
    for prize in prizes:
        if not prize or prize == SENTINEL or len(prize) < 2:
            continue
        loto = prize[-2:]
        head = loto[0]
        if head not in "0123456789":
            continue
        buckets[int(head)].append(loto)

    return MappingProxyType({d: tuple(sorted(nums)) for d, nums in buckets.items()})


class ResultNormalizer:
    """Validate and normalize raw lookup records."""

    def __init__(self, clock: TimeService) -> None:
        self._clock = clock

    def normalize(self, raw: Mapping[str, Any], date: str) -> LotteryResult:
        """Build the canonical record for `date`.

        Raises:
            NoResultDataError: neither the special prize nor the 7th prize is
                present, so the record is unusable.
        """

        if not raw.get("prizeSpecial") and not raw.get("prize7"):
            raise NoResultDataError(
                message=f"No prize data for {date}",
                details={"keys": sorted(str(k) for k in raw.keys())},
            )

        tiers = {name: ensure_array(raw.get(name), length) for name, length in PRIZE_TIER_LENGTHS.items()}
        prize_special = _clean_text(raw.get("prizeSpecial"))
        prize1 = _clean_text(raw.get("prize1"))

        all_prizes = [prize_special, prize1]
        for name in PRIZE_TIER_LENGTHS:
            all_prizes.extend(tiers[name])

        is_live = self._clock.is_live_window() and date == self._clock.current_date_string()

        return LotteryResult(
            date=date,
            prize_special=prize_special,
            prize1=prize1,
            prize2=tiers["prize2"],
            prize3=tiers["prize3"],
            prize4=tiers["prize4"],
            prize5=tiers["prize5"],
            prize6=tiers["prize6"],
            prize7=tiers["prize7"],
            lo_gan=clean_lo_gan(raw.get("loGan")),
            loto_hay_ve=clean_loto_hay_ve(raw.get("lotoHayVe")),
            loto_head=compute_loto_head(all_prizes),
            is_live=is_live,
            last_updated=self._clock.instant(),
        )
