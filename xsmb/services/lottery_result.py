"""Immutable result records for one XSMB draw."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

SENTINEL = "..."

# Fixed number of entries per multi-number prize tier.
PRIZE_TIER_LENGTHS: dict[str, int] = {
    "prize2": 2,
    "prize3": 6,
    "prize4": 4,
    "prize5": 6,
    "prize6": 3,
    "prize7": 4,
}

HEAD_DIGITS = tuple(range(10))

HeadTable = Mapping[int, tuple[str, ...]]


def empty_head_table() -> HeadTable:
    return MappingProxyType({d: () for d in HEAD_DIGITS})


@dataclass(frozen=True)
class LoGanItem:
    """A number and how many draws it has been missing."""

    number: str
    days: int


@dataclass(frozen=True)
class LotoHayVeItem:
    """A number and how often it appeared in the recent window."""

    number: str
    count: int


@dataclass(frozen=True)
class LotteryResult:
    date: str
    prize_special: str
    prize1: str
    prize2: tuple[str, ...]
    prize3: tuple[str, ...]
    prize4: tuple[str, ...]
    prize5: tuple[str, ...]
    prize6: tuple[str, ...]
    prize7: tuple[str, ...]
    last_updated: datetime
    lo_gan: tuple[LoGanItem, ...] = ()
    loto_hay_ve: tuple[LotoHayVeItem, ...] = ()
    loto_head: HeadTable = field(default_factory=empty_head_table)
    is_live: bool = False

    def prize_numbers(self) -> list[str]:
        """Every prize string, special first, in board order."""

        return [
            self.prize_special,
            self.prize1,
            *self.prize2,
            *self.prize3,
            *self.prize4,
            *self.prize5,
            *self.prize6,
            *self.prize7,
        ]

    @property
    def has_data(self) -> bool:
        return any(p != SENTINEL for p in self.prize_numbers())


def empty_result(date: str, last_updated: datetime) -> LotteryResult:
    """The all-sentinel record returned when nothing could be acquired."""

    return LotteryResult(
        date=date,
        prize_special=SENTINEL,
        prize1=SENTINEL,
        prize2=(SENTINEL,) * PRIZE_TIER_LENGTHS["prize2"],
        prize3=(SENTINEL,) * PRIZE_TIER_LENGTHS["prize3"],
        prize4=(SENTINEL,) * PRIZE_TIER_LENGTHS["prize4"],
        prize5=(SENTINEL,) * PRIZE_TIER_LENGTHS["prize5"],
        prize6=(SENTINEL,) * PRIZE_TIER_LENGTHS["prize6"],
        prize7=(SENTINEL,) * PRIZE_TIER_LENGTHS["prize7"],
        last_updated=last_updated,
        lo_gan=(),
        loto_hay_ve=(),
        loto_head=empty_head_table(),
        is_live=False,
    )
