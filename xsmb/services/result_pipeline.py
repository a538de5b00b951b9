"""Acquire one day's result with a bounded number of lookup attempts."""

from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from xsmb.errors import UpstreamError
from xsmb.services.clock import TimeService
from xsmb.services.lookup import MalformedPayload, NoJsonFound, ResultLookup, parse_lookup_text
from xsmb.services.lottery_result import LotteryResult, empty_result
from xsmb.services.normalizer import ResultNormalizer
from xsmb.utils.dates import format_for_lookup

logger = logging.getLogger(__name__)


class _RetryableLookupFailure(Exception):
    pass


class ResultPipeline:
    """`fetch_result(date)` always returns a well-formed record.

    Every failed attempt (transport error, text without JSON, undecodable
    JSON, record without prizes) is followed by a fixed delay, the last one
    included. When the attempts run out the empty result is returned.
    """

    def __init__(
        self,
        lookup: ResultLookup,
        clock: TimeService,
        *,
        max_attempts: int = 3,
        retry_delay: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._lookup = lookup
        self._clock = clock
        self._normalizer = ResultNormalizer(clock)
        self._max_attempts = int(max_attempts)
        self._retry_delay = float(retry_delay)
        self._sleep = sleep

    @property
    def clock(self) -> TimeService:
        return self._clock

    def _attempt(self, date: str) -> LotteryResult:
        text = self._lookup.lookup(format_for_lookup(date))

        response = parse_lookup_text(text)
        if isinstance(response, NoJsonFound):
            raise _RetryableLookupFailure("Invalid response format: no JSON found")
        if isinstance(response, MalformedPayload):
            raise _RetryableLookupFailure(response.reason)

        return self._normalizer.normalize(response.data, date)

    def fetch_result(self, date: str) -> LotteryResult:
        last_error: Exception | None = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                return self._attempt(date)
            except (UpstreamError, requests.RequestException, _RetryableLookupFailure) as exc:
                last_error = exc
                logger.warning("Lookup attempt %d/%d for %s failed: %s", attempt, self._max_attempts, date, exc)
            except Exception as exc:
                last_error = exc
                logger.exception("Lookup attempt %d/%d for %s raised unexpectedly", attempt, self._max_attempts, date)
            self._sleep(self._retry_delay)

        logger.error("All %d lookup attempts for %s failed: %s", self._max_attempts, date, last_error)
        return empty_result(date, self._clock.instant())
