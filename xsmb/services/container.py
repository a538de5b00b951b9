"""Per-app service wiring, stored in `app.extensions["xsmb"]`."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from xsmb.clients.gemini import GeminiClient
from xsmb.services.analysis_service import AnalysisService
from xsmb.services.board_service import BoardService
from xsmb.services.clock import TimeService
from xsmb.services.lookup import GeminiResultLookup, ResultLookup
from xsmb.services.polling import TimerFactory
from xsmb.services.prediction_service import Analyst, PredictionService
from xsmb.services.result_pipeline import ResultPipeline


@dataclass(frozen=True)
class Services:
    clock: TimeService
    pipeline: ResultPipeline
    board: BoardService
    analysis: AnalysisService


def init_services(
    app: Flask,
    *,
    lookup: ResultLookup | None = None,
    analyst: Analyst | None = None,
    clock: TimeService | None = None,
    timer_factory: TimerFactory | None = None,
) -> Services:
    """Build the collaborators from config unless they are given."""

    cfg = app.config
    clock = clock or TimeService(str(cfg["DRAW_TIMEZONE"]))

    if lookup is None or analyst is None:
        client = GeminiClient(
            str(cfg["GEMINI_API_KEY"]),
            str(cfg["GEMINI_MODEL"]),
            base_url=str(cfg["GEMINI_BASE_URL"]),
            timeout_seconds=float(cfg["GEMINI_TIMEOUT_SECONDS"]),
            retries=int(cfg["GEMINI_HTTP_RETRIES"]),
        )
        lookup = lookup or GeminiResultLookup(client)
        analyst = analyst or PredictionService(client)

    pipeline = ResultPipeline(
        lookup,
        clock,
        max_attempts=int(cfg["LOOKUP_MAX_ATTEMPTS"]),
        retry_delay=float(cfg["LOOKUP_RETRY_DELAY_SECONDS"]),
    )
    board = BoardService(
        pipeline,
        clock,
        poll_interval=float(cfg["POLL_INTERVAL_SECONDS"]),
        timer_factory=timer_factory,
    )

    services = Services(clock=clock, pipeline=pipeline, board=board, analysis=AnalysisService(analyst))
    app.extensions["xsmb"] = services
    return services


def get_services() -> Services:
    services: Services | None = current_app.extensions.get("xsmb")
    if services is None:
        raise RuntimeError("Services not initialized")
    return services
