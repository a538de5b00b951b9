"""AI analysis routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint

from xsmb.db import get_session
from xsmb.schemas.analysis import AnalysisStateSchema, HistoryEntrySchema
from xsmb.services.analysis_service import AnalysisState
from xsmb.services.container import get_services
from xsmb.utils.dates import format_human, parse_date
from xsmb.utils.responses import ok

analysis_bp = Blueprint("analysis", __name__)

_state_schema = AnalysisStateSchema()
_history_schema = HistoryEntrySchema(many=True)


def _state_payload(state: AnalysisState) -> dict:
    return _state_schema.dump({"date": state.date, "status": state.status.value, "result": state.result})


@analysis_bp.get("/analysis/history")
def list_history():
    """Successful predictions, newest date first."""

    entries = get_services().analysis.history(get_session())
    return ok(_history_schema.dump([{"date": e.date, "label": format_human(e.date), "result": e.result} for e in entries]))


@analysis_bp.get("/analysis/<date>")
def get_analysis(date: str):
    parse_date(date)
    state = get_services().analysis.restore(get_session(), date)
    return ok(_state_payload(state))


@analysis_bp.post("/analysis/<date>")
def run_analysis(date: str):
    """Analyze the board's result for `date` (looked up if not on the board)."""

    parse_date(date)
    services = get_services()

    data = services.board.result
    if data is None or data.date != date:
        data = services.pipeline.fetch_result(date)

    state = services.analysis.analyze(get_session(), data)
    return ok(_state_payload(state))


@analysis_bp.delete("/analysis/<date>")
def clear_analysis(date: str):
    parse_date(date)
    state = get_services().analysis.clear(get_session(), date)
    return ok(_state_payload(state))
