"""Date navigation and stateless result lookup."""

from __future__ import annotations

from flask import Blueprint

from xsmb.schemas.lottery_result import DatesSchema, LotteryResultSchema
from xsmb.services.container import get_services
from xsmb.utils.dates import format_human, parse_date, recent_dates
from xsmb.utils.responses import dumped

results_bp = Blueprint("results", __name__)

_result_schema = LotteryResultSchema()
_dates_schema = DatesSchema()


@results_bp.get("/dates")
def get_dates():
    """Today, the default date to show, and the quick-pick list."""

    clock = get_services().clock
    today = clock.current_date_string()
    return dumped(
        _dates_schema,
        {
            "today": today,
            "default": clock.default_date_string(),
            "is_live_window": clock.is_live_window(),
            "recent": [{"date": d, "label": format_human(d)} for d in recent_dates(today)],
        },
        no_store=True,
    )


@results_bp.get("/results/<date>")
def get_result(date: str):
    parse_date(date)
    result = get_services().pipeline.fetch_result(date)
    return dumped(_result_schema, result)
