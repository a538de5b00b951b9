"""Live board routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from xsmb.schemas.lottery_result import BoardDateSchema, BoardSchema
from xsmb.services.container import get_services
from xsmb.utils.responses import dumped

board_bp = Blueprint("board", __name__)

_board_schema = BoardSchema()
_date_schema = BoardDateSchema()


@board_bp.get("/board")
def get_board():
    """Current board; also serves as the host's wall-clock tick."""

    snapshot = get_services().board.tick()
    return dumped(_board_schema, snapshot, no_store=True)


@board_bp.post("/board/date")
def select_date():
    payload = request.get_json(silent=True) or {}
    data = _date_schema.load(payload)

    board = get_services().board
    if data.get("shift") is not None:
        snapshot = board.shift(int(data["shift"]))
    else:
        snapshot = board.select_date(str(data["date"]))
    return dumped(_board_schema, snapshot, no_store=True)


@board_bp.post("/board/refresh")
def refresh_board():
    snapshot = get_services().board.refresh()
    return dumped(_board_schema, snapshot, no_store=True)
