"""Helpers for the `{success, data, error}` JSON envelope."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify
from marshmallow import Schema


def ok(data: Any, status_code: int = 200, *, no_store: bool = False) -> Response:
    """Success response.

    `no_store` is used for board state, which changes under the client
    while the live draw is running.
    """

    resp = jsonify({"success": True, "data": data, "error": None})
    resp.status_code = status_code
    if no_store:
        resp.headers["Cache-Control"] = "no-store"
    return resp


def dumped(schema: Schema, obj: Any, status_code: int = 200, *, no_store: bool = False) -> Response:
    return ok(schema.dump(obj), status_code, no_store=no_store)


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> Response:
    """Error response."""

    resp = jsonify(
        {
            "success": False,
            "data": None,
            "error": {"code": code, "message": message, "details": details},
        }
    )
    resp.status_code = status_code
    return resp
