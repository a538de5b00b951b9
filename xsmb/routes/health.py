"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from xsmb.services.container import get_services
from xsmb.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint."""

    services = get_services()
    return ok({"status": "ok", "timezone": services.clock.tz_name})
