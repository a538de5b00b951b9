"""XSMB live board: Flask application package."""

from __future__ import annotations

from typing import Any

from flask import Flask

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]


def create_app(
    config_overrides: dict[str, Any] | None = None,
    *,
    lookup: Any | None = None,
    analyst: Any | None = None,
    clock: Any | None = None,
    timer_factory: Any | None = None,
) -> Flask:
    """Application factory.

    Collaborators default to the Gemini-backed implementations; tests pass
    fakes instead.

    Returns:
        Configured Flask application.
    """
    if load_dotenv is not None:
        load_dotenv()

    from xsmb.config import get_config
    from xsmb.db import init_db
    from xsmb.error_handlers import register_error_handlers
    from xsmb.logging_config import configure_logging
    from xsmb.routes.analysis import analysis_bp
    from xsmb.routes.board import board_bp
    from xsmb.routes.health import health_bp
    from xsmb.routes.results import results_bp
    from xsmb.services.container import init_services

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)
    services = init_services(
        app,
        lookup=lookup,
        analyst=analyst,
        clock=clock,
        timer_factory=timer_factory,
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(results_bp)
    app.register_blueprint(board_bp)
    app.register_blueprint(analysis_bp)

    if app.config.get("BOARD_AUTOLOAD"):
        services.board.select_date(services.clock.default_date_string())

    return app
