"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class UpstreamError(AppError):
    """The language-model service failed or answered with nothing usable."""

    def __init__(
        self,
        message: str = "Upstream service error",
        details: Any | None = None,
        code: str = "upstream_error",
    ) -> None:
        super().__init__(code=code, message=message, status_code=502, details=details)


class NoResultDataError(UpstreamError):
    """The lookup answered, but without a special prize or a 7th prize."""

    def __init__(self, message: str = "No result data", details: Any | None = None) -> None:
        super().__init__(message=message, details=details, code="no_data")
