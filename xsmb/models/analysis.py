"""Per-date AI analysis state.

Two tables:
- analysis_cache: last known status (SUCCESS/ERROR/IDLE) and result per date
- prediction_history: successful predictions only
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from xsmb.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisCacheEntry(Base):
    __tablename__ = "analysis_cache"

    date: Mapped[str] = mapped_column(String(10), primary_key=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    result: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class PredictionHistoryEntry(Base):
    __tablename__ = "prediction_history"

    date: Mapped[str] = mapped_column(String(10), primary_key=True)
    result: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
