"""Repository layer for the analysis cache and prediction history."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from xsmb.models.analysis import AnalysisCacheEntry, PredictionHistoryEntry


class AnalysisRepository:
    """Read/write per-date analysis rows."""

    def get_cache(self, session: Session, date: str) -> AnalysisCacheEntry | None:
        return session.get(AnalysisCacheEntry, date)

    def upsert_cache(self, session: Session, date: str, status: str, result: dict[str, Any] | None) -> None:
        # merge() does an upsert-like behavior based on primary key
        session.merge(AnalysisCacheEntry(date=date, status=status, result=result))
        session.flush()

    def get_history(self, session: Session, date: str) -> PredictionHistoryEntry | None:
        return session.get(PredictionHistoryEntry, date)

    def upsert_history(self, session: Session, date: str, result: dict[str, Any]) -> None:
        session.merge(PredictionHistoryEntry(date=date, result=result))
        session.flush()

    def list_history(self, session: Session) -> Sequence[PredictionHistoryEntry]:
        stmt = select(PredictionHistoryEntry).order_by(PredictionHistoryEntry.date.desc())
        return list(session.scalars(stmt).all())
