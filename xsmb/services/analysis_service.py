"""Per-date analysis state: run, cache, restore, clear."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from xsmb.repositories.analysis_repository import AnalysisRepository
from xsmb.schemas.analysis import AnalysisResultSchema
from xsmb.services.analysis_result import AnalysisResult, AnalyzeStatus, is_failed_analysis
from xsmb.services.lottery_result import LotteryResult
from xsmb.services.prediction_service import Analyst


@dataclass(frozen=True)
class AnalysisState:
    date: str
    status: AnalyzeStatus
    result: AnalysisResult | None


@dataclass(frozen=True)
class HistoryEntry:
    date: str
    result: AnalysisResult


def _dump(result: AnalysisResult | None) -> dict | None:
    return AnalysisResultSchema().dump(result) if result is not None else None


def _load(payload: dict | None) -> AnalysisResult | None:
    return AnalysisResultSchema().load(payload) if payload else None


class AnalysisService:
    """Analysis use-cases backed by `AnalysisRepository`."""

    def __init__(self, analyst: Analyst, repository: AnalysisRepository | None = None) -> None:
        self._analyst = analyst
        self._repo = repository or AnalysisRepository()

    def save_state(self, session: Session, date: str, status: AnalyzeStatus, result: AnalysisResult | None) -> None:
        # LOADING is never persisted
        if status == AnalyzeStatus.LOADING:
            return
        self._repo.upsert_cache(session, date, status.value, _dump(result))

    def restore(self, session: Session, date: str) -> AnalysisState:
        """Cache first, then history (as SUCCESS), then IDLE."""

        cached = self._repo.get_cache(session, date)
        if cached is not None:
            return AnalysisState(date=date, status=AnalyzeStatus(cached.status), result=_load(cached.result))

        saved = self._repo.get_history(session, date)
        if saved is not None:
            return AnalysisState(date=date, status=AnalyzeStatus.SUCCESS, result=_load(saved.result))

        return AnalysisState(date=date, status=AnalyzeStatus.IDLE, result=None)

    def analyze(self, session: Session, data: LotteryResult) -> AnalysisState:
        result = self._analyst.analyze(data)
        status = AnalyzeStatus.ERROR if is_failed_analysis(result) else AnalyzeStatus.SUCCESS

        self.save_state(session, data.date, status, result)
        if status == AnalyzeStatus.SUCCESS:
            self._repo.upsert_history(session, data.date, _dump(result))

        return AnalysisState(date=data.date, status=status, result=result)

    def clear(self, session: Session, date: str) -> AnalysisState:
        self.save_state(session, date, AnalyzeStatus.IDLE, None)
        return AnalysisState(date=date, status=AnalyzeStatus.IDLE, result=None)

    def history(self, session: Session) -> list[HistoryEntry]:
        return [HistoryEntry(date=row.date, result=_load(row.result)) for row in self._repo.list_history(session)]
