from __future__ import annotations

import pytest
from sqlalchemy.orm import sessionmaker

from conftest import RAW_RECORD, FakeAnalyst, make_clock, sample_analysis
from xsmb.db import create_app_engine
from xsmb.models.base import Base
from xsmb.repositories.analysis_repository import AnalysisRepository
from xsmb.schemas.analysis import AnalysisResultSchema
from xsmb.services.analysis_result import AnalyzeStatus
from xsmb.services.analysis_service import AnalysisService
from xsmb.services.normalizer import ResultNormalizer


@pytest.fixture
def session(tmp_path):  # type: ignore[no-untyped-def]
    from xsmb import models  # noqa: F401

    engine = create_app_engine(f"sqlite:///{tmp_path / 'analysis.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    with factory() as s:
        yield s


def test_loading_state_is_never_cached(session) -> None:  # type: ignore[no-untyped-def]
    service = AnalysisService(FakeAnalyst())
    service.save_state(session, "2024-11-24", AnalyzeStatus.LOADING, None)
    session.commit()

    assert AnalysisRepository().get_cache(session, "2024-11-24") is None
    assert service.restore(session, "2024-11-24").status == AnalyzeStatus.IDLE


def test_history_is_used_when_cache_is_missing(session) -> None:  # type: ignore[no-untyped-def]
    repo = AnalysisRepository()
    repo.upsert_history(session, "2024-11-22", AnalysisResultSchema().dump(sample_analysis("27")))
    session.commit()

    state = AnalysisService(FakeAnalyst(), repo).restore(session, "2024-11-22")
    assert state.status == AnalyzeStatus.SUCCESS
    assert state.result is not None
    assert state.result.tomorrow.bach_thu == "27"


def test_cache_wins_over_history(session) -> None:  # type: ignore[no-untyped-def]
    clock, _ = make_clock(2024, 11, 25, 20, 0)
    data = ResultNormalizer(clock).normalize(RAW_RECORD, "2024-11-24")
    service = AnalysisService(FakeAnalyst())

    service.analyze(session, data)
    service.clear(session, "2024-11-24")
    session.commit()

    state = service.restore(session, "2024-11-24")
    assert state.status == AnalyzeStatus.IDLE
    assert state.result is None
    assert [e.date for e in service.history(session)] == ["2024-11-24"]


def test_reanalysis_overwrites_the_same_date(session) -> None:  # type: ignore[no-untyped-def]
    clock, _ = make_clock(2024, 11, 25, 20, 0)
    data = ResultNormalizer(clock).normalize(RAW_RECORD, "2024-11-24")

    AnalysisService(FakeAnalyst(sample_analysis("11"))).analyze(session, data)
    session.commit()
    AnalysisService(FakeAnalyst(sample_analysis("99"))).analyze(session, data)
    session.commit()

    history = AnalysisService(FakeAnalyst()).history(session)
    assert len(history) == 1
    assert history[0].result.tomorrow.bach_thu == "99"
