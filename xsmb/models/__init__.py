"""ORM models."""

from xsmb.models.analysis import AnalysisCacheEntry, PredictionHistoryEntry

__all__ = ["AnalysisCacheEntry", "PredictionHistoryEntry"]
