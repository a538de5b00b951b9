"""Schemas for AI analysis records (API output and stored JSON)."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from xsmb.services.analysis_result import AnalysisResult, AnalyzeStatus, PredictionStat, TomorrowPrediction


class PredictionStatSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    category = fields.String(required=True)
    numbers = fields.String(required=True)
    trend = fields.String(required=True)
    data_ref = fields.String(required=True, data_key="dataRef")

    @post_load
    def _make(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return PredictionStat(**data)


class TomorrowPredictionSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    bach_thu = fields.String(required=True, data_key="bachThu")
    song_thu = fields.String(required=True, data_key="songThu")
    dac_biet = fields.String(required=True, data_key="dacBiet")
    description = fields.String(required=True)
    detailed_stats = fields.List(
        fields.Nested(PredictionStatSchema),
        required=False,
        load_default=list,
        data_key="detailedStats",
    )

    @post_load
    def _make(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return TomorrowPrediction(**data)


class AnalysisResultSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    summary = fields.String(required=True)
    hot_numbers = fields.List(fields.String(), required=True, data_key="hotNumbers")
    lucky_prediction = fields.String(required=True, data_key="luckyPrediction")
    tomorrow = fields.Nested(TomorrowPredictionSchema, required=True)

    @post_load
    def _make(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return AnalysisResult(**data)


class AnalysisStateSchema(Schema):
    date = fields.String(required=True)
    status = fields.String(required=True, validate=validate.OneOf([s.value for s in AnalyzeStatus]))
    result = fields.Nested(AnalysisResultSchema, allow_none=True)


class HistoryEntrySchema(Schema):
    date = fields.String(required=True)
    label = fields.String(required=True)
    result = fields.Nested(AnalysisResultSchema, required=True)
