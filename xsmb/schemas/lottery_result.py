"""Schemas for lottery results and date navigation."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class LoGanItemSchema(Schema):
    number = fields.String()
    days = fields.Integer()


class LotoHayVeItemSchema(Schema):
    number = fields.String()
    count = fields.Integer()


class LotteryResultSchema(Schema):
    """Serialize a `LotteryResult` with the dashboard's camelCase keys."""

    date = fields.String()
    prize_special = fields.String(data_key="prizeSpecial")
    prize1 = fields.String()
    prize2 = fields.List(fields.String())
    prize3 = fields.List(fields.String())
    prize4 = fields.List(fields.String())
    prize5 = fields.List(fields.String())
    prize6 = fields.List(fields.String())
    prize7 = fields.List(fields.String())
    lo_gan = fields.List(fields.Nested(LoGanItemSchema), data_key="loGan")
    loto_hay_ve = fields.List(fields.Nested(LotoHayVeItemSchema), data_key="lotoHayVe")
    loto_head = fields.Dict(
        keys=fields.String(),
        values=fields.List(fields.String()),
        data_key="lotoHead",
    )
    is_live = fields.Boolean(data_key="isLive")
    last_updated = fields.DateTime(data_key="lastUpdated")


class DateOptionSchema(Schema):
    date = fields.String()
    label = fields.String()


class DatesSchema(Schema):
    today = fields.String()
    default = fields.String()
    is_live_window = fields.Boolean(data_key="isLiveWindow")
    recent = fields.List(fields.Nested(DateOptionSchema))


class BoardSchema(Schema):
    date = fields.String()
    label = fields.String()
    max_date = fields.String(data_key="maxDate")
    can_go_next = fields.Boolean(data_key="canGoNext")
    loading = fields.Boolean()
    is_live_mode = fields.Boolean(data_key="isLiveMode")
    polling = fields.Boolean()
    result = fields.Nested(LotteryResultSchema, allow_none=True)


class BoardDateSchema(Schema):
    """Body of `POST /board/date`: either an absolute date or a day shift."""

    date = fields.String(
        required=False,
        load_default=None,
        validate=validate.Regexp(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$", error="Expected YYYY-MM-DD"),
    )
    shift = fields.Integer(required=False, load_default=None, validate=validate.OneOf([-1, 1]))

    @validates_schema
    def _validate_one_of(self, data, **kwargs):  # type: ignore[no-untyped-def]
        has_date = data.get("date") is not None
        has_shift = data.get("shift") is not None
        if has_date == has_shift:
            raise ValidationError({"_schema": ["Provide exactly one of date or shift"]})
