"""Schemas for lottery definitions and prize tables."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, post_load, validate

from lottolab.models.lottery import PrizeMarker, PrizeRow, PrizeTable, VariantType
from lottolab.models.strategy import StrategyKind


class PrizeValueField(fields.Field):
    """A fixed amount or one of the "superprize" / "secondary" markers."""

    def _serialize(self, value, attr, obj, **kwargs):  # type: ignore[no-untyped-def]
        if value is None:
            return None
        if isinstance(value, PrizeMarker):
            return value.value
        return float(value)

    def _deserialize(self, value, attr, data, **kwargs):  # type: ignore[no-untyped-def]
        if isinstance(value, str):
            try:
                return PrizeMarker(value.strip().lower())
            except ValueError as exc:
                raise ValidationError("Prize must be a number, 'superprize' or 'secondary'") from exc
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError("Prize must be a number, 'superprize' or 'secondary'")
        if value < 0:
            raise ValidationError("Prize must not be negative")
        return float(value)


class FieldSchema(Schema):
    size = fields.Integer(data_key="from")
    count = fields.Integer()


class PrizeRowSchema(Schema):
    matches = fields.List(
        fields.Integer(validate=validate.Range(min=0)),
        required=True,
        validate=validate.Length(min=1, max=2),
    )
    prize = PrizeValueField(required=False, load_default=None, allow_none=True)
    prize_percent = fields.Float(
        data_key="prizePercent",
        required=False,
        load_default=None,
        allow_none=True,
        validate=validate.Range(min=0, max=100),
    )
    prize_note = fields.String(data_key="prizeNote", required=False, load_default=None, allow_none=True)

    @post_load
    def _make_row(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return PrizeRow(
            matches=tuple(data["matches"]),
            prize=data.get("prize"),
            prize_percent=data.get("prize_percent"),
            prize_note=data.get("prize_note"),
        )


class PrizeTableSchema(Schema):
    rows = fields.List(fields.Nested(PrizeRowSchema), required=True)
    currency = fields.String(required=False, load_default="₽")
    symmetric = fields.Boolean(required=False, load_default=False)

    @post_load
    def _make_table(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return PrizeTable(rows=tuple(data["rows"]), currency=data["currency"], symmetric=data["symmetric"])


class LotteryVariantSchema(Schema):
    type = fields.Enum(VariantType, by_value=True)
    label = fields.String()
    prize_table = fields.Nested(PrizeTableSchema, data_key="prizeTable")
    average_pool = fields.Float(data_key="averagePool", allow_none=True)


class LotterySchema(Schema):
    id = fields.String()
    name = fields.String()
    description = fields.String()
    field_count = fields.Integer(data_key="fieldCount")
    fields_ = fields.List(fields.Nested(FieldSchema), attribute="fields", data_key="fields")
    default_ticket_cost = fields.Float(data_key="defaultTicketCost")
    default_superprize = fields.Float(data_key="defaultSuperprize")
    has_secondary_prize = fields.Boolean(data_key="hasSecondaryPrize")
    default_secondary_prize = fields.Float(data_key="defaultSecondaryPrize", allow_none=True)
    available_strategies = fields.List(fields.Enum(StrategyKind, by_value=True), data_key="availableStrategies")
    prize_table = fields.Nested(PrizeTableSchema, data_key="prizeTable", allow_none=True)
    variants = fields.List(fields.Nested(LotteryVariantSchema))
    visual_layout = fields.String(data_key="visualLayout")


class LotteryFilterSchema(Schema):
    field_count = fields.Integer(
        data_key="fieldCount",
        required=False,
        load_default=None,
        validate=validate.OneOf([1, 2]),
    )
    has_secondary_prize = fields.Boolean(data_key="hasSecondaryPrize", required=False, load_default=None)
    has_variants = fields.Boolean(data_key="hasVariants", required=False, load_default=None)


class LotteryLookupSchema(Schema):
    lottery_id = fields.String(data_key="lotteryId", required=False, load_default=None)
    name = fields.String(required=False, load_default=None)
