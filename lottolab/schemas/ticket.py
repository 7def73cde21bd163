"""Schemas for tickets, draws and match results."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate


def _unique(values: list[int]) -> None:
    if len(values) != len(set(values)):
        raise ValidationError("Numbers must be unique")


class TicketSchema(Schema):
    lottery_id = fields.String(data_key="lotteryId", required=False, load_default=None)
    field1 = fields.List(
        fields.Integer(validate=validate.Range(min=1)),
        required=True,
        validate=[validate.Length(min=1), _unique],
    )
    field2 = fields.List(
        fields.Integer(validate=validate.Range(min=1)),
        required=False,
        load_default=None,
        validate=_unique,
    )


class DrawResultSchema(Schema):
    field1 = fields.List(fields.Integer())
    field2 = fields.List(fields.Integer(), allow_none=True)


class MatchResultSchema(Schema):
    ticket_index = fields.Integer(data_key="ticketIndex")
    field_matches = fields.List(fields.Integer(), data_key="fieldMatches")
    prize_won = fields.Float(data_key="prizeWon")
    prize_category = fields.String(data_key="prizeCategory")
