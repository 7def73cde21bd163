"""Schemas for simulation requests and results."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from lottolab.models.lottery import VariantType
from lottolab.schemas.lottery import PrizeTableSchema
from lottolab.schemas.ticket import DrawResultSchema, MatchResultSchema, TicketSchema


class SimulationRequestSchema(Schema):
    lottery_id = fields.String(data_key="lotteryId", required=True)
    tickets = fields.List(fields.Nested(TicketSchema), required=True)
    rounds = fields.Integer(required=True, validate=validate.Range(min=1))
    variant = fields.Enum(VariantType, by_value=True, required=False, load_default=None, allow_none=True)
    prize_table = fields.Nested(PrizeTableSchema, data_key="prizeTable", required=False, load_default=None)
    superprize = fields.Float(required=False, load_default=None, validate=validate.Range(min=0))
    secondary_prize = fields.Float(
        data_key="secondaryPrize",
        required=False,
        load_default=None,
        allow_none=True,
        validate=validate.Range(min=0),
    )
    average_pool = fields.Float(
        data_key="averagePool",
        required=False,
        load_default=None,
        allow_none=True,
        validate=validate.Range(min=0),
    )
    ticket_cost = fields.Float(
        data_key="ticketCost",
        required=False,
        load_default=None,
        validate=validate.Range(min=0),
    )
    seed = fields.Integer(required=False, load_default=None)
    workers = fields.Integer(required=False, load_default=None, validate=validate.Range(min=1, max=64))
    include_rounds = fields.Boolean(data_key="includeRounds", required=False, load_default=True)

    @validates_schema
    def _validate_tickets(self, data, **kwargs):  # type: ignore[no-untyped-def]
        tickets = data.get("tickets") or []
        with_second = {t.get("field2") is not None for t in tickets}
        if len(with_second) > 1:
            raise ValidationError({"tickets": ["All tickets must have the same number of fields"]})


class SimulationRoundSchema(Schema):
    round_number = fields.Integer(data_key="roundNumber")
    draw = fields.Nested(DrawResultSchema)
    matches = fields.List(fields.Nested(MatchResultSchema))
    total_prize_this_round = fields.Float(data_key="totalPrizeThisRound")
    bankroll = fields.Float()


class SimulationStatisticsSchema(Schema):
    total_investment = fields.Float(data_key="totalInvestment")
    total_won = fields.Float(data_key="totalWon")
    net_return = fields.Float(data_key="netReturn")
    roi = fields.Float()
    zero_win_rounds = fields.Integer(data_key="zeroWinRounds")
    zero_win_percent = fields.Float(data_key="zeroWinPercent")
    avg_prize_per_round = fields.Float(data_key="avgPrizePerRound")
    max_prize_in_round = fields.Float(data_key="maxPrizeInRound")
    min_non_zero_prize = fields.Float(data_key="minNonZeroPrize")
    prize_distribution = fields.Dict(keys=fields.String(), values=fields.Integer(), data_key="prizeDistribution")
    win_frequency = fields.Dict(keys=fields.String(), values=fields.Float(), data_key="winFrequency")
    final_bankroll = fields.Float(data_key="finalBankroll")
    min_bankroll = fields.Float(data_key="minBankroll")
    max_bankroll = fields.Float(data_key="maxBankroll")
    mean_bankroll = fields.Float(data_key="meanBankroll")
    net_outcome_variance = fields.Float(data_key="netOutcomeVariance")
    net_outcome_std_dev = fields.Float(data_key="netOutcomeStdDev")


class SimulationResultSchema(Schema):
    lottery_id = fields.String(data_key="lotteryId")
    tickets = fields.List(fields.Nested(TicketSchema))
    ticket_cost = fields.Float(data_key="ticketCost")
    rounds_count = fields.Integer(data_key="roundsCount")
    rounds = fields.List(fields.Nested(SimulationRoundSchema))
    statistics = fields.Nested(SimulationStatisticsSchema)
    simulated_at = fields.DateTime(data_key="simulatedAt")
