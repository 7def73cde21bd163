"""Schemas for strategy parameters, generation requests and results."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, post_load, validate, validates_schema

from lottolab.models.strategy import (
    CoverageParams,
    FullWheelParams,
    GuaranteedWinParams,
    KeyWheelParams,
    MinRiskParams,
    StrategyKind,
    WheelParams,
)
from lottolab.schemas.ticket import TicketSchema


class MinRiskParamsSchema(Schema):
    ticket_count = fields.Integer(
        data_key="ticketCount",
        required=False,
        load_default=10,
        validate=validate.Range(min=1, max=10_000),
    )
    spread_numbers = fields.Boolean(data_key="spreadNumbers", required=False, load_default=False)

    @post_load
    def _make_params(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return MinRiskParams(**data)


class CoverageParamsSchema(Schema):
    budget = fields.Float(required=True, validate=validate.Range(min=0))
    spread_numbers = fields.Boolean(data_key="spreadNumbers", required=False, load_default=False)

    @post_load
    def _make_params(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return CoverageParams(**data)


class _PoolParamsSchema(Schema):
    selected_numbers = fields.Integer(
        data_key="selectedNumbers",
        required=False,
        load_default=None,
        validate=validate.Range(min=1),
    )
    numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1)),
        required=False,
        load_default=None,
    )

    @validates_schema
    def _validate_pool(self, data, **kwargs):  # type: ignore[no-untyped-def]
        nums = data.get("numbers")
        if data.get("selected_numbers") is None and not nums:
            raise ValidationError({"selectedNumbers": ["selectedNumbers or numbers is required"]})
        if nums is not None and len(nums) != len(set(nums)):
            raise ValidationError({"numbers": ["Numbers must be unique"]})

    @staticmethod
    def _pool_kwargs(data) -> dict:  # type: ignore[no-untyped-def]
        nums = data.get("numbers")
        numbers = tuple(int(n) for n in nums) if nums else None
        selected = data.get("selected_numbers")
        if selected is None and numbers is not None:
            selected = len(numbers)
        return {"selected_numbers": selected, "numbers": numbers}


class FullWheelParamsSchema(_PoolParamsSchema):
    @post_load
    def _make_params(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return FullWheelParams(**self._pool_kwargs(data))


class WheelParamsSchema(_PoolParamsSchema):
    guarantee = fields.Integer(required=False, load_default=3, validate=validate.Range(min=1))

    @post_load
    def _make_params(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return WheelParams(guarantee=data["guarantee"], **self._pool_kwargs(data))


class KeyWheelParamsSchema(_PoolParamsSchema):
    key_numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1)),
        data_key="keyNumbers",
        required=True,
        validate=validate.Length(min=1),
    )

    @validates_schema
    def _validate_keys(self, data, **kwargs):  # type: ignore[no-untyped-def]
        keys = data.get("key_numbers") or []
        if len(keys) != len(set(keys)):
            raise ValidationError({"keyNumbers": ["Key numbers must be unique"]})

    @post_load
    def _make_params(self, data, **kwargs):  # type: ignore[no-untyped-def]
        keys = tuple(int(k) for k in data["key_numbers"])
        return KeyWheelParams(key_numbers=keys, **self._pool_kwargs(data))


class GuaranteedWinParamsSchema(Schema):
    @post_load
    def _make_params(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return GuaranteedWinParams()


class StrategyCoverageSchema(Schema):
    numbers_covered = fields.Integer(data_key="numbersCovered")
    number_space = fields.Integer(data_key="numberSpace")
    number_percent = fields.Float(data_key="numberPercent")
    combinations_covered = fields.Integer(data_key="combinationsCovered")
    total_combinations = fields.Integer(data_key="totalCombinations")
    combination_percent = fields.Float(data_key="combinationPercent")


class StrategyResultSchema(Schema):
    strategy_id = fields.Enum(StrategyKind, by_value=True, data_key="strategyId")
    lottery_id = fields.String(data_key="lotteryId")
    tickets = fields.List(fields.Nested(TicketSchema))
    ticket_count = fields.Integer(data_key="ticketCount")
    ticket_cost = fields.Float(data_key="ticketCost")
    total_cost = fields.Float(data_key="totalCost")
    coverage = fields.Nested(StrategyCoverageSchema)
    metadata = fields.Dict(keys=fields.String())


class StrategyMetricsSchema(Schema):
    ticket_count = fields.Integer(data_key="ticketCount")
    total_cost = fields.Float(data_key="totalCost")
    number_coverage = fields.Float(data_key="numberCoverage")
    combination_coverage = fields.Float(data_key="combinationCoverage")
    expected_value_per_ticket = fields.Float(data_key="expectedValuePerTicket")
    efficiency = fields.Float()
    risk_level = fields.Integer(data_key="riskLevel")
    score = fields.Float()


class StrategyComparisonSchema(Schema):
    strategy_a = fields.Enum(StrategyKind, by_value=True, data_key="strategyA")
    strategy_b = fields.Enum(StrategyKind, by_value=True, data_key="strategyB")
    metrics = fields.Dict(keys=fields.String(), values=fields.Nested(StrategyMetricsSchema))
    cost_difference = fields.Float(data_key="costDifference")
    ticket_count_difference = fields.Integer(data_key="ticketCountDifference")
    coverage_difference = fields.Float(data_key="coverageDifference")
    score_difference = fields.Float(data_key="scoreDifference")
    better = fields.Enum(StrategyKind, by_value=True, allow_none=True)
    reasoning = fields.String()


class BestStrategySchema(Schema):
    strategy_id = fields.Enum(StrategyKind, by_value=True, data_key="strategyId")
    result = fields.Nested(StrategyResultSchema)
    score = fields.Float()
    scores = fields.Dict(keys=fields.String(), values=fields.Float())
    guarantee = fields.Dict(keys=fields.String())
    skipped = fields.Dict(keys=fields.String(), values=fields.String())


class StrategyAnalysisSchema(Schema):
    result = fields.Nested(StrategyResultSchema)
    metrics = fields.Nested(StrategyMetricsSchema)
    recommendations = fields.List(fields.String())
    warnings = fields.List(fields.String())


class _StrategyRequestSchema(Schema):
    lottery_id = fields.String(data_key="lotteryId", required=True)
    ticket_cost = fields.Float(
        data_key="ticketCost",
        required=False,
        load_default=None,
        validate=validate.Range(min=0, min_inclusive=False),
    )
    seed = fields.Integer(required=False, load_default=None)


class GenerateRequestSchema(_StrategyRequestSchema):
    strategy_id = fields.String(data_key="strategyId", required=True)
    params = fields.Dict(keys=fields.String(), required=False, load_default=dict)


class AnalyzeRequestSchema(GenerateRequestSchema):
    pass


class CompareRequestSchema(_StrategyRequestSchema):
    strategy_ids = fields.List(
        fields.String(),
        data_key="strategyIds",
        required=True,
        validate=validate.Length(min=2),
    )
    params = fields.Dict(
        keys=fields.String(),
        values=fields.Dict(keys=fields.String()),
        required=False,
        load_default=dict,
    )


class BestStrategyRequestSchema(_StrategyRequestSchema):
    params = fields.Dict(
        keys=fields.String(),
        values=fields.Dict(keys=fields.String()),
        required=True,
    )
