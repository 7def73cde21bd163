"""Strategy dispatch: validate params, run the generator, wrap the result."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping

from marshmallow import Schema
from marshmallow import ValidationError as MarshmallowValidationError

from lottolab.config import get_config
from lottolab.errors import (
    InvalidArgumentError,
    InvalidParameterError,
    StrategyNotSupportedError,
    UnsupportedParameterError,
)
from lottolab.models.lottery import Lottery
from lottolab.models.strategy import (
    CoverageParams,
    FullWheelParams,
    GuaranteedWinParams,
    KeyWheelParams,
    MinRiskParams,
    StrategyCoverage,
    StrategyKind,
    StrategyParams,
    StrategyResult,
    WheelParams,
)
from lottolab.models.ticket import Ticket
from lottolab.schemas.strategy import (
    CoverageParamsSchema,
    FullWheelParamsSchema,
    GuaranteedWinParamsSchema,
    KeyWheelParamsSchema,
    MinRiskParamsSchema,
    WheelParamsSchema,
)
from lottolab.services import generators
from lottolab.services.combinatorics import make_random_source
from lottolab.services.probability import total_combinations


logger = logging.getLogger(__name__)

_UNKNOWN_FIELD = "Unknown field."


@dataclass(frozen=True)
class StrategyEntry:
    generator: Callable[..., generators.Generated]
    params_schema: type[Schema]
    params_type: type


STRATEGY_REGISTRY: Mapping[StrategyKind, StrategyEntry] = MappingProxyType(
    {
        StrategyKind.MIN_RISK: StrategyEntry(generators.generate_min_risk, MinRiskParamsSchema, MinRiskParams),
        StrategyKind.COVERAGE: StrategyEntry(generators.generate_coverage, CoverageParamsSchema, CoverageParams),
        StrategyKind.FULL_WHEEL: StrategyEntry(generators.generate_full_wheel, FullWheelParamsSchema, FullWheelParams),
        StrategyKind.WHEEL: StrategyEntry(generators.generate_wheel, WheelParamsSchema, WheelParams),
        StrategyKind.KEY_WHEEL: StrategyEntry(generators.generate_key_wheel, KeyWheelParamsSchema, KeyWheelParams),
        StrategyKind.GUARANTEED_WIN: StrategyEntry(
            generators.generate_guaranteed_win, GuaranteedWinParamsSchema, GuaranteedWinParams
        ),
    }
)


def resolve_kind(strategy_id: StrategyKind | str, lottery: Lottery) -> StrategyKind:
    """Parse a strategy id and check the lottery offers it."""

    try:
        kind = StrategyKind(strategy_id)
    except ValueError as exc:
        raise StrategyNotSupportedError(
            message=f"Unknown strategy: {strategy_id}",
            details={"strategy_id": str(strategy_id)},
        ) from exc

    if not lottery.supports(kind):
        raise StrategyNotSupportedError(
            message=f"Strategy {kind.value} not supported for lottery {lottery.id}",
            details={
                "strategy_id": kind.value,
                "lottery_id": lottery.id,
                "available": [s.value for s in lottery.available_strategies],
            },
        )
    return kind


def load_params(kind: StrategyKind, params: Mapping[str, Any] | StrategyParams | None) -> StrategyParams:
    """Validate a raw params mapping into the kind's params dataclass."""

    entry = STRATEGY_REGISTRY[kind]
    if isinstance(params, entry.params_type):
        return params
    if params is not None and not isinstance(params, Mapping):
        raise InvalidParameterError(
            message=f"Parameters of type {type(params).__name__} do not fit {kind.value}",
        )

    try:
        return entry.params_schema().load(dict(params or {}))
    except MarshmallowValidationError as exc:
        messages = exc.messages if isinstance(exc.messages, dict) else {"_schema": exc.messages}
        unknown = sorted(key for key, errs in messages.items() if errs == [_UNKNOWN_FIELD])
        if unknown:
            raise UnsupportedParameterError(
                message=f"Unsupported parameters for {kind.value}: {', '.join(unknown)}",
                details=messages,
            ) from exc
        raise InvalidParameterError(
            message=f"Invalid parameters for {kind.value}",
            details=messages,
        ) from exc


def compute_coverage(lottery: Lottery, tickets: list[Ticket]) -> StrategyCoverage:
    space = lottery.fields[0].size
    covered = len({n for t in tickets for n in t.field1})
    total = total_combinations(lottery)
    distinct = len({t.fields for t in tickets})

    return StrategyCoverage(
        numbers_covered=covered,
        number_space=space,
        number_percent=covered / space * 100 if space else 0.0,
        combinations_covered=distinct,
        total_combinations=total,
        combination_percent=distinct / total * 100 if total else 0.0,
    )


def execute_strategy(
    strategy_id: StrategyKind | str,
    lottery: Lottery,
    params: Mapping[str, Any] | StrategyParams | None,
    ticket_cost: float,
    rng: random.Random | None = None,
) -> StrategyResult:
    """Generate a ticket set for one strategy.

    Raises StrategyNotSupportedError for an unknown or unavailable kind,
    InvalidArgumentError for a non-positive ticket cost, and the parameter
    errors of `load_params`. Generator errors propagate unchanged.
    """

    kind = resolve_kind(strategy_id, lottery)

    if ticket_cost is None or ticket_cost <= 0:
        raise InvalidArgumentError(
            message="Ticket cost must be positive",
            details={"ticket_cost": ticket_cost},
        )

    entry = STRATEGY_REGISTRY[kind]
    loaded = load_params(kind, params)
    rng = rng if rng is not None else make_random_source()

    tickets, details = entry.generator(lottery, loaded, float(ticket_cost), rng, get_config())

    ticket_count = len(tickets)
    total_cost = ticket_count * float(ticket_cost)
    metadata: dict[str, Any] = {
        "strategy": kind.value,
        "parameters": entry.params_schema().dump(loaded),
        "generated_at": datetime.now(timezone.utc).isoformat(),
        **details,
    }

    logger.info(
        "Generated %d tickets with %s for %s (total cost %.2f)",
        ticket_count,
        kind.value,
        lottery.id,
        total_cost,
    )

    return StrategyResult(
        strategy_id=kind,
        lottery_id=lottery.id,
        tickets=tuple(tickets),
        ticket_count=ticket_count,
        ticket_cost=float(ticket_cost),
        total_cost=total_cost,
        coverage=compute_coverage(lottery, tickets),
        metadata=metadata,
    )
