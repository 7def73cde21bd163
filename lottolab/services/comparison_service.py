"""Strategy comparison, best-strategy selection and single-strategy analysis."""

from __future__ import annotations

import logging
import random
from typing import Any, Mapping

from lottolab.config import get_config
from lottolab.errors import InvalidArgumentError, LotteryError, NoStrategiesEvaluableError
from lottolab.models.lottery import Lottery
from lottolab.models.strategy import (
    BestStrategy,
    StrategyAnalysis,
    StrategyComparison,
    StrategyKind,
    StrategyMetrics,
    StrategyParams,
    StrategyResult,
)
from lottolab.services.combinatorics import combinations, make_random_source
from lottolab.services.prize_service import calculate_expected_value
from lottolab.services.strategy_service import execute_strategy, resolve_kind


logger = logging.getLogger(__name__)

RISK_LEVELS: dict[StrategyKind, int] = {
    StrategyKind.MIN_RISK: 2,
    StrategyKind.COVERAGE: 4,
    StrategyKind.FULL_WHEEL: 6,
    StrategyKind.WHEEL: 5,
    StrategyKind.KEY_WHEEL: 5,
    StrategyKind.GUARANTEED_WIN: 1,
}

HIGH_RISK_LEVEL = 7
HIGH_EFFICIENCY = 0.5
EXCELLENT_COVERAGE_PERCENT = 80.0
LOW_COVERAGE_PERCENT = 50.0

ParamsById = Mapping[str, Mapping[str, Any] | StrategyParams | None]


def calculate_risk_level(kind: StrategyKind) -> int:
    return RISK_LEVELS.get(kind, 5)


def calculate_efficiency(result: StrategyResult) -> float:
    """Share of field-1 numbers touched per 1000 units spent."""

    if result.ticket_count == 0 or result.total_cost <= 0:
        return 0.0
    return max(0.0, (result.coverage.number_percent / 100) / (result.total_cost / 1000))


def calculate_metrics(result: StrategyResult, lottery: Lottery) -> StrategyMetrics:
    """Metrics and score of one generated ticket set.

    The score is the expected prize per unit of ticket cost, scaled by the
    fraction of field-1 numbers covered and by the share of distinct tickets.
    Prizes resolve against the lottery's default table and amounts.
    """

    ev = calculate_expected_value(
        lottery,
        lottery.resolve_prize_table(),
        lottery.default_superprize,
        result.ticket_cost,
        secondary_prize=lottery.default_secondary_prize,
        average_pool=lottery.resolve_average_pool(),
    )

    number_fraction = result.coverage.number_percent / 100
    distinct_ratio = result.coverage.combinations_covered / result.ticket_count if result.ticket_count else 0.0
    score = (ev.expected_prize / result.ticket_cost) * number_fraction * distinct_ratio

    return StrategyMetrics(
        ticket_count=result.ticket_count,
        total_cost=result.total_cost,
        number_coverage=result.coverage.number_percent,
        combination_coverage=result.coverage.combination_percent,
        expected_value_per_ticket=ev.expected_value,
        efficiency=calculate_efficiency(result),
        risk_level=calculate_risk_level(result.strategy_id),
        score=score,
    )


def _reasoning(a: StrategyKind, b: StrategyKind, ma: StrategyMetrics, mb: StrategyMetrics) -> str:
    if ma.score > mb.score:
        text = f"{a.value} is superior: score {ma.score - mb.score:.4f} higher, "
    elif mb.score > ma.score:
        text = f"{b.value} is superior: score {mb.score - ma.score:.4f} higher, "
    else:
        text = "Both strategies score the same, "

    if ma.number_coverage > mb.number_coverage:
        text += f"{a.value} has better coverage ({ma.number_coverage:.1f}% vs {mb.number_coverage:.1f}%)"
    elif mb.number_coverage > ma.number_coverage:
        text += f"{b.value} has better coverage ({mb.number_coverage:.1f}% vs {ma.number_coverage:.1f}%)"
    else:
        text += "equivalent coverage"
    return text


def _build_comparison(
    a: tuple[StrategyResult, StrategyMetrics],
    b: tuple[StrategyResult, StrategyMetrics],
) -> StrategyComparison:
    result_a, metrics_a = a
    result_b, metrics_b = b
    kind_a, kind_b = result_a.strategy_id, result_b.strategy_id

    better: StrategyKind | None = None
    if metrics_a.score > metrics_b.score:
        better = kind_a
    elif metrics_b.score > metrics_a.score:
        better = kind_b

    return StrategyComparison(
        strategy_a=kind_a,
        strategy_b=kind_b,
        metrics={kind_a.value: metrics_a, kind_b.value: metrics_b},
        cost_difference=result_a.total_cost - result_b.total_cost,
        ticket_count_difference=result_a.ticket_count - result_b.ticket_count,
        coverage_difference=metrics_a.number_coverage - metrics_b.number_coverage,
        score_difference=metrics_a.score - metrics_b.score,
        better=better,
        reasoning=_reasoning(kind_a, kind_b, metrics_a, metrics_b),
    )


def _evaluate(
    strategy_id: StrategyKind | str,
    lottery: Lottery,
    params_by_id: ParamsById,
    ticket_cost: float,
    rng: random.Random,
) -> tuple[StrategyResult, StrategyMetrics]:
    kind = resolve_kind(strategy_id, lottery)
    params = params_by_id.get(kind.value) if params_by_id else None
    result = execute_strategy(kind, lottery, params, ticket_cost, rng=rng)
    return result, calculate_metrics(result, lottery)


def _distinct_kinds(ids: list[StrategyKind | str], lottery: Lottery) -> list[StrategyKind]:
    kinds = [resolve_kind(sid, lottery) for sid in ids]
    if len(set(kinds)) != len(kinds):
        raise InvalidArgumentError(
            message="Strategies to compare must be distinct",
            details={"strategy_ids": [k.value for k in kinds]},
        )
    return kinds


def compare_two(
    id_a: StrategyKind | str,
    id_b: StrategyKind | str,
    lottery: Lottery,
    params_by_id: ParamsById,
    ticket_cost: float,
    rng: random.Random | None = None,
) -> StrategyComparison:
    kind_a, kind_b = _distinct_kinds([id_a, id_b], lottery)
    rng = rng if rng is not None else make_random_source()
    a = _evaluate(kind_a, lottery, params_by_id, ticket_cost, rng)
    b = _evaluate(kind_b, lottery, params_by_id, ticket_cost, rng)
    return _build_comparison(a, b)


def compare_multiple(
    lottery: Lottery,
    ids: list[StrategyKind | str],
    params_by_id: ParamsById,
    ticket_cost: float,
    rng: random.Random | None = None,
) -> list[StrategyComparison]:
    """One comparison per unordered pair of `ids`; each strategy runs once."""

    kinds = _distinct_kinds(ids, lottery)
    rng = rng if rng is not None else make_random_source()
    evaluated = [_evaluate(kind, lottery, params_by_id, ticket_cost, rng) for kind in kinds]

    comparisons = [_build_comparison(a, b) for a, b in combinations(evaluated, 2)]
    logger.info("Compared %d strategies for %s (%d pairs)", len(ids), lottery.id, len(comparisons))
    return comparisons


def _guarantee(result: StrategyResult, lottery: Lottery) -> dict[str, Any]:
    kind = result.strategy_id
    pick = lottery.fields[0].count
    guarantee: dict[str, Any] = {
        "description": "No guaranteed outcome",
        "guaranteed_matches": 0,
        "required_budget": result.total_cost,
        "ticket_count": result.ticket_count,
    }

    if kind == StrategyKind.WHEEL:
        matches = int(result.metadata.get("guarantee", 0))
        guarantee.update(
            description=f"At least {matches} matches on one ticket if all drawn numbers are in the pool",
            guaranteed_matches=matches,
        )
    elif kind == StrategyKind.FULL_WHEEL:
        guarantee.update(
            description=f"All {pick} matches on one ticket if all drawn numbers are in the pool",
            guaranteed_matches=pick,
        )
    elif kind == StrategyKind.GUARANTEED_WIN:
        guarantee.update(description="Every possible draw pays on at least one ticket", probability=1.0)
    return guarantee


def get_best_strategy(
    lottery: Lottery,
    params_by_id: ParamsById,
    ticket_cost: float,
    rng: random.Random | None = None,
) -> BestStrategy:
    """Run every strategy named in `params_by_id` and keep the best score.

    A candidate that fails is logged and reported in `skipped`; the
    selection fails only when no candidate produces a result.
    """

    rng = rng if rng is not None else make_random_source()
    scores: dict[str, float] = {}
    skipped: dict[str, str] = {}
    evaluated: list[tuple[StrategyResult, StrategyMetrics]] = []

    for sid in params_by_id or {}:
        try:
            result, metrics = _evaluate(sid, lottery, params_by_id, ticket_cost, rng)
        except LotteryError as exc:
            logger.info("Skipping %s for %s: %s (%s)", sid, lottery.id, exc.message, exc.code)
            skipped[str(sid)] = exc.code
            continue
        scores[result.strategy_id.value] = metrics.score
        evaluated.append((result, metrics))

    if not evaluated:
        raise NoStrategiesEvaluableError(
            message=f"No strategies to evaluate for {lottery.id}",
            details={"lottery_id": lottery.id, "skipped": skipped},
        )

    # max() keeps the first of equal scores
    result, metrics = max(evaluated, key=lambda pair: pair[1].score)
    logger.info("Best strategy for %s: %s (score %.6f)", lottery.id, result.strategy_id.value, metrics.score)

    return BestStrategy(
        strategy_id=result.strategy_id,
        result=result,
        score=metrics.score,
        scores=scores,
        guarantee=_guarantee(result, lottery),
        skipped=skipped,
    )


def analyze_strategy(
    strategy_id: StrategyKind | str,
    lottery: Lottery,
    params: Mapping[str, Any] | StrategyParams | None,
    ticket_cost: float,
    rng: random.Random | None = None,
) -> StrategyAnalysis:
    config = get_config()
    result = execute_strategy(strategy_id, lottery, params, ticket_cost, rng=rng)
    metrics = calculate_metrics(result, lottery)

    recommendations: list[str] = []
    warnings: list[str] = []

    if metrics.efficiency > HIGH_EFFICIENCY:
        recommendations.append("High efficiency ratio - good value for money")
    if metrics.number_coverage > EXCELLENT_COVERAGE_PERCENT:
        recommendations.append("Excellent coverage of the number field")
    elif metrics.number_coverage < LOW_COVERAGE_PERCENT and result.strategy_id in (
        StrategyKind.MIN_RISK,
        StrategyKind.COVERAGE,
    ):
        recommendations.append("Increase ticket count for better coverage")
    if result.strategy_id == StrategyKind.GUARANTEED_WIN:
        recommendations.append("Guarantees at least one winning ticket")

    if result.total_cost > config.HIGH_COST_WARNING:
        warnings.append("High investment required - consider budget constraints")
    if result.ticket_count > config.LARGE_TICKET_COUNT_WARNING:
        warnings.append("Large number of tickets - may be impractical to manage")
    if metrics.risk_level > HIGH_RISK_LEVEL:
        warnings.append("High risk strategy - potential for significant losses")
    if result.coverage.combinations_covered < result.ticket_count:
        warnings.append("Ticket set contains duplicate combinations")
    if metrics.expected_value_per_ticket < 0:
        warnings.append(f"Negative expected value: {metrics.expected_value_per_ticket:.2f} per ticket")

    return StrategyAnalysis(
        result=result,
        metrics=metrics,
        recommendations=recommendations,
        warnings=warnings,
    )
