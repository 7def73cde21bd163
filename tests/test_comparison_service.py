from __future__ import annotations

import pytest

from lottolab.catalog import LOTTERY_5_FROM_36_PLUS_1, LOTTERY_6_FROM_45, LOTTERY_12_FROM_24
from lottolab.errors import InvalidArgumentError, NoStrategiesEvaluableError, StrategyNotSupportedError
from lottolab.models.strategy import StrategyKind
from lottolab.services.comparison_service import (
    analyze_strategy,
    calculate_efficiency,
    calculate_risk_level,
    compare_multiple,
    compare_two,
    get_best_strategy,
)
from lottolab.services.strategy_service import execute_strategy

MOCK_PARAMS = {
    "min_risk": {"ticketCount": 3},
    "coverage": {"budget": 500},
    "full_wheel": {"selectedNumbers": 7},
}


def test_compare_multiple_yields_one_comparison_per_pair(mock_lottery, rng):
    comparisons = compare_multiple(mock_lottery, list(MOCK_PARAMS), MOCK_PARAMS, 100, rng=rng)

    assert len(comparisons) == 3
    pairs = [(c.strategy_a.value, c.strategy_b.value) for c in comparisons]
    assert pairs == [("min_risk", "coverage"), ("min_risk", "full_wheel"), ("coverage", "full_wheel")]
    for c in comparisons:
        assert set(c.metrics) == {c.strategy_a.value, c.strategy_b.value}


def test_compare_two_prefers_wider_coverage(mock_lottery, rng):
    params = {"coverage": {"budget": 400}, "min_risk": {"ticketCount": 1}}
    comparison = compare_two("coverage", "min_risk", mock_lottery, params, 100, rng=rng)

    coverage = comparison.metrics["coverage"]
    min_risk = comparison.metrics["min_risk"]
    assert coverage.ticket_count == 4
    assert min_risk.ticket_count == 1
    assert comparison.cost_difference == 300
    assert comparison.ticket_count_difference == 3
    assert comparison.coverage_difference == pytest.approx(coverage.number_coverage - min_risk.number_coverage)
    assert comparison.better == StrategyKind.COVERAGE
    assert comparison.reasoning.startswith("coverage is superior")


def test_compare_uses_defaults_for_missing_params(mock_lottery, rng):
    comparison = compare_two("min_risk", "full_wheel", mock_lottery, {"full_wheel": {"selectedNumbers": 7}}, 100, rng=rng)
    assert comparison.metrics["min_risk"].ticket_count == 10


def test_best_strategy_picks_highest_score(mock_lottery, rng):
    params = {"min_risk": {"ticketCount": 1}, "coverage": {"budget": 400}}
    best = get_best_strategy(mock_lottery, params, 100, rng=rng)

    assert best.strategy_id == StrategyKind.COVERAGE
    assert set(best.scores) == {"min_risk", "coverage"}
    assert best.score == max(best.scores.values())
    assert best.guarantee["ticket_count"] == best.result.ticket_count


def test_best_strategy_without_candidates(mock_lottery):
    with pytest.raises(NoStrategiesEvaluableError):
        get_best_strategy(mock_lottery, {}, 100)


def test_best_strategy_skips_candidates_that_fail(rng):
    params = {"min_risk": {"ticketCount": 3}, "coverage": {"budget": 50}}
    best = get_best_strategy(LOTTERY_5_FROM_36_PLUS_1, params, 100, rng=rng)

    assert best.strategy_id == StrategyKind.MIN_RISK
    assert set(best.scores) == {"min_risk"}
    assert best.skipped == {"coverage": "insufficient_budget"}


def test_best_strategy_skips_unsupported_strategy(rng):
    params = {"guaranteed_win": {}, "min_risk": {"ticketCount": 2}}
    best = get_best_strategy(LOTTERY_6_FROM_45, params, 100, rng=rng)

    assert best.strategy_id == StrategyKind.MIN_RISK
    assert best.skipped == {"guaranteed_win": "strategy_not_supported"}


def test_best_strategy_when_every_candidate_fails(rng):
    params = {"guaranteed_win": {}, "coverage": {"budget": 10}}
    with pytest.raises(NoStrategiesEvaluableError) as exc_info:
        get_best_strategy(LOTTERY_6_FROM_45, params, 100, rng=rng)

    assert exc_info.value.details["skipped"] == {
        "guaranteed_win": "strategy_not_supported",
        "coverage": "insufficient_budget",
    }


def test_compare_two_rejects_same_strategy(mock_lottery, rng):
    with pytest.raises(InvalidArgumentError):
        compare_two("min_risk", "min_risk", mock_lottery, {}, 100, rng=rng)


def test_compare_multiple_rejects_duplicate_ids(mock_lottery, rng):
    with pytest.raises(InvalidArgumentError):
        compare_multiple(mock_lottery, ["coverage", "min_risk", "coverage"], MOCK_PARAMS, 100, rng=rng)


def test_compare_still_rejects_unavailable_strategy(rng):
    with pytest.raises(StrategyNotSupportedError):
        compare_two("min_risk", "guaranteed_win", LOTTERY_6_FROM_45, {}, 100, rng=rng)


def test_best_strategy_guarantee_of_guaranteed_win(rng):
    params = {"guaranteed_win": {}, "min_risk": {"ticketCount": 1}}
    best = get_best_strategy(LOTTERY_12_FROM_24, params, 300, rng=rng)

    assert best.strategy_id == StrategyKind.GUARANTEED_WIN
    assert best.guarantee["probability"] == 1.0


def test_risk_levels():
    assert calculate_risk_level(StrategyKind.GUARANTEED_WIN) < calculate_risk_level(StrategyKind.MIN_RISK)
    assert calculate_risk_level(StrategyKind.FULL_WHEEL) == 6


def test_efficiency(rng):
    result = execute_strategy("coverage", LOTTERY_6_FROM_45, {"budget": 800}, 100, rng=rng)
    # 100% of the field for 800
    assert calculate_efficiency(result) == pytest.approx(1.25)


def test_analyze_cheap_full_coverage(rng):
    analysis = analyze_strategy("coverage", LOTTERY_6_FROM_45, {"budget": 800}, 100, rng=rng)

    assert "High efficiency ratio - good value for money" in analysis.recommendations
    assert "Excellent coverage of the number field" in analysis.recommendations
    assert any(w.startswith("Negative expected value") for w in analysis.warnings)
    assert analysis.metrics.expected_value_per_ticket < 0


def test_analyze_small_ticket_set(rng):
    analysis = analyze_strategy("min_risk", LOTTERY_6_FROM_45, {"ticketCount": 1}, 100, rng=rng)
    assert "Increase ticket count for better coverage" in analysis.recommendations


def test_analyze_large_wheel_warns(rng):
    analysis = analyze_strategy("full_wheel", LOTTERY_6_FROM_45, {"selectedNumbers": 12}, 100, rng=rng)

    assert analysis.result.ticket_count == 924
    assert "High investment required - consider budget constraints" in analysis.warnings
    assert "Large number of tickets - may be impractical to manage" in analysis.warnings


def test_analyze_guaranteed_win(rng):
    analysis = analyze_strategy("guaranteed_win", LOTTERY_12_FROM_24, {}, 300, rng=rng)
    assert "Guarantees at least one winning ticket" in analysis.recommendations
    assert "Ticket set contains duplicate combinations" not in analysis.warnings
