"""Strategy comparison and analysis controllers. No business logic here."""

from __future__ import annotations

from typing import Any

from lottolab.error_handlers import handle_errors
from lottolab.repositories.lottery_repository import require_lottery
from lottolab.schemas.strategy import (
    AnalyzeRequestSchema,
    BestStrategyRequestSchema,
    BestStrategySchema,
    CompareRequestSchema,
    StrategyAnalysisSchema,
    StrategyComparisonSchema,
)
from lottolab.services.combinatorics import make_random_source
from lottolab.services.comparison_service import analyze_strategy, compare_multiple, get_best_strategy
from lottolab.utils.responses import ok

_compare_request_schema = CompareRequestSchema()
_best_request_schema = BestStrategyRequestSchema()
_analyze_request_schema = AnalyzeRequestSchema()
_comparison_schema = StrategyComparisonSchema()
_best_schema = BestStrategySchema()
_analysis_schema = StrategyAnalysisSchema()


@handle_errors
def compare_strategies(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    data = _compare_request_schema.load(payload or {})
    lottery = require_lottery(data["lottery_id"])

    comparisons = compare_multiple(
        lottery,
        data["strategy_ids"],
        data["params"],
        data["ticket_cost"] or lottery.default_ticket_cost,
        rng=make_random_source(data["seed"]),
    )
    return ok({"comparisons": _comparison_schema.dump(comparisons, many=True), "count": len(comparisons)})


@handle_errors
def best_strategy(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    data = _best_request_schema.load(payload or {})
    lottery = require_lottery(data["lottery_id"])

    best = get_best_strategy(
        lottery,
        data["params"],
        data["ticket_cost"] or lottery.default_ticket_cost,
        rng=make_random_source(data["seed"]),
    )
    return ok(_best_schema.dump(best))


@handle_errors
def analyze(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    data = _analyze_request_schema.load(payload or {})
    lottery = require_lottery(data["lottery_id"])

    analysis = analyze_strategy(
        data["strategy_id"],
        lottery,
        data["params"],
        data["ticket_cost"] or lottery.default_ticket_cost,
        rng=make_random_source(data["seed"]),
    )
    return ok(_analysis_schema.dump(analysis))
