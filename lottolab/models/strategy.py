"""Strategy kinds, per-kind parameters and generation/comparison results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lottolab.models.ticket import Ticket


class StrategyKind(str, Enum):
    MIN_RISK = "min_risk"
    COVERAGE = "coverage"
    FULL_WHEEL = "full_wheel"
    WHEEL = "wheel"
    KEY_WHEEL = "key_wheel"
    GUARANTEED_WIN = "guaranteed_win"


@dataclass(frozen=True)
class MinRiskParams:
    ticket_count: int = 10
    spread_numbers: bool = False


@dataclass(frozen=True)
class CoverageParams:
    budget: float
    spread_numbers: bool = False


@dataclass(frozen=True)
class FullWheelParams:
    selected_numbers: int
    numbers: tuple[int, ...] | None = None


@dataclass(frozen=True)
class WheelParams:
    selected_numbers: int
    numbers: tuple[int, ...] | None = None
    guarantee: int = 3


@dataclass(frozen=True)
class KeyWheelParams:
    key_numbers: tuple[int, ...]
    selected_numbers: int
    numbers: tuple[int, ...] | None = None


@dataclass(frozen=True)
class GuaranteedWinParams:
    pass


StrategyParams = (
    MinRiskParams
    | CoverageParams
    | FullWheelParams
    | WheelParams
    | KeyWheelParams
    | GuaranteedWinParams
)


@dataclass(frozen=True)
class StrategyCoverage:
    numbers_covered: int
    number_space: int
    number_percent: float
    combinations_covered: int
    total_combinations: int
    combination_percent: float


@dataclass(frozen=True)
class StrategyResult:
    strategy_id: StrategyKind
    lottery_id: str
    tickets: tuple[Ticket, ...]
    ticket_count: int
    ticket_cost: float
    total_cost: float
    coverage: StrategyCoverage
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StrategyMetrics:
    ticket_count: int
    total_cost: float
    number_coverage: float
    combination_coverage: float
    expected_value_per_ticket: float
    efficiency: float
    risk_level: int
    score: float


@dataclass(frozen=True)
class StrategyComparison:
    strategy_a: StrategyKind
    strategy_b: StrategyKind
    metrics: dict[str, StrategyMetrics]
    cost_difference: float
    ticket_count_difference: int
    coverage_difference: float
    score_difference: float
    better: StrategyKind | None
    reasoning: str


@dataclass(frozen=True)
class BestStrategy:
    strategy_id: StrategyKind
    result: StrategyResult
    score: float
    scores: dict[str, float]
    guarantee: dict[str, Any]
    # Strategy id -> error code of candidates that could not run
    skipped: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StrategyAnalysis:
    result: StrategyResult
    metrics: StrategyMetrics
    recommendations: list[str]
    warnings: list[str]
