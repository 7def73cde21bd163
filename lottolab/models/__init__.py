"""Value objects of the computation core."""

from lottolab.models.lottery import (
    Field,
    Lottery,
    LotteryVariant,
    PrizeMarker,
    PrizeRow,
    PrizeTable,
    VariantType,
)
from lottolab.models.simulation import SimulationResult, SimulationRound, SimulationStatistics
from lottolab.models.strategy import (
    BestStrategy,
    StrategyAnalysis,
    StrategyComparison,
    StrategyCoverage,
    StrategyKind,
    StrategyMetrics,
    StrategyResult,
)
from lottolab.models.ticket import DrawResult, MatchResult, Ticket

__all__ = [
    "BestStrategy",
    "DrawResult",
    "Field",
    "Lottery",
    "LotteryVariant",
    "MatchResult",
    "PrizeMarker",
    "PrizeRow",
    "PrizeTable",
    "SimulationResult",
    "SimulationRound",
    "SimulationStatistics",
    "StrategyAnalysis",
    "StrategyComparison",
    "StrategyCoverage",
    "StrategyKind",
    "StrategyMetrics",
    "StrategyResult",
    "Ticket",
    "VariantType",
]
