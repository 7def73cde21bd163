"""Simulation rounds, aggregated statistics and the final result."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from lottolab.models.ticket import DrawResult, MatchResult, Ticket


@dataclass(frozen=True)
class SimulationRound:
    round_number: int
    draw: DrawResult
    matches: tuple[MatchResult, ...]
    total_prize_this_round: float
    # Cumulative net cash flow after this round
    bankroll: float


@dataclass(frozen=True)
class SimulationStatistics:
    total_investment: float
    total_won: float
    net_return: float
    roi: float
    zero_win_rounds: int
    zero_win_percent: float
    avg_prize_per_round: float
    max_prize_in_round: float
    min_non_zero_prize: float
    prize_distribution: dict[str, int]
    win_frequency: dict[str, float]
    final_bankroll: float
    min_bankroll: float
    max_bankroll: float
    mean_bankroll: float
    net_outcome_variance: float
    net_outcome_std_dev: float


@dataclass(frozen=True)
class SimulationResult:
    lottery_id: str
    tickets: tuple[Ticket, ...]
    ticket_cost: float
    rounds_count: int
    rounds: tuple[SimulationRound, ...]
    statistics: SimulationStatistics
    simulated_at: datetime
