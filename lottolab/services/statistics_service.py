"""Descriptive statistics over simulation rounds."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from lottolab.models.simulation import SimulationRound, SimulationStatistics

# Two-sided z values for the supported confidence levels
_Z_SCORES = {0.9: 1.645, 0.95: 1.96, 0.99: 2.576}


@dataclass(frozen=True)
class BasicStats:
    count: int
    sum: float
    min: float
    max: float
    mean: float
    median: float
    std_dev: float


def calculate_basic_stats(values: Sequence[float]) -> BasicStats:
    if len(values) == 0:
        return BasicStats(count=0, sum=0.0, min=0.0, max=0.0, mean=0.0, median=0.0, std_dev=0.0)

    arr = np.asarray(values, dtype=float)
    return BasicStats(
        count=int(arr.size),
        sum=float(arr.sum()),
        min=float(arr.min()),
        max=float(arr.max()),
        mean=float(arr.mean()),
        median=float(np.median(arr)),
        std_dev=float(arr.std()),
    )


def percentile(values: Sequence[float], p: float) -> float:
    """Linearly interpolated percentile, `p` in 0..100."""

    if len(values) == 0:
        return 0.0
    return float(np.percentile(np.asarray(values, dtype=float), p))


def confidence_interval(values: Sequence[float], confidence_level: float = 0.95) -> tuple[float, float]:
    if len(values) == 0:
        return (0.0, 0.0)
    stats = calculate_basic_stats(values)
    z = _Z_SCORES.get(confidence_level, 1.96)
    margin = z * stats.std_dev / np.sqrt(stats.count)
    return (stats.mean - float(margin), stats.mean + float(margin))


def _empty_statistics() -> SimulationStatistics:
    return SimulationStatistics(
        total_investment=0.0,
        total_won=0.0,
        net_return=0.0,
        roi=0.0,
        zero_win_rounds=0,
        zero_win_percent=0.0,
        avg_prize_per_round=0.0,
        max_prize_in_round=0.0,
        min_non_zero_prize=0.0,
        prize_distribution={},
        win_frequency={},
        final_bankroll=0.0,
        min_bankroll=0.0,
        max_bankroll=0.0,
        mean_bankroll=0.0,
        net_outcome_variance=0.0,
        net_outcome_std_dev=0.0,
    )


def calculate_simulation_stats(rounds: Sequence[SimulationRound], ticket_cost: float) -> SimulationStatistics:
    """Aggregate a finished run.

    Variance and standard deviation are population values of the per-round
    net outcome (round prize minus round cost). `win_frequency` is the share
    of all ticket-rounds that landed in each paying category.
    """

    if not rounds:
        return _empty_statistics()

    ticket_count = len(rounds[0].matches)
    round_cost = float(ticket_cost) * ticket_count
    total_investment = round_cost * len(rounds)

    prizes = np.fromiter((r.total_prize_this_round for r in rounds), dtype=float, count=len(rounds))
    bankrolls = np.fromiter((r.bankroll for r in rounds), dtype=float, count=len(rounds))
    net = prizes - round_cost

    total_won = float(prizes.sum())
    net_return = total_won - total_investment
    zero_win_rounds = int(np.count_nonzero(prizes == 0))
    non_zero = prizes[prizes > 0]

    distribution: Counter[str] = Counter(
        m.prize_category for r in rounds for m in r.matches if m.prize_won > 0
    )
    ticket_rounds = ticket_count * len(rounds)

    return SimulationStatistics(
        total_investment=total_investment,
        total_won=total_won,
        net_return=net_return,
        roi=net_return / total_investment * 100 if total_investment else 0.0,
        zero_win_rounds=zero_win_rounds,
        zero_win_percent=zero_win_rounds / len(rounds) * 100,
        avg_prize_per_round=float(prizes.mean()),
        max_prize_in_round=float(prizes.max()),
        min_non_zero_prize=float(non_zero.min()) if non_zero.size else 0.0,
        prize_distribution=dict(sorted(distribution.items())),
        win_frequency={k: v / ticket_rounds for k, v in sorted(distribution.items())},
        final_bankroll=float(bankrolls[-1]),
        min_bankroll=float(bankrolls.min()),
        max_bankroll=float(bankrolls.max()),
        mean_bankroll=float(bankrolls.mean()),
        net_outcome_variance=float(net.var()),
        net_outcome_std_dev=float(net.std()),
    )
