"""Monte Carlo draw simulation against a fixed ticket set."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Sequence

from lottolab.config import get_config
from lottolab.errors import (
    EmptyTicketSetError,
    InvalidArgumentError,
    MalformedPrizeTableError,
    SimulationCancelledError,
)
from lottolab.models.lottery import Lottery, PrizeTable
from lottolab.models.simulation import SimulationResult, SimulationRound
from lottolab.models.ticket import DrawResult, MatchResult, Ticket
from lottolab.services.combinatorics import make_random_source, unique_random_numbers
from lottolab.services.prize_service import all_match_vectors, calculate_prize_amount, prize_category
from lottolab.services.statistics_service import calculate_simulation_stats


logger = logging.getLogger(__name__)

PrizeLookup = dict[tuple[int, ...], tuple[float, str]]


def _validate_tickets(lottery: Lottery, tickets: Sequence[Ticket]) -> None:
    for index, ticket in enumerate(tickets):
        if len(ticket.fields) != lottery.field_count:
            raise InvalidArgumentError(
                message=f"Ticket {index} has {len(ticket.fields)} fields, lottery has {lottery.field_count}",
                details={"ticket_index": index},
            )
        for field, numbers in zip(lottery.fields, ticket.fields):
            if len(numbers) != field.count or len(set(numbers)) != len(numbers):
                raise InvalidArgumentError(
                    message=f"Ticket {index} needs {field.count} unique numbers per field",
                    details={"ticket_index": index, "numbers": list(numbers)},
                )
            if any(n < 1 or n > field.size for n in numbers):
                raise InvalidArgumentError(
                    message=f"Ticket {index} has numbers outside 1..{field.size}",
                    details={"ticket_index": index, "numbers": list(numbers)},
                )


def _build_prize_lookup(
    lottery: Lottery,
    prize_table: PrizeTable,
    superprize: float,
    secondary_prize: float | None,
    average_pool: float | None,
) -> PrizeLookup:
    """Payout and category for every reachable match vector, resolved up front."""

    lookup: PrizeLookup = {}
    for vector in all_match_vectors(lottery):
        amount = calculate_prize_amount(prize_table, vector, superprize, secondary_prize, average_pool)
        lookup[vector] = (amount, prize_category(vector))
    return lookup


def draw_numbers(lottery: Lottery, rng: random.Random) -> DrawResult:
    drawn = [tuple(sorted(unique_random_numbers(1, f.size, f.count, rng))) for f in lottery.fields]
    return DrawResult(field1=drawn[0], field2=drawn[1] if len(drawn) > 1 else None)


def _evaluate_draw(
    draw: DrawResult,
    ticket_sets: Sequence[tuple[frozenset[int], ...]],
    lookup: PrizeLookup,
) -> tuple[tuple[MatchResult, ...], float]:
    drawn = [set(f) for f in draw.fields]
    matches: list[MatchResult] = []
    total = 0.0

    for index, fields in enumerate(ticket_sets):
        vector = tuple(len(f & d) for f, d in zip(fields, drawn))
        amount, category = lookup[vector]
        matches.append(
            MatchResult(ticket_index=index, field_matches=vector, prize_won=amount, prize_category=category)
        )
        total += amount

    return tuple(matches), total


def simulate_lottery(
    lottery: Lottery,
    tickets: Sequence[Ticket],
    rounds_count: int,
    prize_table: PrizeTable,
    superprize: float,
    ticket_cost: float,
    secondary_prize: float | None = None,
    average_pool: float | None = None,
    *,
    rng: random.Random | None = None,
    workers: int | None = None,
    batch_size: int | None = None,
    should_cancel: Callable[[], bool] | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> SimulationResult:
    """Play `tickets` for `rounds_count` random draws.

    Every input is validated before the first round. Draws come from `rng`
    in round order; evaluation of a batch may run on `workers` threads, and
    the bankroll is accumulated afterwards in round order, so the result is
    the same for any worker count. `should_cancel` is polled before each
    batch and aborts the whole run.
    """

    config = get_config()

    if not tickets:
        raise EmptyTicketSetError(message="Cannot simulate without tickets")
    if rounds_count < 1 or rounds_count > config.MAX_SIMULATION_ROUNDS:
        raise InvalidArgumentError(
            message=f"Rounds must be between 1 and {config.MAX_SIMULATION_ROUNDS}",
            details={"rounds_count": rounds_count},
        )
    if ticket_cost < 0:
        raise InvalidArgumentError(message="Ticket cost must not be negative", details={"ticket_cost": ticket_cost})
    if prize_table.rows and prize_table.arity != lottery.field_count:
        raise MalformedPrizeTableError(
            message=f"Prize table arity {prize_table.arity} does not match {lottery.field_count} fields",
            details={"lottery_id": lottery.id, "arity": prize_table.arity},
        )
    _validate_tickets(lottery, tickets)

    lookup = _build_prize_lookup(lottery, prize_table, superprize, secondary_prize, average_pool)
    ticket_sets = [tuple(frozenset(f) for f in t.fields) for t in tickets]

    rng = rng if rng is not None else make_random_source()
    workers = max(1, workers if workers is not None else config.SIMULATION_WORKERS)
    batch_size = max(1, batch_size if batch_size is not None else config.SIMULATION_BATCH_SIZE)
    round_cost = float(ticket_cost) * len(tickets)

    logger.info(
        "Simulating %d rounds of %d tickets for %s (workers=%d, batch=%d)",
        rounds_count,
        len(tickets),
        lottery.id,
        workers,
        batch_size,
    )

    evaluate = partial(_evaluate_draw, ticket_sets=ticket_sets, lookup=lookup)
    rounds: list[SimulationRound] = []
    bankroll = 0.0
    executor = ThreadPoolExecutor(max_workers=workers) if workers > 1 else None

    try:
        for start in range(0, rounds_count, batch_size):
            if should_cancel is not None and should_cancel():
                raise SimulationCancelledError(
                    message=f"Simulation cancelled after {start} rounds",
                    details={"completed_rounds": start, "rounds_count": rounds_count},
                )

            size = min(batch_size, rounds_count - start)
            draws = [draw_numbers(lottery, rng) for _ in range(size)]

            if executor is not None:
                evaluated = list(executor.map(evaluate, draws))
            else:
                evaluated = [evaluate(d) for d in draws]

            for offset, (draw, (matches, prize)) in enumerate(zip(draws, evaluated)):
                bankroll = bankroll - round_cost + prize
                rounds.append(
                    SimulationRound(
                        round_number=start + offset + 1,
                        draw=draw,
                        matches=matches,
                        total_prize_this_round=prize,
                        bankroll=bankroll,
                    )
                )

            done = start + size
            logger.debug("Simulated %d/%d rounds", done, rounds_count)
            if progress_callback is not None:
                progress_callback(done, rounds_count)
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    statistics = calculate_simulation_stats(rounds, ticket_cost)
    logger.info(
        "Simulation for %s finished: won %.2f, net %.2f",
        lottery.id,
        statistics.total_won,
        statistics.net_return,
    )

    return SimulationResult(
        lottery_id=lottery.id,
        tickets=tuple(tickets),
        ticket_cost=float(ticket_cost),
        rounds_count=rounds_count,
        rounds=tuple(rounds),
        statistics=statistics,
        simulated_at=datetime.now(timezone.utc),
    )
