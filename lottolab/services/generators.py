"""Ticket generation algorithms, one per strategy kind.

Every generator has the shape
``(lottery, params, ticket_cost, rng, config) -> (tickets, details)``
where ``details`` is merged into the result metadata.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from itertools import product
from typing import Any, Sequence

from lottolab.config import BaseConfig
from lottolab.errors import (
    ComboExplosionError,
    InsufficientBudgetError,
    InvalidParameterError,
    StrategyNotSupportedError,
)
from lottolab.models.lottery import Field, Lottery, PrizeMarker, PrizeRow
from lottolab.models.strategy import (
    CoverageParams,
    FullWheelParams,
    GuaranteedWinParams,
    KeyWheelParams,
    MinRiskParams,
    WheelParams,
)
from lottolab.models.ticket import Ticket
from lottolab.services.combinatorics import binomial, combinations, shuffled
from lottolab.services.prize_service import find_prize_row


logger = logging.getLogger(__name__)

Generated = tuple[list[Ticket], dict[str, Any]]


def _window(order: Sequence[int], index: int, count: int) -> tuple[int, ...]:
    size = len(order)
    return tuple(order[(index * count + j) % size] for j in range(count))


def _second_fields(lottery: Lottery, n_tickets: int, rng: random.Random) -> list[tuple[int, ...] | None]:
    """Field 2 for each ticket: rotating windows over a shuffled order."""

    if lottery.field_count < 2:
        return [None] * n_tickets
    field = lottery.fields[1]
    order = shuffled(field.numbers, rng)
    return [_window(order, i, field.count) for i in range(n_tickets)]


def _build_tickets(lottery: Lottery, first_fields: Sequence[Sequence[int]], rng: random.Random) -> list[Ticket]:
    seconds = _second_fields(lottery, len(first_fields), rng)
    return [
        Ticket(lottery_id=lottery.id, field1=tuple(f1), field2=f2)
        for f1, f2 in zip(first_fields, seconds)
    ]


def _check_combo_bound(pool_size: int, pick: int, config: type[BaseConfig]) -> int:
    total = binomial(pool_size, pick)
    if total > config.MAX_WHEEL_COMBINATIONS:
        raise ComboExplosionError(
            message=f"C({pool_size}, {pick}) = {total} exceeds the limit of {config.MAX_WHEEL_COMBINATIONS}",
            details={"pool_size": pool_size, "pick": pick, "combinations": total},
        )
    return total


def _resolve_pool(
    field: Field,
    selected_numbers: int | None,
    numbers: Sequence[int] | None,
    minimum: int,
    rng: random.Random,
    exclude: Sequence[int] = (),
) -> list[int]:
    """Explicit `numbers` minus `exclude`, or a random sample of `selected_numbers`."""

    excluded = set(exclude)
    available = [n for n in field.numbers if n not in excluded]

    if numbers:
        pool = [int(n) for n in numbers if int(n) not in excluded]
        if len(set(pool)) != len(pool):
            raise InvalidParameterError(message="Pool numbers must be unique", details={"numbers": list(numbers)})
        out_of_range = [n for n in pool if n < 1 or n > field.size]
        if out_of_range:
            raise InvalidParameterError(
                message=f"Pool numbers must be within 1..{field.size}",
                details={"numbers": out_of_range},
            )
    else:
        if selected_numbers is None:
            raise InvalidParameterError(message="selectedNumbers or numbers is required")
        if selected_numbers > len(available):
            raise InvalidParameterError(
                message=f"selectedNumbers must be at most {len(available)}",
                details={"selectedNumbers": selected_numbers},
            )
        pool = rng.sample(available, selected_numbers) if selected_numbers >= minimum else []

    if len(pool) < minimum:
        raise InvalidParameterError(
            message=f"Pool needs at least {minimum} numbers",
            details={"pool_size": len(pool), "minimum": minimum},
        )
    return sorted(pool)


def generate_min_risk(
    lottery: Lottery,
    params: MinRiskParams,
    ticket_cost: float,
    rng: random.Random,
    config: type[BaseConfig],
) -> Generated:
    """Tickets with minimal number overlap.

    Each ticket is the best of MIN_RISK_CANDIDATES random candidates, scored by
    the summed usage of its numbers so far (equal to the total pairwise
    intersection with earlier tickets). Unseen combinations win ties.
    """

    field = lottery.fields[0]
    numbers = list(field.numbers)
    firsts: list[tuple[int, ...]] = []

    if params.spread_numbers:
        order = shuffled(numbers, rng)
        firsts = [tuple(sorted(_window(order, i, field.count))) for i in range(params.ticket_count)]
    else:
        usage: Counter[int] = Counter()
        seen: set[tuple[int, ...]] = set()
        candidates = max(1, config.MIN_RISK_CANDIDATES)
        for _ in range(params.ticket_count):
            drawn = [tuple(sorted(rng.sample(numbers, field.count))) for _ in range(candidates)]
            # min() keeps the first of equal keys
            best = min(drawn, key=lambda c: (c in seen, sum(usage[n] for n in c)))
            firsts.append(best)
            seen.add(best)
            usage.update(best)

    return _build_tickets(lottery, firsts, rng), {"spread_numbers": params.spread_numbers}


def generate_coverage(
    lottery: Lottery,
    params: CoverageParams,
    ticket_cost: float,
    rng: random.Random,
    config: type[BaseConfig],
) -> Generated:
    """As many tickets as the budget buys, least-used numbers first."""

    ticket_count = int(params.budget // ticket_cost)
    if ticket_count < 1:
        raise InsufficientBudgetError(
            message=f"Budget {params.budget} does not cover one ticket at {ticket_cost}",
            details={"budget": params.budget, "ticket_cost": ticket_cost},
        )

    field = lottery.fields[0]
    numbers = list(field.numbers)
    firsts: list[tuple[int, ...]] = []

    if params.spread_numbers:
        firsts = [tuple(sorted(_window(numbers, i, field.count))) for i in range(ticket_count)]
    else:
        usage: Counter[int] = Counter()
        for _ in range(ticket_count):
            # sorted() is stable, so the shuffle decides ties
            picked = sorted(shuffled(numbers, rng), key=lambda n: usage[n])[: field.count]
            firsts.append(tuple(sorted(picked)))
            usage.update(picked)

    details = {"budget": params.budget, "spread_numbers": params.spread_numbers}
    return _build_tickets(lottery, firsts, rng), details


def generate_full_wheel(
    lottery: Lottery,
    params: FullWheelParams,
    ticket_cost: float,
    rng: random.Random,
    config: type[BaseConfig],
) -> Generated:
    """Every pick-sized combination of the pool."""

    field = lottery.fields[0]
    pool = _resolve_pool(field, params.selected_numbers, params.numbers, field.count, rng)
    _check_combo_bound(len(pool), field.count, config)

    firsts = combinations(pool, field.count)
    return _build_tickets(lottery, firsts, rng), {"pool": pool}


def _greedy_wheel(combos: list[tuple[int, ...]], guarantee: int, rng: random.Random) -> list[tuple[int, ...]]:
    remaining = shuffled(combos, rng)
    picked: list[tuple[int, ...]] = []

    while remaining:
        current = remaining.pop(0)
        picked.append(current)
        current_set = set(current)
        remaining = [c for c in remaining if len(current_set.intersection(c)) < guarantee]

    return picked


def generate_wheel(
    lottery: Lottery,
    params: WheelParams,
    ticket_cost: float,
    rng: random.Random,
    config: type[BaseConfig],
) -> Generated:
    """Abbreviated wheel.

    If every drawn field-1 number is in the pool, at least one ticket
    matches `guarantee` of them.
    """

    field = lottery.fields[0]
    pool = _resolve_pool(field, params.selected_numbers, params.numbers, field.count, rng)
    _check_combo_bound(len(pool), field.count, config)

    guarantee = min(params.guarantee, field.count)
    firsts = _greedy_wheel(combinations(pool, field.count), guarantee, rng)
    firsts.sort()

    details = {"pool": pool, "guarantee": guarantee, "full_wheel_size": binomial(len(pool), field.count)}
    return _build_tickets(lottery, firsts, rng), details


def generate_key_wheel(
    lottery: Lottery,
    params: KeyWheelParams,
    ticket_cost: float,
    rng: random.Random,
    config: type[BaseConfig],
) -> Generated:
    """Key numbers in every ticket; the other slots fully wheeled."""

    field = lottery.fields[0]
    keys = sorted(int(k) for k in params.key_numbers)

    if len(set(keys)) != len(keys):
        raise InvalidParameterError(message="Key numbers must be unique", details={"keyNumbers": keys})
    if any(k < 1 or k > field.size for k in keys):
        raise InvalidParameterError(message=f"Key numbers must be within 1..{field.size}", details={"keyNumbers": keys})
    if len(keys) >= field.count:
        raise InvalidParameterError(
            message=f"Use fewer than {field.count} key numbers",
            details={"keyNumbers": keys},
        )

    slots = field.count - len(keys)
    pool = _resolve_pool(field, params.selected_numbers, params.numbers, slots, rng, exclude=keys)
    _check_combo_bound(len(pool), slots, config)

    firsts = [tuple(sorted((*keys, *rest))) for rest in combinations(pool, slots)]
    return _build_tickets(lottery, firsts, rng), {"key_numbers": keys, "pool": pool}


def _row_pays(row: PrizeRow | None) -> bool:
    if row is None:
        return False
    if row.is_pool_percentage:
        return float(row.prize_percent) > 0
    if isinstance(row.prize, PrizeMarker):
        return True
    return float(row.prize) > 0


def _block_sizes(size: int, count: int) -> list[int]:
    return [b for b in range(count, 0, -1) if size % b == 0 and count % b == 0]


def _cover_with_blocks(
    block_size: int,
    block_count: int,
    pick: int,
    paying: set[int],
) -> tuple[list[tuple[int, ...]], int] | None:
    """Greedy cover of every block hit profile by unions of blocks.

    Returns the chosen block-index tuples and the number of profiles, or
    None when some profile cannot be covered.
    """

    profiles = [
        hits for hits in product(range(block_size + 1), repeat=block_count) if sum(hits) == pick
    ]
    candidates = combinations(range(block_count), pick // block_size)

    covers: list[set[int]] = []
    for cand in candidates:
        covers.append({i for i, hits in enumerate(profiles) if sum(hits[b] for b in cand) in paying})

    uncovered = set(range(len(profiles)))
    if uncovered - set().union(*covers):
        return None

    chosen: list[tuple[int, ...]] = []
    while uncovered:
        best = max(range(len(candidates)), key=lambda i: len(covers[i] & uncovered))
        chosen.append(candidates[best])
        uncovered -= covers[best]
    return chosen, len(profiles)


def generate_guaranteed_win(
    lottery: Lottery,
    params: GuaranteedWinParams,
    ticket_cost: float,
    rng: random.Random,
    config: type[BaseConfig],
) -> Generated:
    """Ticket set where every possible draw pays on at least one ticket.

    Applies to single-field formats picking half the field whose table pays
    both zero and full matches. Numbers are shuffled into equal blocks and a
    draw is reduced to its per-block hit counts; tickets are unions of blocks.
    """

    table = lottery.resolve_prize_table()
    field = lottery.fields[0]

    if lottery.field_count != 1 or 2 * field.count != field.size:
        raise StrategyNotSupportedError(
            message=f"Guaranteed win needs a single field picking half its numbers ({lottery.id})",
            details={"lottery_id": lottery.id},
        )

    paying = {m for m in range(field.count + 1) if _row_pays(find_prize_row(table, (m,)))}
    if 0 not in paying or field.count not in paying:
        raise StrategyNotSupportedError(
            message=f"Prize table of {lottery.id} does not pay complementary matches",
            details={"lottery_id": lottery.id, "paying_matches": sorted(paying)},
        )

    order = shuffled(field.numbers, rng)
    for block_size in _block_sizes(field.size, field.count):
        block_count = field.size // block_size
        if (block_size + 1) ** block_count > config.GUARANTEE_ENUMERATION_LIMIT:
            logger.debug("Skipping block size %d: enumeration too large", block_size)
            continue

        cover = _cover_with_blocks(block_size, block_count, field.count, paying)
        if cover is None:
            logger.debug("Block size %d cannot cover every draw", block_size)
            continue

        chosen, profiles = cover
        blocks = [order[i * block_size : (i + 1) * block_size] for i in range(block_count)]
        firsts = [tuple(sorted(n for b in cand for n in blocks[b])) for cand in chosen]
        details = {
            "block_size": block_size,
            "blocks": [sorted(b) for b in blocks],
            "hit_profiles": profiles,
            "paying_matches": sorted(paying),
        }
        return _build_tickets(lottery, firsts, rng), details

    raise StrategyNotSupportedError(
        message=f"No block layout guarantees a win for {lottery.id}",
        details={"lottery_id": lottery.id},
    )
