"""Prize resolution: map a match vector to a payout under a prize table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from itertools import product
from math import floor

from lottolab.errors import MalformedPrizeTableError, MissingPrizeParameterError
from lottolab.models.lottery import Lottery, PrizeMarker, PrizeRow, PrizeTable, canonical_key
from lottolab.models.ticket import DrawResult, Ticket
from lottolab.services.probability import match_vector_probability


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpectedValue:
    expected_prize: float
    expected_value: float
    ev_percent: float
    is_profitable: bool


@dataclass(frozen=True)
class PrizeRowProbability:
    row: PrizeRow
    probability: float
    odds: float | None


@lru_cache(maxsize=64)
def _row_index(prize_table: PrizeTable) -> dict[tuple[int, ...], PrizeRow]:
    index: dict[tuple[int, ...], PrizeRow] = {}
    for row in prize_table.rows:
        index[row.matches] = row
        if prize_table.symmetric:
            index.setdefault(canonical_key(row.matches), row)
    return index


def find_prize_row(prize_table: PrizeTable, match_vector: tuple[int, ...]) -> PrizeRow | None:
    """Most specific row whose key is a prefix of `match_vector`.

    A row keyed by fewer fields than the vector pays regardless of the
    remaining fields, but only when no longer key matches.
    """

    index = _row_index(prize_table)
    vector = tuple(int(m) for m in match_vector)
    for length in range(len(vector), 0, -1):
        prefix = vector[:length]
        row = index.get(prefix)
        if row is None and prize_table.symmetric:
            row = index.get(canonical_key(prefix))
        if row is not None:
            return row
    return None


def calculate_prize_amount(
    prize_table: PrizeTable,
    match_vector: tuple[int, ...],
    superprize: float,
    secondary_prize: float | None = None,
    average_pool: float | None = None,
) -> float:
    """Resolve the payout for one match vector.

    Superprize and secondary markers take the given monetary values. A
    secondary prize that is not defined pays 0 and logs a warning. A
    pool-percentage row without a positive `average_pool` raises
    MissingPrizeParameterError.
    """

    if not prize_table.rows:
        return 0.0

    if len(match_vector) != prize_table.arity:
        raise MalformedPrizeTableError(
            message="Match vector length does not match prize table arity",
            details={"vector": list(match_vector), "arity": prize_table.arity},
        )

    row = find_prize_row(prize_table, match_vector)
    if row is None:
        return 0.0

    if row.is_pool_percentage:
        if average_pool is None or average_pool <= 0:
            raise MissingPrizeParameterError(
                message="Pool-percentage prize row needs a positive average pool",
                details={"matches": list(row.matches), "prize_percent": row.prize_percent},
            )
        # Rounded before flooring so 3.12% of 4,000,000 stays 124800
        return float(floor(round(float(row.prize_percent) * float(average_pool) / 100, 6)))

    if row.prize == PrizeMarker.SUPERPRIZE:
        return float(superprize)

    if row.prize == PrizeMarker.SECONDARY:
        if secondary_prize is None:
            logger.warning("Secondary prize undefined for matches %s, paying 0", list(row.matches))
            return 0.0
        return float(secondary_prize)

    return float(row.prize)


def is_winning_combination(
    prize_table: PrizeTable,
    match_vector: tuple[int, ...],
    superprize: float,
    secondary_prize: float | None = None,
    average_pool: float | None = None,
) -> bool:
    return calculate_prize_amount(prize_table, match_vector, superprize, secondary_prize, average_pool) > 0


def prize_category(match_vector: tuple[int, ...]) -> str:
    """Label such as "4+1" for a two-field vector or "6" for a single field."""

    return "+".join(str(int(m)) for m in match_vector)


def count_matches(ticket: Ticket, draw: DrawResult) -> tuple[int, ...]:
    if len(ticket.fields) != len(draw.fields):
        raise MalformedPrizeTableError(
            message="Ticket and draw have different field counts",
            details={"ticket_fields": len(ticket.fields), "draw_fields": len(draw.fields)},
        )
    return tuple(len(set(t).intersection(d)) for t, d in zip(ticket.fields, draw.fields))


def all_match_vectors(lottery: Lottery) -> list[tuple[int, ...]]:
    return list(product(*(range(f.count + 1) for f in lottery.fields)))


def calculate_expected_value(
    lottery: Lottery,
    prize_table: PrizeTable,
    superprize: float,
    ticket_cost: float,
    secondary_prize: float | None = None,
    average_pool: float | None = None,
) -> ExpectedValue:
    """Exact expected prize of one ticket, summed over every match vector."""

    expected_prize = 0.0
    for vector in all_match_vectors(lottery):
        amount = calculate_prize_amount(prize_table, vector, superprize, secondary_prize, average_pool)
        if amount:
            expected_prize += float(match_vector_probability(lottery, vector)) * amount

    expected_value = expected_prize - float(ticket_cost)
    ev_percent = expected_prize / float(ticket_cost) * 100 if ticket_cost else 0.0
    return ExpectedValue(
        expected_prize=expected_prize,
        expected_value=expected_value,
        ev_percent=ev_percent,
        is_profitable=expected_value > 0,
    )


def prize_table_with_probabilities(lottery: Lottery, prize_table: PrizeTable) -> list[PrizeRowProbability]:
    """Each row paired with the probability that one ticket lands on it."""

    totals: dict[tuple[int, ...], float] = {row.matches: 0.0 for row in prize_table.rows}
    for vector in all_match_vectors(lottery):
        row = find_prize_row(prize_table, vector)
        if row is not None:
            totals[row.matches] += float(match_vector_probability(lottery, vector))

    out: list[PrizeRowProbability] = []
    for row in prize_table.rows:
        p = totals[row.matches]
        out.append(PrizeRowProbability(row=row, probability=p, odds=(1 / p) if p > 0 else None))
    return out
