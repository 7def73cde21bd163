"""Exact match probabilities for lottery fields."""

from __future__ import annotations

from fractions import Fraction
from math import prod

from lottolab.errors import MalformedPrizeTableError
from lottolab.models.lottery import Lottery
from lottolab.services.combinatorics import binomial


def probability_of_match(total: int, picked: int, drawn: int, matched: int) -> Fraction:
    """Hypergeometric P(exactly `matched` of `picked` numbers among `drawn` of `total`)."""

    denominator = binomial(total, drawn)
    if denominator == 0:
        return Fraction(0)
    return Fraction(binomial(picked, matched) * binomial(total - picked, drawn - matched), denominator)


def match_vector_probability(lottery: Lottery, vector: tuple[int, ...]) -> Fraction:
    """Probability of an exact per-field match vector for one ticket.

    Fields are drawn independently, so the result is the product of the
    per-field hypergeometric terms.
    """

    if len(vector) != lottery.field_count:
        raise MalformedPrizeTableError(
            message="Match vector does not fit the lottery fields",
            details={"vector": list(vector), "fields": lottery.field_count},
        )
    return prod(
        (probability_of_match(f.size, f.count, f.count, m) for f, m in zip(lottery.fields, vector)),
        start=Fraction(1),
    )


def total_combinations(lottery: Lottery) -> int:
    return prod(binomial(f.size, f.count) for f in lottery.fields)
