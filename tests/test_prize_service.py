from __future__ import annotations

import logging
from fractions import Fraction

import pytest

from lottolab.catalog import (
    LOTTERY_4_FROM_20,
    LOTTERY_5_FROM_36_PLUS_1,
    LOTTERY_6_FROM_45,
    LOTTERY_8_PLUS_1,
    LOTTERY_12_FROM_24,
)
from lottolab.errors import MalformedPrizeTableError, MissingPrizeParameterError
from lottolab.models.lottery import PrizeTable
from lottolab.models.ticket import DrawResult, Ticket
from lottolab.services.prize_service import (
    calculate_expected_value,
    calculate_prize_amount,
    count_matches,
    find_prize_row,
    is_winning_combination,
    prize_category,
    prize_table_with_probabilities,
)
from lottolab.services.probability import (
    match_vector_probability,
    probability_of_match,
    total_combinations,
)

FIXED_4_20 = LOTTERY_4_FROM_20.resolve_prize_table("fixed")
POOL_4_20 = LOTTERY_4_FROM_20.resolve_prize_table("pool_percentage")


def test_superprize_on_exact_key():
    table = LOTTERY_8_PLUS_1.resolve_prize_table()
    assert calculate_prize_amount(table, (8, 1), 7_777_777) == 7_777_777


def test_fixed_row():
    table = LOTTERY_8_PLUS_1.resolve_prize_table()
    assert calculate_prize_amount(table, (7, 1), 5_000_000) == 75_000
    assert calculate_prize_amount(table, (4, 1), 5_000_000) == 300


def test_no_matching_row_pays_zero():
    table = LOTTERY_8_PLUS_1.resolve_prize_table()
    assert calculate_prize_amount(table, (3, 0), 5_000_000) == 0
    assert calculate_prize_amount(table, (4, 0), 5_000_000) == 0


def test_partial_key_matches_any_second_field():
    table = LOTTERY_5_FROM_36_PLUS_1.resolve_prize_table()
    assert calculate_prize_amount(table, (4, 0), 1) == 7_500
    assert calculate_prize_amount(table, (4, 1), 1) == 7_500
    assert calculate_prize_amount(table, (2, 1), 1) == 75


def test_longer_key_wins_over_partial():
    table = LOTTERY_5_FROM_36_PLUS_1.resolve_prize_table()
    assert calculate_prize_amount(table, (5, 1), 500_000_000, 100_000_000) == 500_000_000
    assert calculate_prize_amount(table, (5, 0), 500_000_000, 100_000_000) == 100_000_000


def test_undefined_secondary_prize_pays_zero_and_warns(caplog):
    table = LOTTERY_5_FROM_36_PLUS_1.resolve_prize_table()

    with caplog.at_level(logging.WARNING, logger="lottolab.services.prize_service"):
        amount = calculate_prize_amount(table, (5, 0), 500_000_000)

    assert amount == 0
    assert "Secondary prize undefined" in caplog.text


def test_arity_mismatch_raises():
    table = LOTTERY_8_PLUS_1.resolve_prize_table()
    with pytest.raises(MalformedPrizeTableError):
        calculate_prize_amount(table, (8,), 1)
    with pytest.raises(MalformedPrizeTableError):
        calculate_prize_amount(LOTTERY_6_FROM_45.resolve_prize_table(), (6, 1), 1)


def test_empty_table_pays_nothing():
    assert calculate_prize_amount(PrizeTable(rows=()), (3, 1, 2), 1_000) == 0


def test_symmetric_lookup():
    assert calculate_prize_amount(FIXED_4_20, (3, 4), 0) == 100_000
    assert calculate_prize_amount(FIXED_4_20, (4, 3), 0) == 100_000
    assert calculate_prize_amount(FIXED_4_20, (4, 0), 0) == 4_000
    assert calculate_prize_amount(FIXED_4_20, (2, 1), 0) == 100
    assert calculate_prize_amount(FIXED_4_20, (4, 4), 50_000_000) == 50_000_000
    assert calculate_prize_amount(FIXED_4_20, (1, 1), 0) == 0


@pytest.mark.parametrize(
    "vector, expected",
    [
        ((3, 4), 124_800),
        ((2, 3), 255_200),
        ((0, 2), 1_000_000),
        ((4, 2), 60_000),
        ((4, 4), 1_200_000),
    ],
)
def test_pool_percentage_is_floored_share_of_pool(vector, expected):
    assert calculate_prize_amount(POOL_4_20, vector, 0, average_pool=4_000_000) == expected


def test_fixed_row_inside_pool_table():
    assert calculate_prize_amount(POOL_4_20, (2, 1), 0, average_pool=4_000_000) == 400


@pytest.mark.parametrize("pool", [None, 0])
def test_pool_percentage_without_pool_raises(pool):
    with pytest.raises(MissingPrizeParameterError):
        calculate_prize_amount(POOL_4_20, (3, 4), 0, average_pool=pool)


def test_complementary_rows_of_12_24():
    table = LOTTERY_12_FROM_24.resolve_prize_table()
    for low, high in [(0, 12), (1, 11), (2, 10), (3, 9), (4, 8)]:
        assert calculate_prize_amount(table, (low,), 100) == calculate_prize_amount(table, (high,), 100)
    for middle in (5, 6, 7):
        assert calculate_prize_amount(table, (middle,), 100) == 0


def test_find_prize_row_and_winning():
    table = LOTTERY_8_PLUS_1.resolve_prize_table()

    assert find_prize_row(table, (6, 0)).prize == 1_500
    assert find_prize_row(table, (2, 1)) is None
    assert is_winning_combination(table, (5, 0), 1)
    assert not is_winning_combination(table, (3, 1), 1)


def test_prize_category():
    assert prize_category((4, 1)) == "4+1"
    assert prize_category((6,)) == "6"


def test_count_matches():
    ticket = Ticket(lottery_id="lottery_8_1", field1=(1, 2, 3, 4, 5, 6, 7, 8), field2=(2,))
    draw = DrawResult(field1=(1, 2, 3, 10, 11, 12, 13, 14), field2=(2,))

    assert count_matches(ticket, draw) == (3, 1)


def test_probability_of_match():
    assert probability_of_match(45, 6, 6, 6) == Fraction(1, 8_145_060)
    assert sum(probability_of_match(45, 6, 6, m) for m in range(7)) == 1


def test_match_vector_probability_multiplies_fields():
    p = match_vector_probability(LOTTERY_8_PLUS_1, (8, 1))
    assert p == Fraction(1, 125_970) * Fraction(1, 4)


def test_total_combinations():
    assert total_combinations(LOTTERY_6_FROM_45) == 8_145_060
    assert total_combinations(LOTTERY_8_PLUS_1) == 125_970 * 4


def test_expected_value_by_hand(tiny_lottery):
    # P(2) = 1/6 pays 600, P(0) = 1/6 pays 60
    ev = calculate_expected_value(tiny_lottery, tiny_lottery.resolve_prize_table(), 600, 100)

    assert ev.expected_prize == pytest.approx(110)
    assert ev.expected_value == pytest.approx(10)
    assert ev.ev_percent == pytest.approx(110)
    assert ev.is_profitable


def test_expected_value_of_real_lottery_is_negative():
    ev = calculate_expected_value(
        LOTTERY_6_FROM_45,
        LOTTERY_6_FROM_45.resolve_prize_table(),
        LOTTERY_6_FROM_45.default_superprize,
        LOTTERY_6_FROM_45.default_ticket_cost,
    )

    assert 0 < ev.expected_prize < 100
    assert not ev.is_profitable


def test_prize_table_with_probabilities():
    rows = prize_table_with_probabilities(LOTTERY_6_FROM_45, LOTTERY_6_FROM_45.resolve_prize_table())

    assert [r.row.matches for r in rows] == [(6,), (5,), (4,), (3,)]
    assert rows[0].probability == pytest.approx(1 / 8_145_060)
    assert rows[0].odds == pytest.approx(8_145_060)


def test_partial_row_probability_sums_second_field():
    rows = prize_table_with_probabilities(LOTTERY_5_FROM_36_PLUS_1, LOTTERY_5_FROM_36_PLUS_1.resolve_prize_table())
    by_key = {r.row.matches: r.probability for r in rows}

    assert by_key[(4,)] == pytest.approx(float(probability_of_match(36, 5, 5, 4)))
