from __future__ import annotations

import random

import pytest

from lottolab.errors import InvalidArgumentError, RangeError
from lottolab.services.combinatorics import (
    binomial,
    combinations,
    difference,
    intersection,
    is_subset,
    make_random_source,
    shuffled,
    union,
    unique,
    unique_random_numbers,
)


def test_combinations_of_four_choose_two():
    combos = combinations([1, 2, 3, 4], 2)

    assert len(combos) == 6
    assert all(len(c) == 2 for c in combos)
    assert len(set(combos)) == 6


def test_combinations_keep_input_order():
    assert combinations(["c", "a", "b"], 2) == [("c", "a"), ("c", "b"), ("a", "b")]


def test_combinations_zero_gives_one_empty_subset():
    assert combinations([1, 2, 3], 0) == [()]


@pytest.mark.parametrize("k", [-1, 4])
def test_combinations_rejects_out_of_range_k(k):
    with pytest.raises(InvalidArgumentError):
        combinations([1, 2, 3], k)


def test_binomial():
    assert binomial(45, 6) == 8_145_060
    assert binomial(5, 0) == 1
    assert binomial(5, 7) == 0
    assert binomial(5, -1) == 0


def test_unique_keeps_first_occurrence():
    assert unique([1, 2, 2, 3, 3, 3]) == [1, 2, 3]
    assert unique([3, 1, 3, 2, 1]) == [3, 1, 2]


def test_intersection_follows_first_argument():
    assert intersection([1, 2, 3, 4], [3, 4, 5, 6]) == [3, 4]
    assert intersection([4, 3, 3], [3, 4]) == [4, 3]
    assert intersection([1, 2], []) == []


def test_difference_union_subset():
    assert difference([1, 2, 3, 4], [2, 4]) == [1, 3]
    assert union([1, 2], [2, 3]) == [1, 2, 3]
    assert is_subset([1, 2], [1, 2, 3])
    assert not is_subset([1, 5], [1, 2, 3])


def test_unique_random_numbers_are_distinct_and_in_range(rng):
    for _ in range(50):
        numbers = unique_random_numbers(1, 20, 8, rng)
        assert len(numbers) == 8
        assert len(set(numbers)) == 8
        assert all(1 <= n <= 20 for n in numbers)


def test_unique_random_numbers_can_take_whole_range(rng):
    assert sorted(unique_random_numbers(5, 9, 5, rng)) == [5, 6, 7, 8, 9]


def test_unique_random_numbers_range_error(rng):
    with pytest.raises(RangeError):
        unique_random_numbers(1, 5, 6, rng)


def test_unique_random_numbers_negative_count(rng):
    with pytest.raises(InvalidArgumentError):
        unique_random_numbers(1, 5, -1, rng)


def test_same_seed_same_numbers():
    a = unique_random_numbers(1, 45, 6, random.Random(7))
    b = unique_random_numbers(1, 45, 6, random.Random(7))
    assert a == b


def test_make_random_source_is_seeded():
    assert make_random_source(99).random() == make_random_source(99).random()


def test_shuffled_does_not_mutate_input(rng):
    items = [1, 2, 3, 4, 5]
    out = shuffled(items, rng)

    assert items == [1, 2, 3, 4, 5]
    assert sorted(out) == items
