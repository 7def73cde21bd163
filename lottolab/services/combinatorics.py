"""Generic set operations and the single factory of randomness."""

from __future__ import annotations

import random
from itertools import combinations as _combinations
from math import comb
from typing import Hashable, Iterable, Sequence, TypeVar

from lottolab.errors import InvalidArgumentError, RangeError

T = TypeVar("T", bound=Hashable)


def combinations(items: Sequence[T], k: int) -> list[tuple[T, ...]]:
    """Every k-element subset of `items`, in input order."""

    n = len(items)
    if k < 0 or k > n:
        raise InvalidArgumentError(
            message="k must be between 0 and the number of items",
            details={"k": k, "n": n},
        )
    return list(_combinations(items, k))


def binomial(n: int, k: int) -> int:
    if k < 0 or n < 0 or k > n:
        return 0
    return comb(n, k)


def unique(items: Iterable[T]) -> list[T]:
    return list(dict.fromkeys(items))


def intersection(a: Iterable[T], b: Iterable[T]) -> list[T]:
    other = set(b)
    return [x for x in unique(a) if x in other]


def difference(a: Iterable[T], b: Iterable[T]) -> list[T]:
    other = set(b)
    return [x for x in unique(a) if x not in other]


def union(a: Iterable[T], b: Iterable[T]) -> list[T]:
    return unique([*a, *b])


def is_subset(a: Iterable[T], b: Iterable[T]) -> bool:
    return set(a).issubset(set(b))


def shuffled(items: Iterable[T], rng: random.Random) -> list[T]:
    out = list(items)
    rng.shuffle(out)
    return out


def unique_random_numbers(min_value: int, max_value: int, count: int, rng: random.Random) -> list[int]:
    """Draw `count` distinct integers from [min_value, max_value] without replacement."""

    if count < 0:
        raise InvalidArgumentError(message="count must be non-negative", details={"count": count})
    span = max_value - min_value + 1
    if count > max(span, 0):
        raise RangeError(
            message=f"Cannot draw {count} unique numbers from range {min_value}..{max_value}",
            details={"min": min_value, "max": max_value, "count": count},
        )
    return rng.sample(range(min_value, max_value + 1), count)


def make_random_source(seed: int | None = None) -> random.Random:
    """Seeded generator; falls back to the configured RANDOM_SEED, then OS entropy."""

    if seed is None:
        from lottolab.config import get_config

        seed = get_config().RANDOM_SEED
    return random.Random(seed)
