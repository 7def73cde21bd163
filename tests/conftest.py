from __future__ import annotations

import random

import pytest

from lottolab.config import get_config
from lottolab.models.lottery import Field, Lottery, PrizeMarker, PrizeRow, PrizeTable


@pytest.fixture
def rng() -> random.Random:
    return random.Random(20240611)


@pytest.fixture
def config():
    return get_config()


@pytest.fixture
def mock_lottery() -> Lottery:
    """Small 6-of-20 lottery offering three strategies."""

    return Lottery(
        id="mock_6_20",
        name="Mock 6/20",
        description="Test lottery",
        fields=(Field(size=20, count=6),),
        default_ticket_cost=100,
        default_superprize=1_000_000,
        available_strategies=("min_risk", "coverage", "full_wheel"),
        prize_table=PrizeTable(
            rows=(
                PrizeRow((6,), PrizeMarker.SUPERPRIZE),
                PrizeRow((5,), 10_000),
                PrizeRow((4,), 500),
                PrizeRow((3,), 100),
            ),
        ),
    )


@pytest.fixture
def tiny_lottery() -> Lottery:
    """2-of-4 lottery small enough to check expectations by hand."""

    return Lottery(
        id="tiny_2_4",
        name="Tiny",
        description="Test lottery",
        fields=(Field(size=4, count=2),),
        default_ticket_cost=100,
        default_superprize=600,
        available_strategies=("min_risk", "guaranteed_win"),
        prize_table=PrizeTable(
            rows=(
                PrizeRow((2,), PrizeMarker.SUPERPRIZE),
                PrizeRow((0,), 60),
            ),
        ),
    )
