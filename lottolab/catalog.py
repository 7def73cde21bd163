"""Lottery reference data.

Six formats, defined once at import and shared read-only across the process.
"""

from __future__ import annotations

from types import MappingProxyType

from lottolab.models.lottery import (
    Field,
    Lottery,
    LotteryVariant,
    PrizeMarker,
    PrizeRow,
    PrizeTable,
    VariantType,
)

SUPERPRIZE = PrizeMarker.SUPERPRIZE
SECONDARY = PrizeMarker.SECONDARY


# 8 of 20 + 1 of 4
LOTTERY_8_PLUS_1 = Lottery(
    id="lottery_8_1",
    name="8 + 1",
    description="8 из 20 + 1 из 4",
    fields=(Field(size=20, count=8), Field(size=4, count=1)),
    default_ticket_cost=300,
    default_superprize=5_000_000,
    prize_table=PrizeTable(
        rows=(
            PrizeRow((8, 1), SUPERPRIZE),
            PrizeRow((8, 0), 300_000),
            PrizeRow((7, 1), 75_000),
            PrizeRow((7, 0), 15_000),
            PrizeRow((6, 1), 3_000),
            PrizeRow((6, 0), 1_500),
            PrizeRow((5, 1), 900),
            PrizeRow((5, 0), 600),
            PrizeRow((4, 1), 300),
        ),
    ),
    visual_layout="5 columns × 4 rows + 1 row of 4",
    available_strategies=("min_risk", "coverage", "full_wheel", "wheel", "key_wheel"),
)


# 4 of 20 in two identical fields; fixed and pool-percentage variants
LOTTERY_4_FROM_20 = Lottery(
    id="lottery_4_20",
    name="4 из 20",
    description="4 из 20 в двух полях",
    fields=(Field(size=20, count=4), Field(size=20, count=4)),
    default_ticket_cost=400,
    default_superprize=50_000_000,
    variants=(
        LotteryVariant(
            type=VariantType.FIXED,
            label="Фиксированные выигрыши",
            prize_table=PrizeTable(
                rows=(
                    PrizeRow((4, 4), SUPERPRIZE),
                    PrizeRow((3, 4), 100_000),
                    PrizeRow((2, 4), 10_000),
                    PrizeRow((1, 4), 2_000),
                    PrizeRow((0, 4), 4_000),
                    PrizeRow((3, 3), 3_000),
                    PrizeRow((2, 3), 1_000),
                    PrizeRow((1, 3), 500),
                    PrizeRow((0, 3), 450),
                    PrizeRow((2, 2), 300),
                    PrizeRow((1, 2), 100),
                    PrizeRow((0, 2), 100),
                ),
                symmetric=True,
            ),
        ),
        LotteryVariant(
            type=VariantType.POOL_PERCENTAGE,
            label="Процент от призового фонда",
            prize_table=PrizeTable(
                rows=(
                    PrizeRow((4, 4), prize_percent=30, prize_note="Суперприз"),
                    PrizeRow((3, 4), prize_percent=3.12),
                    PrizeRow((2, 4), prize_percent=1.5),
                    PrizeRow((1, 4), prize_percent=1.9),
                    PrizeRow((0, 4), prize_percent=1.8),
                    PrizeRow((3, 3), prize_percent=0.8),
                    PrizeRow((2, 3), prize_percent=6.38),
                    PrizeRow((1, 3), prize_percent=8.5),
                    PrizeRow((0, 3), prize_percent=10.5),
                    PrizeRow((2, 2), prize_percent=10.5),
                    PrizeRow((1, 2), 400),
                    PrizeRow((0, 2), prize_percent=25),
                ),
                symmetric=True,
            ),
            average_pool=4_000_000,
        ),
    ),
    visual_layout="2 fields × 4 columns × 5 rows",
    available_strategies=("coverage", "min_risk"),
)


# 12 of 24; 0 matches pays like 12, 1 like 11, and so on
LOTTERY_12_FROM_24 = Lottery(
    id="lottery_12_24",
    name="12 / 24",
    description="Нужно выбрать 12 из 24",
    fields=(Field(size=24, count=12),),
    default_ticket_cost=300,
    default_superprize=100_000_000,
    prize_table=PrizeTable(
        rows=(
            PrizeRow((12,), SUPERPRIZE),
            PrizeRow((11,), 30_000),
            PrizeRow((10,), 3_000),
            PrizeRow((9,), 600),
            PrizeRow((8,), 150),
            PrizeRow((4,), 150),
            PrizeRow((3,), 600),
            PrizeRow((2,), 3_000),
            PrizeRow((1,), 30_000),
            PrizeRow((0,), SUPERPRIZE),
        ),
    ),
    visual_layout="6 columns × 4 rows",
    available_strategies=("guaranteed_win", "min_risk"),
)


# 5 of 36 + 1 of 4, with a secondary prize for 5+0
LOTTERY_5_FROM_36_PLUS_1 = Lottery(
    id="lottery_5_36_1",
    name="5 из 36 + 1",
    description="5 из 36 + 1 из 4",
    fields=(Field(size=36, count=5), Field(size=4, count=1)),
    default_ticket_cost=100,
    default_superprize=500_000_000,
    has_secondary_prize=True,
    default_secondary_prize=100_000_000,
    prize_table=PrizeTable(
        rows=(
            PrizeRow((5, 1), SUPERPRIZE),
            PrizeRow((5, 0), SECONDARY),
            PrizeRow((4,), 7_500),
            PrizeRow((3,), 750),
            PrizeRow((2,), 75),
        ),
    ),
    visual_layout="6 × 6 grid + 1 row of 4",
    available_strategies=("min_risk", "coverage", "full_wheel", "wheel", "key_wheel"),
)


LOTTERY_6_FROM_45 = Lottery(
    id="lottery_6_45",
    name="6 из 45",
    description="Нужно выбрать 6 из 45",
    fields=(Field(size=45, count=6),),
    default_ticket_cost=100,
    default_superprize=250_000_000,
    prize_table=PrizeTable(
        rows=(
            PrizeRow((6,), SUPERPRIZE),
            PrizeRow((5,), 100_000),
            PrizeRow((4,), 2_800),
            PrizeRow((3,), 1_400),
        ),
    ),
    visual_layout="9 columns × 5 rows",
    available_strategies=("min_risk", "coverage", "full_wheel", "wheel", "key_wheel"),
)


LOTTERY_7_FROM_49 = Lottery(
    id="lottery_7_49",
    name="7 из 49",
    description="Нужно выбрать 7 из 49",
    fields=(Field(size=49, count=7),),
    default_ticket_cost=50,
    default_superprize=300_000_000,
    prize_table=PrizeTable(
        rows=(
            PrizeRow((7,), SUPERPRIZE),
            PrizeRow((6,), 120_000),
            PrizeRow((5,), 2_400),
            PrizeRow((4,), 280),
            PrizeRow((3,), 120),
            PrizeRow((2,), 40),
        ),
    ),
    visual_layout="7 × 7 grid",
    available_strategies=("min_risk", "coverage", "full_wheel", "wheel", "key_wheel"),
)


# Display order
LOTTERIES: tuple[Lottery, ...] = (
    LOTTERY_8_PLUS_1,
    LOTTERY_4_FROM_20,
    LOTTERY_12_FROM_24,
    LOTTERY_5_FROM_36_PLUS_1,
    LOTTERY_6_FROM_45,
    LOTTERY_7_FROM_49,
)

ALL_LOTTERIES = MappingProxyType({lottery.id: lottery for lottery in LOTTERIES})
