"""Static lottery definitions: fields, prize tables and variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lottolab.errors import InvalidArgumentError, MalformedPrizeTableError
from lottolab.models.strategy import StrategyKind


class PrizeMarker(str, Enum):
    SUPERPRIZE = "superprize"
    SECONDARY = "secondary"


class VariantType(str, Enum):
    FIXED = "fixed"
    POOL_PERCENTAGE = "pool_percentage"


@dataclass(frozen=True)
class Field:
    """A number field of `size` numbers from which `count` are picked."""

    size: int
    count: int

    def __post_init__(self) -> None:
        if self.size < 1 or self.count < 1 or self.count > self.size:
            raise InvalidArgumentError(
                message="Invalid field definition",
                details={"size": self.size, "count": self.count},
            )

    @property
    def numbers(self) -> range:
        return range(1, self.size + 1)


@dataclass(frozen=True)
class PrizeRow:
    """One prize category keyed by per-field match counts.

    Exactly one of `prize` (amount or marker) and `prize_percent`
    (share of the average pool) is set.
    """

    matches: tuple[int, ...]
    prize: float | PrizeMarker | None = None
    prize_percent: float | None = None
    prize_note: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "matches", tuple(int(m) for m in self.matches))

        if (self.prize is None) == (self.prize_percent is None):
            raise MalformedPrizeTableError(
                message="Prize row needs exactly one of prize or prize_percent",
                details={"matches": list(self.matches)},
            )

        if isinstance(self.prize, str) and not isinstance(self.prize, PrizeMarker):
            try:
                object.__setattr__(self, "prize", PrizeMarker(self.prize))
            except ValueError as exc:
                raise MalformedPrizeTableError(
                    message=f"Unknown prize marker: {self.prize}",
                    details={"matches": list(self.matches)},
                ) from exc

    @property
    def is_pool_percentage(self) -> bool:
        return self.prize_percent is not None


@dataclass(frozen=True)
class PrizeTable:
    """Ordered prize rows.

    With `symmetric=True` a two-field vector and its mirror pay the same row,
    for formats whose two fields are interchangeable.
    """

    rows: tuple[PrizeRow, ...]
    currency: str = "₽"
    symmetric: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

        seen: set[tuple[int, ...]] = set()
        for row in self.rows:
            key = canonical_key(row.matches) if self.symmetric else row.matches
            if key in seen:
                raise MalformedPrizeTableError(
                    message="Duplicate match vector in prize table",
                    details={"matches": list(row.matches)},
                )
            seen.add(key)

    @property
    def arity(self) -> int:
        return max((len(row.matches) for row in self.rows), default=0)


def canonical_key(matches: tuple[int, ...]) -> tuple[int, ...]:
    if len(matches) == 2 and matches[0] > matches[1]:
        return (matches[1], matches[0])
    return matches


@dataclass(frozen=True)
class LotteryVariant:
    type: VariantType
    label: str
    prize_table: PrizeTable
    average_pool: float | None = None


@dataclass(frozen=True)
class Lottery:
    """Read-only lottery format, defined once at import."""

    id: str
    name: str
    description: str
    fields: tuple[Field, ...]
    default_ticket_cost: float
    default_superprize: float
    available_strategies: tuple[StrategyKind, ...]
    prize_table: PrizeTable | None = None
    variants: tuple[LotteryVariant, ...] = ()
    has_secondary_prize: bool = False
    default_secondary_prize: float | None = None
    visual_layout: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "variants", tuple(self.variants))
        # Raises ValueError on an unknown strategy id
        object.__setattr__(
            self,
            "available_strategies",
            tuple(StrategyKind(s) for s in self.available_strategies),
        )

        if len(self.fields) not in (1, 2):
            raise InvalidArgumentError(
                message="A lottery has one or two fields",
                details={"lottery_id": self.id, "fields": len(self.fields)},
            )
        if self.prize_table is None and not self.variants:
            raise MalformedPrizeTableError(
                message="Lottery needs a prize table or at least one variant",
                details={"lottery_id": self.id},
            )

    @property
    def field_count(self) -> int:
        return len(self.fields)

    def supports(self, kind: StrategyKind | str) -> bool:
        try:
            return StrategyKind(kind) in self.available_strategies
        except ValueError:
            return False

    def get_variant(self, variant_type: VariantType | str) -> LotteryVariant | None:
        try:
            wanted = VariantType(variant_type)
        except ValueError:
            return None
        for variant in self.variants:
            if variant.type == wanted:
                return variant
        return None

    def _variant_or_error(self, variant_type: VariantType | str) -> LotteryVariant:
        variant = self.get_variant(variant_type)
        if variant is None:
            raise InvalidArgumentError(
                message=f"Lottery {self.id} has no variant {variant_type}",
                details={"variants": [v.type.value for v in self.variants]},
            )
        return variant

    def resolve_prize_table(self, variant_type: VariantType | str | None = None) -> PrizeTable:
        """Prize table of the given variant, else the main table, else the first variant's."""

        if variant_type is not None:
            return self._variant_or_error(variant_type).prize_table
        if self.prize_table is not None:
            return self.prize_table
        return self.variants[0].prize_table

    def resolve_average_pool(self, variant_type: VariantType | str | None = None) -> float | None:
        if variant_type is not None:
            return self._variant_or_error(variant_type).average_pool
        if self.prize_table is None and self.variants:
            return self.variants[0].average_pool
        return None
