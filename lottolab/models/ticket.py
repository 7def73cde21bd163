"""Tickets, realized draws and per-ticket match outcomes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


def _normalize(numbers: Iterable[int]) -> tuple[int, ...]:
    return tuple(sorted(int(n) for n in numbers))


@dataclass(frozen=True)
class Ticket:
    """One played ticket; numbers are kept sorted ascending."""

    lottery_id: str
    field1: tuple[int, ...]
    field2: tuple[int, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "field1", _normalize(self.field1))
        if self.field2 is not None:
            object.__setattr__(self, "field2", _normalize(self.field2))

    @property
    def fields(self) -> tuple[tuple[int, ...], ...]:
        if self.field2 is None:
            return (self.field1,)
        return (self.field1, self.field2)


@dataclass(frozen=True)
class DrawResult:
    field1: tuple[int, ...]
    field2: tuple[int, ...] | None = None

    @property
    def fields(self) -> tuple[tuple[int, ...], ...]:
        if self.field2 is None:
            return (self.field1,)
        return (self.field1, self.field2)


@dataclass(frozen=True)
class MatchResult:
    ticket_index: int
    field_matches: tuple[int, ...]
    prize_won: float
    prize_category: str

    @property
    def field1_matches(self) -> int:
        return self.field_matches[0] if self.field_matches else 0

    @property
    def field2_matches(self) -> int | None:
        return self.field_matches[1] if len(self.field_matches) > 1 else None
