"""Repository layer over the static lottery reference data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from lottolab.catalog import ALL_LOTTERIES, LOTTERIES
from lottolab.errors import LotteryNotFoundError
from lottolab.models.lottery import Lottery


class LotteryRepository:
    """Read-only lookups over lottery definitions."""

    def __init__(
        self,
        lotteries: Sequence[Lottery] | None = None,
    ) -> None:
        self._lotteries: tuple[Lottery, ...] = tuple(lotteries) if lotteries is not None else LOTTERIES
        self._by_id: Mapping[str, Lottery] = (
            {lottery.id: lottery for lottery in self._lotteries} if lotteries is not None else ALL_LOTTERIES
        )

    def list_all(self) -> list[Lottery]:
        return list(self._lotteries)

    def get_by_id(self, lottery_id: str) -> Lottery | None:
        return self._by_id.get(lottery_id)

    def get_by_name(self, name: str) -> Lottery | None:
        for lottery in self._lotteries:
            if lottery.name == name:
                return lottery
        return None

    def list_by_field_count(self, field_count: int) -> list[Lottery]:
        return [lottery for lottery in self._lotteries if lottery.field_count == field_count]

    def list_with_secondary_prize(self) -> list[Lottery]:
        return [lottery for lottery in self._lotteries if lottery.has_secondary_prize]

    def list_with_variants(self) -> list[Lottery]:
        return [lottery for lottery in self._lotteries if lottery.variants]

    def find(
        self,
        field_count: int | None = None,
        has_secondary_prize: bool | None = None,
        has_variants: bool | None = None,
    ) -> list[Lottery]:
        """Lotteries matching every given filter, in display order. None skips a filter."""

        lotteries = self.list_by_field_count(field_count) if field_count is not None else self.list_all()
        if has_secondary_prize is not None:
            with_secondary = {lottery.id for lottery in self.list_with_secondary_prize()}
            lotteries = [lot for lot in lotteries if (lot.id in with_secondary) == has_secondary_prize]
        if has_variants is not None:
            with_variants = {lottery.id for lottery in self.list_with_variants()}
            lotteries = [lot for lot in lotteries if (lot.id in with_variants) == has_variants]
        return lotteries


_repo = LotteryRepository()


def get_lottery_by_id(lottery_id: str) -> Lottery | None:
    return _repo.get_by_id(lottery_id)


def get_lottery_by_name(name: str) -> Lottery | None:
    return _repo.get_by_name(name)


def get_single_field_lotteries() -> list[Lottery]:
    return _repo.list_by_field_count(1)


def get_two_field_lotteries() -> list[Lottery]:
    return _repo.list_by_field_count(2)


def get_lotteries_with_secondary_prize() -> list[Lottery]:
    return _repo.list_with_secondary_prize()


def get_lotteries_with_variants() -> list[Lottery]:
    return _repo.list_with_variants()


def require_lottery(lottery_id: str) -> Lottery:
    lottery = _repo.get_by_id(lottery_id)
    if lottery is None:
        raise LotteryNotFoundError(
            message=f"Lottery not found: {lottery_id}",
            details={"lottery_id": lottery_id},
        )
    return lottery
