"""Lottery reference data controllers. No business logic here."""

from __future__ import annotations

from typing import Any

from lottolab.error_handlers import handle_errors
from lottolab.errors import InvalidArgumentError, LotteryNotFoundError
from lottolab.repositories.lottery_repository import LotteryRepository
from lottolab.schemas.lottery import LotteryFilterSchema, LotteryLookupSchema, LotterySchema
from lottolab.services.prize_service import prize_table_with_probabilities
from lottolab.utils.responses import ok

_filter_schema = LotteryFilterSchema()
_lookup_schema = LotteryLookupSchema()
_lottery_schema = LotterySchema()
_repo = LotteryRepository()


@handle_errors
def list_lotteries(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    data = _filter_schema.load(payload or {})

    lotteries = _repo.find(
        field_count=data["field_count"],
        has_secondary_prize=data["has_secondary_prize"],
        has_variants=data["has_variants"],
    )

    return ok({"lotteries": _lottery_schema.dump(lotteries, many=True), "count": len(lotteries)})


@handle_errors
def get_lottery(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    """Look a lottery up by `lotteryId` or `name`, with per-row odds."""

    data = _lookup_schema.load(payload or {})

    if data["lottery_id"]:
        lottery = _repo.get_by_id(data["lottery_id"])
    elif data["name"]:
        lottery = _repo.get_by_name(data["name"])
    else:
        raise InvalidArgumentError(message="lotteryId or name is required")

    if lottery is None:
        raise LotteryNotFoundError(details={"lotteryId": data["lottery_id"], "name": data["name"]})

    odds = [
        {
            "matches": list(p.row.matches),
            "probability": p.probability,
            "odds": p.odds,
        }
        for p in prize_table_with_probabilities(lottery, lottery.resolve_prize_table())
    ]
    return ok({"lottery": _lottery_schema.dump(lottery), "prizeProbabilities": odds})
