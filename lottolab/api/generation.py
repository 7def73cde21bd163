"""Ticket generation controller. No business logic here."""

from __future__ import annotations

from typing import Any

from lottolab.error_handlers import handle_errors
from lottolab.repositories.lottery_repository import require_lottery
from lottolab.schemas.strategy import GenerateRequestSchema, StrategyResultSchema
from lottolab.services.combinatorics import make_random_source
from lottolab.services.strategy_service import execute_strategy
from lottolab.utils.responses import ok

_request_schema = GenerateRequestSchema()
_result_schema = StrategyResultSchema()


@handle_errors
def generate_tickets(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    data = _request_schema.load(payload or {})
    lottery = require_lottery(data["lottery_id"])

    result = execute_strategy(
        data["strategy_id"],
        lottery,
        data["params"],
        data["ticket_cost"] or lottery.default_ticket_cost,
        rng=make_random_source(data["seed"]),
    )
    return ok(_result_schema.dump(result))
