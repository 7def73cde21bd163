"""Simulation controller. No business logic here."""

from __future__ import annotations

from typing import Any

from lottolab.error_handlers import handle_errors
from lottolab.models.ticket import Ticket
from lottolab.repositories.lottery_repository import require_lottery
from lottolab.schemas.simulation import SimulationRequestSchema, SimulationResultSchema
from lottolab.services.combinatorics import make_random_source
from lottolab.services.simulation_service import simulate_lottery
from lottolab.utils.responses import ok

_request_schema = SimulationRequestSchema()
_result_schema = SimulationResultSchema()


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


@handle_errors
def run_simulation(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    """Simulate draws for a ticket set.

    The prize table, superprize, secondary prize, average pool and ticket
    cost default to the lottery (or the chosen variant) when not given.
    """

    data = _request_schema.load(payload or {})
    lottery = require_lottery(data["lottery_id"])
    variant = data["variant"]

    tickets = [Ticket(lottery_id=lottery.id, field1=t["field1"], field2=t.get("field2")) for t in data["tickets"]]

    result = simulate_lottery(
        lottery,
        tickets,
        data["rounds"],
        _or_default(data["prize_table"], lottery.resolve_prize_table(variant)),
        _or_default(data["superprize"], lottery.default_superprize),
        _or_default(data["ticket_cost"], lottery.default_ticket_cost),
        secondary_prize=_or_default(data["secondary_prize"], lottery.default_secondary_prize),
        average_pool=_or_default(data["average_pool"], lottery.resolve_average_pool(variant)),
        rng=make_random_source(data["seed"]),
        workers=data["workers"],
    )

    dumped = _result_schema.dump(result)
    if not data["include_rounds"]:
        dumped["rounds"] = []
    return ok(dumped)
