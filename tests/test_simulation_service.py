from __future__ import annotations

import random

import pytest

from lottolab.catalog import LOTTERY_4_FROM_20, LOTTERY_6_FROM_45, LOTTERY_8_PLUS_1, LOTTERY_12_FROM_24
from lottolab.errors import (
    EmptyTicketSetError,
    InvalidArgumentError,
    MalformedPrizeTableError,
    MissingPrizeParameterError,
    SimulationCancelledError,
)
from lottolab.models.ticket import Ticket
from lottolab.services.simulation_service import draw_numbers, simulate_lottery
from lottolab.services.strategy_service import execute_strategy

TABLE_6_45 = LOTTERY_6_FROM_45.resolve_prize_table()


@pytest.fixture
def tickets_6_45():
    return [
        Ticket(lottery_id="lottery_6_45", field1=(1, 2, 3, 4, 5, 6)),
        Ticket(lottery_id="lottery_6_45", field1=(7, 8, 9, 10, 11, 12)),
        Ticket(lottery_id="lottery_6_45", field1=(13, 21, 28, 33, 40, 45)),
    ]


def _simulate(tickets, rounds=200, **kwargs):
    kwargs.setdefault("rng", random.Random(11))
    return simulate_lottery(LOTTERY_6_FROM_45, tickets, rounds, TABLE_6_45, 250_000_000, 100, **kwargs)


def test_draw_numbers_respects_fields(rng):
    for _ in range(100):
        draw = draw_numbers(LOTTERY_8_PLUS_1, rng)
        assert len(set(draw.field1)) == 8
        assert all(1 <= n <= 20 for n in draw.field1)
        assert len(draw.field2) == 1
        assert 1 <= draw.field2[0] <= 4


def test_result_shape(tickets_6_45):
    result = _simulate(tickets_6_45)

    assert result.rounds_count == 200
    assert len(result.rounds) == 200
    assert [r.round_number for r in result.rounds[:3]] == [1, 2, 3]
    assert all(len(r.matches) == 3 for r in result.rounds)


def test_cash_flow_is_conserved(tickets_6_45):
    result = _simulate(tickets_6_45)
    stats = result.statistics

    assert stats.total_investment == 200 * 3 * 100
    assert stats.total_won == pytest.approx(sum(r.total_prize_this_round for r in result.rounds))
    assert stats.net_return == pytest.approx(stats.total_won - stats.total_investment)
    assert stats.final_bankroll == pytest.approx(stats.net_return)


def test_round_prizes_match_ticket_matches(tickets_6_45):
    result = _simulate(tickets_6_45, rounds=300)

    for r in result.rounds:
        drawn = set(r.draw.field1)
        for m in r.matches:
            assert m.field1_matches == len(drawn.intersection(tickets_6_45[m.ticket_index].field1))
        assert r.total_prize_this_round == sum(m.prize_won for m in r.matches)


def test_same_seed_same_run(tickets_6_45):
    a = _simulate(tickets_6_45, rng=random.Random(3))
    b = _simulate(tickets_6_45, rng=random.Random(3))

    assert a.rounds == b.rounds
    assert a.statistics == b.statistics


def test_worker_count_does_not_change_result(tickets_6_45):
    sequential = _simulate(tickets_6_45, rounds=250, rng=random.Random(9), workers=1, batch_size=40)
    threaded = _simulate(tickets_6_45, rounds=250, rng=random.Random(9), workers=4, batch_size=40)

    assert sequential.rounds == threaded.rounds
    assert sequential.statistics == threaded.statistics


def test_progress_is_reported_per_batch(tickets_6_45):
    calls = []
    _simulate(tickets_6_45, rounds=25, batch_size=10, progress_callback=lambda done, total: calls.append((done, total)))
    assert calls == [(10, 25), (20, 25), (25, 25)]


def test_cancellation_aborts_the_run(tickets_6_45):
    polls = []

    def should_cancel():
        polls.append(1)
        return len(polls) > 2

    with pytest.raises(SimulationCancelledError) as exc_info:
        _simulate(tickets_6_45, rounds=100, batch_size=10, should_cancel=should_cancel)
    assert exc_info.value.details["completed_rounds"] == 20


def test_empty_ticket_set():
    with pytest.raises(EmptyTicketSetError):
        _simulate([])


@pytest.mark.parametrize("rounds", [0, -5])
def test_rounds_must_be_positive(tickets_6_45, rounds):
    with pytest.raises(InvalidArgumentError):
        _simulate(tickets_6_45, rounds=rounds)


def test_negative_ticket_cost(tickets_6_45):
    with pytest.raises(InvalidArgumentError):
        simulate_lottery(LOTTERY_6_FROM_45, tickets_6_45, 10, TABLE_6_45, 1, -1)


def test_prize_table_arity_must_match_fields(tickets_6_45):
    with pytest.raises(MalformedPrizeTableError):
        simulate_lottery(LOTTERY_6_FROM_45, tickets_6_45, 10, LOTTERY_8_PLUS_1.resolve_prize_table(), 1, 100)


@pytest.mark.parametrize(
    "ticket",
    [
        Ticket(lottery_id="lottery_6_45", field1=(1, 2, 3, 4, 5)),
        Ticket(lottery_id="lottery_6_45", field1=(1, 2, 3, 4, 5, 46)),
        Ticket(lottery_id="lottery_6_45", field1=(1, 2, 3, 4, 5, 6), field2=(1,)),
    ],
)
def test_malformed_ticket(ticket):
    with pytest.raises(InvalidArgumentError):
        _simulate([ticket], rounds=1)


def test_pool_table_without_pool_fails_before_any_round():
    ticket = Ticket(lottery_id="lottery_4_20", field1=(1, 2, 3, 4), field2=(1, 2, 3, 4))
    table = LOTTERY_4_FROM_20.resolve_prize_table("pool_percentage")
    progress = []

    with pytest.raises(MissingPrizeParameterError):
        simulate_lottery(
            LOTTERY_4_FROM_20,
            [ticket],
            10,
            table,
            50_000_000,
            400,
            progress_callback=lambda done, total: progress.append(done),
        )
    assert progress == []


def test_pool_table_with_pool(rng):
    ticket = Ticket(lottery_id="lottery_4_20", field1=(1, 2, 3, 4), field2=(5, 6, 7, 8))
    table = LOTTERY_4_FROM_20.resolve_prize_table("pool_percentage")

    result = simulate_lottery(LOTTERY_4_FROM_20, [ticket], 50, table, 0, 400, average_pool=4_000_000, rng=rng)
    assert result.statistics.total_investment == 20_000


def test_guaranteed_win_tickets_never_miss(rng):
    generated = execute_strategy("guaranteed_win", LOTTERY_12_FROM_24, {}, 300, rng=rng)

    result = simulate_lottery(
        LOTTERY_12_FROM_24,
        list(generated.tickets),
        500,
        LOTTERY_12_FROM_24.resolve_prize_table(),
        LOTTERY_12_FROM_24.default_superprize,
        300,
        rng=random.Random(1),
    )
    assert result.statistics.zero_win_rounds == 0
    assert result.statistics.min_non_zero_prize > 0
