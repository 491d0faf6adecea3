import random

import pytest

from conftest import StubRandom
from engine.app.timers import Scheduler
from games.reaction_time.controller import ReactionController, ReactionOptions
from games.reaction_time.session import Phase


@pytest.fixture
def ctrl(stub_rng):
    return ReactionController(rng=stub_rng)


def play_until_active(ctrl, start_ms=0):
    ctrl.on_start_requested(start_ms)
    ctrl.on_tick(start_ms + ctrl.session.pending_delay_ms)
    assert ctrl.phase == Phase.Active
    return start_ms + ctrl.session.pending_delay_ms


def test_initial_view(ctrl):
    assert ctrl.phase == Phase.Idle
    assert ctrl.target_symbol == ""
    assert ctrl.elapsed_display == "00:000"
    assert ctrl.result_message == ""
    assert ctrl.instruction == "Press START to begin"
    assert ctrl.ranking_lines == ["Ranking: (empty)"]
    assert not ctrl.awaiting_player_id


def test_delay_then_active(ctrl):
    ctrl.on_start_requested(0)
    assert ctrl.phase == Phase.Delaying
    assert ctrl.instruction == "Get ready..."
    ctrl.on_tick(1499)
    assert ctrl.phase == Phase.Delaying
    assert ctrl.target_symbol == ""
    ctrl.on_tick(1500)
    assert ctrl.phase == Phase.Active
    assert ctrl.target_symbol == "K"
    assert ctrl.instruction == "Press the key: K"


def test_key_before_target_is_ignored(ctrl):
    ctrl.on_start_requested(0)
    assert ctrl.on_key_input("K", 500) is False
    assert ctrl.phase == Phase.Delaying


def test_sampling_updates_display_without_finishing(ctrl):
    t0 = play_until_active(ctrl)
    for step in range(1, 30):
        ctrl.on_tick(t0 + step * 10)
    assert ctrl.phase == Phase.Active
    assert ctrl.elapsed_display == "00:290"


def test_wrong_key_keeps_running(ctrl):
    t0 = play_until_active(ctrl)
    assert ctrl.on_key_input("x", t0 + 100) is False
    assert ctrl.phase == Phase.Active
    assert not ctrl.awaiting_player_id


def test_matching_key_finishes_and_asks_for_id(ctrl):
    t0 = play_until_active(ctrl)
    assert ctrl.on_key_input("k", t0 + 237) is True
    assert ctrl.phase == Phase.Finished
    assert ctrl.session.reaction_time_ms == 237
    assert ctrl.elapsed_display == "00:237"
    assert ctrl.result_message == "Reaction time: 237 ms"
    assert ctrl.instruction == "Press START to play again"
    assert ctrl.awaiting_player_id

    # display stays frozen after the sampler is stopped
    ctrl.on_tick(t0 + 5000)
    assert ctrl.elapsed_display == "00:237"


def test_submit_commits_to_ranking(ctrl):
    t0 = play_until_active(ctrl)
    ctrl.on_key_input("K", t0 + 250)
    entry = ctrl.submit_player_id("alexander")
    assert entry.player_id == "ALEX" and entry.reaction_time_ms == 250
    assert not ctrl.awaiting_player_id
    assert ctrl.ranking_lines == ["Ranking:", "1. ALEX: 250 ms"]
    # only one commit per finished round
    assert ctrl.submit_player_id("bob") is None
    assert len(ctrl.ranking) == 1


def test_blank_id_records_nothing(ctrl):
    t0 = play_until_active(ctrl)
    ctrl.on_key_input("K", t0 + 250)
    assert ctrl.submit_player_id("   ") is None
    assert not ctrl.awaiting_player_id
    assert ctrl.ranking.snapshot() == ()


def test_skip_records_nothing(ctrl):
    t0 = play_until_active(ctrl)
    ctrl.on_key_input("K", t0 + 250)
    ctrl.skip_player_id()
    assert not ctrl.awaiting_player_id
    assert ctrl.ranking.snapshot() == ()


def test_submit_without_finished_round_is_ignored(ctrl):
    assert ctrl.submit_player_id("alex") is None
    assert ctrl.ranking.snapshot() == ()


def test_key_after_finish_does_not_record_again(ctrl):
    t0 = play_until_active(ctrl)
    ctrl.on_key_input("K", t0 + 100)
    ctrl.submit_player_id("amy")
    assert ctrl.on_key_input("K", t0 + 300) is False
    assert ctrl.phase == Phase.Finished
    assert len(ctrl.ranking) == 1


def test_restart_cancels_pending_delay():
    rng = StubRandom(delay_ms=1000, symbol="A")
    scheduler = Scheduler()
    ctrl = ReactionController(rng=rng, scheduler=scheduler)

    ctrl.on_start_requested(0)           # first delay due at 1000
    rng.delay_ms = 2500
    ctrl.on_start_requested(500)         # second delay due at 3000
    assert scheduler.pending() == 1

    ctrl.on_tick(1000)
    assert ctrl.phase == Phase.Delaying
    assert ctrl.target_symbol == ""
    assert ctrl.on_key_input("A", 1100) is False

    ctrl.on_tick(3000)
    assert ctrl.phase == Phase.Active
    assert ctrl.session.start_instant_ms == 3000


def test_stale_delay_callback_is_ignored_even_if_it_runs(ctrl):
    ctrl.on_start_requested(0)
    stale = ctrl._delay_timer
    ctrl.on_start_requested(100)
    # simulate a timer that escaped cancellation
    stale.callback(1500)
    assert ctrl.phase == Phase.Delaying
    assert ctrl.session.target_symbol is None


def test_restart_while_active_stops_sampling(ctrl):
    t0 = play_until_active(ctrl)
    ctrl.on_tick(t0 + 50)
    ctrl.on_start_requested(t0 + 60)
    assert ctrl.elapsed_display == "00:000"
    ctrl.on_tick(t0 + 100)
    assert ctrl.elapsed_display == "00:000"
    assert ctrl.scheduler.pending() == 1


def test_restart_discards_uncommitted_result(ctrl):
    t0 = play_until_active(ctrl)
    ctrl.on_key_input("K", t0 + 100)
    ctrl.on_start_requested(t0 + 200)
    assert not ctrl.awaiting_player_id
    assert ctrl.result_message == ""
    assert ctrl.submit_player_id("late") is None


def test_random_rounds_respect_configured_range():
    ctrl = ReactionController(options=ReactionOptions(delay_min_ms=200, delay_max_ms=210),
                              rng=random.Random(7))
    for i in range(50):
        ctrl.on_start_requested(i * 1000)
        assert 200 <= ctrl.session.pending_delay_ms < 210


def test_options_from_manifest():
    opts = ReactionOptions.from_manifest({"options": {"delay_min_ms": 500, "ranking_size": 3, "colour": "red"}})
    assert opts.delay_min_ms == 500
    assert opts.delay_max_ms == 3000
    assert opts.ranking_size == 3
    assert ReactionOptions.from_manifest(None) == ReactionOptions()
    assert ReactionOptions.from_manifest({"options": None}) == ReactionOptions()


@pytest.mark.parametrize("kwargs", [
    {"delay_min_ms": 3000, "delay_max_ms": 3000},
    {"delay_min_ms": -1},
    {"tick_ms": 0},
    {"ranking_size": 0},
    {"player_id_length": 0},
])
def test_invalid_options_raise(kwargs):
    with pytest.raises(ValueError):
        ReactionOptions(**kwargs)


def test_ranking_size_option_is_used():
    ctrl = ReactionController(options=ReactionOptions(ranking_size=2, player_id_length=2),
                              rng=StubRandom())
    for pid, offset in [("abc", 300), ("def", 100), ("ghi", 200)]:
        t0 = play_until_active(ctrl, start_ms=offset * 100)
        ctrl.on_key_input("K", t0 + offset)
        ctrl.submit_player_id(pid)
    assert [(e.player_id, e.reaction_time_ms) for e in ctrl.ranking.snapshot()] == [("DE", 100), ("GH", 200)]
