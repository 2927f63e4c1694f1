import random

import pytest

from concentration.components.difficulty import Difficulty
from concentration.components.game_state import GamePhase
from concentration.components.tile import TileStatus
from concentration.config import GameSettings
from concentration.errors import InvalidConfiguration
from concentration.events.bus import (
    EVENT_EXIT_REQUESTED,
    EVENT_MENU_START_SELECTED,
    EVENT_PAIR_MATCHED,
    EVENT_PAIR_RESOLVE,
    EVENT_PHASE_CHANGED,
    EVENT_PLAY_STARTED,
    EVENT_PREVIEW_COUNTDOWN,
    EVENT_PREVIEW_COUNTDOWN_TICK,
    EVENT_PREVIEW_STARTED,
    EVENT_SESSION_COMPLETED,
    EVENT_SESSION_RESET,
    EVENT_SESSION_STARTED,
    EVENT_TILES_HIDDEN,
)
from concentration.game import MemoryGame
from tests.helpers import complete_board, pair_indices, play_until_ready


def _game(seed=0, settings=None):
    return MemoryGame(rng=random.Random(seed), settings=settings)


def _capture(game, name):
    captured: list[dict] = []
    game.subscribe(name, lambda sender, **payload: captured.append(payload))
    return captured


def test_new_game_is_idle():
    game = _game()
    assert game.phase == GamePhase.IDLE
    assert game.tiles() == []


def test_request_start_deals_hidden_board_and_previews():
    game = _game()
    previews = _capture(game, EVENT_PREVIEW_STARTED)

    game.request_start("medium")

    assert game.phase == GamePhase.PREVIEWING
    tiles = game.tiles()
    assert len(tiles) == 16
    assert all(status == TileStatus.HIDDEN for _, _, status in tiles)
    assert len(previews) == 1
    preview = previews[0]
    assert preview["difficulty"] == Difficulty.MEDIUM
    assert preview["seconds"] == 4
    assert (preview["cols"], preview["rows"]) == (4, 4)
    assert preview["symbols"] == [symbol for _, symbol, _ in tiles]


def test_countdown_reaches_zero_then_play_starts_once():
    game = _game()
    countdown = _capture(game, EVENT_PREVIEW_COUNTDOWN)
    play_started = _capture(game, EVENT_PLAY_STARTED)

    game.request_start(Difficulty.EASY)
    for _ in range(4):
        game.advance(1.0)
        assert game.phase == GamePhase.PREVIEWING
    game.advance(1.0)

    assert [payload["remaining"] for payload in countdown] == [4, 3, 2, 1, 0]
    assert game.phase == GamePhase.PLAYING
    game.advance(3.0)
    assert len(play_started) == 1


def test_phase_changes_follow_session_lifecycle():
    game = _game()
    changes = _capture(game, EVENT_PHASE_CHANGED)

    play_until_ready(game)
    complete_board(game)
    game.request_replay()

    assert [(c["previous_phase"], c["new_phase"]) for c in changes] == [
        (GamePhase.IDLE, GamePhase.PREVIEWING),
        (GamePhase.PREVIEWING, GamePhase.PLAYING),
        (GamePhase.PLAYING, GamePhase.ENDED),
        (GamePhase.ENDED, GamePhase.IDLE),
    ]
    assert changes[-1]["session_id"] == game.session.session_id


def test_restart_mid_play_reports_the_phase_it_left():
    game = _game()
    changes = _capture(game, EVENT_PHASE_CHANGED)
    play_until_ready(game)

    session = game.request_start("medium")

    last = changes[-1]
    assert (last["previous_phase"], last["new_phase"]) == (GamePhase.PLAYING, GamePhase.PREVIEWING)
    assert last["session_id"] == session.session_id


def test_selection_ignored_during_preview():
    game = _game()
    game.request_start("easy")
    assert game.select_tile(0) is False
    assert game.board.flipped == []
    assert game.board.attempts == 0


def test_session_started_on_first_flip_only():
    game = _game()
    started = _capture(game, EVENT_SESSION_STARTED)
    play_until_ready(game)
    assert started == []

    (a1, _), (b1, _) = pair_indices(game)[:2]
    game.select_tile(a1)
    game.select_tile(b1)
    game.advance(1.0)
    game.select_tile(a1)

    assert len(started) == 1
    assert started[0]["difficulty"] == Difficulty.EASY
    assert game.timer.running


def test_perfect_easy_game_completes_with_score():
    game = _game(4)
    completed = _capture(game, EVENT_SESSION_COMPLETED)
    matched = _capture(game, EVENT_PAIR_MATCHED)

    play_until_ready(game)
    complete_board(game)

    assert game.phase == GamePhase.ENDED
    assert [payload["pairs_found"] for payload in matched] == [1, 2, 3, 4, 5, 6]
    assert len(completed) == 1
    payload = completed[0]
    assert payload["attempts"] == 6
    assert payload["elapsed_time_ms"] == 3000
    assert payload["difficulty"] == Difficulty.EASY
    assert payload["score"] == 940
    assert game.session.result is not None
    assert game.session.result.score == 940


def test_medium_score_is_doubled():
    game = _game(5)
    completed = _capture(game, EVENT_SESSION_COMPLETED)

    play_until_ready(game, "medium")
    complete_board(game)

    # 8 pairs at half a second each: 4s, 8 attempts.
    assert completed[0]["score"] == (1000 - 40 - 40) * 2


def test_mismatches_count_towards_attempts():
    game = _game(6)
    completed = _capture(game, EVENT_SESSION_COMPLETED)
    play_until_ready(game)

    pairs = pair_indices(game)
    game.select_tile(pairs[0][0])
    game.select_tile(pairs[1][0])
    game.advance(1.0)
    complete_board(game)

    assert completed[0]["attempts"] == 7
    # one second of mismatch pause plus six half-second resolutions
    assert completed[0]["elapsed_time_ms"] == 4000
    assert completed[0]["score"] == 1000 - 40 - 35


def test_nothing_changes_after_completion():
    game = _game()
    play_until_ready(game)
    complete_board(game)
    result = game.session.result

    game.advance(30.0)
    assert game.select_tile(0) is False
    assert game.session.result == result
    assert game.timer.elapsed_seconds == result.elapsed_seconds


def test_replay_returns_to_idle_with_fresh_state():
    game = _game()
    resets = _capture(game, EVENT_SESSION_RESET)
    play_until_ready(game)
    complete_board(game)
    finished_id = game.session.session_id

    assert game.request_replay() is True

    assert game.phase == GamePhase.IDLE
    assert game.session.session_id != finished_id
    assert game.session.result is None
    assert game.tiles() == []
    assert game.board.attempts == 0
    assert game.board.matched_pairs == 0
    assert game.timer.elapsed_seconds == 0
    assert resets == [{"session_id": game.session.session_id, "reason": "replay"}]


def test_replay_ignored_outside_ended():
    game = _game()
    assert game.request_replay() is False
    play_until_ready(game)
    assert game.request_replay() is False
    assert game.phase == GamePhase.PLAYING


def test_exit_request_is_announced_without_changing_phase():
    game = _game()
    exits = _capture(game, EVENT_EXIT_REQUESTED)
    play_until_ready(game)

    game.request_exit()

    assert len(exits) == 1
    assert exits[0]["session_id"] == game.session.session_id
    assert game.phase == GamePhase.PLAYING


def test_unknown_difficulty_leaves_state_untouched():
    game = _game()
    play_until_ready(game)
    before = game.tiles()
    session_id = game.session.session_id

    with pytest.raises(InvalidConfiguration):
        game.request_start("impossible")

    assert game.phase == GamePhase.PLAYING
    assert game.session.session_id == session_id
    assert game.tiles() == before


def test_alphabet_too_small_for_difficulty():
    game = _game(settings=GameSettings(symbols=tuple("ABCDEFG")))
    game.request_start("easy")

    with pytest.raises(InvalidConfiguration):
        game.request_start("medium")

    assert game.phase == GamePhase.PREVIEWING
    assert len(game.tiles()) == 12


def test_new_session_cancels_pending_resolution():
    game = _game(7)
    hidden = _capture(game, EVENT_TILES_HIDDEN)
    play_until_ready(game)
    pairs = pair_indices(game)
    game.select_tile(pairs[0][0])
    game.select_tile(pairs[1][0])

    game.request_start("easy")
    game.advance(2.0)

    assert hidden == []
    assert game.board.flipped == []
    assert game.board.attempts == 0
    assert all(status == TileStatus.HIDDEN for _, _, status in game.tiles())


def test_new_session_replaces_running_countdown():
    game = _game()
    countdown = _capture(game, EVENT_PREVIEW_COUNTDOWN)
    game.request_start("easy")
    game.advance(2.0)

    session = game.request_start("hard")
    game.advance(1.0)

    assert game.session.preview_remaining == 2
    fresh = [payload["remaining"] for payload in countdown if payload["session_id"] == session.session_id]
    assert fresh == [2]
    game.advance(2.0)
    assert game.phase == GamePhase.PLAYING


def test_start_from_menu_event():
    game = _game()
    game.event_bus.emit(EVENT_MENU_START_SELECTED, difficulty=Difficulty.HARD)

    assert game.phase == GamePhase.PREVIEWING
    assert game.session.difficulty == Difficulty.HARD
    assert len(game.tiles()) == 24


def test_countdown_tick_from_replaced_session_is_ignored():
    game = _game()
    countdown = _capture(game, EVENT_PREVIEW_COUNTDOWN)
    old = game.request_start("easy")
    game.request_start("easy")

    game.event_bus.emit(EVENT_PREVIEW_COUNTDOWN_TICK, session_id=old.session_id)

    assert game.session.preview_remaining == 5
    assert countdown == []
    assert game.phase == GamePhase.PREVIEWING


def test_pair_resolution_from_replaced_session_is_ignored():
    game = _game(8)
    play_until_ready(game)
    old_id = game.session.session_id
    play_until_ready(game)
    first, second = pair_indices(game)[0]
    game.select_tile(first)
    game.select_tile(second)

    game.event_bus.emit(EVENT_PAIR_RESOLVE, session_id=old_id, indices=(first, second), matched=True)

    assert game.board.matched_pairs == 0
    assert game.board.flipped == [first, second]
    statuses = {index: status for index, _, status in game.tiles()}
    assert statuses[first] == TileStatus.FLIPPED
    assert statuses[second] == TileStatus.FLIPPED
