from __future__ import annotations

from collections import defaultdict

from concentration.components.game_state import GamePhase
from concentration.game import MemoryGame


def pair_indices(game: MemoryGame) -> list[tuple[int, int]]:
    """Group the current board's tile indices into matching pairs, in symbol order of first appearance."""
    by_symbol: dict[str, list[int]] = defaultdict(list)
    for index, symbol, _ in game.tiles():
        by_symbol[symbol].append(index)
    return [tuple(indices) for indices in by_symbol.values()]


def play_until_ready(game: MemoryGame, difficulty="easy") -> None:
    """Start a session and tick through its preview so tiles accept selections."""
    game.request_start(difficulty)
    seconds = game.session.preview_remaining
    for _ in range(seconds):
        game.advance(1.0)
    assert game.phase == GamePhase.PLAYING


def complete_board(game: MemoryGame, *, resolve_dt: float = 0.5) -> None:
    """Match every pair, ticking ``resolve_dt`` after each pair so it resolves."""
    for first, second in pair_indices(game):
        game.select_tile(first)
        game.select_tile(second)
        game.advance(resolve_dt)
