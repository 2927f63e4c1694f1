from __future__ import annotations

import logging
from typing import Sequence

from esper import World

from concentration.components.board import Board
from concentration.components.game_state import GamePhase
from concentration.components.tile import Tile, TileStatus
from concentration.config import GameSettings
from concentration.events.bus import (
    EventBus,
    EVENT_BOARD_CLEARED,
    EVENT_BOARD_INITIALIZED,
    EVENT_FIRST_FLIP,
    EVENT_PAIR_EVALUATED,
    EVENT_PAIR_MATCHED,
    EVENT_PAIR_RESOLVE,
    EVENT_TILE_CLICK,
    EVENT_TILE_FLIPPED,
    EVENT_TILES_HIDDEN,
)
from concentration.systems.board_ops import clear_tiles, get_tile
from concentration.utils.game_state import get_session, get_session_entity, is_current_session

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns tile status transitions and pair evaluation for the current session."""

    def __init__(self, world: World, event_bus: EventBus, *, settings: GameSettings | None = None):
        self.world = world
        self.event_bus = event_bus
        self._settings = settings or getattr(world, "settings", None) or GameSettings()
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_PAIR_RESOLVE, self.on_pair_resolve)

    def initialize(self, dealt_symbols: Sequence[str], *, cols: int = 0, rows: int = 0) -> Board:
        """Replace any previous board with hidden tiles for ``dealt_symbols``."""
        session_entity = get_session_entity(self.world)
        session = get_session(self.world)
        if session_entity is None or session is None:
            raise RuntimeError("GameSession not found")
        clear_tiles(self.world)
        pair_count = len(dealt_symbols) // 2
        board = Board(pair_count=pair_count, cols=cols, rows=rows)
        self.world.add_component(session_entity, board)
        for index, symbol in enumerate(dealt_symbols):
            self.world.create_entity(Tile(index=index, symbol=symbol, session_id=session.session_id))
        self.event_bus.emit(
            EVENT_BOARD_INITIALIZED,
            session_id=session.session_id,
            symbols=list(dealt_symbols),
            cols=cols,
            rows=rows,
        )
        return board

    def on_tile_click(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            return
        self.select_tile(index)

    def select_tile(self, index: int) -> bool:
        """Flip the tile at ``index``; returns False when the selection is ignored."""
        session = get_session(self.world)
        board = self._board()
        if session is None or board is None or session.phase != GamePhase.PLAYING:
            logger.debug("Selection %s ignored outside of play", index)
            return False
        if board.pair_pending:
            logger.debug("Selection %s ignored while a pair is pending", index)
            return False
        tile = get_tile(self.world, index)
        if tile is None or tile.status != TileStatus.HIDDEN:
            logger.debug("Selection %s ignored (missing, flipped or matched)", index)
            return False

        if not session.started:
            session.started = True
            self.event_bus.emit(EVENT_FIRST_FLIP, session_id=session.session_id, index=index)

        tile.status = TileStatus.FLIPPED
        board.flipped.append(index)
        self.event_bus.emit(EVENT_TILE_FLIPPED, session_id=session.session_id, index=index, symbol=tile.symbol)

        if len(board.flipped) == 2:
            self._evaluate_pair(session.session_id, board)
        return True

    def _evaluate_pair(self, session_id: int, board: Board) -> None:
        first, second = board.flipped
        tile_a = get_tile(self.world, first)
        tile_b = get_tile(self.world, second)
        matched = tile_a is not None and tile_b is not None and tile_a.symbol == tile_b.symbol
        board.attempts += 1
        indices = (first, second)
        self.event_bus.emit(
            EVENT_PAIR_EVALUATED,
            session_id=session_id,
            indices=indices,
            matched=matched,
            attempts=board.attempts,
        )
        delay = self._settings.match_delay if matched else self._settings.mismatch_delay
        scheduler = getattr(self.world, "scheduler", None)
        if scheduler is None:
            self.event_bus.emit(EVENT_PAIR_RESOLVE, session_id=session_id, indices=indices, matched=matched)
        else:
            scheduler.schedule(EVENT_PAIR_RESOLVE, delay, session_id=session_id, indices=indices, matched=matched)

    def on_pair_resolve(self, sender, **payload):
        session_id = payload.get("session_id")
        indices = payload.get("indices")
        if not is_current_session(self.world, session_id):
            logger.debug("Dropping pair resolution for stale session %s", session_id)
            return
        board = self._board()
        if board is None or not indices or tuple(board.flipped) != tuple(indices):
            return
        tiles = [get_tile(self.world, index) for index in indices]
        if any(tile is None for tile in tiles):
            return
        board.flipped.clear()
        if payload.get("matched"):
            for tile in tiles:
                tile.status = TileStatus.MATCHED
            board.matched_pairs += 1
            self.event_bus.emit(
                EVENT_PAIR_MATCHED,
                session_id=session_id,
                indices=tuple(indices),
                pairs_found=board.matched_pairs,
                attempts=board.attempts,
            )
            if board.complete:
                self.event_bus.emit(EVENT_BOARD_CLEARED, session_id=session_id, attempts=board.attempts)
        else:
            for tile in tiles:
                tile.status = TileStatus.HIDDEN
            self.event_bus.emit(EVENT_TILES_HIDDEN, session_id=session_id, indices=tuple(indices))

    def _board(self) -> Board | None:
        session_entity = get_session_entity(self.world)
        if session_entity is None:
            return None
        try:
            return self.world.component_for_entity(session_entity, Board)
        except KeyError:
            return None
