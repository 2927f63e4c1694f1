from __future__ import annotations

from typing import Any

from esper import World

from concentration.components.cursor import KeyboardCursor
from concentration.components.game_state import GamePhase
from concentration.components.tile import TileStatus
from concentration.constants import HUD_HEIGHT, TILE_PADDING
from concentration.events.bus import (
    EventBus,
    EVENT_PAIR_EVALUATED,
    EVENT_PREVIEW_COUNTDOWN,
    EVENT_PREVIEW_STARTED,
    EVENT_TIMER_SAMPLED,
)
from concentration.systems.board_ops import get_board, ordered_tiles
from concentration.ui.layout import compute_board_geometry, tile_origin
from concentration.utils.game_state import get_session

HIDDEN_COLOR = (52, 73, 94)
FLIPPED_COLOR = (236, 240, 241)
MATCHED_COLOR = (46, 204, 113)
PREVIEW_COLOR = (241, 196, 15)


class RenderSystem:
    """Draws the board and status bar for the preview and play phases."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_PREVIEW_STARTED, self.on_preview_started)
        self.event_bus.subscribe(EVENT_PREVIEW_COUNTDOWN, self.on_preview_countdown)
        self.event_bus.subscribe(EVENT_PAIR_EVALUATED, self.on_pair_evaluated)
        self.event_bus.subscribe(EVENT_TIMER_SAMPLED, self.on_timer_sampled)
        self.countdown = 0
        self.attempts = 0
        self.elapsed_seconds = 0
        self._last_tile_layout: list[dict[str, Any]] = []

    def on_preview_started(self, sender, **kwargs):
        self.countdown = kwargs.get('seconds', 0)
        self.attempts = 0
        self.elapsed_seconds = 0

    def on_preview_countdown(self, sender, **kwargs):
        self.countdown = kwargs.get('remaining', 0)

    def on_pair_evaluated(self, sender, **kwargs):
        self.attempts = kwargs.get('attempts', self.attempts)

    def on_timer_sampled(self, sender, **kwargs):
        self.elapsed_seconds = kwargs.get('elapsed_seconds', self.elapsed_seconds)

    def build_tile_layout(self) -> list[dict[str, Any]]:
        """Per-tile draw data: rectangle, colour and the label to show."""
        session = get_session(self.world)
        board = get_board(self.world)
        if session is None or board is None or board.tile_count == 0:
            return []
        previewing = session.phase == GamePhase.PREVIEWING
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, board.cols, board.rows
        )
        layout: list[dict[str, Any]] = []
        for tile in ordered_tiles(self.world):
            x, y = tile_origin(tile.index, board.cols, board.rows, tile_size, start_x, start_y)
            if previewing:
                color, label = PREVIEW_COLOR, tile.symbol
            elif tile.status == TileStatus.MATCHED:
                color, label = MATCHED_COLOR, tile.symbol
            elif tile.status == TileStatus.FLIPPED:
                color, label = FLIPPED_COLOR, tile.symbol
            else:
                color, label = HIDDEN_COLOR, ""
            layout.append({
                'index': tile.index,
                'left': x + TILE_PADDING / 2,
                'bottom': y + TILE_PADDING / 2,
                'size': tile_size - TILE_PADDING,
                'color': color,
                'label': label,
            })
        self._last_tile_layout = layout
        return layout

    def status_text(self) -> str:
        session = get_session(self.world)
        if session is None:
            return ""
        if session.phase == GamePhase.PREVIEWING:
            return f"{session.difficulty.label} - memorise the tiles: {self.countdown}"
        if session.phase == GamePhase.PLAYING:
            return f"{session.difficulty.label}   Attempts {self.attempts}   Time {self.elapsed_seconds}s"
        return ""

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        session = get_session(self.world)
        if session is None or session.phase not in (GamePhase.PREVIEWING, GamePhase.PLAYING):
            return
        layout = self.build_tile_layout()
        arcade.draw_text(
            self.status_text(),
            self.window.width / 2,
            self.window.height - HUD_HEIGHT / 2,
            arcade.color.WHITE,
            18,
            anchor_x="center",
            anchor_y="center",
        )
        cursor = self._cursor()
        for entry in layout:
            arcade.draw_lbwh_rectangle_filled(
                entry['left'], entry['bottom'], entry['size'], entry['size'], entry['color']
            )
            if entry['label']:
                arcade.draw_text(
                    entry['label'],
                    entry['left'] + entry['size'] / 2,
                    entry['bottom'] + entry['size'] / 2,
                    arcade.color.BLACK,
                    int(entry['size'] * 0.4),
                    anchor_x="center",
                    anchor_y="center",
                )
            if cursor is not None and cursor.visible and cursor.index == entry['index']:
                arcade.draw_lbwh_rectangle_outline(
                    entry['left'], entry['bottom'], entry['size'], entry['size'],
                    arcade.color.ANTIQUE_WHITE, border_width=3,
                )

    def _cursor(self) -> KeyboardCursor | None:
        for _, cursor in self.world.get_component(KeyboardCursor):
            return cursor
        return None
