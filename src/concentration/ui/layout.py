from __future__ import annotations

from typing import Tuple

from concentration.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    MIN_TILE_SIZE,
)


def compute_board_geometry(window_width: int, window_height: int, cols: int, rows: int) -> Tuple[int, float, float]:
    """Return (tile_size, start_x, start_y) for a cols x rows board.

    Shared by rendering and input so clicks land on the tile that was drawn.
    ``start_y`` is the bottom edge of the board; row 0 is drawn at the top.
    """
    cols = max(1, cols)
    rows = max(1, rows)
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    start_x = (window_width - cols * tile_size) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def tile_origin(index: int, cols: int, rows: int, tile_size: int, start_x: float, start_y: float) -> Tuple[float, float]:
    """Bottom-left corner of the cell holding ``index`` (row-major, top row first)."""
    row, col = divmod(index, cols)
    x = start_x + col * tile_size
    y = start_y + (rows - 1 - row) * tile_size
    return x, y


def tile_index_at(x: float, y: float, window_width: int, window_height: int, cols: int, rows: int) -> int | None:
    """Map a window point to a tile index, or None when it misses the board."""
    if cols <= 0 or rows <= 0:
        return None
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, cols, rows)
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    row = rows - 1 - row_from_bottom
    if 0 <= row < rows and 0 <= col < cols:
        return row * cols + col
    return None
