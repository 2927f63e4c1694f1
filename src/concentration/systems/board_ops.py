from __future__ import annotations

from typing import List, Tuple

from esper import World

from concentration.components.board import Board
from concentration.components.game_state import GameSession
from concentration.components.tile import Tile, TileStatus

TileSnapshot = Tuple[int, str, TileStatus]


def get_board(world: World) -> Board | None:
    for entity, _ in world.get_component(GameSession):
        try:
            return world.component_for_entity(entity, Board)
        except KeyError:
            return None
    return None


def get_tile_entity(world: World, index: int) -> int | None:
    for ent, tile in world.get_component(Tile):
        if tile.index == index:
            return ent
    return None


def get_tile(world: World, index: int) -> Tile | None:
    ent = get_tile_entity(world, index)
    if ent is None:
        return None
    return world.component_for_entity(ent, Tile)


def ordered_tiles(world: World) -> List[Tile]:
    return sorted((tile for _, tile in world.get_component(Tile)), key=lambda tile: tile.index)


def snapshot_tiles(world: World) -> List[TileSnapshot]:
    """Index-ordered ``(index, symbol, status)`` view of the current board."""
    return [(tile.index, tile.symbol, tile.status) for tile in ordered_tiles(world)]


def clear_tiles(world: World) -> int:
    """Delete every tile entity; returns how many were removed."""
    ents = [ent for ent, _ in world.get_component(Tile)]
    for ent in ents:
        world.delete_entity(ent, immediate=True)
    return len(ents)

