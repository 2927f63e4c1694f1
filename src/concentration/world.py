import random

from esper import World

from concentration.components.board import Board
from concentration.components.game_state import GameSession
from concentration.components.timer import Timer
from concentration.config import GameSettings
from concentration.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    settings: GameSettings | None = None,
) -> World:
    """Create a world holding one idle session entity.

    ``world.random`` and ``world.settings`` are shared by the systems built on
    top of it so a seeded ``random.Random`` makes every deal reproducible.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "settings", settings or GameSettings())

    # Single session entity; its components are replaced wholesale per game.
    world.create_entity(GameSession(), Board(), Timer())
    return world
