"""Headless facade bundling the world, event bus and core systems."""
from __future__ import annotations

import random
from typing import Callable, List

from concentration.components.board import Board
from concentration.components.difficulty import Difficulty
from concentration.components.game_state import GamePhase, GameSession
from concentration.components.timer import Timer
from concentration.config import GameSettings
from concentration.events.bus import EVENT_TICK, EventBus
from concentration.systems.board import BoardSystem
from concentration.systems.board_ops import TileSnapshot, snapshot_tiles
from concentration.systems.scheduler_system import SchedulerSystem
from concentration.systems.session_system import SessionSystem
from concentration.systems.timer_system import TimerSystem
from concentration.utils.game_state import get_session_entity
from concentration.world import create_world


class MemoryGame:
    """The input and query surface offered to a UI collaborator.

    Notifications are plain bus events; subscribe with
    ``game.subscribe(EVENT_PAIR_MATCHED, handler)`` where ``handler`` has the
    blinker signature ``handler(sender, **payload)``. Time only moves through
    :meth:`advance`.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        *,
        rng: random.Random | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, rng=rng, settings=settings)
        self.scheduler_system = SchedulerSystem(self.world, self.event_bus)
        self.timer_system = TimerSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.session_system = SessionSystem(self.world, self.event_bus, self.board_system)

    # Input surface -----------------------------------------------------

    def request_start(self, difficulty: Difficulty | str) -> GameSession:
        return self.session_system.request_start(difficulty)

    def select_tile(self, index: int) -> bool:
        return self.board_system.select_tile(index)

    def request_replay(self) -> bool:
        return self.session_system.request_replay()

    def request_exit(self) -> None:
        self.session_system.request_exit()

    def advance(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def subscribe(self, event_name: str, handler: Callable[..., None]) -> None:
        self.event_bus.subscribe(event_name, handler)

    # Queries -----------------------------------------------------------

    @property
    def session(self) -> GameSession:
        return self.world.component_for_entity(self._session_entity(), GameSession)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self._session_entity(), Board)

    @property
    def timer(self) -> Timer:
        return self.world.component_for_entity(self._session_entity(), Timer)

    @property
    def phase(self) -> GamePhase:
        return self.session.phase

    def tiles(self) -> List[TileSnapshot]:
        return snapshot_tiles(self.world)

    def _session_entity(self) -> int:
        entity = get_session_entity(self.world)
        if entity is None:
            raise RuntimeError("GameSession not found")
        return entity
