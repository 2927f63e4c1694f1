"""Session resource describing the active phase of play."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from concentration.components.difficulty import Difficulty
from concentration.components.score import ScoreResult


class GamePhase(Enum):
    """Lifecycle phases of a single play-through."""
    IDLE = auto()
    PREVIEWING = auto()
    PLAYING = auto()
    ENDED = auto()


@dataclass
class GameSession:
    """Singleton component for the session currently owned by the game.

    ``session_id`` increases every time a session is replaced; scheduled work
    and tiles carry it so leftovers from a superseded session can be told apart.
    """
    session_id: int = 0
    difficulty: Difficulty = Difficulty.EASY
    phase: GamePhase = GamePhase.IDLE
    preview_remaining: int = 0
    started: bool = False
    result: Optional[ScoreResult] = None
