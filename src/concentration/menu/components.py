"""Components used by the start and results screens."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from concentration.components.difficulty import Difficulty
from concentration.components.score import ScoreResult


class MenuAction(Enum):
    """Actions that a menu button can trigger."""
    SELECT_DIFFICULTY = auto()
    START = auto()
    REPLAY = auto()
    EXIT = auto()


class MenuScreen(Enum):
    START = auto()
    RESULTS = auto()


@dataclass
class MenuButton:
    """Interactive button displayed on a menu screen."""
    label: str
    action: MenuAction
    x: float
    y: float
    width: float = 200.0
    height: float = 56.0
    enabled: bool = True
    difficulty: Optional[Difficulty] = None


@dataclass
class MenuState:
    """Which screen is showing and the difficulty picked on it."""
    screen: MenuScreen = MenuScreen.START
    selected_difficulty: Difficulty = Difficulty.EASY
    result: Optional[ScoreResult] = None


@dataclass
class MenuBackground:
    """Background styling data for the menu screen."""
    color: tuple[int, int, int] = (20, 30, 50)


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
