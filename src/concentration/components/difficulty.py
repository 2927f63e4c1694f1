"""Difficulty levels and their fixed board configuration."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from concentration.errors import InvalidConfiguration


class Difficulty(Enum):
    """Selectable difficulty; the value is the name shown to players."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        """Accept a member or a case-insensitive name such as ``"Hard"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidConfiguration(f"Unknown difficulty {value!r}")

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def config(self) -> "DifficultyConfig":
        return DIFFICULTY_TABLE[self]


@dataclass(frozen=True, slots=True)
class DifficultyConfig:
    pair_count: int
    preview_seconds: int
    grid_cols: int
    grid_rows: int
    score_multiplier: int

    @property
    def tile_count(self) -> int:
        return self.pair_count * 2


DIFFICULTY_TABLE: Mapping[Difficulty, DifficultyConfig] = MappingProxyType({
    Difficulty.EASY: DifficultyConfig(pair_count=6, preview_seconds=5, grid_cols=4, grid_rows=3, score_multiplier=1),
    Difficulty.MEDIUM: DifficultyConfig(pair_count=8, preview_seconds=4, grid_cols=4, grid_rows=4, score_multiplier=2),
    Difficulty.HARD: DifficultyConfig(pair_count=12, preview_seconds=3, grid_cols=4, grid_rows=6, score_multiplier=3),
})
