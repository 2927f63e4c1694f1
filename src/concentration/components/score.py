from dataclasses import dataclass

from concentration.components.difficulty import Difficulty


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Final statistics of a completed session."""
    elapsed_seconds: int
    attempts: int
    difficulty: Difficulty
    score: int

    @property
    def elapsed_time_ms(self) -> int:
        return self.elapsed_seconds * 1000
