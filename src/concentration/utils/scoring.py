"""Score formula applied once a session completes."""
from __future__ import annotations

from concentration.components.difficulty import Difficulty
from concentration.components.score import ScoreResult
from concentration.constants import ATTEMPT_PENALTY, BASE_SCORE, TIME_PENALTY_PER_SECOND


def compute_score(elapsed_seconds: int, attempts: int, difficulty: Difficulty | str) -> ScoreResult:
    """Return the final score snapshot.

    ``max(0, 1000 - 10 * elapsed_seconds - 5 * attempts)`` scaled by the
    difficulty multiplier. Pure; identical inputs always give an equal result.
    """
    level = Difficulty.parse(difficulty)
    base = BASE_SCORE - TIME_PENALTY_PER_SECOND * elapsed_seconds - ATTEMPT_PENALTY * attempts
    score = max(0, base) * level.config.score_multiplier
    return ScoreResult(
        elapsed_seconds=elapsed_seconds,
        attempts=attempts,
        difficulty=level,
        score=score,
    )
