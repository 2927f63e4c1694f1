"""Runtime settings for timing and the symbol alphabet."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Tuple

from concentration.constants import (
    COUNTDOWN_INTERVAL,
    MATCH_RESOLVE_DELAY,
    MISMATCH_RESOLVE_DELAY,
    SYMBOLS,
    TIMER_SAMPLE_INTERVAL,
)
from concentration.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONCENTRATION_"


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Timing knobs shared by the board, session and timer systems.

    Delays of zero (or less) make pair resolution synchronous, which headless
    callers and tests can use to skip the cosmetic pause.
    """

    match_delay: float = MATCH_RESOLVE_DELAY
    mismatch_delay: float = MISMATCH_RESOLVE_DELAY
    countdown_interval: float = COUNTDOWN_INTERVAL
    timer_sample_interval: float = TIMER_SAMPLE_INTERVAL
    symbols: Tuple[str, ...] = field(default=SYMBOLS)

    def __post_init__(self) -> None:
        if self.countdown_interval <= 0.0:
            raise InvalidConfiguration("countdown_interval must be positive")
        if self.timer_sample_interval <= 0.0:
            raise InvalidConfiguration("timer_sample_interval must be positive")
        if len(set(self.symbols)) != len(self.symbols):
            raise InvalidConfiguration("symbol alphabet must not contain duplicates")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GameSettings":
        """Build settings from ``CONCENTRATION_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        overrides: dict[str, float] = {}
        for name in ("match_delay", "mismatch_delay", "countdown_interval", "timer_sample_interval"):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is None or raw == "":
                continue
            try:
                overrides[name] = float(raw)
            except ValueError as exc:
                raise InvalidConfiguration(f"{ENV_PREFIX}{name.upper()} must be a number, got {raw!r}") from exc
        if overrides:
            logger.info("Settings overridden from environment: %s", overrides)
        return replace(cls(), **overrides)
