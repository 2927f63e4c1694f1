"""High-level coordinator for session phase transitions."""
from __future__ import annotations

import logging
import random

from esper import World

from concentration.components.board import Board
from concentration.components.difficulty import Difficulty
from concentration.components.game_state import GamePhase, GameSession
from concentration.components.score import ScoreResult
from concentration.components.timer import Timer
from concentration.config import GameSettings
from concentration.events.bus import (
    EVENT_BOARD_CLEARED,
    EVENT_EXIT_REQUESTED,
    EVENT_FIRST_FLIP,
    EVENT_MENU_EXIT_SELECTED,
    EVENT_MENU_REPLAY_SELECTED,
    EVENT_MENU_START_SELECTED,
    EVENT_PLAY_STARTED,
    EVENT_PREVIEW_COUNTDOWN,
    EVENT_PREVIEW_COUNTDOWN_TICK,
    EVENT_PREVIEW_STARTED,
    EVENT_SESSION_COMPLETED,
    EVENT_SESSION_RESET,
    EVENT_SESSION_STARTED,
    EVENT_TIMER_START,
    EVENT_TIMER_STOP,
    EventBus,
)
from concentration.systems.board import BoardSystem
from concentration.systems.board_ops import clear_tiles
from concentration.systems.deal import deal_symbols
from concentration.utils.game_state import get_session, get_session_entity, is_current_session, set_phase
from concentration.utils.scoring import compute_score

logger = logging.getLogger(__name__)


class SessionSystem:
    """Drives a session through idle, preview, play and completion.

    The session entity carries ``GameSession``, ``Board`` and ``Timer``; a new
    game replaces all three and cancels whatever the old one had scheduled.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: BoardSystem,
        *,
        rng: random.Random | None = None,
        settings: GameSettings | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self._settings = settings or getattr(world, "settings", None) or GameSettings()
        self._countdown_handle: int | None = None
        self._session_entity = get_session_entity(world)
        if self._session_entity is None:
            self._session_entity = world.create_entity(GameSession(), Board(), Timer())
        self._next_session_id = self._session().session_id + 1

        self.event_bus.subscribe(EVENT_PREVIEW_COUNTDOWN_TICK, self._on_countdown_tick)
        self.event_bus.subscribe(EVENT_FIRST_FLIP, self._on_first_flip)
        self.event_bus.subscribe(EVENT_BOARD_CLEARED, self._on_board_cleared)
        self.event_bus.subscribe(EVENT_MENU_START_SELECTED, self._on_menu_start)
        self.event_bus.subscribe(EVENT_MENU_REPLAY_SELECTED, self._on_menu_replay)
        self.event_bus.subscribe(EVENT_MENU_EXIT_SELECTED, self._on_menu_exit)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request_start(self, difficulty: Difficulty | str) -> GameSession:
        """Deal a fresh board for ``difficulty`` and begin the preview countdown.

        Works from any phase; the previous session is discarded. Raises
        ``InvalidConfiguration`` before touching any state if the difficulty
        is unknown or cannot be dealt from the symbol alphabet.
        """
        level = Difficulty.parse(difficulty)
        config = level.config
        symbols = deal_symbols(config.pair_count, self._rng, self._settings.symbols)

        previous_phase = self._session().phase
        self._teardown(reason="new_session")
        # Carry the outgoing phase so the change below reports where play really was.
        session = GameSession(
            session_id=self._allocate_session_id(),
            difficulty=level,
            phase=previous_phase,
            preview_remaining=config.preview_seconds,
        )
        self.world.add_component(self._session_entity, session)
        self.world.add_component(self._session_entity, Timer(session_id=session.session_id))
        self.board_system.initialize(symbols, cols=config.grid_cols, rows=config.grid_rows)

        set_phase(self.world, self.event_bus, GamePhase.PREVIEWING)
        logger.info(
            "Session %s started on %s (%d pairs, %ds preview)",
            session.session_id, level.value, config.pair_count, config.preview_seconds,
        )
        self.event_bus.emit(
            EVENT_PREVIEW_STARTED,
            session_id=session.session_id,
            difficulty=level,
            symbols=list(symbols),
            seconds=config.preview_seconds,
            cols=config.grid_cols,
            rows=config.grid_rows,
        )
        if config.preview_seconds <= 0:
            self._begin_play(session)
        else:
            self._countdown_handle = self._scheduler().schedule(
                EVENT_PREVIEW_COUNTDOWN_TICK,
                self._settings.countdown_interval,
                session_id=session.session_id,
                interval=self._settings.countdown_interval,
            )
        return session

    def request_replay(self) -> bool:
        """Return an ended session to idle; ignored in any other phase."""
        session = self._session()
        if session.phase != GamePhase.ENDED:
            logger.debug("Replay ignored in phase %s", session.phase.name)
            return False
        self._teardown(reason="replay")
        fresh = GameSession(
            session_id=self._allocate_session_id(),
            difficulty=session.difficulty,
            phase=session.phase,
        )
        self.world.add_component(self._session_entity, fresh)
        self.world.add_component(self._session_entity, Timer(session_id=fresh.session_id))
        set_phase(self.world, self.event_bus, GamePhase.IDLE)
        logger.info("Session %s reset to idle", session.session_id)
        self.event_bus.emit(EVENT_SESSION_RESET, session_id=fresh.session_id, reason="replay")
        return True

    def request_exit(self) -> None:
        """Announce that the player wants to leave; the phase is unchanged."""
        session = self._session()
        logger.info("Exit requested during %s", session.phase.name)
        self.event_bus.emit(EVENT_EXIT_REQUESTED, session_id=session.session_id)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_menu_start(self, sender, **payload) -> None:
        difficulty = payload.get("difficulty")
        if difficulty is None:
            return
        self.request_start(difficulty)

    def _on_menu_replay(self, sender, **payload) -> None:
        self.request_replay()

    def _on_menu_exit(self, sender, **payload) -> None:
        self.request_exit()

    def _on_countdown_tick(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        if not is_current_session(self.world, session_id):
            logger.debug("Dropping countdown tick for stale session %s", session_id)
            return
        session = self._session()
        if session.phase != GamePhase.PREVIEWING:
            return
        session.preview_remaining -= 1
        self.event_bus.emit(
            EVENT_PREVIEW_COUNTDOWN,
            session_id=session.session_id,
            remaining=max(0, session.preview_remaining),
        )
        if session.preview_remaining <= 0:
            self._scheduler().cancel(self._countdown_handle)
            self._countdown_handle = None
            self._begin_play(session)

    def _on_first_flip(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        if not is_current_session(self.world, session_id):
            return
        session = self._session()
        self.event_bus.emit(EVENT_TIMER_START, session_id=session.session_id)
        logger.info("Session %s clock started", session.session_id)
        self.event_bus.emit(EVENT_SESSION_STARTED, session_id=session.session_id, difficulty=session.difficulty)

    def _on_board_cleared(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        if not is_current_session(self.world, session_id):
            return
        session = self._session()
        if session.phase != GamePhase.PLAYING:
            return
        set_phase(self.world, self.event_bus, GamePhase.ENDED)
        self.event_bus.emit(EVENT_TIMER_STOP, session_id=session.session_id)
        self._scheduler().cancel_session(session.session_id)
        timer = self.world.component_for_entity(self._session_entity, Timer)
        board = self.world.component_for_entity(self._session_entity, Board)
        result = compute_score(timer.elapsed_seconds, board.attempts, session.difficulty)
        session.result = result
        logger.info(
            "Session %s completed: %d attempts in %ds, score %d",
            session.session_id, result.attempts, result.elapsed_seconds, result.score,
        )
        self._emit_completed(session.session_id, result)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _begin_play(self, session: GameSession) -> None:
        set_phase(self.world, self.event_bus, GamePhase.PLAYING)
        logger.info("Session %s preview finished; play begins", session.session_id)
        self.event_bus.emit(EVENT_PLAY_STARTED, session_id=session.session_id)

    def _emit_completed(self, session_id: int, result: ScoreResult) -> None:
        self.event_bus.emit(
            EVENT_SESSION_COMPLETED,
            session_id=session_id,
            attempts=result.attempts,
            elapsed_time_ms=result.elapsed_time_ms,
            difficulty=result.difficulty,
            score=result.score,
        )

    def _teardown(self, *, reason: str) -> None:
        """Cancel the current session's scheduled work and clear its board and clock."""
        session = self._session()
        scheduler = self._scheduler()
        scheduler.cancel_session(session.session_id)
        scheduler.cancel(self._countdown_handle)
        self._countdown_handle = None
        removed = clear_tiles(self.world)
        self.world.add_component(self._session_entity, Board())
        self.world.add_component(self._session_entity, Timer())
        logger.debug("Session %s torn down (%s, %d tiles removed)", session.session_id, reason, removed)

    def _allocate_session_id(self) -> int:
        session_id = self._next_session_id
        self._next_session_id += 1
        return session_id

    def _session(self) -> GameSession:
        return self.world.component_for_entity(self._session_entity, GameSession)

    def _scheduler(self):
        scheduler = getattr(self.world, "scheduler", None)
        if scheduler is None:
            raise RuntimeError("SchedulerSystem must be created before SessionSystem is used")
        return scheduler
