from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                    # payload: dt=float
EVENT_TIMER_START = "timer_start"                      # payload: session_id=int
EVENT_TIMER_STOP = "timer_stop"                        # payload: session_id=int
EVENT_TIMER_SAMPLE_TICK = "timer_sample_tick"          # payload: session_id=int
EVENT_TIMER_SAMPLED = "timer_sampled"                  # payload: session_id=int, elapsed_seconds=int


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                      # payload: x, y, button
EVENT_KEY_PRESS = "key_press"                          # payload: symbol, modifiers
EVENT_TILE_CLICK = "tile_click"                        # payload: index=int


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_BOARD_INITIALIZED = "board_initialized"          # payload: session_id=int, symbols=list[str], cols=int, rows=int
EVENT_TILE_FLIPPED = "tile_flipped"                    # payload: session_id=int, index=int, symbol=str
EVENT_FIRST_FLIP = "first_flip"                        # payload: session_id=int, index=int
EVENT_PAIR_EVALUATED = "pair_evaluated"                # payload: session_id=int, indices=(int,int), matched=bool, attempts=int
EVENT_PAIR_RESOLVE = "pair_resolve"                    # payload: session_id=int, indices=(int,int), matched=bool
EVENT_TILES_HIDDEN = "tiles_hidden"                    # payload: session_id=int, indices=(int,int)
EVENT_PAIR_MATCHED = "pair_matched"                    # payload: session_id=int, indices=(int,int), pairs_found=int, attempts=int
EVENT_BOARD_CLEARED = "board_cleared"                  # payload: session_id=int, attempts=int


# ============================================================================
# SESSION FLOW & STATE
# ============================================================================
EVENT_PHASE_CHANGED = "phase_changed"                  # payload: session_id=int, previous_phase=GamePhase, new_phase=GamePhase
EVENT_PREVIEW_STARTED = "preview_started"              # payload: session_id=int, difficulty=Difficulty, symbols=list[str], seconds=int, cols=int, rows=int
EVENT_PREVIEW_COUNTDOWN_TICK = "preview_countdown_tick"  # payload: session_id=int
EVENT_PREVIEW_COUNTDOWN = "preview_countdown"          # payload: session_id=int, remaining=int
EVENT_PLAY_STARTED = "play_started"                    # payload: session_id=int
EVENT_SESSION_STARTED = "session_started"              # payload: session_id=int, difficulty=Difficulty
EVENT_SESSION_COMPLETED = "session_completed"          # payload: session_id=int, attempts=int, elapsed_time_ms=int, difficulty=Difficulty, score=int
EVENT_SESSION_RESET = "session_reset"                  # payload: session_id=int, reason=str
EVENT_EXIT_REQUESTED = "exit_requested"                # payload: session_id=int


# ============================================================================
# MENU
# ============================================================================
EVENT_MENU_DIFFICULTY_SELECTED = "menu_difficulty_selected"  # payload: difficulty=Difficulty
EVENT_MENU_START_SELECTED = "menu_start_selected"            # payload: difficulty=Difficulty
EVENT_MENU_REPLAY_SELECTED = "menu_replay_selected"          # payload: none
EVENT_MENU_EXIT_SELECTED = "menu_exit_selected"              # payload: none
