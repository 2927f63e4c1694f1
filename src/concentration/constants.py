"""Shared constants for the memory-matching core and its Arcade front end."""

# Ordered symbol alphabet. A board of N pairs uses the first N entries.
SYMBOLS = (
    "⭐", "🌟", "🔶", "🔷", "💠", "🔺",
    "🔻", "🔴", "🟢", "🔵", "🟡", "🟣",
)

# Cosmetic delays before a flipped pair resolves (seconds).
MATCH_RESOLVE_DELAY = 0.5
MISMATCH_RESOLVE_DELAY = 1.0

# Preview countdown decrements once per interval.
COUNTDOWN_INTERVAL = 1.0
# The visible timer is re-sampled once per interval while playing.
TIMER_SAMPLE_INTERVAL = 1.0

# Score formula terms.
BASE_SCORE = 1000
TIME_PENALTY_PER_SECOND = 10
ATTEMPT_PENALTY = 5

# Window and board geometry.
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
BOTTOM_MARGIN = 20
# Top band reserved for the status bar (difficulty, attempts, timer).
HUD_HEIGHT = 60
TILE_PADDING = 6

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.90
MIN_TILE_SIZE = 20
