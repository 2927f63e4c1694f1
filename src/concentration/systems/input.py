from concentration.components.cursor import KeyboardCursor
from concentration.components.game_state import GamePhase
from concentration.events.bus import (
    EventBus,
    EVENT_BOARD_INITIALIZED,
    EVENT_KEY_PRESS,
    EVENT_MENU_EXIT_SELECTED,
    EVENT_MOUSE_PRESS,
    EVENT_TILE_CLICK,
)
from concentration.systems.board_ops import get_board
from concentration.ui.layout import tile_index_at
from concentration.utils.game_state import get_session

KEY_ENTER = 65293
KEY_SPACE = 32
KEY_ESCAPE = 65307
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364


class InputSystem:
    """Turns board clicks and keyboard focus moves into tile selections."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.cursor_entity = self.world.create_entity(KeyboardCursor())
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_BOARD_INITIALIZED, self.on_board_initialized)

    @property
    def cursor(self) -> KeyboardCursor:
        return self.world.component_for_entity(self.cursor_entity, KeyboardCursor)

    def on_board_initialized(self, sender, **kwargs):
        cursor = self.cursor
        cursor.index = 0
        cursor.visible = False

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Only the left button flips tiles.
        if button != 1:
            return
        if not self._playing():
            return
        board = get_board(self.world)
        if board is None:
            return
        index = tile_index_at(x, y, self.window.width, self.window.height, board.cols, board.rows)
        if index is None or index >= board.tile_count:
            return
        self.cursor.visible = False
        self.event_bus.emit(EVENT_TILE_CLICK, index=index)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        session = get_session(self.world)
        if session is None or session.phase not in (GamePhase.PREVIEWING, GamePhase.PLAYING):
            return
        if symbol == KEY_ESCAPE:
            self.event_bus.emit(EVENT_MENU_EXIT_SELECTED)
            return
        if session.phase != GamePhase.PLAYING:
            return
        board = get_board(self.world)
        if board is None or board.tile_count == 0 or board.cols <= 0:
            return
        cursor = self.cursor
        if symbol in (KEY_ENTER, KEY_SPACE):
            cursor.visible = True
            self.event_bus.emit(EVENT_TILE_CLICK, index=cursor.index)
            return
        row, col = divmod(cursor.index, board.cols)
        if symbol == KEY_LEFT:
            col = max(0, col - 1)
        elif symbol == KEY_RIGHT:
            col = min(board.cols - 1, col + 1)
        elif symbol == KEY_UP:
            row = max(0, row - 1)
        elif symbol == KEY_DOWN:
            row = min(board.rows - 1, row + 1)
        else:
            return
        candidate = row * board.cols + col
        if candidate < board.tile_count:
            cursor.index = candidate
        cursor.visible = True

    def _playing(self) -> bool:
        session = get_session(self.world)
        return session is not None and session.phase == GamePhase.PLAYING
