"""Input handling and screen lifecycle for the ECS-driven menus."""
from __future__ import annotations

from typing import Callable

from esper import World

from concentration.components.difficulty import Difficulty
from concentration.components.game_state import GamePhase
from concentration.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MENU_DIFFICULTY_SELECTED,
    EVENT_MENU_EXIT_SELECTED,
    EVENT_MENU_REPLAY_SELECTED,
    EVENT_MENU_START_SELECTED,
    EVENT_MOUSE_PRESS,
    EVENT_PHASE_CHANGED,
    EVENT_SESSION_COMPLETED,
    EVENT_SESSION_RESET,
    EventBus,
)
from concentration.menu.components import MenuAction, MenuButton, MenuScreen, MenuState
from concentration.menu.factory import clear_menu, spawn_results_menu, spawn_start_menu
from concentration.utils.game_state import get_session

# Arcade key codes, kept local so the menu works without importing arcade.
KEY_ENTER = 65293
KEY_SPACE = 32
KEY_ESCAPE = 65307
KEY_R = 114
KEY_1 = 49
KEY_2 = 50
KEY_3 = 51

_DIFFICULTY_KEYS = {
    KEY_1: Difficulty.EASY,
    KEY_2: Difficulty.MEDIUM,
    KEY_3: Difficulty.HARD,
}


class MenuInputSystem:
    """Processes input while a menu screen is showing and swaps screens on phase changes."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        menu_size_provider: Callable[[], tuple[float, float]] | None = None,
    ) -> None:
        self.world = world
        self._event_bus = event_bus
        self._menu_size_provider = menu_size_provider or (lambda: (800.0, 600.0))
        event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        event_bus.subscribe(EVENT_PHASE_CHANGED, self._on_phase_changed)
        event_bus.subscribe(EVENT_SESSION_COMPLETED, self._on_session_completed)
        event_bus.subscribe(EVENT_SESSION_RESET, self._on_session_reset)

    def show_start_menu(self) -> None:
        width, height = self._menu_size_provider()
        session = get_session(self.world)
        selected = session.difficulty if session is not None else Difficulty.EASY
        spawn_start_menu(self.world, int(width), int(height), selected=selected)

    def on_mouse_press(self, sender, **payload) -> None:
        x = payload.get("x")
        y = payload.get("y")
        button = payload.get("button")
        if x is None or y is None or button is None:
            return
        self.handle_mouse_press(float(x), float(y), int(button))

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        """Activate the enabled button under the cursor, if any."""
        if self._menu_state() is None or button != 1:
            return
        for _, menu_button in self.world.get_component(MenuButton):
            if not menu_button.enabled:
                continue
            if self._point_inside_button(x, y, menu_button):
                self._activate(menu_button.action, menu_button.difficulty)
                return

    def on_key_press(self, sender, **payload) -> None:
        symbol = payload.get("symbol")
        if symbol is None:
            return
        self.handle_key_press(int(symbol), int(payload.get("modifiers") or 0))

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        state = self._menu_state()
        if state is None:
            return
        if state.screen == MenuScreen.START:
            if symbol in _DIFFICULTY_KEYS:
                self._activate(MenuAction.SELECT_DIFFICULTY, _DIFFICULTY_KEYS[symbol])
            elif symbol in (KEY_ENTER, KEY_SPACE):
                self._activate(MenuAction.START)
        elif state.screen == MenuScreen.RESULTS:
            if symbol in (KEY_ENTER, KEY_R):
                self._activate(MenuAction.REPLAY)
        if symbol == KEY_ESCAPE:
            self._activate(MenuAction.EXIT)

    def _activate(self, action: MenuAction, difficulty: Difficulty | None = None) -> None:
        state = self._menu_state()
        if state is None:
            return
        if action == MenuAction.SELECT_DIFFICULTY and difficulty is not None:
            state.selected_difficulty = difficulty
            self._event_bus.emit(EVENT_MENU_DIFFICULTY_SELECTED, difficulty=difficulty)
        elif action == MenuAction.START:
            self._event_bus.emit(EVENT_MENU_START_SELECTED, difficulty=state.selected_difficulty)
        elif action == MenuAction.REPLAY:
            self._event_bus.emit(EVENT_MENU_REPLAY_SELECTED)
        elif action == MenuAction.EXIT:
            self._event_bus.emit(EVENT_MENU_EXIT_SELECTED)

    def _on_phase_changed(self, sender, **payload) -> None:
        if payload.get("new_phase") == GamePhase.PREVIEWING:
            clear_menu(self.world)

    def _on_session_completed(self, sender, **payload) -> None:
        session = get_session(self.world)
        if session is None or session.result is None:
            return
        width, height = self._menu_size_provider()
        spawn_results_menu(self.world, int(width), int(height), session.result)

    def _on_session_reset(self, sender, **payload) -> None:
        self.show_start_menu()

    def _menu_state(self) -> MenuState | None:
        for _, state in self.world.get_component(MenuState):
            return state
        return None

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
