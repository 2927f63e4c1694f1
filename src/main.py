"""Entry point for the memory-matching game.

Sets up the headless game core, menu systems and the Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from concentration.config import GameSettings
from concentration.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from concentration.events.bus import EVENT_EXIT_REQUESTED, EVENT_KEY_PRESS, EVENT_MOUSE_PRESS
from concentration.game import MemoryGame
from concentration.menu.input_system import MenuInputSystem
from concentration.menu.render_system import MenuRenderSystem
from concentration.systems.input import InputSystem
from concentration.systems.render import RenderSystem

logger = logging.getLogger(__name__)


class MemoryWindow(Window):
    def __init__(self, settings: GameSettings | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Memory Match")
        self.set_update_rate(1/60)
        self.game = MemoryGame(settings=settings)
        self.event_bus = self.game.event_bus
        self.world = self.game.world

        # Menu systems
        self.menu_input_system = MenuInputSystem(
            self.world,
            self.event_bus,
            menu_size_provider=lambda: (self.width, self.height),
        )
        self.menu_render_system = MenuRenderSystem(self.world, self)

        # Board systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        self.event_bus.subscribe(EVENT_EXIT_REQUESTED, self._on_exit_requested)
        self.menu_input_system.show_start_menu()
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        if self.menu_render_system.process():
            return
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.game.advance(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, modifiers=modifiers)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def _on_exit_requested(self, sender, **payload):
        logger.info("Exit requested during %s; closing window", self.game.phase.name)
        self.close()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    )
    MemoryWindow(settings=GameSettings.from_env())
    run()

if __name__ == "__main__":
    main()
