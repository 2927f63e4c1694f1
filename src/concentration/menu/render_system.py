"""Rendering system responsible for drawing the start and results screens."""
import arcade
from esper import World

from concentration.menu.components import MenuAction, MenuBackground, MenuButton, MenuScreen, MenuState


class MenuRenderSystem:
    """Renders menu entities whenever a menu screen is active."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> bool:
        """Draw the active menu; returns False when no menu is showing."""
        state = self._menu_state()
        if state is None:
            return False

        for _, background in self.world.get_component(MenuBackground):
            arcade.draw_lrbt_rectangle_filled(
                0,
                self.window.width,
                0,
                self.window.height,
                background.color,
            )

        if state.screen == MenuScreen.START:
            self._draw_title("Memory Match", "Pick a difficulty, memorise the tiles, then find every pair.")
        elif state.result is not None:
            result = state.result
            self._draw_title(
                "Board cleared!",
                f"Time {result.elapsed_seconds}s   Attempts {result.attempts}   "
                f"Difficulty {result.difficulty.label}",
            )
            arcade.draw_text(
                f"Score {result.score}",
                self.window.width / 2,
                self.window.height / 2,
                arcade.color.ANTIQUE_WHITE,
                32,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )

        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            selected = (
                button.action == MenuAction.SELECT_DIFFICULTY
                and button.difficulty == state.selected_difficulty
            )
            if not button.enabled:
                fill_color = arcade.color.GRAY_BLUE
            elif selected:
                fill_color = arcade.color.LIGHT_STEEL_BLUE
            else:
                fill_color = arcade.color.DARK_SLATE_BLUE
            outline_color = arcade.color.WHITE if button.enabled else arcade.color.SILVER
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, fill_color)
            arcade.draw_lbwh_rectangle_outline(
                left,
                bottom,
                button.width,
                button.height,
                outline_color,
                border_width=2,
            )
            arcade.draw_text(
                button.label,
                button.x,
                button.y,
                arcade.color.WHITE,
                22,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )
        return True

    def _draw_title(self, title: str, subtitle: str) -> None:
        arcade.draw_text(
            title,
            self.window.width / 2,
            self.window.height - 90,
            arcade.color.WHITE,
            36,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        arcade.draw_text(
            subtitle,
            self.window.width / 2,
            self.window.height - 140,
            arcade.color.LIGHT_GRAY,
            16,
            anchor_x="center",
            anchor_y="center",
        )

    def _menu_state(self) -> MenuState | None:
        for _, state in self.world.get_component(MenuState):
            return state
        return None
