"""Factory helpers for creating and clearing menu entities."""
from esper import World

from concentration.components.difficulty import Difficulty
from concentration.components.score import ScoreResult
from concentration.menu.components import MenuAction, MenuBackground, MenuButton, MenuScreen, MenuState, MenuTag


def clear_menu(world: World) -> None:
    """Remove all entities that are part of the menu UI."""
    to_delete: set[int] = set()
    for component in (MenuButton, MenuBackground, MenuState, MenuTag):
        for ent, _ in world.get_component(component):
            to_delete.add(ent)
    for ent in to_delete:
        world.delete_entity(ent, immediate=True)


def spawn_start_menu(
    world: World,
    width: int,
    height: int,
    *,
    selected: Difficulty = Difficulty.EASY,
) -> None:
    """Create the difficulty buttons and the start button."""
    clear_menu(world)
    center_x = width / 2
    center_y = height / 2

    world.create_entity(MenuBackground(), MenuState(screen=MenuScreen.START, selected_difficulty=selected), MenuTag())

    spacing = 220.0
    for offset, difficulty in zip((-1, 0, 1), Difficulty):
        world.create_entity(
            MenuButton(
                label=difficulty.label,
                action=MenuAction.SELECT_DIFFICULTY,
                x=center_x + offset * spacing,
                y=center_y + 40.0,
                difficulty=difficulty,
            ),
            MenuTag(),
        )
    world.create_entity(
        MenuButton(label="Start", action=MenuAction.START, x=center_x, y=center_y - 60.0),
        MenuTag(),
    )


def spawn_results_menu(world: World, width: int, height: int, result: ScoreResult) -> None:
    """Create the end screen showing final stats with replay and exit buttons."""
    clear_menu(world)
    center_x = width / 2
    center_y = height / 2

    world.create_entity(
        MenuBackground(),
        MenuState(screen=MenuScreen.RESULTS, selected_difficulty=result.difficulty, result=result),
        MenuTag(),
    )
    button_specs = (
        ("Replay", MenuAction.REPLAY, center_x - 120.0),
        ("Exit", MenuAction.EXIT, center_x + 120.0),
    )
    for label, action, x in button_specs:
        world.create_entity(
            MenuButton(label=label, action=action, x=x, y=center_y - 120.0),
            MenuTag(),
        )
