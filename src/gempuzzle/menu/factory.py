"""Factory helpers for creating the main menu entities."""
from esper import World

from gempuzzle.menu.components import MenuAction, MenuButton, MenuTag

PUZZLE_BUTTON_COLOR = (76, 175, 80)
ZEN_BUTTON_COLOR = (33, 150, 243)


def clear_main_menu(world: World) -> None:
    for ent in [ent for ent, _ in world.get_component(MenuTag)]:
        world.delete_entity(ent, immediate=True)


def spawn_main_menu(world: World, width: int, height: int) -> None:
    """Create the Puzzle and Zen buttons, replacing any existing menu entities.

    Called again on window resize so the buttons stay centred.
    """
    clear_main_menu(world)
    center_x = width / 2
    center_y = height / 2
    button_specs = (
        ("PUZZLE MODE", MenuAction.PUZZLE, center_y + 25.0, PUZZLE_BUTTON_COLOR),
        ("ZEN MODE", MenuAction.ZEN, center_y - 45.0, ZEN_BUTTON_COLOR),
    )
    for label, action, y_position, color in button_specs:
        world.create_entity(
            MenuButton(label=label, action=action, x=center_x, y=y_position, color=color),
            MenuTag(),
        )
