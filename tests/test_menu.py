from gempuzzle.components.game_state import GameMode
from gempuzzle.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_MENU_PUZZLE_SELECTED,
    EVENT_MENU_ZEN_SELECTED,
)
from gempuzzle.menu.components import MenuAction, MenuButton, MenuTag
from gempuzzle.menu.factory import clear_main_menu, spawn_main_menu
from gempuzzle.menu.input_system import MenuInputSystem
from gempuzzle.utils.game_state import set_game_mode
from gempuzzle.world import create_world
from tests.helpers import record_events


def _buttons(world):
    return {button.action: button for _, button in world.get_component(MenuButton)}


def test_spawn_menu_creates_both_modes_once():
    world = create_world(EventBus())
    spawn_main_menu(world, 480, 800)
    spawn_main_menu(world, 600, 900)

    buttons = _buttons(world)
    assert set(buttons) == {MenuAction.PUZZLE, MenuAction.ZEN}
    assert len(list(world.get_component(MenuTag))) == 2
    assert buttons[MenuAction.PUZZLE].x == 300

    clear_main_menu(world)
    assert list(world.get_component(MenuButton)) == []


def test_clicking_buttons_selects_modes():
    bus = EventBus()
    world = create_world(bus)
    spawn_main_menu(world, 480, 800)
    MenuInputSystem(world, bus)
    puzzle = record_events(bus, EVENT_MENU_PUZZLE_SELECTED)
    zen = record_events(bus, EVENT_MENU_ZEN_SELECTED)
    buttons = _buttons(world)

    pz = buttons[MenuAction.PUZZLE]
    bus.emit(EVENT_MOUSE_PRESS, x=pz.x, y=pz.y, button=1, press_id=1)
    zb = buttons[MenuAction.ZEN]
    bus.emit(EVENT_MOUSE_PRESS, x=zb.x + 90, y=zb.y - 20, button=1, press_id=2)

    assert puzzle == [{"press_id": 1}]
    assert zen == [{"press_id": 2}]


def test_clicks_outside_buttons_or_menu_are_ignored():
    bus = EventBus()
    world = create_world(bus)
    spawn_main_menu(world, 480, 800)
    MenuInputSystem(world, bus)
    puzzle = record_events(bus, EVENT_MENU_PUZZLE_SELECTED)
    pz = _buttons(world)[MenuAction.PUZZLE]

    bus.emit(EVENT_MOUSE_PRESS, x=10, y=10, button=1)
    set_game_mode(world, bus, GameMode.PUZZLE)
    bus.emit(EVENT_MOUSE_PRESS, x=pz.x, y=pz.y, button=1)

    assert puzzle == []


def test_keyboard_shortcuts():
    bus = EventBus()
    world = create_world(bus)
    menu_input = MenuInputSystem(world, bus)
    puzzle = record_events(bus, EVENT_MENU_PUZZLE_SELECTED)
    zen = record_events(bus, EVENT_MENU_ZEN_SELECTED)

    menu_input.handle_key_press(65293, 0)
    menu_input.handle_key_press(122, 0)
    menu_input.handle_key_press(97, 0)

    assert len(puzzle) == 1
    assert len(zen) == 1
