from gempuzzle.components.game_state import GameMode
from gempuzzle.components.resolver_state import ResolverPhase
from gempuzzle.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_TILE_CLICK,
    EVENT_TILE_SWIPE,
    EVENT_PAUSE_REQUEST,
    EVENT_EXIT_REQUEST,
    EVENT_OVERLAY_DISMISSED,
)
from gempuzzle.systems.input import KEY_ESCAPE, InputSystem
from gempuzzle.systems.resolver_state_utils import get_or_create_resolver_state
from gempuzzle.ui.layout import compute_board_geometry
from gempuzzle.utils.game_state import set_game_mode
from gempuzzle.world import create_world
from tests.helpers import record_events


class DummyWindow:
    def __init__(self, width=480, height=800):
        self.width = width
        self.height = height


def _setup(mode=GameMode.PUZZLE):
    bus = EventBus()
    world = create_world(bus, initial_mode=mode)
    window = DummyWindow()
    InputSystem(bus, window, world)
    geometry = compute_board_geometry(window.width, window.height)
    return bus, world, geometry


def _drag(bus, start, end, press_id=None):
    bus.emit(EVENT_MOUSE_PRESS, x=start[0], y=start[1], button=1, press_id=press_id)
    bus.emit(EVENT_MOUSE_RELEASE, x=end[0], y=end[1], button=1)


def test_press_and_release_on_same_cell_is_a_tap():
    bus, world, geometry = _setup()
    clicks = record_events(bus, EVENT_TILE_CLICK)
    x, y = geometry.cell_center(2, 3)

    _drag(bus, (x, y), (x + 5, y - 5))

    assert clicks == [{"row": 2, "col": 3}]


def test_row_zero_is_the_top_of_the_board():
    bus, world, geometry = _setup()
    clicks = record_events(bus, EVENT_TILE_CLICK)
    x, y = geometry.cell_center(0, 0)
    assert y > geometry.cell_center(7, 0)[1]

    _drag(bus, (x, y), (x, y))

    assert clicks == [{"row": 0, "col": 0}]


def test_horizontal_drag_swipes_along_dominant_axis():
    bus, world, geometry = _setup()
    swipes = record_events(bus, EVENT_TILE_SWIPE)
    clicks = record_events(bus, EVENT_TILE_CLICK)
    x, y = geometry.cell_center(4, 4)

    _drag(bus, (x, y), (x + 40, y + 10))
    _drag(bus, (x, y), (x - 40, y - 10))

    assert swipes == [
        {"src": (4, 4), "dst": (4, 5)},
        {"src": (4, 4), "dst": (4, 3)},
    ]
    assert clicks == []


def test_upward_drag_targets_the_row_above():
    bus, world, geometry = _setup()
    swipes = record_events(bus, EVENT_TILE_SWIPE)
    x, y = geometry.cell_center(4, 4)

    _drag(bus, (x, y), (x, y + 40))
    _drag(bus, (x, y), (x, y - 40))

    assert swipes == [
        {"src": (4, 4), "dst": (3, 4)},
        {"src": (4, 4), "dst": (5, 4)},
    ]


def test_swipe_off_the_board_is_dropped():
    bus, world, geometry = _setup()
    swipes = record_events(bus, EVENT_TILE_SWIPE)
    clicks = record_events(bus, EVENT_TILE_CLICK)
    x, y = geometry.cell_center(0, 0)

    _drag(bus, (x, y), (x - 40, y))
    _drag(bus, (x, y), (x, y + 40))

    assert swipes == []
    assert clicks == []


def test_press_outside_board_does_nothing():
    bus, world, geometry = _setup()
    clicks = record_events(bus, EVENT_TILE_CLICK)

    _drag(bus, (5, 5), (5, 5))

    assert clicks == []


def test_right_button_is_ignored():
    bus, world, geometry = _setup()
    clicks = record_events(bus, EVENT_TILE_CLICK)
    x, y = geometry.cell_center(1, 1)

    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=4)

    assert clicks == []


def test_input_is_ignored_while_resolver_is_busy():
    bus, world, geometry = _setup()
    clicks = record_events(bus, EVENT_TILE_CLICK)
    get_or_create_resolver_state(world).phase = ResolverPhase.FALLING
    x, y = geometry.cell_center(1, 1)

    _drag(bus, (x, y), (x, y))

    assert clicks == []


def test_header_button_pauses_puzzle_and_exits_zen():
    bus, world, geometry = _setup()
    pauses = record_events(bus, EVENT_PAUSE_REQUEST)
    exits = record_events(bus, EVENT_EXIT_REQUEST)

    _drag(bus, (450, 760), (450, 760))
    assert len(pauses) == 1

    set_game_mode(world, bus, GameMode.ZEN)
    _drag(bus, (450, 760), (450, 760))
    assert len(exits) == 1


def test_click_while_paused_resumes():
    bus, world, geometry = _setup(GameMode.PAUSED)
    pauses = record_events(bus, EVENT_PAUSE_REQUEST)
    clicks = record_events(bus, EVENT_TILE_CLICK)
    x, y = geometry.cell_center(3, 3)

    _drag(bus, (x, y), (x, y))

    assert len(pauses) == 1
    assert clicks == []


def test_click_on_overlay_dismisses_it():
    for mode in (GameMode.GAME_OVER, GameMode.LEVEL_CLEAR):
        bus, world, geometry = _setup(mode)
        dismissed = record_events(bus, EVENT_OVERLAY_DISMISSED)
        _drag(bus, (100, 100), (100, 100))
        assert len(dismissed) == 1


def test_press_that_changed_mode_does_not_reach_board():
    bus, world, geometry = _setup(GameMode.MENU)
    clicks = record_events(bus, EVENT_TILE_CLICK)
    set_game_mode(world, bus, GameMode.PUZZLE, input_guard_press_id=7)
    x, y = geometry.cell_center(3, 3)

    _drag(bus, (x, y), (x, y), press_id=7)
    assert clicks == []

    _drag(bus, (x, y), (x, y), press_id=8)
    assert clicks == [{"row": 3, "col": 3}]


def test_escape_pauses_puzzle_and_exits_zen():
    bus, world, geometry = _setup()
    input_system = InputSystem(bus, DummyWindow(), world)
    pauses = record_events(bus, EVENT_PAUSE_REQUEST)
    exits = record_events(bus, EVENT_EXIT_REQUEST)

    input_system.handle_key_press(KEY_ESCAPE)
    input_system.handle_key_press(97)
    assert len(pauses) == 1

    set_game_mode(world, bus, GameMode.ZEN)
    input_system.handle_key_press(KEY_ESCAPE)
    assert len(exits) == 1


def test_escape_is_ignored_mid_cascade_but_still_resumes():
    bus, world, geometry = _setup()
    input_system = InputSystem(bus, DummyWindow(), world)
    pauses = record_events(bus, EVENT_PAUSE_REQUEST)
    exits = record_events(bus, EVENT_EXIT_REQUEST)
    get_or_create_resolver_state(world).phase = ResolverPhase.CLEARING

    input_system.handle_key_press(KEY_ESCAPE)
    set_game_mode(world, bus, GameMode.ZEN)
    input_system.handle_key_press(KEY_ESCAPE)
    assert pauses == []
    assert exits == []

    set_game_mode(world, bus, GameMode.PAUSED)
    input_system.handle_key_press(KEY_ESCAPE)
    assert len(pauses) == 1
