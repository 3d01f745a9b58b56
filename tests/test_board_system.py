from gempuzzle.components.game_state import GameMode
from gempuzzle.components.resolver_state import ResolverPhase
from gempuzzle.events.bus import (
    EventBus,
    EVENT_TILE_CLICK,
    EVENT_TILE_SWIPE,
    EVENT_TILE_SELECTED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_BOARD_RESET,
)
from gempuzzle.systems.board import BoardSystem
from gempuzzle.systems.resolver_state_utils import get_or_create_resolver_state
from gempuzzle.utils.game_state import set_game_mode
from gempuzzle.world import create_world
from tests.helpers import record_events


def _setup():
    bus = EventBus()
    world = create_world(bus, initial_mode=GameMode.PUZZLE)
    board = BoardSystem(world, bus)
    return bus, world, board


def test_first_tap_selects():
    bus, world, board = _setup()
    selected = record_events(bus, EVENT_TILE_SELECTED)

    bus.emit(EVENT_TILE_CLICK, row=1, col=2)

    assert board.selected == (1, 2)
    assert selected == [{"row": 1, "col": 2}]


def test_tapping_selected_tile_deselects():
    bus, world, board = _setup()
    deselected = record_events(bus, EVENT_TILE_DESELECTED)

    bus.emit(EVENT_TILE_CLICK, row=1, col=2)
    bus.emit(EVENT_TILE_CLICK, row=1, col=2)

    assert board.selected is None
    assert deselected[0]["reason"] == "same_tile"


def test_tapping_adjacent_tile_requests_swap():
    bus, world, board = _setup()
    swaps = record_events(bus, EVENT_TILE_SWAP_REQUEST)

    bus.emit(EVENT_TILE_CLICK, row=1, col=2)
    bus.emit(EVENT_TILE_CLICK, row=2, col=2)

    assert swaps == [{"src": (1, 2), "dst": (2, 2)}]
    assert board.selected is None


def test_tapping_distant_tile_moves_selection():
    bus, world, board = _setup()
    swaps = record_events(bus, EVENT_TILE_SWAP_REQUEST)

    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    bus.emit(EVENT_TILE_CLICK, row=3, col=3)

    assert swaps == []
    assert board.selected == (3, 3)


def test_swipe_requests_swap_and_clears_selection():
    bus, world, board = _setup()
    swaps = record_events(bus, EVENT_TILE_SWAP_REQUEST)

    bus.emit(EVENT_TILE_CLICK, row=5, col=5)
    bus.emit(EVENT_TILE_SWIPE, src=(0, 0), dst=(0, 1))

    assert swaps == [{"src": (0, 0), "dst": (0, 1)}]
    assert board.selected is None


def test_taps_ignored_while_processing():
    bus, world, board = _setup()
    get_or_create_resolver_state(world).phase = ResolverPhase.SWAPPING

    bus.emit(EVENT_TILE_CLICK, row=0, col=0)

    assert board.selected is None


def test_selection_cleared_on_reset_and_mode_change():
    bus, world, board = _setup()

    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    bus.emit(EVENT_BOARD_RESET, num_kinds=4, restored=False)
    assert board.selected is None

    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    set_game_mode(world, bus, GameMode.PAUSED)
    assert board.selected is None
