from __future__ import annotations

import math
from typing import Tuple

from esper import World

from gempuzzle.components.game_state import GameMode
from gempuzzle.constants import SWIPE_THRESHOLD
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
from gempuzzle.systems.resolver_state_utils import is_processing
from gempuzzle.ui.layout import compute_board_geometry, grid_position_at, header_button_hit
from gempuzzle.utils.game_state import current_mode, get_game_state

LEFT_BUTTON = 1
KEY_ESCAPE = 65307  # arcade.key.ESCAPE


class InputSystem:
    """Turns pointer press/release pairs into taps, swipes and mode requests.

    A press and release on the same cell is a tap. A drag longer than the swipe
    threshold targets the neighbour along the dominant axis of the drag; swipes
    that would leave the board are dropped. Nothing reaches the board while the
    resolver is processing.
    """

    def __init__(self, event_bus: EventBus, window, world: World, *, swipe_threshold: float = SWIPE_THRESHOLD):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.swipe_threshold = swipe_threshold
        self._press_cell: Tuple[int, int] | None = None
        self._press_point: Tuple[float, float] = (0.0, 0.0)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None or kwargs.get('button', LEFT_BUTTON) != LEFT_BUTTON:
            return
        self._press_cell = None
        if self._is_guarded(kwargs.get('press_id')):
            return
        mode = current_mode(self.world)
        if mode == GameMode.PAUSED:
            self.event_bus.emit(EVENT_PAUSE_REQUEST)
            return
        if mode in (GameMode.LEVEL_CLEAR, GameMode.GAME_OVER):
            self.event_bus.emit(EVENT_OVERLAY_DISMISSED)
            return
        if mode not in (GameMode.PUZZLE, GameMode.ZEN):
            return
        if is_processing(self.world):
            return
        if header_button_hit(self.window.width, self.window.height, x, y):
            if mode == GameMode.PUZZLE:
                self.event_bus.emit(EVENT_PAUSE_REQUEST)
            else:
                self.event_bus.emit(EVENT_EXIT_REQUEST)
            return
        cell = self.cell_at(x, y)
        if cell is not None:
            self._press_cell = cell
            self._press_point = (x, y)

    def on_mouse_release(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        start = self._press_cell
        self._press_cell = None
        if start is None or x is None or y is None:
            return
        if is_processing(self.world):
            return
        dx = x - self._press_point[0]
        dy = y - self._press_point[1]
        if math.hypot(dx, dy) > self.swipe_threshold:
            target = self.swipe_target(start, dx, dy)
            if target is not None:
                self.event_bus.emit(EVENT_TILE_SWIPE, src=start, dst=target)
            return
        if self.cell_at(x, y) == start:
            self.event_bus.emit(EVENT_TILE_CLICK, row=start[0], col=start[1])

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        """ESC pauses or resumes Puzzle mode and leaves Zen mode, like the header button."""
        if symbol != KEY_ESCAPE:
            return
        mode = current_mode(self.world)
        if mode == GameMode.PAUSED:
            self.event_bus.emit(EVENT_PAUSE_REQUEST)
            return
        if is_processing(self.world):
            return
        if mode == GameMode.PUZZLE:
            self.event_bus.emit(EVENT_PAUSE_REQUEST)
        elif mode == GameMode.ZEN:
            self.event_bus.emit(EVENT_EXIT_REQUEST)

    def cell_at(self, x: float, y: float) -> Tuple[int, int] | None:
        geometry = compute_board_geometry(self.window.width, self.window.height)
        return grid_position_at(geometry, x, y)

    def swipe_target(self, start: Tuple[int, int], dx: float, dy: float) -> Tuple[int, int] | None:
        geometry = compute_board_geometry(self.window.width, self.window.height)
        row, col = start
        if abs(dx) > abs(dy):
            col += 1 if dx > 0 else -1
        else:
            # Screen y grows upward while board rows grow downward.
            row += -1 if dy > 0 else 1
        if 0 <= row < geometry.rows and 0 <= col < geometry.cols:
            return row, col
        return None

    def _is_guarded(self, press_id) -> bool:
        # The press that switched modes (e.g. a menu button) must not also hit the board.
        state = get_game_state(self.world)
        if state is None or press_id is None:
            return False
        return state.input_guard_press_id is not None and state.input_guard_press_id == press_id
