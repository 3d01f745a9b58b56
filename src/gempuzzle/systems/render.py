from typing import Optional, Tuple

from esper import World

from gempuzzle.components.game_state import GameMode
from gempuzzle.events.bus import EventBus, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED
from gempuzzle.rendering.board_renderer import BoardRenderer
from gempuzzle.rendering.hud_renderer import HudRenderer
from gempuzzle.systems.board_ops import board_dimensions
from gempuzzle.ui.layout import compute_board_geometry
from gempuzzle.utils.game_state import current_mode
from gempuzzle.utils.session import get_session


class RenderSystem:
    """Pull-based renderer: reads board, session and mode each frame, never writes them."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.selected: Optional[Tuple[int, int]] = None
        self._board_renderer = BoardRenderer(world)
        self._hud_renderer = HudRenderer(window)
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def process(self):
        mode = current_mode(self.world)
        if mode is None or mode == GameMode.MENU:
            return
        dims = board_dimensions(self.world)
        if dims is None:
            return
        rows, cols = dims
        geometry = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        self._hud_renderer.draw_header(geometry, get_session(self.world), mode)
        self._board_renderer.draw(geometry, self.selected)
        self._hud_renderer.draw_overlay(mode)
