from typing import Optional, Tuple
from esper import World
from gempuzzle.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SWIPE, EVENT_TILE_SELECTED,
                                  EVENT_TILE_DESELECTED, EVENT_TILE_SWAP_REQUEST, EVENT_BOARD_RESET,
                                  EVENT_GAME_MODE_CHANGED)
from gempuzzle.systems.board_ops import is_adjacent
from gempuzzle.systems.resolver_state_utils import is_processing


class BoardSystem:
    """Tracks the selected gem and turns taps and swipes into swap requests."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_SWIPE, self.on_tile_swipe)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self.on_board_reset)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if is_processing(self.world):
            return
        pos = (row, col)
        if self.selected is None:
            self._select(pos)
        elif self.selected == pos:
            self._deselect(reason='same_tile')
        elif is_adjacent(self.selected, pos):
            src = self.selected
            self._deselect(reason='swap')
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=pos)
        else:
            # Change selection to new tile
            self._select(pos)

    def on_tile_swipe(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if self.selected is not None:
            self._deselect(reason='swipe')
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=tuple(src), dst=tuple(dst))

    def on_board_reset(self, sender, **kwargs):
        if self.selected is not None:
            self._deselect(reason='reset')

    def _select(self, pos: Tuple[int, int]):
        self.selected = pos
        self.event_bus.emit(EVENT_TILE_SELECTED, row=pos[0], col=pos[1])

    def _deselect(self, *, reason: str):
        prev = self.selected
        self.selected = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
