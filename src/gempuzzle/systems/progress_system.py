from __future__ import annotations

import logging

from esper import World

from gempuzzle.components.game_state import GameMode
from gempuzzle.components.session import SessionMode
from gempuzzle.events.bus import (
    EVENT_BOARD_SETTLED,
    EVENT_GAME_MODE_CHANGED,
    EVENT_LEVEL_COMPLETED,
    EventBus,
)
from gempuzzle.persistence.records import PuzzleRecord, ZenSnapshot
from gempuzzle.persistence.store import ProgressStore
from gempuzzle.systems.board_ops import kind_grid
from gempuzzle.utils.game_state import current_mode
from gempuzzle.utils.session import get_session

logger = logging.getLogger(__name__)


class ProgressSystem:
    """Persists puzzle records and the Zen board through a ProgressStore."""

    def __init__(self, world: World, event_bus: EventBus, store: ProgressStore) -> None:
        self.world = world
        self.event_bus = event_bus
        self.store = store

        self.event_bus.subscribe(EVENT_LEVEL_COMPLETED, self._on_level_completed)
        self.event_bus.subscribe(EVENT_BOARD_SETTLED, self._on_board_settled)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self._on_mode_changed)

    def best_record(self, level: int) -> PuzzleRecord | None:
        return self.store.load_record(level)

    def save_zen_state(self) -> bool:
        session = get_session(self.world)
        if session is None or session.mode != SessionMode.ZEN:
            return False
        grid = kind_grid(self.world)
        if any(kind is None for row in grid for kind in row):
            # Mid-cascade boards are never persisted.
            return False
        self.store.save_zen_state(ZenSnapshot(score=session.score, board=grid))
        logger.debug("Zen state saved (score=%d)", session.score)
        return True

    # Event handlers -----------------------------------------------------

    def _on_level_completed(self, sender, **payload) -> None:
        level = payload.get("level")
        stars = payload.get("stars")
        score = payload.get("score")
        if level is None or stars is None or score is None:
            return
        self.store.save_record(PuzzleRecord(level=int(level), stars=int(stars), high_score=int(score)))

    def _on_board_settled(self, sender, **payload) -> None:
        if current_mode(self.world) == GameMode.ZEN:
            self.save_zen_state()

    def _on_mode_changed(self, sender, **payload) -> None:
        if payload.get("previous_mode") == GameMode.ZEN:
            self.save_zen_state()
