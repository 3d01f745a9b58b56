from __future__ import annotations

import random
from typing import Dict, List, Sequence

from esper import World

from gempuzzle.components.game_state import GameMode
from gempuzzle.components.session import Session, SessionMode
from gempuzzle.events.bus import EventBus, EVENT_TICK
from gempuzzle.persistence.records import PuzzleRecord, ZenSnapshot
from gempuzzle.systems.board_ops import restore_board
from gempuzzle.utils.session import replace_session
from gempuzzle.world import create_world


class CyclingRandom(random.Random):
    """Deterministic refills: randrange walks 0, 1, 2, ... modulo its argument."""

    def __init__(self, period: int = 3):
        super().__init__(0)
        self.period = period
        self.calls = 0

    def randrange(self, n, *args, **kwargs):
        value = self.calls % min(self.period, n)
        self.calls += 1
        return value


class MemoryProgressStore:
    """In-memory ProgressStore double that records every write."""

    def __init__(self, zen: ZenSnapshot | None = None):
        self.records: Dict[int, PuzzleRecord] = {}
        self.zen = zen
        self.zen_saves: List[ZenSnapshot] = []

    def save_record(self, record: PuzzleRecord) -> None:
        self.records[record.level] = record

    def load_record(self, level: int) -> PuzzleRecord | None:
        return self.records.get(level)

    def save_zen_state(self, snapshot: ZenSnapshot) -> None:
        self.zen = snapshot
        self.zen_saves.append(snapshot)

    def load_zen_state(self) -> ZenSnapshot | None:
        return self.zen


def drive_ticks(bus: EventBus, count: int = 30, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def make_world(
    bus: EventBus,
    grid: Sequence[Sequence[int]],
    *,
    mode: GameMode = GameMode.PUZZLE,
    num_kinds: int = 5,
    rng: random.Random | None = None,
    session: Session | None = None,
) -> World:
    """World sized to ``grid`` with those kinds placed and an active session."""
    world = create_world(bus, initial_mode=mode, rows=len(grid), cols=len(grid[0]), rng=rng)
    restore_board(world, grid, num_kinds=num_kinds)
    if session is None:
        session_mode = SessionMode.ZEN if mode == GameMode.ZEN else SessionMode.PUZZLE
        session = Session(
            mode=session_mode,
            level=1,
            time_left=30.0 if session_mode == SessionMode.PUZZLE else 0.0,
            max_time=60.0 if session_mode == SessionMode.PUZZLE else 0.0,
            target_score=1500 if session_mode == SessionMode.PUZZLE else 0,
            num_kinds=num_kinds,
        )
    replace_session(world, session)
    return world


def record_events(bus: EventBus, name: str) -> List[dict]:
    received: List[dict] = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
