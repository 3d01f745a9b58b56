"""Puzzle/Zen session lifecycle: difficulty curve, timer, stars and level flow."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from esper import World

from gempuzzle.components.game_state import GameMode, PLAYING_MODES
from gempuzzle.components.session import Session, SessionMode
from gempuzzle.constants import (
    BASE_KINDS,
    BASE_TIME,
    KIND_STEP_LEVELS,
    LEVEL_CLEAR_DELAY,
    MAX_LEVEL,
    MIN_TIME,
    PALETTE_SIZE,
    TARGET_SCORE_PER_LEVEL,
    THREE_STAR_RATIO,
    TIME_STEP_LEVELS,
    TIME_STEP_SECONDS,
    TWO_STAR_RATIO,
    ZEN_NUM_KINDS,
)
from gempuzzle.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_MENU_PUZZLE_SELECTED,
    EVENT_MENU_ZEN_SELECTED,
    EVENT_PAUSE_REQUEST,
    EVENT_EXIT_REQUEST,
    EVENT_OVERLAY_DISMISSED,
    EVENT_SESSION_STARTED,
    EVENT_BOARD_RESET,
    EVENT_LEVEL_COMPLETED,
    EVENT_GAME_OVER,
    EVENT_CAMPAIGN_COMPLETE,
)
from gempuzzle.persistence.store import ProgressStore
from gempuzzle.systems.board_ops import generate_board, restore_board
from gempuzzle.systems.resolver_state_utils import is_processing
from gempuzzle.utils.game_state import current_mode, set_game_mode
from gempuzzle.utils.session import get_session, replace_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LevelParameters:
    max_time: int
    target_score: int
    num_kinds: int


def level_parameters(level: int, palette_size: int = PALETTE_SIZE) -> LevelParameters:
    """Difficulty curve: less time every 5 levels, one more gem kind every 10."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    max_time = max(MIN_TIME, BASE_TIME - ((level - 1) // TIME_STEP_LEVELS) * TIME_STEP_SECONDS)
    return LevelParameters(
        max_time=max_time,
        target_score=level * TARGET_SCORE_PER_LEVEL,
        num_kinds=min(palette_size, BASE_KINDS + level // KIND_STEP_LEVELS),
    )


def compute_stars(score: int, target_score: int) -> int:
    """3 stars above 1.5x the target, 2 above 1.2x, otherwise 1."""
    if score > target_score * THREE_STAR_RATIO:
        return 3
    if score > target_score * TWO_STAR_RATIO:
        return 2
    return 1


class SessionSystem:
    """Starts sessions, runs the Puzzle timer and moves between game modes.

    Anything that rebuilds the board waits for the resolver to go idle, so a
    running cascade never shares the grid with a new session.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        store: ProgressStore | None = None,
        rng: random.Random | None = None,
        level_clear_delay: float = LEVEL_CLEAR_DELAY,
        palette_size: int = PALETTE_SIZE,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.store = store
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.level_clear_delay = level_clear_delay
        self.palette_size = palette_size
        self._advance_in: float | None = None

        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_MENU_PUZZLE_SELECTED, self._on_puzzle_selected)
        self.event_bus.subscribe(EVENT_MENU_ZEN_SELECTED, self._on_zen_selected)
        self.event_bus.subscribe(EVENT_PAUSE_REQUEST, self._on_pause_request)
        self.event_bus.subscribe(EVENT_EXIT_REQUEST, self._on_exit_request)
        self.event_bus.subscribe(EVENT_OVERLAY_DISMISSED, self._on_overlay_dismissed)

    @property
    def session(self) -> Session | None:
        return get_session(self.world)

    # Event handlers -----------------------------------------------------

    def _on_puzzle_selected(self, sender, **payload) -> None:
        self.start_puzzle(1, press_id=payload.get("press_id"))

    def _on_zen_selected(self, sender, **payload) -> None:
        self.start_zen(press_id=payload.get("press_id"))

    def _on_pause_request(self, sender, **payload) -> None:
        mode = current_mode(self.world)
        if mode == GameMode.PAUSED:
            self.resume()
        else:
            self.pause()

    def _on_exit_request(self, sender, **payload) -> None:
        self.exit_to_menu()

    def _on_overlay_dismissed(self, sender, **payload) -> None:
        self.dismiss_overlay()

    def on_tick(self, sender, **kwargs) -> None:
        self.update(kwargs.get('dt', 1/60))

    # Operations ---------------------------------------------------------

    def start_puzzle(self, level: int, *, press_id: int | None = None) -> bool:
        if is_processing(self.world):
            logger.debug("Puzzle start for level %d deferred: cascade in flight", level)
            return False
        params = level_parameters(level, self.palette_size)
        replace_session(self.world, Session(
            mode=SessionMode.PUZZLE,
            level=level,
            score=0,
            time_left=float(params.max_time),
            max_time=float(params.max_time),
            target_score=params.target_score,
            num_kinds=params.num_kinds,
        ))
        generate_board(self.world, params.num_kinds, self._rng)
        self._advance_in = None
        set_game_mode(self.world, self.event_bus, GameMode.PUZZLE, input_guard_press_id=press_id)
        logger.info(
            "Puzzle level %d: %ds, target %d, %d kinds",
            level, params.max_time, params.target_score, params.num_kinds,
        )
        self.event_bus.emit(EVENT_BOARD_RESET, num_kinds=params.num_kinds, restored=False)
        self.event_bus.emit(EVENT_SESSION_STARTED, mode=SessionMode.PUZZLE, level=level)
        return True

    def start_zen(self, *, press_id: int | None = None) -> bool:
        """Resume the saved Zen board, or start a fresh one when none is usable."""
        if is_processing(self.world):
            logger.debug("Zen start deferred: cascade in flight")
            return False
        snapshot = self.store.load_zen_state() if self.store is not None else None
        restored = False
        score = 0
        if snapshot is not None:
            try:
                restore_board(self.world, snapshot.board, num_kinds=ZEN_NUM_KINDS)
            except ValueError as exc:
                logger.warning("Saved zen board unusable, starting fresh: %s", exc)
            else:
                restored = True
                score = max(0, snapshot.score)
        if not restored:
            generate_board(self.world, ZEN_NUM_KINDS, self._rng)
        replace_session(self.world, Session(mode=SessionMode.ZEN, score=score, num_kinds=ZEN_NUM_KINDS))
        self._advance_in = None
        set_game_mode(self.world, self.event_bus, GameMode.ZEN, input_guard_press_id=press_id)
        logger.info("Zen session started (restored=%s, score=%d)", restored, score)
        self.event_bus.emit(EVENT_BOARD_RESET, num_kinds=ZEN_NUM_KINDS, restored=restored)
        self.event_bus.emit(EVENT_SESSION_STARTED, mode=SessionMode.ZEN, level=1)
        return True

    def update(self, dt: float) -> None:
        mode = current_mode(self.world)
        if mode == GameMode.LEVEL_CLEAR:
            self._update_level_clear(dt)
            return
        if mode != GameMode.PUZZLE:
            return
        session = self.session
        if session is None:
            return
        session.time_left -= dt
        # Reaching the target wins even when time runs out on the same tick.
        if session.score >= session.target_score:
            self.finish_level()
            return
        if session.time_left <= 0:
            session.time_left = 0.0
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
            logger.info("Time up on level %d with %d points", session.level, session.score)
            self.event_bus.emit(EVENT_GAME_OVER, level=session.level, score=session.score)

    def finish_level(self) -> int:
        """Award stars, announce the completed level and schedule the next one."""
        session = self.session
        if session is None:
            raise RuntimeError("No active session")
        stars = compute_stars(session.score, session.target_score)
        logger.info("Level %d cleared with %d points (%d stars)", session.level, session.score, stars)
        self.event_bus.emit(EVENT_LEVEL_COMPLETED, level=session.level, stars=stars, score=session.score)
        set_game_mode(self.world, self.event_bus, GameMode.LEVEL_CLEAR)
        self._advance_in = self.level_clear_delay
        return stars

    def pause(self) -> bool:
        if current_mode(self.world) != GameMode.PUZZLE:
            return False
        set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        return True

    def resume(self) -> bool:
        if current_mode(self.world) != GameMode.PAUSED:
            return False
        set_game_mode(self.world, self.event_bus, GameMode.PUZZLE)
        return True

    def exit_to_menu(self) -> bool:
        """Leave a running game. The Zen board is saved by the progress system on the mode change."""
        mode = current_mode(self.world)
        if mode not in PLAYING_MODES and mode != GameMode.PAUSED:
            return False
        if is_processing(self.world):
            return False
        set_game_mode(self.world, self.event_bus, GameMode.MENU)
        return True

    def dismiss_overlay(self) -> bool:
        if current_mode(self.world) not in (GameMode.GAME_OVER, GameMode.LEVEL_CLEAR):
            return False
        if is_processing(self.world):
            return False
        self._advance_in = None
        set_game_mode(self.world, self.event_bus, GameMode.MENU)
        return True

    # Internals ----------------------------------------------------------

    def _update_level_clear(self, dt: float) -> None:
        if self._advance_in is None:
            return
        self._advance_in -= dt
        if self._advance_in > 0 or is_processing(self.world):
            return
        self._advance_in = None
        session = self.session
        level = session.level if session is not None else MAX_LEVEL
        if level < MAX_LEVEL:
            self.start_puzzle(level + 1)
        else:
            logger.info("Campaign complete at level %d", level)
            self.event_bus.emit(EVENT_CAMPAIGN_COMPLETE, level=level)
            set_game_mode(self.world, self.event_bus, GameMode.MENU)
