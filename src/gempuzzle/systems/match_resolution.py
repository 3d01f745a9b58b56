from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from esper import World

from gempuzzle.components.game_state import GameMode, PLAYING_MODES
from gempuzzle.components.resolver_state import ResolverPhase, ResolverState
from gempuzzle.constants import CLEAR_DELAY, GRAVITY_DELAY, POINTS_PER_GEM, SWAP_DELAY
from gempuzzle.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_REJECTED,
    EVENT_TILE_SWAP_DO,
    EVENT_TILE_SWAP_INVALID,
    EVENT_MATCH_FOUND,
    EVENT_MATCH_CLEARED,
    EVENT_GRAVITY_APPLIED,
    EVENT_CASCADE_STEP,
    EVENT_CASCADE_COMPLETE,
    EVENT_BOARD_SETTLED,
    EVENT_SCORE_CHANGED,
    EVENT_TIME_CHANGED,
)
from gempuzzle.systems.board_ops import (
    apply_gravity,
    clear_matched,
    get_board,
    in_bounds,
    is_adjacent,
    mark_matched,
    swap_gems,
)
from gempuzzle.systems.match import find_matches
from gempuzzle.systems.resolver_state_utils import get_or_create_resolver_state
from gempuzzle.utils.game_state import current_mode
from gempuzzle.utils.session import get_session

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class MatchResolutionSystem:
    """Runs the swap -> match -> clear -> gravity -> rematch cycle.

    Every wait between phases is a countdown consumed by tick events, so a
    cascade of any depth is a loop over phases rather than nested calls. While a
    swap or cascade is in flight the resolver reports ``processing`` and drops
    new swap requests.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        swap_delay: float = SWAP_DELAY,
        clear_delay: float = CLEAR_DELAY,
        gravity_delay: float = GRAVITY_DELAY,
        points_per_gem: int = POINTS_PER_GEM,
    ):
        self.world = world
        self.event_bus = event_bus
        self.swap_delay = swap_delay
        self.clear_delay = clear_delay
        self.gravity_delay = gravity_delay
        self.points_per_gem = points_per_gem
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def state(self) -> ResolverState:
        return get_or_create_resolver_state(self.world)

    @property
    def processing(self) -> bool:
        return self.state.processing

    # Event handlers -----------------------------------------------------

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.request_swap(tuple(src), tuple(dst))

    def on_tick(self, sender, **kwargs):
        # A paused game freezes the cascade along with the timer.
        if current_mode(self.world) == GameMode.PAUSED:
            return
        self.advance(kwargs.get('dt', 1/60))

    # Operations ---------------------------------------------------------

    def request_swap(self, a: Position, b: Position) -> bool:
        """Swap two adjacent gems and schedule validation; False if rejected."""
        reason = self._rejection_reason(a, b)
        if reason is not None:
            logger.debug("Swap %s <-> %s rejected: %s", a, b, reason)
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=a, dst=b, reason=reason)
            return False
        swap_gems(self.world, a, b)
        state = self.state
        state.swap = (a, b)
        state.cascade_depth = 0
        self._enter(state, ResolverPhase.SWAPPING, self.swap_delay, reset_timer=True)
        self.event_bus.emit(EVENT_TILE_SWAP_DO, src=a, dst=b)
        return True

    def resolve_cascade(self, matches: Iterable[Position]) -> None:
        """Score one cascade step and schedule the clear that follows it."""
        positions = sorted(set(matches))
        if not positions:
            return
        state = self.state
        state.cascade_depth += 1
        state.steps_total += 1
        mark_matched(self.world, positions)
        count = len(positions)
        self._award(count)
        logger.debug("Cascade step %d: %d gems matched", state.cascade_depth, count)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=state.cascade_depth, positions=positions)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, size=count, depth=state.cascade_depth)
        self._enter(state, ResolverPhase.CLEARING, self.clear_delay)

    def advance(self, dt: float) -> None:
        """Consume ``dt`` seconds, running every phase whose delay has elapsed."""
        state = self.state
        if not state.processing:
            return
        state.timer -= dt
        while state.processing and state.timer <= 0.0:
            self._run_phase(state)

    # Internals ----------------------------------------------------------

    def _rejection_reason(self, a: Position, b: Position) -> Optional[str]:
        if self.state.processing:
            return "processing"
        if current_mode(self.world) not in PLAYING_MODES:
            return "not_playing"
        board = get_board(self.world)
        if not (in_bounds(board, a) and in_bounds(board, b)):
            return "out_of_bounds"
        if not is_adjacent(a, b):
            return "not_adjacent"
        return None

    def _run_phase(self, state: ResolverState) -> None:
        if state.phase == ResolverPhase.SWAPPING:
            matches = find_matches(self.world)
            if matches:
                self.resolve_cascade(matches)
                return
            a, b = state.swap
            swap_gems(self.world, a, b)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=a, dst=b)
            self._enter(state, ResolverPhase.REVERTING, self.swap_delay)
        elif state.phase == ResolverPhase.REVERTING:
            self._finish(state, reason="swap_reverted")
        elif state.phase == ResolverPhase.CLEARING:
            cleared = clear_matched(self.world)
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=cleared)
            moves, new_tiles = apply_gravity(self.world)
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves, new_tiles=new_tiles)
            self._enter(state, ResolverPhase.FALLING, self.gravity_delay)
        elif state.phase == ResolverPhase.FALLING:
            matches = find_matches(self.world)
            if matches:
                self.resolve_cascade(matches)
                return
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.cascade_depth)
            logger.info("Cascade settled after %d step(s)", state.cascade_depth)
            self._finish(state, reason="cascade")

    @staticmethod
    def _enter(state: ResolverState, phase: ResolverPhase, delay: float, *, reset_timer: bool = False) -> None:
        # Carry any overshoot from the previous phase so long frames stay in sync.
        carry = 0.0 if reset_timer else min(state.timer, 0.0)
        state.phase = phase
        state.timer = carry + delay

    def _finish(self, state: ResolverState, *, reason: str) -> None:
        state.phase = ResolverPhase.IDLE
        state.timer = 0.0
        state.swap = None
        self.event_bus.emit(EVENT_BOARD_SETTLED, reason=reason)

    def _award(self, count: int) -> None:
        session = get_session(self.world)
        if session is None:
            return
        delta = count * self.points_per_gem
        session.score += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=delta)
        if session.timed and current_mode(self.world) == GameMode.PUZZLE:
            session.time_left = min(session.max_time, session.time_left + count)
            self.event_bus.emit(EVENT_TIME_CHANGED, time_left=session.time_left, max_time=session.max_time)
