import random

from esper import World
from .events.bus import EventBus
from gempuzzle.components.board import Board
from gempuzzle.components.game_state import GameState, GameMode
from gempuzzle.components.resolver_state import ResolverState
from gempuzzle.constants import GRID_ROWS, GRID_COLS


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.MENU,
    *,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    rng: random.Random | None = None,
) -> World:
    """Build the world every system shares: game state, an empty board and resolver state.

    The world is passed by reference to each system; nothing is stored globally.
    Gems are only spawned once a Puzzle or Zen session starts.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(GameState(mode=initial_mode))
    world.create_entity(ResolverState())
    world.create_entity(
        Board(
            rows=rows,
            cols=cols,
            slots=[[None for _ in range(cols)] for _ in range(rows)],
        )
    )
    return world
