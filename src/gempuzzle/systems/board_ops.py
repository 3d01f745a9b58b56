from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from esper import World

from gempuzzle.components.board import Board
from gempuzzle.components.board_position import BoardPosition
from gempuzzle.components.gem import Gem
from gempuzzle.components.gem_visual import GemVisual
from gempuzzle.constants import PALETTE_SIZE

Position = Tuple[int, int]
KindGrid = List[List[Optional[int]]]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    kind: int


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def in_bounds(board: Board, pos: Position) -> bool:
    row, col = pos
    return 0 <= row < board.rows and 0 <= col < board.cols


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def _world_rng(world: World, rng: random.Random | None) -> random.Random:
    if rng is not None:
        return rng
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def get_gem_at(world: World, row: int, col: int) -> int | None:
    board = get_board(world)
    if not in_bounds(board, (row, col)):
        return None
    return board.slots[row][col]


def kind_grid(world: World) -> KindGrid:
    """Snapshot of gem kinds, ``None`` for empty slots."""
    board = get_board(world)
    grid: KindGrid = []
    for row in board.slots:
        grid.append([
            world.component_for_entity(entity, Gem).kind if entity is not None else None
            for entity in row
        ])
    return grid


def spawn_gem(world: World, row: int, col: int, kind: int, *, drop_from: float | None = None) -> int:
    """Create a gem entity and place it in the board slot at (row, col)."""
    board = get_board(world)
    entity = world.create_entity(
        Gem(kind=kind),
        BoardPosition(row=row, col=col),
        GemVisual(row=float(row if drop_from is None else drop_from), col=float(col)),
    )
    board.slots[row][col] = entity
    return entity


def _completes_run(grid: KindGrid, row: int, col: int, kind: int) -> bool:
    # Only left and upper neighbours exist while the board fills top-left first.
    if col >= 2 and grid[row][col - 1] == kind and grid[row][col - 2] == kind:
        return True
    if row >= 2 and grid[row - 1][col] == kind and grid[row - 2][col] == kind:
        return True
    return False


def reset_board(world: World, *, num_kinds: int = 0) -> Board:
    """Delete every gem and leave the board with all slots empty."""
    board = get_board(world)
    for row in board.slots:
        for entity in row:
            if entity is not None:
                world.delete_entity(entity, immediate=True)
    board.slots = [[None for _ in range(board.cols)] for _ in range(board.rows)]
    board.num_kinds = num_kinds
    return board


def _clean_layout(rows: int, cols: int, num_kinds: int, rng: random.Random) -> KindGrid | None:
    layout: KindGrid = [[None] * cols for _ in range(rows)]
    for row in range(rows):
        for col in range(cols):
            available = [k for k in range(num_kinds) if not _completes_run(layout, row, col, k)]
            if not available:
                return None
            layout[row][col] = rng.choice(available)
    return layout


def generate_board(
    world: World,
    num_kinds: int,
    rng: random.Random | None = None,
    *,
    max_attempts: int = 100,
) -> None:
    """Fill the board with random gems so that no run of 3 exists.

    The layout is built row by row, left to right. A kind that would close a run
    with the two already-placed neighbours to the left or above is excluded, which
    is the same distribution as re-rolling until the placement is clean. With very
    few kinds a cell can run out of options; that layout is discarded and the fill
    starts over, so gems are only spawned once a clean layout exists.
    """
    if num_kinds < 1:
        raise ValueError(f"num_kinds must be positive, got {num_kinds}")
    rng = _world_rng(world, rng)
    board = get_board(world)
    for _ in range(max_attempts):
        layout = _clean_layout(board.rows, board.cols, num_kinds, rng)
        if layout is None:
            continue
        reset_board(world, num_kinds=num_kinds)
        for row in range(board.rows):
            for col in range(board.cols):
                spawn_gem(world, row, col, layout[row][col])
        return
    raise RuntimeError(f"Unable to generate a {board.rows}x{board.cols} board without matches from {num_kinds} kinds")


def restore_board(world: World, kinds: Sequence[Sequence[int]], *, num_kinds: int | None = None) -> None:
    """Rebuild the board verbatim from a persisted kind matrix.

    No anti-match pass runs; the snapshot is assumed to be a settled board.
    ``num_kinds`` sets the palette used by later refills.
    """
    board = get_board(world)
    if len(kinds) != board.rows or any(len(row) != board.cols for row in kinds):
        raise ValueError(f"Board snapshot must be {board.rows}x{board.cols}")
    for row in kinds:
        for kind in row:
            if not isinstance(kind, int) or not 0 <= kind < PALETTE_SIZE:
                raise ValueError(f"Invalid gem kind in snapshot: {kind!r}")
    if num_kinds is None:
        num_kinds = board.num_kinds or PALETTE_SIZE
    reset_board(world, num_kinds=num_kinds)
    for row in range(board.rows):
        for col in range(board.cols):
            spawn_gem(world, row, col, int(kinds[row][col]))


def swap_gems(world: World, a: Position, b: Position) -> bool:
    """Exchange the gems in two slots and update their recorded positions."""
    board = get_board(world)
    if not (in_bounds(board, a) and in_bounds(board, b)):
        return False
    ent_a = board.slots[a[0]][a[1]]
    ent_b = board.slots[b[0]][b[1]]
    if ent_a is None or ent_b is None:
        return False
    board.slots[a[0]][a[1]], board.slots[b[0]][b[1]] = ent_b, ent_a
    pos_b = world.component_for_entity(ent_b, BoardPosition)
    pos_b.row, pos_b.col = a
    pos_a = world.component_for_entity(ent_a, BoardPosition)
    pos_a.row, pos_a.col = b
    return True


def mark_matched(world: World, positions) -> int:
    board = get_board(world)
    marked = 0
    for row, col in positions:
        entity = board.slots[row][col]
        if entity is None:
            continue
        gem = world.component_for_entity(entity, Gem)
        if not gem.matched:
            gem.matched = True
            marked += 1
    return marked


def _is_hole(world: World, entity: int | None) -> bool:
    return entity is None or world.component_for_entity(entity, Gem).matched


def clear_matched(world: World) -> List[Position]:
    """Delete every gem flagged matched and free its slot."""
    board = get_board(world)
    cleared: List[Position] = []
    for row in range(board.rows):
        for col in range(board.cols):
            entity = board.slots[row][col]
            if entity is None:
                continue
            if world.component_for_entity(entity, Gem).matched:
                world.delete_entity(entity, immediate=True)
                board.slots[row][col] = None
                cleared.append((row, col))
    return cleared


def apply_gravity(
    world: World,
    num_kinds: int | None = None,
    rng: random.Random | None = None,
) -> Tuple[List[GravityMove], List[Position]]:
    """Compact each column downward, then refill the top gap with random gems.

    Empty slots and gems still flagged matched both count as holes. Surviving
    gems keep their relative order. Refills skip the anti-match pass, so they
    can set up further cascades.
    """
    board = get_board(world)
    rng = _world_rng(world, rng)
    if num_kinds is None:
        num_kinds = board.num_kinds or PALETTE_SIZE
    moves: List[GravityMove] = []
    new_tiles: List[Position] = []
    for col in range(board.cols):
        survivors: List[int] = []
        for row in range(board.rows - 1, -1, -1):
            entity = board.slots[row][col]
            if _is_hole(world, entity):
                if entity is not None:
                    world.delete_entity(entity, immediate=True)
                continue
            survivors.append(entity)
        target_row = board.rows - 1
        for entity in survivors:
            position = world.component_for_entity(entity, BoardPosition)
            if position.row != target_row:
                moves.append(GravityMove(
                    source=(position.row, col),
                    target=(target_row, col),
                    kind=world.component_for_entity(entity, Gem).kind,
                ))
                position.row = target_row
            board.slots[target_row][col] = entity
            target_row -= 1
        gap = target_row + 1
        for row in range(gap):
            board.slots[row][col] = None
            spawn_gem(world, row, col, rng.randrange(num_kinds), drop_from=row - gap)
            new_tiles.append((row, col))
    return moves, new_tiles
