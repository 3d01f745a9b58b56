from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from esper import World

from gempuzzle.systems.board_ops import kind_grid

Position = Tuple[int, int]

MIN_RUN = 3


@dataclass(frozen=True, slots=True)
class MatchRun:
    kind: int
    positions: Tuple[Position, ...]
    orientation: str  # 'horizontal' or 'vertical'

    @property
    def length(self) -> int:
        return len(self.positions)


def _scan_line(cells: Sequence[Tuple[Position, Optional[int]]], orientation: str) -> List[MatchRun]:
    runs: List[MatchRun] = []
    run: List[Position] = []
    last_kind: Optional[int] = None
    for pos, kind in cells:
        if kind is not None and kind == last_kind:
            run.append(pos)
            continue
        if len(run) >= MIN_RUN and last_kind is not None:
            runs.append(MatchRun(kind=last_kind, positions=tuple(run), orientation=orientation))
        run = [pos] if kind is not None else []
        last_kind = kind
    if len(run) >= MIN_RUN and last_kind is not None:
        runs.append(MatchRun(kind=last_kind, positions=tuple(run), orientation=orientation))
    return runs


def find_runs(grid: Sequence[Sequence[Optional[int]]]) -> List[MatchRun]:
    """Detect every horizontal or vertical run of 3+ identical kinds.

    Empty slots (``None``) break runs. Overlapping runs (L/T shapes) are
    reported separately; see ``find_matches`` for the merged position set.
    """
    runs: List[MatchRun] = []
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    for r in range(rows):
        runs.extend(_scan_line([((r, c), grid[r][c]) for c in range(cols)], "horizontal"))
    for c in range(cols):
        runs.extend(_scan_line([((r, c), grid[r][c]) for r in range(rows)], "vertical"))
    return runs


def find_matches(source: World | Sequence[Sequence[Optional[int]]]) -> Set[Position]:
    """Return the set of positions that belong to any qualifying run."""
    grid = kind_grid(source) if isinstance(source, World) else source
    matched: Set[Position] = set()
    for run in find_runs(grid):
        matched.update(run.positions)
    return matched
