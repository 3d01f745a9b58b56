from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from gempuzzle.constants import (
    BOARD_FILL_PCT,
    BOTTOM_PADDING,
    EXIT_BUTTON_WIDTH,
    GRID_COLS,
    GRID_ROWS,
    HEADER_HEIGHT_PCT,
    HEADER_MAX_HEIGHT,
    HEADER_MIN_HEIGHT,
)


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    """Board placement in window pixels (arcade coordinates, y grows upward)."""
    cell_size: float
    left: float
    bottom: float
    header_height: float
    rows: int = GRID_ROWS
    cols: int = GRID_COLS

    @property
    def width(self) -> float:
        return self.cell_size * self.cols

    @property
    def height(self) -> float:
        return self.cell_size * self.rows

    @property
    def top(self) -> float:
        return self.bottom + self.height

    def cell_center(self, row: float, col: float) -> Tuple[float, float]:
        # Row 0 is the top row of the board.
        x = self.left + (col + 0.5) * self.cell_size
        y = self.top - (row + 0.5) * self.cell_size
        return x, y


def compute_board_geometry(
    window_width: int,
    window_height: int,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
) -> BoardGeometry:
    """Fit the board below the header strip, centred in the remaining space.

    Input mapping and rendering both go through this function so clicks always
    land on the cell that is drawn under the pointer.
    """
    header = max(HEADER_MIN_HEIGHT, min(HEADER_MAX_HEIGHT, window_height * HEADER_HEIGHT_PCT))
    available_w = window_width
    available_h = window_height - header - BOTTOM_PADDING
    cell = max(0.0, min(available_w / cols, available_h / rows)) * BOARD_FILL_PCT
    width = cell * cols
    height = cell * rows
    left = (window_width - width) / 2
    spare = available_h - height
    top = window_height - header - spare / 2
    return BoardGeometry(cell_size=cell, left=left, bottom=top - height, header_height=header, rows=rows, cols=cols)


def grid_position_at(geometry: BoardGeometry, x: float, y: float) -> Tuple[int, int] | None:
    """Return (row, col) under the point, or None outside the board."""
    if geometry.cell_size <= 0:
        return None
    if x < geometry.left or x > geometry.left + geometry.width:
        return None
    if y < geometry.bottom or y > geometry.top:
        return None
    col = int((x - geometry.left) // geometry.cell_size)
    row = int((geometry.top - y) // geometry.cell_size)
    if 0 <= row < geometry.rows and 0 <= col < geometry.cols:
        return row, col
    return None


def header_button_hit(window_width: int, window_height: int, x: float, y: float) -> bool:
    """True for the pause/exit button in the top-right corner of the header."""
    geometry = compute_board_geometry(window_width, window_height)
    return x > window_width - EXIT_BUTTON_WIDTH and y > window_height - geometry.header_height
