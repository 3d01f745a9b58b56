from __future__ import annotations

from typing import Optional, Tuple

import arcade
from esper import World

from gempuzzle.components.board_position import BoardPosition
from gempuzzle.components.gem import Gem
from gempuzzle.components.gem_visual import GemVisual
from gempuzzle.constants import GEM_COLORS
from gempuzzle.ui.layout import BoardGeometry

BOARD_BACKGROUND = (17, 17, 17)
SHINE_COLOR = (255, 255, 255, 77)


class BoardRenderer:
    """Draws the board frame and every gem at its interpolated position."""

    def __init__(self, world: World, *, padding_ratio: float = 0.1):
        self.world = world
        self.padding_ratio = padding_ratio

    def draw(self, geometry: BoardGeometry, selected: Optional[Tuple[int, int]]) -> None:
        arcade.draw_lrbt_rectangle_filled(
            geometry.left - 10,
            geometry.left + geometry.width + 10,
            geometry.bottom - 10,
            geometry.top + 10,
            BOARD_BACKGROUND,
        )
        size = geometry.cell_size
        pad = size * self.padding_ratio
        for _, (gem, visual, position) in self.world.get_components(Gem, GemVisual, BoardPosition):
            if visual.alpha <= 0.0 or visual.row < -0.5:
                continue
            cx, cy = geometry.cell_center(visual.row, visual.col)
            red, green, blue = GEM_COLORS[gem.kind]
            color = (red, green, blue, int(255 * visual.alpha))
            # Alternate shapes so neighbouring kinds stay distinguishable.
            if gem.kind % 2 == 0:
                arcade.draw_circle_filled(cx, cy, size / 2 - pad, color)
            else:
                arcade.draw_lrbt_rectangle_filled(
                    cx - size / 2 + pad, cx + size / 2 - pad,
                    cy - size / 2 + pad, cy + size / 2 - pad,
                    color,
                )
            arcade.draw_circle_filled(cx - size / 6, cy + size / 6, size / 6, SHINE_COLOR)
            if selected == (position.row, position.col):
                arcade.draw_lbwh_rectangle_outline(
                    cx - size / 2, cy - size / 2, size, size, arcade.color.WHITE, border_width=3
                )
