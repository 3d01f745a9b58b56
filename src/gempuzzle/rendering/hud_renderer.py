from __future__ import annotations

import arcade

from gempuzzle.components.game_state import GameMode
from gempuzzle.components.session import Session
from gempuzzle.ui.layout import BoardGeometry

TIMER_BACKGROUND = (68, 68, 68)
TIMER_OK = (76, 175, 80)
TIMER_LOW = (244, 67, 54)
OVERLAY_COLOR = (0, 0, 0, 178)
NARROW_WIDTH = 450

OVERLAY_TEXT = {
    GameMode.PAUSED: ("PAUSED", "Click to Resume"),
    GameMode.GAME_OVER: ("GAME OVER", "Click to Menu"),
    GameMode.LEVEL_CLEAR: ("LEVEL CLEARED!", "Next Level starting..."),
}


class HudRenderer:
    """Score, level, timer bar and the pause/exit button in the header strip."""

    def __init__(self, window):
        self.window = window

    def draw_header(self, geometry: BoardGeometry, session: Session | None, mode: GameMode) -> None:
        width = self.window.width
        text_y = self.window.height - geometry.header_height * 0.4
        narrow = width < NARROW_WIDTH
        font_size = 18 if narrow else 22
        score = session.score if session is not None else 0
        arcade.draw_text(f"Score: {score}", 20, text_y, arcade.color.WHITE, font_size,
                         anchor_y="center", bold=True)
        zen = session is not None and not session.timed
        arcade.draw_text("EXIT" if zen else "||", width - 20, text_y, arcade.color.WHITE, font_size,
                         anchor_x="right", anchor_y="center", bold=True)
        if session is None:
            return
        if session.timed:
            if narrow:
                arcade.draw_text(f"Lv.{session.level}", width - 50, text_y, arcade.color.WHITE,
                                 font_size, anchor_x="right", anchor_y="center", bold=True)
            else:
                arcade.draw_text(f"Level: {session.level}", width / 2, text_y, arcade.color.WHITE,
                                 font_size, anchor_x="center", anchor_y="center", bold=True)
            bar_y = text_y - 30
            bar_width = width - 40
            arcade.draw_lbwh_rectangle_filled(20, bar_y, bar_width, 10, TIMER_BACKGROUND)
            ratio = max(0.0, session.time_left / session.max_time) if session.max_time else 0.0
            arcade.draw_lbwh_rectangle_filled(20, bar_y, bar_width * ratio, 10,
                                              TIMER_OK if ratio > 0.3 else TIMER_LOW)
        else:
            zen_y = text_y - 25 if narrow else text_y
            arcade.draw_text("ZEN MODE", width / 2, zen_y, (170, 170, 170), 14 if narrow else 16,
                             anchor_x="center", anchor_y="center")

    def draw_overlay(self, mode: GameMode) -> None:
        text = OVERLAY_TEXT.get(mode)
        if text is None:
            return
        title, subtitle = text
        width, height = self.window.width, self.window.height
        arcade.draw_lrbt_rectangle_filled(0, width, 0, height, OVERLAY_COLOR)
        arcade.draw_text(title, width / 2, height / 2 + 20, arcade.color.WHITE, 30,
                         anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text(subtitle, width / 2, height / 2 - 20, arcade.color.WHITE, 20,
                         anchor_x="center", anchor_y="center")
