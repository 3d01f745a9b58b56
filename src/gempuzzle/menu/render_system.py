"""Rendering system responsible for drawing the main menu."""
import arcade
from esper import World
from gempuzzle.components.game_state import GameMode
from gempuzzle.menu.components import MenuButton
from gempuzzle.utils.game_state import current_mode

OVERLAY_COLOR = (0, 0, 0, 204)


class MenuRenderSystem:
    """Renders menu entities when the game is in menu mode."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> None:
        """Draw the title and mode buttons if the current mode is Menu."""
        if current_mode(self.world) != GameMode.MENU:
            return

        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, OVERLAY_COLOR)
        arcade.draw_text(
            "GEM PUZZLE",
            self.window.width / 2,
            self.window.height * 2 / 3,
            arcade.color.WHITE,
            40,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )

        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, button.color)
            arcade.draw_text(
                button.label,
                button.x,
                button.y,
                arcade.color.WHITE,
                20,
                anchor_x="center",
                anchor_y="center",
            )
