"""Input handling for the ECS-driven main menu."""
from esper import World

from gempuzzle.components.game_state import GameMode
from gempuzzle.events.bus import (
    EVENT_MENU_PUZZLE_SELECTED,
    EVENT_MENU_ZEN_SELECTED,
    EVENT_MOUSE_PRESS,
    EventBus,
)
from gempuzzle.menu.components import MenuAction, MenuButton
from gempuzzle.utils.game_state import current_mode

KEY_ENTER = (65293, 13)
KEY_Z = 122


class MenuInputSystem:
    """Processes input events while the game is in the menu mode."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self._event_bus = event_bus
        event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **payload) -> None:
        x = payload.get("x")
        y = payload.get("y")
        if x is None or y is None:
            return
        self.handle_mouse_press(float(x), float(y), press_id=payload.get("press_id"))

    def handle_mouse_press(self, x: float, y: float, press_id: int | None = None) -> None:
        """Start the mode whose button is under the pointer."""
        if current_mode(self.world) != GameMode.MENU:
            return
        for _, menu_button in self.world.get_component(MenuButton):
            if self._point_inside_button(x, y, menu_button):
                self._activate_action(menu_button.action, press_id=press_id)
                return

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        """Enter starts Puzzle mode, Z starts Zen mode."""
        if current_mode(self.world) != GameMode.MENU:
            return
        # arcade.key values, kept literal to avoid importing arcade here.
        if symbol in KEY_ENTER:
            self._activate_action(MenuAction.PUZZLE)
        elif symbol == KEY_Z:
            self._activate_action(MenuAction.ZEN)

    def _activate_action(self, action: MenuAction, *, press_id: int | None = None) -> None:
        if action == MenuAction.PUZZLE:
            self._event_bus.emit(EVENT_MENU_PUZZLE_SELECTED, press_id=press_id)
        elif action == MenuAction.ZEN:
            self._event_bus.emit(EVENT_MENU_ZEN_SELECTED, press_id=press_id)

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
