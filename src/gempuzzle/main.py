"""Entry point for the Gem Puzzle match-three game.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color

from gempuzzle.world import create_world
from gempuzzle.components.game_state import GameMode
from gempuzzle.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_GAME_MODE_CHANGED,
)
from gempuzzle.menu.factory import spawn_main_menu
from gempuzzle.menu.input_system import MenuInputSystem
from gempuzzle.menu.render_system import MenuRenderSystem
from gempuzzle.persistence.store import JsonProgressStore
from gempuzzle.systems.animation import AnimationSystem
from gempuzzle.systems.audio import ArcadeSoundPlayer, AudioSystem
from gempuzzle.systems.board import BoardSystem
from gempuzzle.systems.input import InputSystem
from gempuzzle.systems.match_resolution import MatchResolutionSystem
from gempuzzle.systems.progress_system import ProgressSystem
from gempuzzle.systems.render import RenderSystem
from gempuzzle.systems.session_system import SessionSystem
from gempuzzle.utils.game_state import current_mode

BACKGROUND_COLOR = (34, 34, 34)


class GemPuzzleWindow(Window):
    def __init__(self, width: int = 480, height: int = 800):
        super().__init__(width, height, "Gem Puzzle", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, initial_mode=GameMode.MENU)
        self.store = JsonProgressStore()
        self._press_counter = 0

        # Progression systems
        self.progress_system = ProgressSystem(self.world, self.event_bus, self.store)
        self.session_system = SessionSystem(self.world, self.event_bus, store=self.store)

        # Menu systems
        spawn_main_menu(self.world, self.width, self.height)
        self.menu_input_system = MenuInputSystem(self.world, self.event_bus)
        self.menu_render_system = MenuRenderSystem(self.world, self)

        # Board systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.animation_system = AnimationSystem(self.world, self.event_bus)

        # Presentation systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.audio_system = AudioSystem(self.event_bus, ArcadeSoundPlayer())

        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self._on_mode_changed)
        set_background_color(BACKGROUND_COLOR)

    def on_resize(self, width: int, height: int):
        spawn_main_menu(self.world, width, height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()
        self.menu_render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self._press_counter += 1
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, press_id=self._press_counter)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        mode = current_mode(self.world)
        if mode == GameMode.MENU:
            self.menu_input_system.handle_key_press(symbol, modifiers)
        else:
            self.input_system.handle_key_press(symbol, modifiers)

    def _on_mode_changed(self, sender, **payload):
        if payload.get("new_mode") == GameMode.MENU:
            spawn_main_menu(self.world, self.width, self.height)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    GemPuzzleWindow()
    run()

if __name__ == "__main__":
    main()
