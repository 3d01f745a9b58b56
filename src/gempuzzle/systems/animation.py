from esper import World

from gempuzzle.components.board_position import BoardPosition
from gempuzzle.components.gem import Gem
from gempuzzle.components.gem_visual import GemVisual
from gempuzzle.constants import CLEAR_DELAY
from gempuzzle.events.bus import EventBus, EVENT_TICK

EASE_FACTOR = 0.2   # fraction of the remaining distance covered per frame
SNAP_DISTANCE = 0.01


class AnimationSystem:
    """Eases each gem's draw position toward its grid slot and fades matched gems.

    Only GemVisual is written here; grid structure belongs to the resolver.
    """

    def __init__(self, world: World, event_bus: EventBus, *, fade_duration: float = CLEAR_DELAY):
        self.world = world
        self.event_bus = event_bus
        self.fade_duration = fade_duration
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        for _, (visual, position, gem) in self.world.get_components(GemVisual, BoardPosition, Gem):
            visual.row = self._ease(visual.row, position.row)
            visual.col = self._ease(visual.col, position.col)
            if gem.matched and visual.alpha > 0.0:
                visual.alpha = max(0.0, visual.alpha - dt / self.fade_duration) if self.fade_duration > 0 else 0.0

    @staticmethod
    def _ease(current: float, target: int) -> float:
        current += (target - current) * EASE_FACTOR
        if abs(target - current) < SNAP_DISTANCE:
            return float(target)
        return current
