"""Components used by the main menu ECS subsystem."""
from dataclasses import dataclass
from enum import Enum, auto


class MenuAction(Enum):
    """Actions that a menu button can trigger."""
    PUZZLE = auto()
    ZEN = auto()


@dataclass
class MenuButton:
    """Interactive button displayed in the main menu."""
    label: str
    action: MenuAction
    x: float
    y: float
    color: tuple[int, int, int]
    width: float = 200.0
    height: float = 50.0


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
