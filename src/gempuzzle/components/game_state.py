"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level game modes that drive which systems run."""
    MENU = auto()
    PUZZLE = auto()
    ZEN = auto()
    PAUSED = auto()
    LEVEL_CLEAR = auto()
    GAME_OVER = auto()


PLAYING_MODES = frozenset({GameMode.PUZZLE, GameMode.ZEN})


@dataclass
class GameState:
    """Singleton component storing the currently active game mode."""
    mode: GameMode = GameMode.MENU
    input_guard_press_id: Optional[int] = None
