from dataclasses import dataclass
from enum import Enum, auto


class SessionMode(Enum):
    PUZZLE = auto()
    ZEN = auto()


@dataclass(slots=True)
class Session:
    """Score and difficulty parameters of the game being played.

    ``time_left``/``max_time`` only matter in Puzzle mode; Zen sessions are
    untimed and keep both at zero.
    """
    mode: SessionMode
    level: int = 1
    score: int = 0
    time_left: float = 0.0
    max_time: float = 0.0
    target_score: int = 0
    num_kinds: int = 0

    @property
    def timed(self) -> bool:
        return self.mode == SessionMode.PUZZLE
