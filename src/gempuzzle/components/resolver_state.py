from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class ResolverPhase(Enum):
    IDLE = auto()
    SWAPPING = auto()    # swap applied, waiting to validate
    REVERTING = auto()   # swap undone, waiting for the revert to settle
    CLEARING = auto()    # gems flagged matched, waiting to disappear
    FALLING = auto()     # gravity applied, waiting before re-detecting


@dataclass(slots=True)
class ResolverState:
    """Tracks the swap/cascade state machine shared across systems."""

    phase: ResolverPhase = ResolverPhase.IDLE
    timer: float = 0.0
    swap: Optional[Tuple[Tuple[int, int], Tuple[int, int]]] = None
    cascade_depth: int = 0
    steps_total: int = 0

    @property
    def processing(self) -> bool:
        return self.phase != ResolverPhase.IDLE
