from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class Board:
    """Grid of gem slots indexed ``slots[row][col]``; row 0 is the top row.

    Each slot holds the entity id of the gem occupying it, or ``None`` while the
    slot is empty between a clear and the following gravity refill.
    """
    rows: int
    cols: int
    num_kinds: int = 0
    slots: List[List[Optional[int]]] = field(default_factory=list)
