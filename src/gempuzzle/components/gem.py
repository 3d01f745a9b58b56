from dataclasses import dataclass


@dataclass(slots=True)
class Gem:
    """Per-gem kind assignment (no color data).

    ``kind`` indexes the palette in constants.GEM_COLORS. ``matched`` is only set
    while a cascade step is waiting to clear the gem.
    """
    kind: int
    matched: bool = False
