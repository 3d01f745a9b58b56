from dataclasses import dataclass


@dataclass(slots=True)
class GemVisual:
    """Interpolated draw coordinates in grid units, plus fade alpha."""
    row: float
    col: float
    alpha: float = 1.0
