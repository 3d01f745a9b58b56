"""Plain records exchanged with the progress store."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class PuzzleRecord:
    level: int
    stars: int
    high_score: int

    def to_dict(self) -> Dict[str, int]:
        return {"level": self.level, "stars": self.stars, "high_score": self.high_score}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PuzzleRecord":
        stars = int(payload["stars"])
        if not 1 <= stars <= 3:
            raise ValueError(f"stars out of range: {stars}")
        return cls(
            level=int(payload["level"]),
            stars=stars,
            high_score=int(payload["high_score"]),
        )


@dataclass(slots=True)
class ZenSnapshot:
    """Zen mode score plus the settled board as a kind-only grid."""
    score: int
    board: List[List[int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "board": [list(row) for row in self.board]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ZenSnapshot":
        board = payload["board"]
        if not isinstance(board, list) or not all(isinstance(row, list) for row in board):
            raise ValueError("board must be a list of rows")
        return cls(
            score=int(payload["score"]),
            board=[[int(kind) for kind in row] for row in board],
        )
