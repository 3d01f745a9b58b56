"""Best-effort progress persistence.

Reads that fail for any reason (missing file, unreadable JSON, unexpected shape)
are reported as "no data"; failed writes are logged and dropped. Gameplay never
depends on the store succeeding.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Protocol

from gempuzzle.constants import DEFAULT_SAVE_PATH
from gempuzzle.persistence.records import PuzzleRecord, ZenSnapshot

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    def save_record(self, record: PuzzleRecord) -> None: ...

    def load_record(self, level: int) -> PuzzleRecord | None: ...

    def save_zen_state(self, snapshot: ZenSnapshot) -> None: ...

    def load_zen_state(self) -> ZenSnapshot | None: ...


class JsonProgressStore:
    """Keeps puzzle records (keyed by level) and the single Zen slot in one JSON file."""

    def __init__(self, save_path: Path | None = None) -> None:
        self._save_path = Path(save_path) if save_path is not None else DEFAULT_SAVE_PATH

    @property
    def save_path(self) -> Path:
        return self._save_path

    def save_record(self, record: PuzzleRecord) -> None:
        """Store ``record``, keeping the best stars and high score already saved for its level."""
        payload = self._read()
        records = payload.get("puzzle_records")
        if not isinstance(records, dict):
            records = payload["puzzle_records"] = {}
        existing = self._parse_record(records.get(str(record.level)))
        if existing is not None:
            record = PuzzleRecord(
                level=record.level,
                stars=max(record.stars, existing.stars),
                high_score=max(record.high_score, existing.high_score),
            )
        records[str(record.level)] = record.to_dict()
        self._write(payload)

    def load_record(self, level: int) -> PuzzleRecord | None:
        records = self._read().get("puzzle_records", {})
        if not isinstance(records, dict):
            return None
        return self._parse_record(records.get(str(level)))

    def save_zen_state(self, snapshot: ZenSnapshot) -> None:
        payload = self._read()
        payload["zen_save"] = snapshot.to_dict()
        self._write(payload)

    def load_zen_state(self) -> ZenSnapshot | None:
        raw = self._read().get("zen_save")
        if raw is None:
            return None
        try:
            return ZenSnapshot.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed zen save in %s: %s", self._save_path, exc)
            return None

    def clear_zen_state(self) -> None:
        payload = self._read()
        if payload.pop("zen_save", None) is not None:
            self._write(payload)

    # Internals ----------------------------------------------------------

    @staticmethod
    def _parse_record(raw: Any) -> PuzzleRecord | None:
        if raw is None:
            return None
        try:
            return PuzzleRecord.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed puzzle record %r: %s", raw, exc)
            return None

    def _read(self) -> Dict[str, Any]:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read progress from %s: %s", self._save_path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Progress file %s does not hold an object; ignoring it", self._save_path)
            return {}
        return payload

    def _write(self, payload: Dict[str, Any]) -> None:
        try:
            self._save_path.parent.mkdir(parents=True, exist_ok=True)
            with self._save_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
        except OSError as exc:
            logger.warning("Could not save progress to %s: %s", self._save_path, exc)
