"""High score persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_SCORES = 15


@dataclass
class HighScoreEntry:
    moves: int
    time: int
    grid_size: int
    date: str


def _entry_from_dict(data: dict) -> HighScoreEntry:
    entry = HighScoreEntry(**data)
    for name in ("moves", "time", "grid_size"):
        value = getattr(entry, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an integer, got {value!r}")
    if not isinstance(entry.date, str):
        raise TypeError(f"date must be a string, got {entry.date!r}")
    return entry


class HighScoreManager:
    """Keeps the best ``MAX_SCORES`` results, fewest moves first, in a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._scores: list[HighScoreEntry] = []
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text(encoding="utf-8"))
            self._scores = [_entry_from_dict(e) for e in data]
        except (ValueError, TypeError, OSError) as e:
            # ValueError covers bad JSON and bad UTF-8 alike.
            logger.warning("Ignoring unreadable score file %s: %s", self.filepath, e)
            self._scores = []

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = [asdict(e) for e in self._scores]
        self.filepath.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved %d score(s) to %s", len(data), self.filepath)

    # -- queries --------------------------------------------------------------

    def add_score(self, entry: HighScoreEntry) -> None:
        """Insert *entry*, keep the list ranked and trimmed, then save.

        Ties on ``moves`` keep arrival order.
        """
        self._scores.append(entry)
        self._scores.sort(key=lambda e: e.moves)
        del self._scores[MAX_SCORES:]
        self.save()

    def get_scores(self, size: int | None = None) -> list[HighScoreEntry]:
        if size is None:
            return list(self._scores)
        return [e for e in self._scores if e.grid_size == size]

    def get_all_sizes(self) -> list[int]:
        return sorted({e.grid_size for e in self._scores})
