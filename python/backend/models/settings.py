"""Persistent user preferences (board size, theme, picture)."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SIZE = 3
MAX_SIZE = 5


@dataclass
class Settings:
    grid_size: int = 3
    dark_mode: bool = False
    image: Optional[str] = None


class SettingsStore:
    """Loads and saves :class:`Settings` as JSON.

    Unknown keys are dropped and missing ones take their defaults, so
    files written by older versions keep loading.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath

    def load(self) -> Settings:
        if not self.filepath.exists():
            logger.debug("No settings file at %s, using defaults", self.filepath)
            return Settings()
        try:
            data = json.loads(self.filepath.read_text(encoding="utf-8"))
            known = {f.name for f in fields(Settings)}
            settings = Settings(**{k: v for k, v in data.items() if k in known})
        except (ValueError, AttributeError, OSError) as e:
            logger.warning("Failed to load settings from %s: %s", self.filepath, e)
            return Settings()

        if not isinstance(settings.grid_size, int) or not (
            MIN_SIZE <= settings.grid_size <= MAX_SIZE
        ):
            logger.warning("Unsupported grid size %r in settings", settings.grid_size)
            settings.grid_size = Settings.grid_size
        return settings

    def save(self, settings: Settings) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(asdict(settings), indent=2) + "\n"
        self.filepath.write_text(text, encoding="utf-8")
        logger.debug("Settings saved: %s", settings)
