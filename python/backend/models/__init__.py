from backend.models.board import EMPTY, Board, Cell, Direction
from backend.models.highscore import MAX_SCORES, HighScoreEntry, HighScoreManager
from backend.models.settings import MAX_SIZE, MIN_SIZE, Settings, SettingsStore

__all__ = [
    "Board",
    "Cell",
    "Direction",
    "EMPTY",
    "HighScoreEntry",
    "HighScoreManager",
    "MAX_SCORES",
    "MAX_SIZE",
    "MIN_SIZE",
    "Settings",
    "SettingsStore",
]
