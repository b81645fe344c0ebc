"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import enum
import time
from typing import Callable

from backend.models.board import Board


class GamePhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    WON = "won"


class GameTimer:
    """Whole-second stopwatch, started on the first move and stopped on a win.

    *clock* returns seconds as a float; it defaults to ``time.monotonic``
    and is swapped for a fake in tests.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._start_time: float = 0.0
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> int:
        total = self._elapsed_banked
        if self._running:
            total += self._clock() - self._start_time
        return int(total)

    def start(self) -> None:
        if not self._running:
            self._start_time = self._clock()
            self._running = True

    def stop(self) -> None:
        if self._running:
            self._elapsed_banked += self._clock() - self._start_time
            self._running = False

    def reset(self) -> None:
        self._elapsed_banked = 0.0
        self._running = False


class GameState:
    """Holds the current board, move counter, phase and timer."""

    def __init__(self, board: Board, timer: GameTimer | None = None) -> None:
        self.board = board
        self.moves: int = 0
        self.phase = GamePhase.IDLE
        self.timer = timer or GameTimer()

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def elapsed_time(self) -> int:
        return self.timer.elapsed
