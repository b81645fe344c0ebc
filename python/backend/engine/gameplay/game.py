"""Core gameplay logic — validates moves, applies them and checks the win."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Callable

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GamePhase, GameState, GameTimer
from backend.models.board import EMPTY, Board, Direction
from backend.models.highscore import HighScoreEntry

logger = logging.getLogger(__name__)


# -- move rule ----------------------------------------------------------------


def can_move(board: Board, target: int) -> bool:
    """True if the tile at *target* can slide into the empty cell.

    The tile must share a row or column with the blank and sit right next
    to it. Raises ``IndexError`` for an index off the board.
    """
    board.check_index(target)
    if board.cells[target] is EMPTY:
        return False
    tr, tc = divmod(target, board.size)
    br, bc = divmod(board.empty_index, board.size)
    return abs(tr - br) + abs(tc - bc) == 1


def apply_move(board: Board, target: int) -> Board:
    """Return a new board with the tile at *target* moved into the blank.

    The caller checks :func:`can_move` first; only bounds are re-checked
    here. The new blank position is ``result.empty_index == target``.
    """
    board.check_index(target)
    moved = board.copy()
    moved.cells[board.empty_index] = board.cells[target]
    moved.cells[target] = EMPTY
    moved.empty_index = target
    return moved


def is_solved(board: Board) -> bool:
    return board.is_solved()


# The offset points to the tile that will slide into the blank.
# UP   → tile below the blank moves up
# DOWN → tile above the blank moves down
# LEFT → tile right of the blank moves left
# RIGHT→ tile left of the blank moves right
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


def neighbor_for(board: Board, direction: Direction) -> int | None:
    """Index of the tile that *direction* would slide, or None at an edge."""
    br, bc = divmod(board.empty_index, board.size)
    dr, dc = _OFFSETS[direction]
    tr, tc = br + dr, bc + dc
    if not (0 <= tr < board.size and 0 <= tc < board.size):
        return None
    return tr * board.size + tc


# -- session ------------------------------------------------------------------


class GameSession:
    """Owns one board and its move count, phase and timer.

    Frontends create one session and feed it clicks or key presses; the
    timer starts on the first accepted move and stops on the win.
    """

    def __init__(
        self,
        size: int,
        *,
        shuffle: bool = True,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.size = size
        self._rng = rng if rng is not None else random.Random()
        self.state = GameState(
            GameGenerator.generate(size, shuffle, self._rng),
            GameTimer(clock),
        )

    @classmethod
    def from_board(
        cls, board: Board, clock: Callable[[], float] | None = None
    ) -> GameSession:
        """Create a session from an existing board (e.g. loaded from file)."""
        obj = object.__new__(cls)
        obj.size = board.size
        obj._rng = random.Random()
        obj.state = GameState(board, GameTimer(clock))
        return obj

    # -- lifecycle ------------------------------------------------------------

    def new_game(self, shuffle: bool = True, size: int | None = None) -> None:
        """Replace the board wholesale and reset moves, timer and phase."""
        size = self.size if size is None else size
        board = GameGenerator.generate(size, shuffle, self._rng)
        self.size = size
        timer = self.state.timer
        timer.reset()
        self.state = GameState(board, timer)
        logger.info("New %d×%d game (shuffled=%s)", self.size, self.size, shuffle)

    # -- movement -------------------------------------------------------------

    def click(self, index: int) -> bool:
        """Slide the tile at *index* into the blank if it is adjacent.

        Returns True if the move was applied. Clicks on the blank, on
        non-adjacent tiles, or after the win change nothing.
        """
        state = self.state
        if state.phase is GamePhase.WON or not can_move(state.board, index):
            return False

        state.board = apply_move(state.board, index)
        state.increment_moves()
        if state.phase is GamePhase.IDLE:
            state.phase = GamePhase.RUNNING
            state.timer.start()

        if is_solved(state.board):
            state.timer.stop()
            state.phase = GamePhase.WON
            logger.info(
                "Solved %d×%d in %d moves, %ds",
                self.size, self.size, state.moves, state.timer.elapsed,
            )
        return True

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        target = neighbor_for(self.state.board, direction)
        if target is None:
            return False
        return self.click(target)

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def elapsed_seconds(self) -> int:
        return self.state.elapsed_time

    @property
    def is_won(self) -> bool:
        return self.state.phase is GamePhase.WON

    def movable(self) -> list[int]:
        """Indices of every tile that can currently slide."""
        board = self.state.board
        return [i for i in range(board.cell_count) if can_move(board, i)]

    def score_entry(self, now: datetime | None = None) -> HighScoreEntry:
        """Snapshot of the finished game for the score list."""
        if not self.is_won:
            raise RuntimeError("score_entry() is only available after a win.")
        now = now or datetime.now()
        return HighScoreEntry(
            moves=self.state.moves,
            time=self.state.elapsed_time,
            grid_size=self.size,
            date=now.isoformat(timespec="seconds"),
        )
