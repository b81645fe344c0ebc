"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random

from backend.models.board import EMPTY, Board

logger = logging.getLogger(__name__)

# Half of all permutations are solvable, so this is never reached by a
# correct parity check.
MAX_ATTEMPTS = 10_000


class GameGenerator:
    """Creates boards by shuffling labels and rejecting unsolvable ones."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        GameGenerator._check_size(size)
        cells = [*range(1, size * size), EMPTY]
        return Board(size=size, cells=cells, empty_index=size * size - 1)

    @staticmethod
    def generate(
        size: int,
        shuffle: bool = True,
        rng: random.Random | None = None,
    ) -> Board:
        """Return a board of the given size.

        With ``shuffle=False`` this is the solved board. Otherwise the labels
        are shuffled with *rng* (a fresh ``random.Random`` if omitted) until
        the permutation is solvable, and the blank is placed bottom-right.
        """
        GameGenerator._check_size(size)
        if not shuffle:
            return GameGenerator.solved(size)

        rng = rng if rng is not None else random.Random()
        labels = list(range(1, size * size))

        for attempt in range(1, MAX_ATTEMPTS + 1):
            GameGenerator.shuffle_labels(labels, rng)
            if GameGenerator.is_solvable_labels(labels, size):
                logger.debug(
                    "Generated %d×%d board after %d attempt(s)", size, size, attempt
                )
                return Board(
                    size=size,
                    cells=[*labels, EMPTY],
                    empty_index=size * size - 1,
                )

        raise RuntimeError(
            f"No solvable {size}×{size} permutation after {MAX_ATTEMPTS} shuffles."
        )

    # -- solvability ----------------------------------------------------------

    @staticmethod
    def count_inversions(labels: list[int]) -> int:
        """Number of pairs ``i < j`` with ``labels[i] > labels[j]``."""
        inversions = 0
        for i in range(len(labels)):
            for j in range(i + 1, len(labels)):
                if labels[i] > labels[j]:
                    inversions += 1
        return inversions

    @staticmethod
    def is_solvable_labels(labels: list[int], size: int) -> bool:
        """Parity check for *labels* followed by a bottom-right blank."""
        inversions = GameGenerator.count_inversions(labels)
        if size % 2 == 1:
            return inversions % 2 == 0
        # The blank sits on the bottom row: one row counted from the bottom.
        return (inversions + 1) % 2 == 1

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state, blank anywhere."""
        inversions = GameGenerator.count_inversions(board.labels())
        if board.size % 2 == 1:
            return inversions % 2 == 0
        blank_row = board.empty_index // board.size
        rows_from_bottom = board.size - 1 - blank_row
        return (inversions + rows_from_bottom) % 2 == 0

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def shuffle_labels(labels: list[int], rng: random.Random) -> None:
        """Fisher–Yates shuffle of *labels* in-place."""
        for i in range(len(labels) - 1, 0, -1):
            j = rng.randint(0, i)
            labels[i], labels[j] = labels[j], labels[i]

    @staticmethod
    def _check_size(size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size < 2:
            raise ValueError(f"Board size must be an integer of at least 2, got {size!r}.")
