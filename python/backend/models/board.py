"""Board model for the sliding puzzle game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

#: Sentinel stored in the one cell that holds no tile.
EMPTY = None

Cell = Optional[int]


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Cells are stored as a flat row-major list. ``EMPTY`` marks the blank
    space, and ``empty_index`` caches its position.
    """

    size: int
    cells: list[Cell]
    empty_index: int

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[Cell]) -> Board:
        """Create a board from a flat row-major cell list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, None, 8])

        Raises ``ValueError`` unless *flat* holds each label
        ``1..size*size-1`` once plus exactly one ``EMPTY``.
        """
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}.")
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} cells for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        labels = sorted(v for v in flat if v is not EMPTY)
        if labels != list(range(1, size * size)):
            raise ValueError(
                f"A {size}×{size} board needs labels 1..{size * size - 1} "
                f"exactly once and one empty cell."
            )
        return cls(size=size, cells=list(flat), empty_index=flat.index(EMPTY))

    # -- geometry -------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def row_col(self, index: int) -> tuple[int, int]:
        self.check_index(index)
        return divmod(index, self.size)

    def index_of(self, row: int, col: int) -> int:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"({row}, {col}) is off a {self.size}×{self.size} board.")
        return row * self.size + col

    def check_index(self, index: int) -> None:
        if not 0 <= index < self.cell_count:
            raise IndexError(
                f"Cell index {index} out of range for a "
                f"{self.size}×{self.size} board."
            )

    # -- queries --------------------------------------------------------------

    def get_cell(self, index: int) -> Cell:
        self.check_index(index)
        return self.cells[index]

    def labels(self) -> list[int]:
        """Tile labels in board order, skipping the empty cell."""
        return [v for v in self.cells if v is not EMPTY]

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        last = self.cell_count - 1
        if self.cells[last] is not EMPTY:
            return False
        return all(self.cells[i] == i + 1 for i in range(last))

    def is_tile_correct(self, index: int) -> bool:
        """Check if the cell at *index* holds its goal value."""
        val = self.get_cell(index)
        if val is EMPTY:
            return index == self.cell_count - 1
        return val == index + 1

    def copy(self) -> Board:
        return Board(
            size=self.size,
            cells=self.cells[:],
            empty_index=self.empty_index,
        )
