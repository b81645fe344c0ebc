"""Generator test suite — shuffling, parity and reachability.

3×3 boards are checked against the full set of positions reachable from
the goal state, built once per module by breadth-first search over legal
slides (9!/2 = 181,440 states).
"""

from __future__ import annotations

import random
from collections import deque

import pytest

from backend.engine.gamegenerator import generator as generator_module
from backend.engine.gamegenerator import GameGenerator
from backend.models.board import EMPTY, Board

SEEDS = range(25)


# -- helpers ------------------------------------------------------------------


def _neighbors(state: tuple, size: int) -> list[tuple]:
    blank = state.index(EMPTY)
    br, bc = divmod(blank, size)
    out: list[tuple] = []
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        nr, nc = br + dr, bc + dc
        if 0 <= nr < size and 0 <= nc < size:
            cells = list(state)
            target = nr * size + nc
            cells[blank], cells[target] = cells[target], cells[blank]
            out.append(tuple(cells))
    return out


@pytest.fixture(scope="module")
def reachable_3x3() -> set[tuple]:
    start = tuple(GameGenerator.solved(3).cells)
    seen = {start}
    queue = deque([start])
    while queue:
        state = queue.popleft()
        for nxt in _neighbors(state, 3):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


class _ScriptedRandom(random.Random):
    """Fisher–Yates driver that only ever swaps the first two labels."""

    def __init__(self) -> None:
        super().__init__(0)
        self.rounds = 0

    def randint(self, a: int, b: int) -> int:
        if b == 1:
            self.rounds += 1
            return 0
        return b


# -- unshuffled boards --------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_unshuffled_board_is_solved(size: int) -> None:
    board = GameGenerator.generate(size, shuffle=False)
    assert board.is_solved()
    assert board.cells[:-1] == list(range(1, size * size))
    assert board.empty_index == size * size - 1


@pytest.mark.parametrize("size", [1, 0, -3])
def test_invalid_size_is_rejected(size: int) -> None:
    with pytest.raises(ValueError):
        GameGenerator.generate(size)


@pytest.mark.parametrize("size", ["3", 3.0, True])
def test_non_integer_size_is_rejected(size) -> None:
    with pytest.raises(ValueError):
        GameGenerator.generate(size)


# -- shuffled boards ----------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5])
@pytest.mark.parametrize("seed", SEEDS)
def test_shuffled_board_is_solvable_permutation(size: int, seed: int) -> None:
    board = GameGenerator.generate(size, shuffle=True, rng=random.Random(seed))

    assert len(board.cells) == size * size
    assert board.cells.count(EMPTY) == 1
    assert board.cells[-1] is EMPTY
    assert board.empty_index == size * size - 1
    assert sorted(board.labels()) == list(range(1, size * size))
    assert GameGenerator.is_solvable(board)
    assert GameGenerator.count_inversions(board.labels()) % 2 == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_shuffled_3x3_is_reachable_from_goal(
    seed: int, reachable_3x3: set[tuple]
) -> None:
    board = GameGenerator.generate(3, rng=random.Random(seed))
    assert tuple(board.cells) in reachable_3x3


def test_same_seed_gives_same_board() -> None:
    a = GameGenerator.generate(4, rng=random.Random(1234))
    b = GameGenerator.generate(4, rng=random.Random(1234))
    assert a == b


def test_shuffle_visits_many_layouts() -> None:
    rng = random.Random(7)
    layouts = {tuple(GameGenerator.generate(3, rng=rng).cells) for _ in range(50)}
    assert len(layouts) > 40


# -- parity -------------------------------------------------------------------


@pytest.mark.parametrize(
    "labels, expected",
    [
        ([1, 2, 3, 4], 0),
        ([2, 1, 3, 4], 1),
        ([4, 3, 2, 1], 6),
        ([3, 1, 2], 2),
    ],
)
def test_count_inversions(labels: list[int], expected: int) -> None:
    assert GameGenerator.count_inversions(labels) == expected


def test_single_inversion_4x4_is_unsolvable() -> None:
    labels = [2, 1, *range(3, 16)]
    assert not GameGenerator.is_solvable_labels(labels, 4)
    assert not GameGenerator.is_solvable(Board.from_flat(4, [*labels, EMPTY]))


def test_generator_rejects_single_inversion_4x4() -> None:
    rng = _ScriptedRandom()
    board = GameGenerator.generate(4, rng=rng)

    # First shuffle gives [2, 1, 3, ...]; only the second one is accepted.
    assert rng.rounds == 2
    assert board.cells[:2] == [1, 2]
    assert GameGenerator.count_inversions(board.labels()) == 0


def test_parity_check_matches_bfs_on_3x3(reachable_3x3: set[tuple]) -> None:
    rng = random.Random(99)
    cells: list = [*range(1, 9), EMPTY]
    for _ in range(300):
        rng.shuffle(cells)
        board = Board.from_flat(3, cells)
        assert GameGenerator.is_solvable(board) == (tuple(cells) in reachable_3x3)


def test_even_board_parity_depends_on_blank_row() -> None:
    # Sliding 12 down leaves 3 inversions with the blank one row up.
    solved = GameGenerator.solved(4)
    moved = solved.copy()
    moved.cells[15], moved.cells[11] = moved.cells[11], EMPTY
    moved.empty_index = 11
    assert GameGenerator.is_solvable(moved)

    swapped = moved.copy()
    swapped.cells[0], swapped.cells[1] = swapped.cells[1], swapped.cells[0]
    assert not GameGenerator.is_solvable(swapped)


# -- safety cap ---------------------------------------------------------------


def test_runaway_retry_loop_is_capped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(generator_module, "MAX_ATTEMPTS", 5)
    monkeypatch.setattr(
        GameGenerator, "is_solvable_labels", staticmethod(lambda labels, size: False)
    )
    with pytest.raises(RuntimeError):
        GameGenerator.generate(3, rng=random.Random(0))
