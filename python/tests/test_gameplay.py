"""Move rule, win check, and the session built on top of them."""

from __future__ import annotations

import random
from datetime import datetime
from itertools import combinations

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GameSession, apply_move, can_move, is_solved
from backend.engine.gamestate import GamePhase
from backend.models.board import EMPTY, Board, Direction

SOLVED_3 = [1, 2, 3, 4, 5, 6, 7, 8, EMPTY]


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# -- can_move -----------------------------------------------------------------


def test_can_move_orthogonal_neighbours_only() -> None:
    board = Board.from_flat(3, [1, 2, 3, EMPTY, 4, 5, 6, 7, 8])  # blank at (1, 0)
    assert can_move(board, 0)  # above
    assert can_move(board, 4)  # right
    assert can_move(board, 6)  # below
    assert not can_move(board, 1)  # diagonal
    assert not can_move(board, 7)  # diagonal
    assert not can_move(board, 5)  # same row, two away
    assert not can_move(board, 3)  # the blank itself


def test_can_move_does_not_wrap_rows() -> None:
    # Index 2 ends row 0 and index 3 starts row 1.
    board = Board.from_flat(3, [1, 2, 3, EMPTY, 4, 5, 6, 7, 8])
    assert not can_move(board, 2)


@pytest.mark.parametrize("index", [-1, 9])
def test_can_move_out_of_range_raises(index: int) -> None:
    with pytest.raises(IndexError):
        can_move(Board.from_flat(3, SOLVED_3), index)


@pytest.mark.parametrize("size", [3, 4, 5])
def test_movable_tile_count_by_blank_position(size: int) -> None:
    last = size - 1
    for blank in range(size * size):
        cells: list = [*range(1, size * size)]
        cells.insert(blank, EMPTY)
        board = Board.from_flat(size, cells)
        r, c = divmod(blank, size)
        on_edge = (r in (0, last)) + (c in (0, last))
        movable = [i for i in range(size * size) if can_move(board, i)]
        assert len(movable) == 4 - on_edge
        for i in movable:
            tr, tc = divmod(i, size)
            assert tr == r or tc == c


# -- apply_move ---------------------------------------------------------------


def test_apply_move_swaps_tile_into_blank() -> None:
    board = Board.from_flat(3, SOLVED_3)
    moved = apply_move(board, 7)
    assert moved.cells == [1, 2, 3, 4, 5, 6, 7, EMPTY, 8]
    assert moved.empty_index == 7


def test_apply_move_leaves_input_untouched() -> None:
    board = Board.from_flat(3, SOLVED_3)
    apply_move(board, 5)
    assert board.cells == SOLVED_3
    assert board.empty_index == 8


@pytest.mark.parametrize("seed", range(5))
def test_apply_move_then_inverse_restores_board(seed: int) -> None:
    board = GameGenerator.generate(4, rng=random.Random(seed))
    for target in [i for i in range(16) if can_move(board, i)]:
        moved = apply_move(board, target)

        changed = [i for i in range(16) if moved.cells[i] != board.cells[i]]
        assert sorted(changed) == sorted([target, board.empty_index])
        assert moved.empty_index == target
        assert moved.cells[board.empty_index] == board.cells[target]

        assert can_move(moved, board.empty_index)
        assert apply_move(moved, board.empty_index) == board


# -- is_solved ----------------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5])
def test_generated_unshuffled_board_is_solved(size: int) -> None:
    assert is_solved(GameGenerator.generate(size, shuffle=False))


@pytest.mark.parametrize("i, j", list(combinations(range(8), 2)))
def test_any_two_swapped_labels_are_not_solved(i: int, j: int) -> None:
    cells = SOLVED_3[:]
    cells[i], cells[j] = cells[j], cells[i]
    assert not is_solved(Board.from_flat(3, cells))


# -- session ------------------------------------------------------------------


def test_click_scenario_on_solved_3x3() -> None:
    session = GameSession(3, shuffle=False)
    assert session.board.cells == SOLVED_3
    assert session.phase is GamePhase.IDLE

    assert session.click(7)
    assert session.board.cells == [1, 2, 3, 4, 5, 6, 7, EMPTY, 8]
    assert session.board.empty_index == 7
    assert session.moves == 1
    assert not is_solved(session.board)
    assert session.phase is GamePhase.RUNNING

    # 1 sits at index 0, two rows above the blank at 7.
    assert not session.click(0)
    assert session.board.cells == [1, 2, 3, 4, 5, 6, 7, EMPTY, 8]
    assert session.moves == 1

    # 5 at index 4 is directly above the blank, so it does slide.
    assert session.click(4)
    assert session.board.cells == [1, 2, 3, 4, EMPTY, 6, 7, 5, 8]
    assert session.moves == 2


def test_rejected_click_keeps_session_idle() -> None:
    clock = FakeClock()
    session = GameSession(3, shuffle=False, clock=clock)
    assert not session.click(0)
    assert not session.click(8)  # the blank
    assert session.phase is GamePhase.IDLE
    assert session.moves == 0
    assert not session.state.timer.running


def test_timer_runs_from_first_move_until_win() -> None:
    clock = FakeClock()
    session = GameSession(3, shuffle=False, clock=clock)

    clock.now += 30  # idle time before the first move is not counted
    session.click(7)
    clock.now += 5.7
    assert session.elapsed_seconds == 5

    session.click(8)
    assert session.is_won
    assert session.phase is GamePhase.WON
    assert session.moves == 2

    clock.now += 100
    assert session.elapsed_seconds == 5


def test_clicks_after_win_are_ignored() -> None:
    session = GameSession(3, shuffle=False)
    session.click(7)
    session.click(8)
    assert session.is_won
    assert not session.click(7)
    assert session.moves == 2


def test_score_entry_snapshot() -> None:
    clock = FakeClock()
    session = GameSession(3, shuffle=False, clock=clock)
    session.click(5)
    clock.now += 12
    session.click(8)

    entry = session.score_entry(now=datetime(2025, 5, 22, 10, 30))
    assert entry.moves == 2
    assert entry.time == 12
    assert entry.grid_size == 3
    assert entry.date == "2025-05-22T10:30:00"


def test_score_entry_before_win_raises() -> None:
    session = GameSession(3, shuffle=False)
    with pytest.raises(RuntimeError):
        session.score_entry()


def test_new_game_resets_everything() -> None:
    clock = FakeClock()
    session = GameSession(3, shuffle=False, clock=clock, rng=random.Random(3))
    session.click(7)
    clock.now += 4

    session.new_game()
    assert session.moves == 0
    assert session.phase is GamePhase.IDLE
    assert session.elapsed_seconds == 0
    assert GameGenerator.is_solvable(session.board)

    session.new_game(shuffle=False, size=4)
    assert session.size == 4
    assert session.board.is_solved()


def test_new_game_with_bad_size_keeps_current_game() -> None:
    session = GameSession(3, shuffle=False)
    session.click(7)
    before = session.board.copy()

    with pytest.raises(ValueError):
        session.new_game(size=1)

    assert session.size == 3
    assert session.board == before
    assert session.moves == 1

    session.new_game(shuffle=False)
    assert session.board.size == 3
    assert session.board.is_solved()


def test_move_translates_direction_to_neighbour() -> None:
    session = GameSession(3, shuffle=False)
    assert not session.move(Direction.UP)  # nothing below the blank
    assert not session.move(Direction.LEFT)  # nothing right of the blank
    assert session.moves == 0

    assert session.move(Direction.DOWN)  # 6 slides down
    assert session.board.cells[8] == 6
    assert session.board.empty_index == 5

    assert session.move(Direction.RIGHT)  # 5 slides right
    assert session.board.cells[5] == 5
    assert session.board.empty_index == 4
    assert session.moves == 2


def test_movable_lists_blank_neighbours() -> None:
    session = GameSession(3, shuffle=False)
    assert session.movable() == [5, 7]


def test_from_board_keeps_layout() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, EMPTY, 8])
    session = GameSession.from_board(board)
    assert session.size == 3
    assert session.click(8)
    assert session.is_won
