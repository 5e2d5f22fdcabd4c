from __future__ import annotations

import numpy as np
import pytest

from minimax_ttt.game import Board, Cell


def test_initial_board_is_empty() -> None:
    board = Board.initial()
    assert all(board.get(row, col) == Cell.EMPTY for row in range(3) for col in range(3))
    assert board.score() == 0
    assert len(board.empty_cells()) == 9
    assert not board.is_full()


def test_successors_follow_row_major_order() -> None:
    board = Board.from_rows(
        [
            ["_", "X", "O"],
            ["O", "X", "X"],
            ["X", "O", "_"],
        ]
    )
    successors = list(board.legal_successors(Cell.X))

    assert len(successors) == 2
    assert successors[0].get(0, 0) == Cell.X
    assert successors[0].get(2, 2) == Cell.EMPTY
    assert successors[1].get(0, 0) == Cell.EMPTY
    assert successors[1].get(2, 2) == Cell.X


def test_successors_are_lazy_and_leave_board_untouched() -> None:
    board = Board.initial()
    successors = board.legal_successors(Cell.O)

    first = next(successors)
    assert first.get(0, 0) == Cell.O
    assert board == Board.initial()
    assert len(list(successors)) == 8
    assert list(successors) == []


def test_successors_require_a_player() -> None:
    with pytest.raises(ValueError):
        Board.initial().legal_successors(Cell.EMPTY)


def test_completed_row_scores_player_a_weight() -> None:
    board = Board.from_rows(
        [
            ["X", "X", "X"],
            ["_", "_", "_"],
            ["_", "_", "_"],
        ]
    )
    assert board.score() == -10


def test_completed_main_diagonal_scores_player_b_weight() -> None:
    board = Board.from_rows(
        [
            ["O", "_", "_"],
            ["_", "O", "_"],
            ["_", "_", "O"],
        ]
    )
    assert board.score() == 10


def test_columns_and_anti_diagonal_are_scored() -> None:
    column = Board.from_rows([["_", "O", "_"], ["X", "O", "_"], ["X", "O", "_"]])
    anti = Board.from_rows([["_", "O", "X"], ["O", "X", "_"], ["X", "_", "_"]])
    assert column.score() == 10
    assert anti.score() == -10


def test_first_line_in_scan_order_wins_on_double_lines() -> None:
    board = Board.from_rows(
        [
            ["_", "_", "_"],
            ["X", "X", "X"],
            ["O", "O", "O"],
        ]
    )
    assert board.score() == -10

    board = Board.from_rows(
        [
            ["O", "O", "O"],
            ["_", "_", "_"],
            ["X", "X", "X"],
        ]
    )
    assert board.score() == 10


def test_full_board_without_line_is_a_draw() -> None:
    board = Board.from_rows(
        [
            ["X", "O", "X"],
            ["X", "O", "O"],
            ["O", "X", "X"],
        ]
    )
    assert board.is_full()
    assert board.score() == 0
    assert list(board.legal_successors(Cell.O)) == []


def test_score_is_pure() -> None:
    board = Board.from_rows([["X", "O", "_"], ["_", "X", "_"], ["O", "_", "X"]])
    snapshot = board.cells
    assert board.score() == board.score() == -10
    assert board.cells == snapshot


def test_place_returns_new_board() -> None:
    board = Board.initial()
    placed = board.place(1, 2, Cell.O)
    assert placed.get(1, 2) == Cell.O
    assert board.get(1, 2) == Cell.EMPTY
    assert placed.diff(board) == [(1, 2)]


def test_out_of_range_coordinates_fail_loudly() -> None:
    board = Board.initial()
    with pytest.raises(IndexError):
        board.get(3, 0)
    with pytest.raises(IndexError):
        board.get(0, -1)
    with pytest.raises(IndexError):
        board.place(1, 5, Cell.X)


def test_from_rows_rejects_bad_shapes_and_glyphs() -> None:
    with pytest.raises(ValueError):
        Board.from_rows([["X", "O"], ["_", "_"]])
    with pytest.raises(ValueError):
        Board.from_rows([["X", "O", "Q"], ["_", "_", "_"], ["_", "_", "_"]])


def test_boards_are_hashable_values() -> None:
    a = Board.initial().place(0, 0, Cell.X)
    b = Board.initial().place(0, 0, Cell.X)
    assert a == b
    assert len({a, b}) == 1


def test_render_indents_each_row() -> None:
    board = Board.initial().place(0, 0, Cell.X).place(2, 1, Cell.O)
    assert board.render(2) == "  [X _ _]\n  [_ _ _]\n  [_ O _]\n"
    assert str(Board.initial()) == "[_ _ _]\n" * 3


def test_as_array_is_read_only_weights() -> None:
    board = Board.initial().place(0, 0, Cell.X).place(1, 1, Cell.O)
    grid = board.as_array()

    assert grid.shape == (3, 3)
    assert grid.dtype == np.int8
    assert grid[0, 0] == -10
    assert grid[1, 1] == 10
    assert np.count_nonzero(grid) == 2
    with pytest.raises(ValueError):
        grid[2, 2] = 10


def test_cell_opponent_and_glyphs() -> None:
    assert Cell.X.opponent() == Cell.O
    assert Cell.O.opponent() == Cell.X
    assert Cell.EMPTY.opponent() == Cell.EMPTY
    assert [cell.glyph for cell in Cell] == ["_", "X", "O"]
