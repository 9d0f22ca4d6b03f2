"""Tests for the digit grid."""

import pytest

from sudoku_engine.solver.board import Board


def test_new_board_is_empty():
    board = Board()
    assert board.copy_grid() == [[0] * 9 for _ in range(9)]
    assert board.is_solved() is False
    assert board.has_any_duplicate() is False


def test_set_get_and_clear_cell():
    board = Board()
    board.set(2, 7, 4)
    assert board.get(2, 7) == 4
    board.set(2, 7, 0)
    assert board.is_empty(2, 7)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, 9), (9, 9)])
def test_out_of_range_cell_rejected(row, col):
    board = Board()
    with pytest.raises(ValueError):
        board.get(row, col)
    with pytest.raises(ValueError):
        board.set(row, col, 1)


@pytest.mark.parametrize("digit", [-1, 10])
def test_out_of_range_digit_rejected(digit):
    with pytest.raises(ValueError):
        Board().set(0, 0, digit)


def test_solved_board(solution):
    board = Board.from_grid(solution)
    assert board.is_solved() is True
    assert board.has_any_duplicate() is False
    assert board.duplicate_cells() == []


def test_duplicate_in_row():
    board = Board()
    board.set(0, 0, 5)
    board.set(0, 8, 5)
    assert board.has_duplicate_at(0, 0)
    assert board.has_duplicate_at(0, 8)
    assert board.duplicate_cells() == [(0, 0), (0, 8)]
    assert board.has_any_duplicate()


def test_duplicate_in_column():
    board = Board()
    board.set(1, 3, 2)
    board.set(7, 3, 2)
    assert board.duplicate_cells() == [(1, 3), (7, 3)]


def test_duplicate_in_box_only():
    board = Board()
    board.set(3, 3, 9)
    board.set(5, 5, 9)
    assert board.duplicate_cells() == [(3, 3), (5, 5)]


def test_same_digit_in_unrelated_cells_is_not_duplicate():
    board = Board()
    board.set(0, 0, 1)
    board.set(4, 4, 1)
    assert board.has_any_duplicate() is False


def test_replace_is_all_or_nothing(puzzle):
    board = Board.from_grid(puzzle)
    bad = [row[:] for row in puzzle]
    bad[8][8] = 12
    with pytest.raises(ValueError):
        board.replace(bad)
    assert board.copy_grid() == puzzle


def test_clear_resets_every_cell(puzzle):
    board = Board.from_grid(puzzle)
    board.clear()
    assert board == Board()
