"""The 9x9 grid of placed digits."""

from __future__ import annotations

from typing import List

import numpy as np

from .groups import DIRECTIONS, group_containing

Grid = List[List[int]]


def check_cell(row: int, col: int) -> None:
    """Reject (row, col) outside the grid."""
    if not (0 <= row <= 8 and 0 <= col <= 8):
        raise ValueError(f"Cell out of range: ({row}, {col})")


def check_digit(digit: int, allow_blank: bool = True) -> None:
    low = 0 if allow_blank else 1
    if not isinstance(digit, (int, np.integer)) or not low <= digit <= 9:
        raise ValueError(f"Digit out of range: {digit!r}")


class Board:
    """Sudoku board holding digits 0-9, where 0 is an empty cell.

    The board does not forbid duplicate digits in a group; an inconsistent
    board is a legal value. Duplicates are only detected on request.
    """

    def __init__(self):
        self._cells = np.zeros((9, 9), dtype=np.int8)
        self._revision = 0

    @classmethod
    def from_grid(cls, grid: Grid) -> "Board":
        board = cls()
        board.replace(grid)
        return board

    def get(self, row: int, col: int) -> int:
        check_cell(row, col)
        return int(self._cells[row, col])

    def set(self, row: int, col: int, digit: int) -> None:
        check_cell(row, col)
        check_digit(digit)
        self._cells[row, col] = digit
        self._revision += 1

    def clear(self) -> None:
        self._cells.fill(0)
        self._revision += 1

    def replace(self, grid: Grid) -> None:
        """Replace every cell from a 9x9 grid; nothing changes if the grid is invalid."""
        cells = np.zeros((9, 9), dtype=np.int8)
        if len(grid) != 9:
            raise ValueError(f"Expected 9 rows, got {len(grid)}")
        for row, values in enumerate(grid):
            if len(values) != 9:
                raise ValueError(f"Expected 9 values in row {row}, got {len(values)}")
            for col, digit in enumerate(values):
                check_digit(digit)
                cells[row, col] = digit
        self._cells = cells
        self._revision += 1

    @property
    def revision(self) -> int:
        """Counter bumped by every mutation."""
        return self._revision

    def copy_grid(self) -> Grid:
        return self._cells.astype(int).tolist()

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) == 0

    def is_solved(self) -> bool:
        """True when no cell is blank (duplicates are not considered)."""
        return bool(np.all(self._cells != 0))

    def empty_count(self) -> int:
        return int(np.count_nonzero(self._cells == 0))

    def has_duplicate_at(self, row: int, col: int) -> bool:
        """True if the digit at (row, col) appears elsewhere in its row, column or box."""
        digit = self.get(row, col)
        if digit == 0:
            return False
        for direction in DIRECTIONS:
            for member in group_containing(direction, row, col):
                if (member.row, member.col) == (row, col):
                    continue
                if self._cells[member.row, member.col] == digit:
                    return True
        return False

    def duplicate_cells(self) -> list[tuple[int, int]]:
        """All cells whose digit is duplicated in some group, row-major."""
        return [
            (row, col)
            for row in range(9)
            for col in range(9)
            if self.has_duplicate_at(row, col)
        ]

    def has_any_duplicate(self) -> bool:
        return any(
            self.has_duplicate_at(row, col) for row in range(9) for col in range(9)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __repr__(self) -> str:
        return f"Board(filled={81 - self.empty_count()})"
