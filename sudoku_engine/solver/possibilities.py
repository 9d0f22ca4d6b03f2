"""Per-cell candidate digits kept as a 9x9x9 boolean array."""

from __future__ import annotations

import numpy as np

from .board import Board, check_cell, check_digit
from .groups import Direction, group_members


class PossibilityMatrix:
    """Candidate flags for every (row, col, digit).

    ``flags[row, col, digit - 1]`` is True while ``digit`` is still possible
    at the cell. A fresh or reset matrix is all True and not ``is_reduced``;
    it becomes reduced once derived from the board and stops being
    reduced as soon as the board changes.

    Every true->false transition is appended to a journal which callers read
    with :meth:`drain_cleared` to learn which candidates a call removed.
    """

    def __init__(self, board: Board):
        self._board = board
        self._flags = np.ones((9, 9, 9), dtype=bool)
        self._reduced = False
        self._reduced_revision = -1
        self._cleared: list[tuple[int, int, int]] = []

    @property
    def is_reduced(self) -> bool:
        """True while the flags were derived from the board as it is now."""
        return self._reduced and self._reduced_revision == self._board.revision

    def mark_reduced(self) -> None:
        self._reduced = True
        self._reduced_revision = self._board.revision

    def reset_all(self) -> None:
        self._flags.fill(True)
        self._reduced = False
        self._cleared.clear()

    def is_candidate(self, row: int, col: int, digit: int) -> bool:
        check_cell(row, col)
        check_digit(digit, allow_blank=False)
        return bool(self._flags[row, col, digit - 1])

    def clear_candidate(self, row: int, col: int, digit: int) -> bool:
        """Remove ``digit`` from (row, col). Returns True only if it was still set."""
        check_cell(row, col)
        check_digit(digit, allow_blank=False)
        if not self._flags[row, col, digit - 1]:
            return False
        self._flags[row, col, digit - 1] = False
        self._cleared.append((row, col, digit))
        return True

    def candidates_of(self, row: int, col: int) -> list[int]:
        """Ascending candidate digits of a blank cell; empty for a filled cell."""
        if not self._board.is_empty(row, col):
            return []
        return [int(d) + 1 for d in np.flatnonzero(self._flags[row, col])]

    def candidate_locations_in_group(
        self, direction: Direction, index: int, digit: int
    ) -> list[int]:
        """Member indexes of blank group cells where ``digit`` is still possible."""
        check_digit(digit, allow_blank=False)
        return [
            member.index
            for member in group_members(direction, index)
            if self._board.is_empty(member.row, member.col)
            and self._flags[member.row, member.col, digit - 1]
        ]

    def candidate_count(self) -> int:
        """Total candidate flags still set on blank cells."""
        blank = np.array(
            [[self._board.is_empty(r, c) for c in range(9)] for r in range(9)]
        )
        return int(self._flags[blank].sum())

    def drain_cleared(self) -> list[tuple[int, int, int]]:
        """Return and forget the (row, col, digit) clears recorded so far."""
        cleared = list(self._cleared)
        self._cleared.clear()
        return cleared

    def snapshot(self) -> np.ndarray:
        """Copy of the raw flag array, indexed [row, col, digit - 1]."""
        return self._flags.copy()
