"""Step-by-step solving session over one board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, Grid
from .possibilities import PossibilityMatrix
from .rules import find_forced_move, reduce_all, reduce_from_placement

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """A digit placed by the solver."""

    row: int
    col: int
    digit: int
    rule: str
    elimination_passes: int = 0

    def __str__(self) -> str:
        return f"r{self.row + 1}c{self.col + 1} = {self.digit} ({self.rule})"


class NoMoveReason(str, Enum):
    """Why no certain move exists, in the order the checks are made."""

    DUPLICATES = "duplicates"
    SOLVED = "solved"
    CONTRADICTION = "contradiction"
    NO_CERTAIN_MOVE = "no_certain_move"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    NoMoveReason.DUPLICATES: "board is illegal/has duplicates",
    NoMoveReason.SOLVED: "board is solved",
    NoMoveReason.CONTRADICTION: "some empty cell has no possibilities",
    NoMoveReason.NO_CERTAIN_MOVE: "cannot find any move which is certain",
}


class SolveController:
    """Owns a board and its candidate matrix for one puzzle session.

    Not thread-safe; use one controller per puzzle.
    """

    def __init__(self, board: Board | None = None):
        self.board = board if board is not None else Board()
        self.possibilities = PossibilityMatrix(self.board)
        self._last_cleared: list[tuple[int, int, int]] = []

    @classmethod
    def from_grid(cls, grid: Grid) -> "SolveController":
        return cls(Board.from_grid(grid))

    @property
    def last_cleared(self) -> list[tuple[int, int, int]]:
        """Candidates removed by the latest :meth:`solve_step`, as (row, col, digit)."""
        return list(self._last_cleared)

    # Edits made from outside the solver invalidate every deduction.

    def set_cell(self, row: int, col: int, digit: int) -> None:
        self.board.set(row, col, digit)
        self._invalidate()

    def clear(self) -> None:
        self.board.clear()
        self._invalidate()

    def load_grid(self, grid: Grid) -> None:
        self.board.replace(grid)
        self._invalidate()

    def _invalidate(self) -> None:
        self.possibilities.reset_all()
        self._last_cleared = []

    def solve_start(self) -> None:
        """Rebuild candidates from scratch out of the current board."""
        self.possibilities.reset_all()
        reduce_all(self.board, self.possibilities)
        self.possibilities.drain_cleared()
        self._last_cleared = []

    def solve_step(self) -> Optional[Placement]:
        """
        Find and apply one forced placement.

        Returns:
            The placement made, or None when no rule proves a move. Use
            :meth:`diagnose` to find out why.
        """
        if not self.possibilities.is_reduced:
            self.solve_start()
        if self.board.has_any_duplicate():
            _LOGGER.info("No move: %s", NoMoveReason.DUPLICATES.message)
            self._last_cleared = []
            return None

        outcome = find_forced_move(self.board, self.possibilities)
        deduction = outcome.deduction
        if deduction is None:
            self._last_cleared = self.possibilities.drain_cleared()
            _LOGGER.info("No move: %s", self.diagnose().message)
            return None

        self.board.set(deduction.row, deduction.col, deduction.digit)
        reduce_from_placement(
            self.board, self.possibilities, deduction.row, deduction.col
        )
        self.possibilities.mark_reduced()
        self._last_cleared = self.possibilities.drain_cleared()
        placement = Placement(
            deduction.row,
            deduction.col,
            deduction.digit,
            deduction.rule,
            outcome.elimination_passes,
        )
        _LOGGER.debug("Placed %s", placement)
        return placement

    def solve_all(self, max_steps: int = 81) -> list[Placement]:
        """Apply forced placements until none is left or ``max_steps`` are made."""
        placements: list[Placement] = []
        while len(placements) < max_steps:
            placement = self.solve_step()
            if placement is None:
                break
            placements.append(placement)
        return placements

    def is_candidate(self, row: int, col: int, digit: int) -> bool:
        return self.possibilities.is_candidate(row, col, digit)

    def candidates_grid(self) -> list[list[list[int]]]:
        """Candidate digits of every cell; filled cells have none."""
        return [
            [self.possibilities.candidates_of(row, col) for col in range(9)]
            for row in range(9)
        ]

    def is_solved(self) -> bool:
        return self.board.is_solved()

    def has_any_duplicate(self) -> bool:
        return self.board.has_any_duplicate()

    def has_contradiction(self) -> bool:
        """True when some blank cell has no candidate left."""
        if not self.possibilities.is_reduced:
            return False
        return any(
            self.board.is_empty(row, col)
            and not self.possibilities.candidates_of(row, col)
            for row in range(9)
            for col in range(9)
        )

    def diagnose(self) -> NoMoveReason:
        """Explain a "no move" outcome."""
        if self.has_any_duplicate():
            return NoMoveReason.DUPLICATES
        if self.is_solved():
            return NoMoveReason.SOLVED
        if self.has_contradiction():
            return NoMoveReason.CONTRADICTION
        return NoMoveReason.NO_CERTAIN_MOVE
