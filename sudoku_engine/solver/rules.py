"""Logical deduction rules over a board and its candidate matrix.

Placement rules (naked single, hidden single) only read state and report
a forced move. Elimination rules (naked pair, hidden pair, box/line
reduction) clear candidates and report whether anything changed.

All scans use the same order: cells row-major, groups rows then columns
then boxes with index 0-8, digits ascending.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Optional

from .board import Board
from .groups import (
    ALL_GROUPS,
    CellGroup,
    Direction,
    box_index,
    cell_in_box,
    group_containing,
    group_members,
    peers,
)
from .possibilities import PossibilityMatrix

_LOGGER = logging.getLogger(__name__)

NAKED_SINGLE = "naked_single"
HIDDEN_SINGLE = "hidden_single"


@dataclass(frozen=True)
class Deduction:
    """A forced placement and the rule that proved it."""

    row: int
    col: int
    digit: int
    rule: str


def reduce_from_placement(
    board: Board, matrix: PossibilityMatrix, row: int, col: int
) -> bool:
    """Clear candidates made impossible by the digit placed at (row, col)."""
    digit = board.get(row, col)
    if digit == 0:
        return False
    changed = False
    for num in range(1, 10):
        changed |= matrix.clear_candidate(row, col, num)
    for peer_row, peer_col in peers(row, col):
        changed |= matrix.clear_candidate(peer_row, peer_col, digit)
    return changed


def reduce_all(board: Board, matrix: PossibilityMatrix) -> None:
    """Derive the candidate matrix from every placed digit on the board."""
    for row in range(9):
        for col in range(9):
            reduce_from_placement(board, matrix, row, col)
    matrix.mark_reduced()


def naked_single(board: Board, matrix: PossibilityMatrix) -> Optional[Deduction]:
    """First blank cell with exactly one candidate left."""
    for row in range(9):
        for col in range(9):
            if not board.is_empty(row, col):
                continue
            candidates = matrix.candidates_of(row, col)
            if len(candidates) == 1:
                return Deduction(row, col, candidates[0], NAKED_SINGLE)
    return None


def _group_hidden_single(
    board: Board, matrix: PossibilityMatrix, group: CellGroup
) -> Optional[Deduction]:
    members = group.members()
    for member in members:
        if not board.is_empty(member.row, member.col):
            continue
        for digit in matrix.candidates_of(member.row, member.col):
            locations = matrix.candidate_locations_in_group(
                group.direction, group.index, digit
            )
            if len(locations) == 1:
                return Deduction(member.row, member.col, digit, HIDDEN_SINGLE)
    return None


def hidden_single(board: Board, matrix: PossibilityMatrix) -> Optional[Deduction]:
    """A digit possible in only one blank cell of some group."""
    for group in ALL_GROUPS:
        found = _group_hidden_single(board, matrix, group)
        if found is not None:
            return found
    return None


def find_placement(board: Board, matrix: PossibilityMatrix) -> Optional[Deduction]:
    return naked_single(board, matrix) or hidden_single(board, matrix)


def _clear_from_group(
    matrix: PossibilityMatrix,
    group: CellGroup,
    keep: set[int],
    digits: tuple[int, ...],
) -> bool:
    changed = False
    for member in group:
        if member.index in keep:
            continue
        for digit in digits:
            changed |= matrix.clear_candidate(member.row, member.col, digit)
    return changed


def _group_naked_pairs(matrix: PossibilityMatrix, group: CellGroup) -> bool:
    changed = False
    members = group.members()
    for first, second in combinations(members, 2):
        pair = matrix.candidates_of(first.row, first.col)
        if len(pair) != 2 or matrix.candidates_of(second.row, second.col) != pair:
            continue
        if _clear_from_group(matrix, group, {first.index, second.index}, tuple(pair)):
            _LOGGER.debug(
                "naked pair %s in %s at r%dc%d/r%dc%d",
                pair,
                group,
                first.row + 1,
                first.col + 1,
                second.row + 1,
                second.col + 1,
            )
            changed = True
    return changed


def naked_pairs(board: Board, matrix: PossibilityMatrix) -> bool:
    """Two cells of a group sharing the same two candidates remove them elsewhere."""
    changed = False
    for group in ALL_GROUPS:
        changed |= _group_naked_pairs(matrix, group)
    return changed


def _eliminate_pair_everywhere(
    matrix: PossibilityMatrix,
    cells: tuple[tuple[int, int], tuple[int, int]],
    pair: tuple[int, int],
) -> bool:
    """Apply the naked pair effect in every group that holds both cells."""
    changed = False
    (row_a, col_a), (row_b, col_b) = cells
    for direction in (Direction.ROW, Direction.COLUMN, Direction.BOX):
        group = group_containing(direction, row_a, col_a)
        if group != group_containing(direction, row_b, col_b):
            continue
        keep = {
            member.index
            for member in group
            if (member.row, member.col) in ((row_a, col_a), (row_b, col_b))
        }
        changed |= _clear_from_group(matrix, group, keep, pair)
    return changed


def _group_hidden_pairs(matrix: PossibilityMatrix, group: CellGroup) -> bool:
    members = group.members()
    locations = {
        digit: matrix.candidate_locations_in_group(group.direction, group.index, digit)
        for digit in range(1, 10)
    }
    changed = False
    for first, second in combinations(range(1, 10), 2):
        if len(locations[first]) != 2 or locations[first] != locations[second]:
            continue
        cells = tuple((members[i].row, members[i].col) for i in locations[first])
        collapsed = False
        for row, col in cells:
            for digit in matrix.candidates_of(row, col):
                if digit not in (first, second):
                    collapsed |= matrix.clear_candidate(row, col, digit)
        collapsed |= _eliminate_pair_everywhere(matrix, cells, (first, second))
        if collapsed:
            _LOGGER.debug("hidden pair %d/%d in %s", first, second, group)
            changed = True
    return changed


def hidden_pairs(board: Board, matrix: PossibilityMatrix) -> bool:
    """Two digits confined to the same two cells of a group own those cells."""
    changed = False
    for group in ALL_GROUPS:
        changed |= _group_hidden_pairs(matrix, group)
    return changed


def _box_line_reduction(matrix: PossibilityMatrix, box: int) -> bool:
    changed = False
    for digit in range(1, 10):
        locations = matrix.candidate_locations_in_group(Direction.BOX, box, digit)
        # Pointing pairs and triples only.
        if len(locations) not in (2, 3):
            continue
        cells = [cell_in_box(index, box) for index in locations]
        rows = {row for row, _ in cells}
        cols = {col for _, col in cells}
        if len(rows) == 1:
            line = group_members(Direction.ROW, rows.pop())
        elif len(cols) == 1:
            line = group_members(Direction.COLUMN, cols.pop())
        else:
            continue
        line_changed = False
        for member in line:
            if box_index(member.row, member.col) == box:
                continue
            line_changed |= matrix.clear_candidate(member.row, member.col, digit)
        if line_changed:
            _LOGGER.debug("box/line reduction of %d from box %d", digit, box + 1)
            changed = True
    return changed


def box_line_reduction(board: Board, matrix: PossibilityMatrix) -> bool:
    """A digit confined to one row or column of a box is removed from the rest of that line."""
    changed = False
    for box in range(9):
        changed |= _box_line_reduction(matrix, box)
    return changed


ELIMINATION_RULES = (naked_pairs, hidden_pairs, box_line_reduction)


def eliminate_once(board: Board, matrix: PossibilityMatrix) -> bool:
    """Run every elimination rule once, in order. True if any candidate was cleared."""
    changed = False
    for rule in ELIMINATION_RULES:
        changed |= rule(board, matrix)
    return changed


@dataclass(frozen=True)
class SearchOutcome:
    deduction: Optional[Deduction]
    elimination_passes: int


def find_forced_move(board: Board, matrix: PossibilityMatrix) -> SearchOutcome:
    """
    Find the simplest certain placement.

    Singles are tried first. Otherwise elimination passes run until a
    single appears or a pass changes nothing. Each productive pass clears
    at least one of a finite number of candidates, so the loop halts.
    """
    passes = 0
    deduction = find_placement(board, matrix)
    while deduction is None:
        if not eliminate_once(board, matrix):
            break
        passes += 1
        deduction = find_placement(board, matrix)
    return SearchOutcome(deduction, passes)
