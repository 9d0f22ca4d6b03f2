"""Rows, columns and boxes of the 9x9 grid as ordered member lists."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Direction(str, Enum):
    """Kind of cell group."""

    ROW = "row"
    COLUMN = "column"
    BOX = "box"


# Canonical scan order for groups: rows, then columns, then boxes.
DIRECTIONS: tuple[Direction, ...] = (Direction.ROW, Direction.COLUMN, Direction.BOX)


@dataclass(frozen=True)
class GroupMember:
    """One cell of a group, with its stable position inside that group."""

    row: int
    col: int
    index: int


@dataclass(frozen=True)
class CellGroup:
    """A row, column or box identified by direction and index 0-8."""

    direction: Direction
    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= 8:
            raise ValueError(f"Group index out of range: {self.index}")

    def members(self) -> list[GroupMember]:
        return group_members(self.direction, self.index)

    def __iter__(self) -> Iterator[GroupMember]:
        return iter(self.members())

    def __str__(self) -> str:
        return f"{self.direction.value} {self.index + 1}"


def box_index(row: int, col: int) -> int:
    """Index of the box holding (row, col)."""
    return (row // 3) * 3 + col // 3


def cell_in_box(member_index: int, box: int) -> tuple[int, int]:
    """Map a member index inside a box back to grid (row, col)."""
    row0 = (box // 3) * 3
    col0 = (box % 3) * 3
    return row0 + member_index // 3, col0 + member_index % 3


def _build_members(direction: Direction, index: int) -> tuple[GroupMember, ...]:
    if direction is Direction.ROW:
        return tuple(GroupMember(index, i, i) for i in range(9))
    if direction is Direction.COLUMN:
        return tuple(GroupMember(i, index, i) for i in range(9))
    return tuple(GroupMember(*cell_in_box(i, index), i) for i in range(9))


_MEMBERS: dict[tuple[Direction, int], tuple[GroupMember, ...]] = {
    (direction, index): _build_members(direction, index)
    for direction in DIRECTIONS
    for index in range(9)
}

ALL_GROUPS: tuple[CellGroup, ...] = tuple(
    CellGroup(direction, index) for direction in DIRECTIONS for index in range(9)
)


def group_members(direction: Direction, index: int) -> list[GroupMember]:
    """
    Ordered members of one group.

    Rows run left to right, columns top to bottom, boxes row-major
    inside the box. The member index is the position in that order.
    """
    try:
        return list(_MEMBERS[(Direction(direction), index)])
    except KeyError:
        raise ValueError(f"Group index out of range: {index}") from None


def group_index_for(direction: Direction, row: int, col: int) -> int:
    """Index of the group of the given direction that contains (row, col)."""
    if not (0 <= row <= 8 and 0 <= col <= 8):
        raise ValueError(f"Cell out of range: ({row}, {col})")
    if direction is Direction.ROW:
        return row
    if direction is Direction.COLUMN:
        return col
    return box_index(row, col)


def group_containing(direction: Direction, row: int, col: int) -> CellGroup:
    return CellGroup(direction, group_index_for(direction, row, col))


def groups_of_cell(row: int, col: int) -> list[CellGroup]:
    """The row, column and box containing (row, col), in canonical order."""
    return [group_containing(direction, row, col) for direction in DIRECTIONS]


def peers(row: int, col: int) -> list[tuple[int, int]]:
    """Every other cell sharing a row, column or box with (row, col)."""
    seen: set[tuple[int, int]] = set()
    result: list[tuple[int, int]] = []
    for group in groups_of_cell(row, col):
        for member in group:
            cell = (member.row, member.col)
            if cell == (row, col) or cell in seen:
                continue
            seen.add(cell)
            result.append(cell)
    return result
