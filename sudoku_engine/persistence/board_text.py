"""Read and write boards as 9 lines of 9 space-separated digits."""

from __future__ import annotations

import os
from pathlib import Path

from ..solver.board import Grid


class BoardFormatError(ValueError):
    """Persisted board text is malformed."""


def parse_board(text: str) -> Grid:
    """
    Parse persisted board text into a 9x9 grid.

    Args:
        text: 9 lines, each holding 9 whitespace-separated integers 0-9

    Returns:
        The parsed grid (0 for empty cells)

    Raises:
        BoardFormatError: On the first malformed line or value
    """
    grid: Grid = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if len(grid) >= 9:
            raise BoardFormatError("Too many lines in file")
        tokens = line.split()
        if len(tokens) != 9:
            raise BoardFormatError(
                f"Incorrect number of elements in line {line_number}: "
                f"expected 9, got {len(tokens)}"
            )
        row: list[int] = []
        for token in tokens:
            # int() also takes non-ASCII digits and underscores.
            if not (token.isascii() and token.isdigit()):
                raise BoardFormatError(
                    f"Bad number in file: {token!r} on line {line_number}"
                )
            num = int(token)
            if num > 9:
                raise BoardFormatError(
                    f"Bad number in file: {token!r} on line {line_number}"
                )
            row.append(num)
        grid.append(row)
    if len(grid) != 9:
        raise BoardFormatError("Too few lines in file")
    return grid


def format_board(grid: Grid) -> str:
    """Render a grid in the persisted format, one newline-terminated line per row."""
    return "".join(" ".join(str(int(num)) for num in row) + "\n" for row in grid)


def read_board_file(path: str | os.PathLike[str]) -> Grid:
    return parse_board(Path(path).read_text(encoding="utf-8"))


def write_board_file(path: str | os.PathLike[str], grid: Grid) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(format_board(grid), encoding="utf-8")
    return target
