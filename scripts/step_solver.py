"""Apply forced Sudoku moves to a saved board, one logical step at a time."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sudoku_engine.api.routes import load_settings
from sudoku_engine.persistence.board_text import (
    BoardFormatError,
    read_board_file,
    write_board_file,
)
from sudoku_engine.solver.controller import SolveController

LOGGER = logging.getLogger("step_solver")

DEFAULT_SAVE_DIR = Path(os.getenv("SUDOKU_SAVE_DIR", "saves"))


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Step through forced Sudoku moves")
    parser.add_argument("board", type=Path, help="Board file (9 lines of 9 digits)")
    parser.add_argument(
        "--steps",
        type=int,
        default=load_settings().max_run_steps,
        help="Maximum number of moves to make",
    )
    parser.add_argument(
        "--save",
        type=Path,
        default=None,
        help="Write the resulting board here (relative paths go under SUDOKU_SAVE_DIR)",
    )
    parser.add_argument(
        "--save-dir",
        type=Path,
        default=DEFAULT_SAVE_DIR,
        help="Directory for relative --save paths",
    )
    parser.add_argument(
        "--show-candidates",
        action="store_true",
        help="Print remaining candidates when no more moves are found",
    )
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def render_grid(grid: list[list[int]]) -> str:
    lines = []
    for row, values in enumerate(grid):
        if row and row % 3 == 0:
            lines.append("------+-------+------")
        chunks = [
            " ".join(str(v) if v else "." for v in values[i : i + 3])
            for i in range(0, 9, 3)
        ]
        lines.append(" | ".join(chunks))
    return "\n".join(lines)


def render_candidates(controller: SolveController) -> str:
    lines = []
    for row, cells in enumerate(controller.candidates_grid()):
        for col, digits in enumerate(cells):
            if digits:
                lines.append(f"r{row + 1}c{col + 1}: {''.join(map(str, digits))}")
    return "\n".join(lines)


def resolve_save_path(save: Path, save_dir: Path) -> Path:
    return save if save.is_absolute() else save_dir / save


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.debug)

    if args.steps < 1:
        LOGGER.error("--steps must be positive, got %d", args.steps)
        return 2

    try:
        grid = read_board_file(args.board)
    except FileNotFoundError:
        LOGGER.error("Board file not found: %s", args.board)
        return 1
    except BoardFormatError as exc:
        LOGGER.error("Error reading file %s: %s", args.board, exc)
        return 1

    controller = SolveController.from_grid(grid)
    controller.solve_start()

    moves = 0
    while moves < args.steps:
        placement = controller.solve_step()
        if placement is None:
            break
        moves += 1
        print(f"{moves:2d}. {placement}")

    print(render_grid(controller.board.copy_grid()))
    if moves < args.steps:
        reason = controller.diagnose()
        print(f"No move could be found ({reason.message})")
        if args.show_candidates and not controller.is_solved():
            print(render_candidates(controller))

    if args.save is not None:
        target = write_board_file(
            resolve_save_path(args.save, args.save_dir), controller.board.copy_grid()
        )
        LOGGER.info("Saved board to %s", target)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
