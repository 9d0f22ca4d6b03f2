"""Tests for the step solver command-line script."""

from pathlib import Path

from scripts.step_solver import main, parse_args, render_grid, resolve_save_path
from sudoku_engine.persistence.board_text import format_board, read_board_file


def test_cli_solves_and_saves(tmp_path: Path, capsys, puzzle, solution):
    board_file = tmp_path / "puzzle.txt"
    board_file.write_text(format_board(puzzle), encoding="utf-8")

    code = main([str(board_file), "--save", "out.txt", "--save-dir", str(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert " 1. r" in out
    assert "board is solved" in out
    assert read_board_file(tmp_path / "out.txt") == solution


def test_cli_step_limit(tmp_path: Path, capsys, puzzle):
    board_file = tmp_path / "puzzle.txt"
    board_file.write_text(format_board(puzzle), encoding="utf-8")

    assert main([str(board_file), "--steps", "2"]) == 0
    out = capsys.readouterr().out
    assert " 2. r" in out
    assert " 3. r" not in out


def test_cli_reports_stuck_board_with_candidates(tmp_path: Path, capsys, empty_grid):
    board_file = tmp_path / "empty.txt"
    board_file.write_text(format_board(empty_grid), encoding="utf-8")

    assert main([str(board_file), "--show-candidates"]) == 0
    out = capsys.readouterr().out
    assert "cannot find any move which is certain" in out
    assert "r1c1: 123456789" in out


def test_cli_rejects_malformed_file(tmp_path: Path):
    board_file = tmp_path / "bad.txt"
    board_file.write_text("1 2 3\n", encoding="utf-8")
    assert main([str(board_file)]) == 1


def test_cli_missing_file(tmp_path: Path):
    assert main([str(tmp_path / "nope.txt")]) == 1


def test_render_grid_marks_blanks(puzzle):
    lines = render_grid(puzzle).splitlines()
    assert lines[0] == "5 3 . | . 7 . | . . ."
    assert lines[3] == "------+-------+------"


def test_resolve_save_path(tmp_path: Path):
    assert resolve_save_path(Path("a.txt"), tmp_path) == tmp_path / "a.txt"
    absolute = tmp_path / "b.txt"
    assert resolve_save_path(absolute, Path("elsewhere")) == absolute


def test_cli_step_default_ignores_unparseable_env(monkeypatch):
    monkeypatch.setenv("SUDOKU_MAX_RUN_STEPS", "lots")
    assert parse_args(["board.txt"]).steps == 81

    monkeypatch.setenv("SUDOKU_MAX_RUN_STEPS", "7")
    assert parse_args(["board.txt"]).steps == 7
