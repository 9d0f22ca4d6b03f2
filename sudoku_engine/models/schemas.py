"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class SudokuGrid(BaseModel):
    """A Sudoku grid."""

    cells: list[list[int]] = Field(description="9x9 grid (0 for empty cells)")

    class Config:
        json_schema_extra = {
            "example": {
                "cells": [
                    [5, 3, 0, 0, 7, 0, 0, 0, 0],
                    [6, 0, 0, 1, 9, 5, 0, 0, 0],
                    [0, 9, 8, 0, 0, 0, 0, 6, 0],
                    [8, 0, 0, 0, 6, 0, 0, 0, 3],
                    [4, 0, 0, 8, 0, 3, 0, 0, 1],
                    [7, 0, 0, 0, 2, 0, 0, 0, 6],
                    [0, 6, 0, 0, 0, 0, 2, 8, 0],
                    [0, 0, 0, 4, 1, 9, 0, 0, 5],
                    [0, 0, 0, 0, 8, 0, 0, 7, 9],
                ]
            }
        }

    @field_validator("cells")
    @classmethod
    def _check_shape(cls, cells: list[list[int]]) -> list[list[int]]:
        if len(cells) != 9 or any(len(row) != 9 for row in cells):
            raise ValueError("grid must be 9 rows of 9 values")
        if any(not 0 <= value <= 9 for row in cells for value in row):
            raise ValueError("cell values must be in 0-9")
        return cells


class StepRequest(BaseModel):
    """Request to find forced moves for a grid."""

    grid: SudokuGrid = Field(description="The Sudoku puzzle to work on")


class CreateSessionRequest(BaseModel):
    """Request to open a solving session."""

    grid: SudokuGrid | None = Field(
        default=None, description="Initial puzzle (empty board if omitted)"
    )


class CellEditRequest(BaseModel):
    """Set a single cell."""

    value: int = Field(ge=0, le=9, description="Cell value (0 clears the cell)")


class LoadRequest(BaseModel):
    """Persisted board text to load."""

    text: str = Field(description="9 lines of 9 space-separated digits")


class SaveResponse(BaseModel):
    text: str = Field(description="Board in the persisted text format")


class PlacementModel(BaseModel):
    """A digit placed by the solver."""

    row: int = Field(ge=0, le=8, description="Row index (0-8)")
    col: int = Field(ge=0, le=8, description="Column index (0-8)")
    digit: int = Field(ge=1, le=9, description="Placed digit")
    rule: str = Field(description="Rule that proved the placement")
    elimination_passes: int = Field(
        default=0, description="Elimination passes needed before the rule applied"
    )


class ClearedCandidate(BaseModel):
    row: int
    col: int
    digit: int


class Diagnostics(BaseModel):
    """Read-only board state checks."""

    solved: bool = Field(description="Whether every cell is filled")
    has_duplicates: bool = Field(description="Whether a digit repeats in a group")
    duplicate_cells: list[list[int]] = Field(
        description="(row, col) of every duplicated digit"
    )
    contradiction: bool = Field(
        description="Whether some empty cell has no candidates left"
    )


class StepResponse(BaseModel):
    """Result of one solve step."""

    success: bool = Field(description="Whether a move was found")
    placement: PlacementModel | None = Field(description="Move made (if any)")
    reason: str | None = Field(default=None, description="Why no move was found")
    message: str = Field(description="Status message")
    cleared: list[ClearedCandidate] = Field(
        default_factory=list, description="Candidates removed during the step"
    )
    grid: list[list[int]] = Field(description="Board after the step")


class RunResponse(BaseModel):
    """Result of applying forced moves until stuck."""

    placements: list[PlacementModel] = Field(description="Moves made, in order")
    reason: str = Field(description="Why the run stopped")
    message: str = Field(description="Status message")
    original: list[list[int]] = Field(description="Board before the run")
    grid: list[list[int]] = Field(description="Board after the run")


class SessionState(BaseModel):
    """Full state of a solving session."""

    session_id: str
    grid: list[list[int]] = Field(description="Current board")
    candidates: list[list[list[int]]] = Field(
        description="Candidate digits per cell (empty until candidates are derived)"
    )
    candidates_ready: bool = Field(
        description="Whether candidates have been derived from the board"
    )
    diagnostics: Diagnostics


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status")
    active_sessions: int = Field(description="Open solving sessions")
    max_sessions: int = Field(description="Session store capacity")
