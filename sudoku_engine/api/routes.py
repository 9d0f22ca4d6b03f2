"""API routes for the step-by-step Sudoku solver."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TypeVar

from fastapi import APIRouter, HTTPException

from ..models.schemas import (
    CellEditRequest,
    ClearedCandidate,
    CreateSessionRequest,
    Diagnostics,
    HealthResponse,
    LoadRequest,
    PlacementModel,
    RunResponse,
    SaveResponse,
    SessionState,
    StepRequest,
    StepResponse,
)
from ..persistence.board_text import BoardFormatError, format_board, parse_board
from ..solver.controller import Placement, SolveController
from .sessions import SessionStore

router = APIRouter()
_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T", int, float, str)


def _env(name: str, default: _T) -> _T:
    """Read an environment variable, converting to the same type as *default*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return type(default)(raw)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    max_sessions: int = 64
    max_run_steps: int = 81


def load_settings() -> Settings:
    return Settings(
        max_sessions=_env("SUDOKU_MAX_SESSIONS", 64),
        max_run_steps=_env("SUDOKU_MAX_RUN_STEPS", 81),
    )


def validate_settings(settings: Settings) -> str | None:
    """Return a description of the first unusable setting, if any."""
    if settings.max_sessions < 1:
        return f"SUDOKU_MAX_SESSIONS must be positive, got {settings.max_sessions}"
    if settings.max_run_steps < 1:
        return f"SUDOKU_MAX_RUN_STEPS must be positive, got {settings.max_run_steps}"
    return None


_SETTINGS = load_settings()
_SESSIONS = SessionStore(_SETTINGS.max_sessions)


def configure(settings: Settings) -> None:
    """Install new settings and start with an empty session store."""
    global _SETTINGS, _SESSIONS

    _SETTINGS = settings
    _SESSIONS = SessionStore(settings.max_sessions)


def _get_session(session_id: str) -> SolveController:
    controller = _SESSIONS.get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return controller


def _placement_model(placement: Placement) -> PlacementModel:
    return PlacementModel(
        row=placement.row,
        col=placement.col,
        digit=placement.digit,
        rule=placement.rule,
        elimination_passes=placement.elimination_passes,
    )


def _diagnostics(controller: SolveController) -> Diagnostics:
    return Diagnostics(
        solved=controller.is_solved(),
        has_duplicates=controller.has_any_duplicate(),
        duplicate_cells=[list(cell) for cell in controller.board.duplicate_cells()],
        contradiction=controller.has_contradiction(),
    )


def _session_state(session_id: str, controller: SolveController) -> SessionState:
    ready = controller.possibilities.is_reduced
    candidates = (
        controller.candidates_grid()
        if ready
        else [[[] for _ in range(9)] for _ in range(9)]
    )
    return SessionState(
        session_id=session_id,
        grid=controller.board.copy_grid(),
        candidates=candidates,
        candidates_ready=ready,
        diagnostics=_diagnostics(controller),
    )


def _step(controller: SolveController) -> StepResponse:
    placement = controller.solve_step()
    cleared = [
        ClearedCandidate(row=row, col=col, digit=digit)
        for row, col, digit in controller.last_cleared
    ]
    if placement is None:
        reason = controller.diagnose()
        return StepResponse(
            success=False,
            placement=None,
            reason=reason.value,
            message=f"No move could be found ({reason.message})",
            cleared=cleared,
            grid=controller.board.copy_grid(),
        )
    return StepResponse(
        success=True,
        placement=_placement_model(placement),
        message=f"Placed {placement}",
        cleared=cleared,
        grid=controller.board.copy_grid(),
    )


def _run(controller: SolveController) -> RunResponse:
    original = controller.board.copy_grid()
    placements = controller.solve_all(max_steps=_SETTINGS.max_run_steps)
    reason = controller.diagnose()
    if len(placements) >= _SETTINGS.max_run_steps and not controller.is_solved():
        message = f"Stopped after {len(placements)} move(s) (step limit reached)"
    else:
        message = f"Made {len(placements)} move(s); {reason.message}"
    return RunResponse(
        placements=[_placement_model(p) for p in placements],
        reason=reason.value,
        message=message,
        original=original,
        grid=controller.board.copy_grid(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        active_sessions=len(_SESSIONS),
        max_sessions=_SESSIONS.max_size,
    )


@router.post("/api/v1/sudoku:step", response_model=StepResponse, tags=["Sudoku"])
async def step_sudoku(request: StepRequest):
    """
    Find the next forced move for a grid.

    Expected JSON format:
    {
        "grid": {
            "cells": [[row1], [row2], ...]
        }
    }
    Where each row is a list of 9 integers (0 for empty).
    """
    controller = SolveController.from_grid(request.grid.cells)
    return _step(controller)


@router.post("/api/v1/sudoku:run", response_model=RunResponse, tags=["Sudoku"])
async def run_sudoku(request: StepRequest):
    """Apply forced moves to a grid until no certain move is left."""
    controller = SolveController.from_grid(request.grid.cells)
    return _run(controller)


@router.post("/api/v1/sessions", response_model=SessionState, tags=["Sessions"])
async def create_session(request: CreateSessionRequest | None = None):
    """Open a solving session, optionally starting from a grid."""
    controller = SolveController()
    if request is not None and request.grid is not None:
        controller.load_grid(request.grid.cells)
    session_id = _SESSIONS.create(controller)
    _LOGGER.info("Created session %s", session_id)
    return _session_state(session_id, controller)


# Registered before the plain GET so ":save" is not read as part of the id.
@router.get(
    "/api/v1/sessions/{session_id}:save",
    response_model=SaveResponse,
    tags=["Sessions"],
)
async def save_session(session_id: str):
    controller = _get_session(session_id)
    return SaveResponse(text=format_board(controller.board.copy_grid()))


@router.get(
    "/api/v1/sessions/{session_id}", response_model=SessionState, tags=["Sessions"]
)
async def get_session(session_id: str):
    return _session_state(session_id, _get_session(session_id))


@router.delete("/api/v1/sessions/{session_id}", tags=["Sessions"])
async def delete_session(session_id: str):
    if not _SESSIONS.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return {"success": True, "message": "Session deleted"}


@router.put(
    "/api/v1/sessions/{session_id}/cells/{row}/{col}",
    response_model=SessionState,
    tags=["Sessions"],
)
async def edit_cell(session_id: str, row: int, col: int, request: CellEditRequest):
    """Set one cell. Candidates must be derived again afterwards."""
    controller = _get_session(session_id)
    if not (0 <= row <= 8 and 0 <= col <= 8):
        raise HTTPException(status_code=400, detail=f"Cell out of range: ({row}, {col})")
    controller.set_cell(row, col, request.value)
    return _session_state(session_id, controller)


@router.post(
    "/api/v1/sessions/{session_id}:clear",
    response_model=SessionState,
    tags=["Sessions"],
)
async def clear_session(session_id: str):
    controller = _get_session(session_id)
    controller.clear()
    return _session_state(session_id, controller)


@router.post(
    "/api/v1/sessions/{session_id}:start",
    response_model=SessionState,
    tags=["Sessions"],
)
async def start_session(session_id: str):
    """Derive candidates from the current board."""
    controller = _get_session(session_id)
    controller.solve_start()
    return _session_state(session_id, controller)


@router.post(
    "/api/v1/sessions/{session_id}:step",
    response_model=StepResponse,
    tags=["Sessions"],
)
async def step_session(session_id: str):
    return _step(_get_session(session_id))


@router.post(
    "/api/v1/sessions/{session_id}:run",
    response_model=RunResponse,
    tags=["Sessions"],
)
async def run_session(session_id: str):
    return _run(_get_session(session_id))


@router.post(
    "/api/v1/sessions/{session_id}:load",
    response_model=SessionState,
    tags=["Sessions"],
)
async def load_session(session_id: str, request: LoadRequest):
    """Replace the board from persisted text. A malformed board changes nothing."""
    controller = _get_session(session_id)
    try:
        grid = parse_board(request.text)
    except BoardFormatError as e:
        _LOGGER.warning("Rejected board load for session %s: %s", session_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    controller.load_grid(grid)
    return _session_state(session_id, controller)
