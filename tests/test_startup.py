"""Tests for application startup behavior."""

import pytest

from sudoku_engine import main
from sudoku_engine.api import routes


@pytest.mark.asyncio
async def test_app_lifespan_fails_on_non_positive_session_limit(monkeypatch):
    monkeypatch.setenv("SUDOKU_MAX_SESSIONS", "0")

    with pytest.raises(RuntimeError, match="Invalid configuration at startup"):
        async with main._app_lifespan(main.app):
            pass


@pytest.mark.asyncio
async def test_app_lifespan_fails_on_non_positive_step_limit(monkeypatch):
    monkeypatch.setenv("SUDOKU_MAX_RUN_STEPS", "-3")

    with pytest.raises(RuntimeError, match="SUDOKU_MAX_RUN_STEPS"):
        async with main._app_lifespan(main.app):
            pass


@pytest.mark.asyncio
async def test_app_lifespan_applies_settings(monkeypatch):
    monkeypatch.setenv("SUDOKU_MAX_SESSIONS", "5")

    async with main._app_lifespan(main.app):
        assert routes._SESSIONS.max_size == 5


def test_env_falls_back_on_unparseable_value(monkeypatch):
    monkeypatch.setenv("SUDOKU_MAX_SESSIONS", "many")
    assert routes.load_settings().max_sessions == 64


def test_session_store_evicts_least_recently_used():
    from sudoku_engine.api.sessions import SessionStore
    from sudoku_engine.solver.controller import SolveController

    store = SessionStore(max_size=2)
    first = store.create(SolveController())
    second = store.create(SolveController())
    assert store.get(first) is not None
    store.create(SolveController())

    assert store.get(second) is None
    assert store.get(first) is not None
    assert len(store) == 2
