# Rev 0.1.0

"""Pytest fixtures for vznx (Rev 0.1.0)"""
from __future__ import annotations
import pytest
from pathlib import Path

from vznx.models.entities import Project, Task, TeamMember, WorkspaceState
from vznx.models.seed import seed_state
from vznx.repositories.db import Database
from vznx.repositories.sqlite_workspace_repository import SQLiteWorkspaceRepository


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch):
    # keep settings/logs/db out of the real home directory
    for var in ("XDG_DATA_HOME", "XDG_STATE_HOME", "XDG_CONFIG_HOME"):
        monkeypatch.setenv(var, str(tmp_path / var.lower()))
    monkeypatch.delenv("VZNX_DB", raising=False)


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def repo(db) -> SQLiteWorkspaceRepository:
    return SQLiteWorkspaceRepository(db)


@pytest.fixture()
def seeded() -> WorkspaceState:
    return seed_state()


@pytest.fixture()
def two_project_state() -> WorkspaceState:
    """
    pA: a1 (done, m1), a2 (open, m2), a3 (open, m1)
    pB: b1 (open, m1), b2 (done, m2)
    m3 has nothing assigned.
    """
    return WorkspaceState(
        projects=(Project("pA", "Alpha"), Project("pB", "Beta")),
        tasks=(
            Task("a1", "pA", "A1", True, "m1"),
            Task("a2", "pA", "A2", False, "m2"),
            Task("a3", "pA", "A3", False, "m1"),
            Task("b1", "pB", "B1", False, "m1"),
            Task("b2", "pB", "B2", True, "m2"),
        ),
        team_members=(
            TeamMember("m1", "Ann", 4),
            TeamMember("m2", "Bo", 2),
            TeamMember("m3", "Cy", 5),
        ),
    )
