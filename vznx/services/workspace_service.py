# Rev 0.1.3

"""Workspace store (Rev 0.1.3)
Owns the single in-memory WorkspaceState. Every user intent goes through
`dispatch`, which applies the pure transform (mutation → cascade → recompute)
and only then persists the committed snapshot. Persistence failures are
logged and never roll back the in-memory state.
"""
from __future__ import annotations
import sqlite3
from typing import Any, List, Optional, Protocol, Tuple

from ..models import codec
from ..models.entities import MemberWorkload, Project, Task, WorkspaceState
from ..models.seed import seed_state
from ..utils.config import RECORD_KEY
from ..utils.logging_setup import get_logger
from . import store_ops
from .capacity import analyze
from .progress import recalculate
from .store_ops import (
    AddProject, AddTask, AddTeamMember, DeleteProject, DeleteTask, DeleteTeamMember,
    Intent, OverrideProjectProgress, SetTaskCompletion, ToggleTask, UpdateTeamMember,
)

PERSISTENCE_ERRORS = (sqlite3.Error, OSError)


class RecordRepository(Protocol):
    def load_record(self, key: str) -> Optional[str]: ...
    def save_record(self, key: str, payload: str) -> None: ...


class WorkspaceStore:
    def __init__(
        self,
        state: Optional[WorkspaceState] = None,
        *,
        repo: Optional[RecordRepository] = None,
        key: str = RECORD_KEY,
    ) -> None:
        self._log = get_logger("WorkspaceStore")
        self._state = state if state is not None else WorkspaceState()
        self._repo = repo
        self._key = key

    @classmethod
    def open(cls, repo: Optional[RecordRepository], key: str = RECORD_KEY) -> "WorkspaceStore":
        """Load the stored record (seed data if absent or unreadable) and write it back.
        With no repository the store starts from seed data and stays in memory."""
        store = cls(repo=repo, key=key)
        store._state = store._load()
        store._persist()
        return store

    # ---- reads (snapshots) ----
    @property
    def state(self) -> WorkspaceState:
        return self._state

    def projects(self) -> Tuple[Project, ...]:
        return self._state.projects

    def project(self, project_id: str) -> Optional[Project]:
        return self._state.project(project_id)

    def tasks_for_project(self, project_id: str) -> Tuple[Task, ...]:
        return self._state.tasks_for_project(project_id)

    def team_workload(self) -> List[MemberWorkload]:
        return analyze(self._state.team_members, self._state.tasks)

    # ---- writes ----
    def dispatch(self, intent: Intent) -> None:
        new_state = store_ops.apply_intent(self._state, intent)
        if new_state == self._state:
            self._log.debug("No-op intent %r", intent)
            return
        self._state = new_state
        self._log.debug("Committed %r", intent)
        self._persist()

    def add_project(self, name: str) -> Optional[str]:
        pid = store_ops.fresh_id("p", self._state.ids())
        self.dispatch(AddProject(name=name, project_id=pid))
        return pid if self._state.project(pid) else None

    def add_task(self, project_id: str, name: str, assigned_member_id: Optional[str] = None) -> Optional[str]:
        tid = store_ops.fresh_id("t", self._state.ids())
        self.dispatch(AddTask(project_id=project_id, name=name, assigned_member_id=assigned_member_id, task_id=tid))
        return tid if self._state.task(tid) else None

    def add_team_member(self, name: str, capacity: Any = None) -> Optional[str]:
        mid = store_ops.fresh_id("m", self._state.ids())
        self.dispatch(AddTeamMember(name=name, capacity=capacity, member_id=mid))
        return mid if self._state.member(mid) else None

    def update_task_completion(self, task_id: str, complete: bool) -> None:
        self.dispatch(SetTaskCompletion(task_id=task_id, complete=complete))

    def toggle_task(self, task_id: str) -> None:
        self.dispatch(ToggleTask(task_id=task_id))

    def update_project_progress(self, project_id: str, progress: Any) -> None:
        self.dispatch(OverrideProjectProgress(project_id=project_id, progress=progress))

    def update_team_member(self, member_id: str, name: str, capacity: Any) -> None:
        self.dispatch(UpdateTeamMember(member_id=member_id, name=name, capacity=capacity))

    def delete_project(self, project_id: str) -> None:
        self.dispatch(DeleteProject(project_id=project_id))

    def delete_task(self, task_id: str) -> None:
        self.dispatch(DeleteTask(task_id=task_id))

    def delete_team_member(self, member_id: str) -> None:
        self.dispatch(DeleteTeamMember(member_id=member_id))

    def reset(self) -> None:
        """Replace everything with the seed dataset."""
        self._state = seed_state()
        self._log.info("Workspace reset to seed data")
        self._persist()

    # ---- persistence ----
    def _load(self) -> WorkspaceState:
        try:
            payload = self._repo.load_record(self._key) if self._repo is not None else None
        except PERSISTENCE_ERRORS:
            self._log.exception("Could not read workspace record %r; using seed data", self._key)
            payload = None
        if payload is None:
            state = seed_state()
            return WorkspaceState(
                projects=recalculate(state.projects, state.tasks),
                tasks=state.tasks,
                team_members=state.team_members,
            )
        state = codec.loads(payload)
        self._log.info(
            "Loaded workspace: %d project(s), %d task(s), %d member(s)",
            len(state.projects), len(state.tasks), len(state.team_members),
        )
        return state

    def _persist(self) -> None:
        if self._repo is None:
            return
        try:
            self._repo.save_record(self._key, codec.dumps(self._state))
        except PERSISTENCE_ERRORS:
            # memory stays authoritative
            self._log.exception("Could not save workspace record %r", self._key)
