# Rev 0.1.1: team rows carry tone + over-capacity count
from __future__ import annotations

from typing import Any, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from ..models.types import CRITICAL, ELEVATED
from ..services.capacity import team_summary
from ..services.workspace_service import WorkspaceStore

UNASSIGNED = "Unassigned"

_TONES = {CRITICAL: "red", ELEVATED: "orange"}


class WorkspaceViewModel(QObject):
    """
    Emits plain-dict snapshots; views never touch the store directly.
      projectsReloaded([{id, name, status, progress, tasks_total, tasks_done}])
      tasksReloaded(project_id, [{id, name, is_complete, assigned_member_id, assignee}])
      teamReloaded([{id, name, max_capacity, open_tasks, capacity_pct, risk_tier, over_capacity, tone}])
    """
    projectsReloaded = Signal(list)
    tasksReloaded = Signal(str, list)
    teamReloaded = Signal(list)

    def __init__(self, store: WorkspaceStore):
        super().__init__()
        self._store = store
        self._project_id: Optional[str] = None

    # ---- selection
    def select_project(self, project_id: Optional[str]) -> None:
        self._project_id = project_id
        self.reload_tasks()

    def selected_project(self) -> Optional[Dict[str, Any]]:
        if self._project_id is None:
            return None
        p = self._store.project(self._project_id)
        return self._project_row(p) if p else None

    # ---- queries
    def project_rows(self) -> List[Dict[str, Any]]:
        return [self._project_row(p) for p in self._store.projects()]

    def task_rows(self, project_id: str) -> List[Dict[str, Any]]:
        names = {m.id: m.name for m in self._store.state.team_members}
        return [
            {
                "id": t.id,
                "name": t.name,
                "is_complete": t.is_complete,
                "assigned_member_id": t.assigned_member_id,
                "assignee": names.get(t.assigned_member_id, UNASSIGNED),
            }
            for t in self._store.tasks_for_project(project_id)
        ]

    def team_rows(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": w.id,
                "name": w.name,
                "max_capacity": w.max_capacity,
                "open_tasks": w.open_tasks,
                "capacity_pct": w.capacity_pct,
                "risk_tier": w.risk_tier,
                "over_capacity": w.over_capacity,
                "tone": _TONES.get(w.risk_tier, "green"),
            }
            for w in self._store.team_workload()
        ]

    def team_summary(self) -> Dict[str, int]:
        return team_summary(self._store.team_workload())

    # ---- reloads
    def reload_projects(self) -> None:
        self.projectsReloaded.emit(self.project_rows())

    def reload_tasks(self) -> None:
        # selected project may have been deleted
        if self._project_id is None or self._store.project(self._project_id) is None:
            self._project_id = None
            self.tasksReloaded.emit("", [])
            return
        self.tasksReloaded.emit(self._project_id, self.task_rows(self._project_id))

    def reload_team(self) -> None:
        self.teamReloaded.emit(self.team_rows())

    def reload_all(self) -> None:
        self.reload_projects()
        self.reload_tasks()
        self.reload_team()

    # ---- commands: dashboard
    def add_project(self, name: str) -> Optional[str]:
        pid = self._store.add_project(name)
        if pid: self.reload_projects()
        return pid

    def delete_project(self, project_id: str) -> None:
        self._store.delete_project(project_id)
        self.reload_all()

    def override_progress(self, project_id: str, progress: Any) -> None:
        self._store.update_project_progress(project_id, progress)
        self.reload_projects()

    # ---- commands: tasks
    def toggle_task(self, task_id: str) -> None:
        self._store.toggle_task(task_id)
        self.reload_all()

    # ---- commands: team
    def add_team_member(self, name: str, capacity: Any = None) -> Optional[str]:
        mid = self._store.add_team_member(name, capacity)
        if mid: self.reload_team()
        return mid

    def edit_team_member(self, member_id: str, name: str, capacity: Any) -> None:
        self._store.update_team_member(member_id, name, capacity)
        self.reload_team()
        self.reload_tasks()

    def delete_team_member(self, member_id: str) -> None:
        self._store.delete_team_member(member_id)
        self.reload_all()

    # ---- internals
    def _project_row(self, p) -> Dict[str, Any]:
        tasks = self._store.tasks_for_project(p.id)
        return {
            "id": p.id,
            "name": p.name,
            "status": p.status,
            "progress": p.progress,
            "tasks_total": len(tasks),
            "tasks_done": sum(1 for t in tasks if t.is_complete),
        }
