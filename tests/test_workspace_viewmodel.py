from __future__ import annotations

import pytest
from PySide6.QtCore import QCoreApplication

from vznx.models.seed import seed_state
from vznx.services.workspace_service import WorkspaceStore
from vznx.viewmodels.workspace_viewmodel import WorkspaceViewModel


@pytest.fixture(scope="session")
def qcore():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def vm(qcore) -> WorkspaceViewModel:
    return WorkspaceViewModel(WorkspaceStore(seed_state()))


class _Recorder:
    def __init__(self, vm: WorkspaceViewModel):
        self.projects, self.tasks, self.team = [], [], []
        vm.projectsReloaded.connect(self.projects.append)
        vm.tasksReloaded.connect(lambda pid, rows: self.tasks.append((pid, rows)))
        vm.teamReloaded.connect(self.team.append)


def test_project_rows(vm):
    rows = {r["id"]: r for r in vm.project_rows()}
    assert rows["p1"] == {
        "id": "p1", "name": "New Headquarters Design", "status": "In Progress",
        "progress": 0, "tasks_total": 3, "tasks_done": 0,
    }
    assert (rows["p2"]["status"], rows["p2"]["tasks_done"]) == ("Completed", 2)


def test_task_rows_name_assignees(vm):
    store = vm._store
    tid = store.add_task("p3", "Print boards")
    rows = {r["id"]: r for r in vm.task_rows("p3")}
    assert rows["t6"]["assignee"] == "Ben Smith"
    assert rows[tid]["assignee"] == "Unassigned"


def test_toggle_emits_updated_snapshots(vm):
    rec = _Recorder(vm)
    vm.select_project("p1")
    vm.toggle_task("t1")
    p1 = next(r for r in rec.projects[-1] if r["id"] == "p1")
    assert p1["progress"] == 33
    pid, rows = rec.tasks[-1]
    assert pid == "p1"
    assert next(r for r in rows if r["id"] == "t1")["is_complete"] is True
    alice = next(r for r in rec.team[-1] if r["id"] == "m1")
    assert alice["open_tasks"] == 1


def test_team_rows_tone_and_over_capacity(vm):
    vm.edit_team_member("m1", "Alice Johnson", 1)
    alice = next(r for r in vm.team_rows() if r["id"] == "m1")
    assert (alice["capacity_pct"], alice["risk_tier"], alice["over_capacity"], alice["tone"]) == (100, "Critical", 1, "red")
    vm.edit_team_member("m1", "Alice Johnson", 3)
    alice = next(r for r in vm.team_rows() if r["id"] == "m1")
    assert (alice["capacity_pct"], alice["tone"]) == (67, "orange")
    chloe = next(r for r in vm.team_rows() if r["id"] == "m3")
    assert chloe["tone"] == "green"


def test_deleting_selected_project_clears_selection(vm):
    rec = _Recorder(vm)
    vm.select_project("p1")
    vm.delete_project("p1")
    assert rec.tasks[-1] == ("", [])
    assert vm.selected_project() is None
    assert [r["id"] for r in rec.projects[-1]] == ["p2", "p3"]


def test_delete_member_refreshes_everything(vm):
    rec = _Recorder(vm)
    vm.delete_team_member("m3")
    assert [r["id"] for r in rec.team[-1]] == ["m1", "m2"]
    p2 = next(r for r in rec.projects[-1] if r["id"] == "p2")
    assert (p2["tasks_total"], p2["progress"], p2["status"]) == (0, 0, "In Progress")


def test_override_progress_emits_projects_only(vm):
    rec = _Recorder(vm)
    vm.override_progress("p3", 100)
    assert next(r for r in rec.projects[-1] if r["id"] == "p3")["status"] == "Completed"
    assert rec.team == []


def test_add_commands_skip_reload_on_blank_names(vm):
    rec = _Recorder(vm)
    assert vm.add_project("  ") is None
    assert vm.add_team_member("") is None
    assert rec.projects == [] and rec.team == []
    assert vm.add_team_member("Dana", 2)
    assert rec.team[-1][-1]["name"] == "Dana"


def test_team_summary(vm):
    s = vm.team_summary()
    assert (s["members"], s["open_tasks"], s["Normal"]) == (3, 4, 3)
