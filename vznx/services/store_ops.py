# Rev 0.1.2

"""Entity store primitives (Rev 0.1.2)
Every user intent is a small request dataclass; `apply_intent(state, intent)`
returns the next WorkspaceState. Operations are total:
  - numeric input is clamped, never rejected
  - unknown ids leave the collections untouched
  - any change to the task set is followed by a progress sweep
Manual progress overrides bypass the sweep until the next task mutation.
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Union

from ..models.entities import DEFAULT_CAPACITY, Project, Task, TeamMember, WorkspaceState
from ..models.types import IN_PROGRESS, status_for
from . import cascade
from .progress import recalculate


# --- validation clamps ------------------------------------------------------

def coerce_int(value: Any, fallback: int) -> int:
    """int(value) for ints, floats and numeric strings; `fallback` otherwise."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else fallback
    if isinstance(value, str):
        text = value.strip()
        # leading-integer parse: "12abc" -> 12, "abc" -> fallback
        digits = ""
        for i, ch in enumerate(text):
            if ch.isdigit() or (i == 0 and ch in "+-"):
                digits += ch
            else:
                break
        try:
            return int(digits)
        except ValueError:
            return fallback
    return fallback


def clamp_capacity(value: Any, fallback: int) -> int:
    return max(1, coerce_int(value, fallback))


def clamp_progress(value: Any) -> int:
    return min(100, max(0, coerce_int(value, 0)))


def clean_name(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def fresh_id(prefix: str, taken: set[str]) -> str:
    while True:
        candidate = f"{prefix}{uuid.uuid4().hex[:10]}"
        if candidate not in taken:
            return candidate


# --- intents ----------------------------------------------------------------

@dataclass(frozen=True)
class AddProject:
    name: str
    project_id: Optional[str] = None


@dataclass(frozen=True)
class AddTask:
    project_id: str
    name: str
    assigned_member_id: Optional[str] = None
    task_id: Optional[str] = None


@dataclass(frozen=True)
class AddTeamMember:
    name: str
    capacity: Any = None
    member_id: Optional[str] = None


@dataclass(frozen=True)
class SetTaskCompletion:
    task_id: str
    complete: bool


@dataclass(frozen=True)
class ToggleTask:
    task_id: str


@dataclass(frozen=True)
class OverrideProjectProgress:
    project_id: str
    progress: Any


@dataclass(frozen=True)
class UpdateTeamMember:
    member_id: str
    name: str
    capacity: Any


@dataclass(frozen=True)
class DeleteProject:
    project_id: str


@dataclass(frozen=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True)
class DeleteTeamMember:
    member_id: str


Intent = Union[
    AddProject, AddTask, AddTeamMember, SetTaskCompletion, ToggleTask,
    OverrideProjectProgress, UpdateTeamMember, DeleteProject, DeleteTask, DeleteTeamMember,
]


# --- primitives -------------------------------------------------------------

def with_tasks(state: WorkspaceState, tasks) -> WorkspaceState:
    """Commit a new task set and sweep progress over it."""
    tasks = tuple(tasks)
    return replace(state, tasks=tasks, projects=recalculate(state.projects, tasks))


def add_project(state: WorkspaceState, name: str, project_id: Optional[str] = None) -> WorkspaceState:
    name = clean_name(name)
    if not name:
        return state
    pid = project_id if project_id and project_id not in state.ids() else fresh_id("p", state.ids())
    project = Project(id=pid, name=name, status=IN_PROGRESS, progress=0)
    return replace(state, projects=state.projects + (project,))


def add_task(
    state: WorkspaceState,
    project_id: str,
    name: str,
    assigned_member_id: Optional[str] = None,
    task_id: Optional[str] = None,
) -> WorkspaceState:
    name = clean_name(name)
    if not name or state.project(project_id) is None:
        return state
    if assigned_member_id is not None and state.member(assigned_member_id) is None:
        assigned_member_id = None
    tid = task_id if task_id and task_id not in state.ids() else fresh_id("t", state.ids())
    task = Task(id=tid, project_id=project_id, name=name, is_complete=False, assigned_member_id=assigned_member_id)
    return with_tasks(state, state.tasks + (task,))


def add_team_member(
    state: WorkspaceState, name: str, capacity: Any = None, member_id: Optional[str] = None
) -> WorkspaceState:
    name = clean_name(name)
    if not name:
        return state
    mid = member_id if member_id and member_id not in state.ids() else fresh_id("m", state.ids())
    cap = DEFAULT_CAPACITY if capacity is None else clamp_capacity(capacity, DEFAULT_CAPACITY)
    member = TeamMember(id=mid, name=name, max_capacity=cap)
    return replace(state, team_members=state.team_members + (member,))


def update_task_completion(state: WorkspaceState, task_id: str, complete: bool) -> WorkspaceState:
    tasks = tuple(
        replace(t, is_complete=bool(complete)) if t.id == task_id else t for t in state.tasks
    )
    return with_tasks(state, tasks)


def toggle_task(state: WorkspaceState, task_id: str) -> WorkspaceState:
    task = state.task(task_id)
    if task is None:
        return with_tasks(state, state.tasks)
    return update_task_completion(state, task_id, not task.is_complete)


def update_project_progress(state: WorkspaceState, project_id: str, progress: Any) -> WorkspaceState:
    """Manual override path; no recompute."""
    value = clamp_progress(progress)
    projects = tuple(
        replace(p, progress=value, status=status_for(value)) if p.id == project_id else p
        for p in state.projects
    )
    return replace(state, projects=projects)


def update_team_member(state: WorkspaceState, member_id: str, name: str, capacity: Any) -> WorkspaceState:
    new_name = clean_name(name)
    members = tuple(
        replace(m, name=new_name or m.name, max_capacity=clamp_capacity(capacity, 1))
        if m.id == member_id else m
        for m in state.team_members
    )
    return replace(state, team_members=members)


def delete_task(state: WorkspaceState, task_id: str) -> WorkspaceState:
    return with_tasks(state, (t for t in state.tasks if t.id != task_id))


# --- dispatch ---------------------------------------------------------------

_HANDLERS: Dict[type, Callable[[WorkspaceState, Any], WorkspaceState]] = {
    AddProject: lambda s, i: add_project(s, i.name, i.project_id),
    AddTask: lambda s, i: add_task(s, i.project_id, i.name, i.assigned_member_id, i.task_id),
    AddTeamMember: lambda s, i: add_team_member(s, i.name, i.capacity, i.member_id),
    SetTaskCompletion: lambda s, i: update_task_completion(s, i.task_id, i.complete),
    ToggleTask: lambda s, i: toggle_task(s, i.task_id),
    OverrideProjectProgress: lambda s, i: update_project_progress(s, i.project_id, i.progress),
    UpdateTeamMember: lambda s, i: update_team_member(s, i.member_id, i.name, i.capacity),
    DeleteProject: lambda s, i: cascade.delete_project(s, i.project_id),
    DeleteTask: lambda s, i: delete_task(s, i.task_id),
    DeleteTeamMember: lambda s, i: cascade.delete_team_member(s, i.member_id),
}


def apply_intent(state: WorkspaceState, intent: Intent) -> WorkspaceState:
    handler = _HANDLERS.get(type(intent))
    if handler is None:
        raise TypeError(f"Unsupported intent: {type(intent).__name__}")
    return handler(state, intent)
