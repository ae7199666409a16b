# Rev 0.1.2
"""
Workspace record <-> WorkspaceState.

The stored record is one JSON object under a single key:
  {"projects": [...], "tasks": [...], "teamMembers": [...]}
Field names stay camelCase (projectId, isComplete, assignedToMemberId,
maxCapacity) so records written by earlier builds keep loading.
"""
from __future__ import annotations
import json
import math
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from ..services.progress import recalculate
from ..utils.logging_setup import get_logger
from .entities import DEFAULT_CAPACITY, Project, Task, TeamMember, WorkspaceState
from .seed import SEED_PROJECTS, SEED_TASKS, SEED_TEAM, seed_state
from .types import status_for

_log = get_logger("codec")


class CorruptRecordError(ValueError):
    """Stored payload cannot be turned into a WorkspaceState."""


# --- encode -----------------------------------------------------------------

def project_to_dict(p: Project) -> Dict[str, Any]:
    return {"id": p.id, "name": p.name, "status": p.status, "progress": p.progress}


def task_to_dict(t: Task) -> Dict[str, Any]:
    return {
        "id": t.id,
        "projectId": t.project_id,
        "name": t.name,
        "isComplete": t.is_complete,
        "assignedToMemberId": t.assigned_member_id,
    }


def member_to_dict(m: TeamMember) -> Dict[str, Any]:
    return {"id": m.id, "name": m.name, "maxCapacity": m.max_capacity}


def state_to_record(state: WorkspaceState) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "projects": [project_to_dict(p) for p in state.projects],
        "tasks": [task_to_dict(t) for t in state.tasks],
        "teamMembers": [member_to_dict(m) for m in state.team_members],
    }


def dumps(state: WorkspaceState) -> str:
    return json.dumps(state_to_record(state), separators=(",", ":"))


# --- decode -----------------------------------------------------------------

def _require(row: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(row, Mapping):
        raise CorruptRecordError(f"{kind} entry is not an object: {row!r}")
    if not isinstance(row.get("id"), str) or not row["id"]:
        raise CorruptRecordError(f"{kind} entry without a string id: {row!r}")
    return row


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    return value if isinstance(value, str) else ""


def _int(value: Any, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if isinstance(value, float) and not math.isfinite(value):
        return fallback
    return int(value)


def project_from_dict(row: Any) -> Project:
    row = _require(row, "project")
    progress = min(100, max(0, _int(row.get("progress"), 0)))
    return Project(id=row["id"], name=_text(row, "name"), status=status_for(progress), progress=progress)


def task_from_dict(row: Any) -> Task:
    row = _require(row, "task")
    project_id = row.get("projectId")
    if not isinstance(project_id, str):
        raise CorruptRecordError(f"task {row['id']} has no projectId")
    is_complete = row.get("isComplete", False)
    if not isinstance(is_complete, bool):
        raise CorruptRecordError(f"task {row['id']} has a non-boolean isComplete: {is_complete!r}")
    member_id = row.get("assignedToMemberId")
    return Task(
        id=row["id"],
        project_id=project_id,
        name=_text(row, "name"),
        is_complete=is_complete,
        assigned_member_id=member_id if isinstance(member_id, str) and member_id else None,
    )


def member_from_dict(row: Any) -> TeamMember:
    row = _require(row, "team member")
    # 0 / missing means "use the default", as in the original team view
    capacity = _int(row.get("maxCapacity"), 0) or DEFAULT_CAPACITY
    return TeamMember(id=row["id"], name=_text(row, "name"), max_capacity=max(1, capacity))


def _collection(record: Mapping[str, Any], key: str, decode, fallback):
    raw = record.get(key)
    if raw is None:
        return fallback
    if not isinstance(raw, list):
        raise CorruptRecordError(f"{key} is not a list")
    return tuple(decode(row) for row in raw)


def state_from_record(record: Any) -> WorkspaceState:
    """
    Decode a stored record. Missing fields fall back to the seed collection;
    anything malformed raises CorruptRecordError. Dangling references are
    repaired: orphaned tasks are dropped, unknown assignees become unassigned.

    Stored progress is kept only while both projects and tasks come from the
    record. If either was filled from seed data, progress is swept again.
    """
    if not isinstance(record, Mapping):
        raise CorruptRecordError(f"record is not an object: {type(record).__name__}")
    projects = _collection(record, "projects", project_from_dict, SEED_PROJECTS)
    tasks = _collection(record, "tasks", task_from_dict, SEED_TASKS)
    members = _collection(record, "teamMembers", member_from_dict, SEED_TEAM)
    seeded = projects is SEED_PROJECTS or tasks is SEED_TASKS

    project_ids = {p.id for p in projects}
    member_ids = {m.id for m in members}
    repaired = []
    for t in tasks:
        if t.project_id not in project_ids:
            _log.warning("Dropping task %s: project %s not found", t.id, t.project_id)
            continue
        if t.assigned_member_id is not None and t.assigned_member_id not in member_ids:
            _log.warning("Task %s: member %s not found, unassigning", t.id, t.assigned_member_id)
            t = replace(t, assigned_member_id=None)
        repaired.append(t)
    if seeded:
        projects = recalculate(projects, repaired)
    return WorkspaceState(projects=projects, tasks=tuple(repaired), team_members=members)


def loads(payload: Optional[str]) -> WorkspaceState:
    """Decode a JSON payload; None or an unreadable payload yields the seed dataset."""
    if payload is None:
        return seed_state()
    try:
        return state_from_record(json.loads(payload))
    except (ValueError, TypeError, RecursionError) as e:
        # CorruptRecordError and json.JSONDecodeError are both ValueErrors;
        # RecursionError comes from absurdly nested JSON
        _log.error("Stored workspace record is corrupt (%s); falling back to seed data", e)
        return seed_state()
