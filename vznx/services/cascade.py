# Rev 0.1.0

"""Cascade deletes (Rev 0.1.0)
Two independent rules over full snapshots:
  project → its tasks
  team member → every task assigned to it (removed, not unassigned)
Both finish with a full progress sweep, so an unknown id is a safe no-op.
"""
from __future__ import annotations
from dataclasses import replace

from ..models.entities import WorkspaceState
from ..utils.logging_setup import get_logger
from .progress import recalculate

_log = get_logger("cascade")


def delete_project(state: WorkspaceState, project_id: str) -> WorkspaceState:
    projects = tuple(p for p in state.projects if p.id != project_id)
    tasks = tuple(t for t in state.tasks if t.project_id != project_id)
    removed = len(state.tasks) - len(tasks)
    if len(projects) == len(state.projects):
        _log.debug("delete_project: no project %r", project_id)
    else:
        _log.info("Deleted project %s and %d task(s)", project_id, removed)
    return replace(state, projects=recalculate(projects, tasks), tasks=tasks)


def delete_team_member(state: WorkspaceState, member_id: str) -> WorkspaceState:
    members = tuple(m for m in state.team_members if m.id != member_id)
    # unassigned tasks never match, even for member_id=None
    tasks = tuple(
        t for t in state.tasks
        if t.assigned_member_id is None or t.assigned_member_id != member_id
    )
    removed = len(state.tasks) - len(tasks)
    if len(members) == len(state.team_members):
        _log.debug("delete_team_member: no member %r", member_id)
    else:
        _log.info("Deleted member %s and %d assigned task(s)", member_id, removed)
    # a member's tasks can span projects, so sweep all of them
    return replace(
        state,
        projects=recalculate(state.projects, tasks),
        tasks=tasks,
        team_members=members,
    )
