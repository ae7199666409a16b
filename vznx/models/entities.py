# Rev 0.1.1
"""Immutable workspace entities: project → task ← team member"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .types import IN_PROGRESS, ProjectStatus, RiskTier

DEFAULT_CAPACITY = 5


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    status: ProjectStatus = IN_PROGRESS   # derived from progress
    progress: int = 0                     # 0..100


@dataclass(frozen=True)
class Task:
    id: str
    project_id: str
    name: str
    is_complete: bool = False
    assigned_member_id: Optional[str] = None   # None = unassigned


@dataclass(frozen=True)
class TeamMember:
    id: str
    name: str
    max_capacity: int = DEFAULT_CAPACITY


@dataclass(frozen=True)
class MemberWorkload:
    """Read-only team view row; recomputed on every read, never stored."""
    id: str
    name: str
    max_capacity: int
    open_tasks: int
    capacity_pct: int
    risk_tier: RiskTier
    over_capacity: int


@dataclass(frozen=True)
class WorkspaceState:
    """Single owned snapshot of all three collections."""
    projects: Tuple[Project, ...] = field(default_factory=tuple)
    tasks: Tuple[Task, ...] = field(default_factory=tuple)
    team_members: Tuple[TeamMember, ...] = field(default_factory=tuple)

    def project(self, project_id: str) -> Optional[Project]:
        return next((p for p in self.projects if p.id == project_id), None)

    def task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def member(self, member_id: str) -> Optional[TeamMember]:
        return next((m for m in self.team_members if m.id == member_id), None)

    def tasks_for_project(self, project_id: str) -> Tuple[Task, ...]:
        return tuple(t for t in self.tasks if t.project_id == project_id)

    def ids(self) -> set[str]:
        return (
            {p.id for p in self.projects}
            | {t.id for t in self.tasks}
            | {m.id for m in self.team_members}
        )
