# Rev 0.1.0
"""
Seed dataset used on first start and whenever the stored record is missing
or unreadable. Three projects, six tasks, three members (capacities 5, 5, 4).
"""
from __future__ import annotations

from .entities import Project, Task, TeamMember, WorkspaceState
from .types import COMPLETED, IN_PROGRESS

SEED_PROJECTS = (
    Project(id="p1", name="New Headquarters Design", status=IN_PROGRESS, progress=0),
    Project(id="p2", name="Residential Tower 3D Mockup", status=COMPLETED, progress=100),
    Project(id="p3", name="Client Presentation Prep", status=IN_PROGRESS, progress=0),
)

SEED_TASKS = (
    Task(id="t1", project_id="p1", name="Draft Floor Plans", is_complete=False, assigned_member_id="m1"),
    Task(id="t2", project_id="p1", name="Review Structural Drawings", is_complete=False, assigned_member_id="m2"),
    Task(id="t3", project_id="p1", name="Submit for Initial Approval", is_complete=False, assigned_member_id="m1"),
    Task(id="t4", project_id="p2", name="Final Rendering", is_complete=True, assigned_member_id="m3"),
    Task(id="t5", project_id="p2", name="Model Testing", is_complete=True, assigned_member_id="m3"),
    Task(id="t6", project_id="p3", name="Gather Project Statistics", is_complete=False, assigned_member_id="m2"),
)

SEED_TEAM = (
    TeamMember(id="m1", name="Alice Johnson", max_capacity=5),
    TeamMember(id="m2", name="Ben Smith", max_capacity=5),
    TeamMember(id="m3", name="Chloe Lee", max_capacity=4),
)


def seed_state() -> WorkspaceState:
    return WorkspaceState(projects=SEED_PROJECTS, tasks=SEED_TASKS, team_members=SEED_TEAM)
