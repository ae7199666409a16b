# Rev 0.1.0

"""Capacity analysis (Rev 0.1.0)
Open-task count, utilisation and risk tier per team member.
Stateless; recomputed on every read of team data.
"""
from __future__ import annotations
from typing import Dict, Iterable, List

from ..models.entities import DEFAULT_CAPACITY, MemberWorkload, Task, TeamMember
from ..models.types import CRITICAL, ELEVATED, NORMAL, RiskTier
from .progress import round_pct

CRITICAL_PCT = 90
ELEVATED_PCT = 50


def risk_tier(open_tasks: int, max_capacity: int, capacity_pct: int) -> RiskTier:
    if open_tasks > max_capacity or capacity_pct > CRITICAL_PCT:
        return CRITICAL
    if capacity_pct > ELEVATED_PCT:
        return ELEVATED
    return NORMAL


def open_task_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for t in tasks:
        if t.assigned_member_id is None or t.is_complete:
            continue
        counts[t.assigned_member_id] = counts.get(t.assigned_member_id, 0) + 1
    return counts


def workload_for(member: TeamMember, open_tasks: int) -> MemberWorkload:
    # stored capacities are clamped on write; 0/missing still means the default
    max_capacity = member.max_capacity or DEFAULT_CAPACITY
    capacity_pct = min(100, round_pct(open_tasks, max_capacity))
    return MemberWorkload(
        id=member.id,
        name=member.name,
        max_capacity=max_capacity,
        open_tasks=open_tasks,
        capacity_pct=capacity_pct,
        risk_tier=risk_tier(open_tasks, max_capacity, capacity_pct),
        over_capacity=max(0, open_tasks - max_capacity),
    )


def analyze(team_members: Iterable[TeamMember], tasks: Iterable[Task]) -> List[MemberWorkload]:
    counts = open_task_counts(tasks)
    return [workload_for(m, counts.get(m.id, 0)) for m in team_members]


def team_summary(workloads: Iterable[MemberWorkload]) -> Dict[str, int]:
    """Header figures for the team view."""
    summary = {"members": 0, "open_tasks": 0, "over_capacity": 0, NORMAL: 0, ELEVATED: 0, CRITICAL: 0}
    for w in workloads:
        summary["members"] += 1
        summary["open_tasks"] += w.open_tasks
        summary[w.risk_tier] += 1
        if w.over_capacity:
            summary["over_capacity"] += 1
    return summary
