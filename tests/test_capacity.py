from __future__ import annotations

import pytest

from vznx.models.entities import Task, TeamMember
from vznx.services.capacity import analyze, risk_tier, team_summary


def _open(member_id: str, n: int, done: int = 0):
    tasks = [Task(f"{member_id}-o{i}", "p", "T", False, member_id) for i in range(n)]
    tasks += [Task(f"{member_id}-d{i}", "p", "T", True, member_id) for i in range(done)]
    return tasks


def test_over_capacity_scenario():
    [w] = analyze([TeamMember("m", "Chloe", 4)], _open("m", 5))
    assert w.open_tasks == 5
    assert w.capacity_pct == 100
    assert w.risk_tier == "Critical"
    assert w.over_capacity == 1


@pytest.mark.parametrize(
    "open_tasks,cap,pct,tier",
    [
        (0, 5, 0, "Normal"),
        (2, 4, 50, "Normal"),      # exactly 50 is not Elevated
        (3, 5, 60, "Elevated"),
        (9, 10, 90, "Elevated"),   # exactly 90 is not Critical
        (10, 11, 91, "Critical"),
        (1, 1, 100, "Critical"),
    ],
)
def test_tier_boundaries(open_tasks, cap, pct, tier):
    [w] = analyze([TeamMember("m", "M", cap)], _open("m", open_tasks))
    assert w.capacity_pct == pct
    assert w.risk_tier == tier


def test_critical_whenever_over_capacity_regardless_of_pct():
    assert risk_tier(open_tasks=6, max_capacity=5, capacity_pct=0) == "Critical"


def test_capacity_pct_clamped_to_range():
    [w] = analyze([TeamMember("m", "M", 1)], _open("m", 40))
    assert 0 <= w.capacity_pct <= 100
    assert w.over_capacity == 39


def test_completed_and_unassigned_tasks_are_not_open():
    tasks = _open("m", 1, done=3) + [Task("u", "p", "U", False, None)]
    [w] = analyze([TeamMember("m", "M", 5)], tasks)
    assert w.open_tasks == 1
    assert w.capacity_pct == 20


def test_zero_capacity_falls_back_to_default():
    [w] = analyze([TeamMember("m", "M", 0)], _open("m", 1))
    assert w.max_capacity == 5
    assert w.capacity_pct == 20


def test_analyze_does_not_mutate_inputs(seeded):
    members, tasks = list(seeded.team_members), list(seeded.tasks)
    analyze(members, tasks)
    assert members == list(seeded.team_members)
    assert tasks == list(seeded.tasks)


def test_seed_team_workload(seeded):
    rows = {w.id: w for w in analyze(seeded.team_members, seeded.tasks)}
    assert (rows["m1"].open_tasks, rows["m1"].capacity_pct) == (2, 40)
    assert (rows["m2"].open_tasks, rows["m2"].capacity_pct) == (2, 40)
    assert (rows["m3"].open_tasks, rows["m3"].capacity_pct, rows["m3"].max_capacity) == (0, 0, 4)
    assert {w.risk_tier for w in rows.values()} == {"Normal"}


def test_team_summary_counts():
    members = [TeamMember("a", "A", 4), TeamMember("b", "B", 5), TeamMember("c", "C", 5)]
    tasks = _open("a", 5) + _open("b", 3)
    s = team_summary(analyze(members, tasks))
    assert s["members"] == 3
    assert s["open_tasks"] == 8
    assert s["over_capacity"] == 1
    assert (s["Critical"], s["Elevated"], s["Normal"]) == (1, 1, 1)
