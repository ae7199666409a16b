from __future__ import annotations

import pytest

from vznx.models.entities import Project, Task
from vznx.services.progress import project_progress, recalculate, round_pct


def _tasks(project_id: str, done: int, total: int):
    return tuple(
        Task(f"{project_id}-{i}", project_id, f"T{i}", is_complete=i < done) for i in range(total)
    )


@pytest.mark.parametrize(
    "n,d,expected",
    [
        (0, 0, 0),
        (1, 3, 33),
        (2, 3, 67),
        (3, 3, 100),
        (1, 8, 13),   # 12.5 rounds up
        (5, 4, 125),
    ],
)
def test_round_pct_half_up(n, d, expected):
    assert round_pct(n, d) == expected


def test_project_without_tasks_is_zero_and_in_progress():
    [p] = recalculate([Project("p", "Empty", status="Completed", progress=100)], [])
    assert p.progress == 0
    assert p.status == "In Progress"


def test_three_task_scenario():
    tasks = list(_tasks("p", 1, 3))
    assert project_progress("p", tasks) == 33

    tasks[1] = Task(tasks[1].id, "p", tasks[1].name, True)
    [p] = recalculate([Project("p", "P")], tasks)
    assert (p.progress, p.status) == (67, "In Progress")

    tasks[2] = Task(tasks[2].id, "p", tasks[2].name, True)
    [p] = recalculate([Project("p", "P")], tasks)
    assert (p.progress, p.status) == (100, "Completed")


def test_recalculate_sweeps_every_project_and_overwrites_overrides():
    projects = [Project("a", "A", progress=50), Project("b", "B", progress=10)]
    tasks = _tasks("a", 2, 2) + _tasks("b", 0, 4)
    a, b = recalculate(projects, tasks)
    assert (a.progress, a.status) == (100, "Completed")
    assert (b.progress, b.status) == (0, "In Progress")


def test_status_completed_iff_progress_100():
    projects = [Project(str(n), "P") for n in range(1, 6)]
    tasks = []
    for n in range(1, 6):
        tasks.extend(_tasks(str(n), n - 1, 4))
    for p in recalculate(projects, tasks):
        assert (p.status == "Completed") == (p.progress == 100)


def test_recalculate_returns_unchanged_instances_when_already_consistent():
    p = Project("a", "A", progress=50)
    [out] = recalculate([p], _tasks("a", 1, 2))
    assert out is p
