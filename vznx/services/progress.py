# Rev 0.1.0

"""Progress recalculation (Rev 0.1.0)
Derive each project's completion percentage and status from its task set.
Pure functions; callers pass the post-mutation task set.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Iterable, Tuple

from ..models.entities import Project, Task
from ..models.types import status_for


def round_pct(numerator: int, denominator: int) -> int:
    """round(100 * n / d), halves rounded up; 0 when d == 0."""
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def project_progress(project_id: str, tasks: Iterable[Task]) -> int:
    total = done = 0
    for t in tasks:
        if t.project_id != project_id:
            continue
        total += 1
        if t.is_complete:
            done += 1
    return round_pct(done, total)


def recalculate(projects: Iterable[Project], tasks: Iterable[Task]) -> Tuple[Project, ...]:
    """Sweep every project; overwrites any manual override."""
    tasks = tuple(tasks)
    out = []
    for p in projects:
        progress = project_progress(p.id, tasks)
        status = status_for(progress)
        if p.progress == progress and p.status == status:
            out.append(p)
        else:
            out.append(replace(p, progress=progress, status=status))
    return tuple(out)
