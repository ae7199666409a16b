# File: vznx/tools/workspace_cli.py
# Usage examples:
#   python -m vznx.tools.workspace_cli projects
#   python -m vznx.tools.workspace_cli tasks p1
#   python -m vznx.tools.workspace_cli toggle-task t2
#   python -m vznx.tools.workspace_cli add-member "Dana Ortiz" --capacity 3
#   python -m vznx.tools.workspace_cli team --db /path/to/workspace.db
#   python -m vznx.tools.workspace_cli info
#
# Notes:
# - DB path defaults to env VZNX_DB, then settings.json, then $XDG_DATA_HOME/vznx/workspace.db
# - Every mutating command prints the affected view afterwards
# - If the DB cannot be opened, commands still run on seed data in memory

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from ..app_context import AppContext
from ..utils.config import load_settings
from ..utils.logging_setup import setup_logging
from ..viewmodels.workspace_viewmodel import WorkspaceViewModel

_TIER_MARK = {"Normal": " ", "Elevated": "!", "Critical": "‼"}


def bar(pct: int, width: int = 20) -> str:
    pct = min(100, max(0, pct))
    filled = (pct * width) // 100
    return "█" * filled + "·" * (width - filled)


def print_projects(vm: WorkspaceViewModel) -> None:
    rows = vm.project_rows()
    if not rows:
        print("No projects.")
        return
    for r in rows:
        print(
            f"{r['id']:<14} {bar(r['progress'])} {r['progress']:>3}%  "
            f"{r['status']:<11} {r['tasks_done']}/{r['tasks_total']}  {r['name']}"
        )


def print_tasks(vm: WorkspaceViewModel, project_id: str) -> None:
    vm.select_project(project_id)
    project = vm.selected_project()
    if project is None:
        print(f"Project not found: {project_id}")
        return
    print(f"{project['name']}: {project['tasks_done']} / {project['tasks_total']} tasks, {project['progress']}%")
    rows = vm.task_rows(project_id)
    if not rows:
        print("  No tasks in this project.")
    for r in rows:
        mark = "✔" if r["is_complete"] else "·"
        print(f"  {mark} {r['id']:<14} {r['name']:<36} {r['assignee']}")


def print_team(vm: WorkspaceViewModel) -> None:
    rows = vm.team_rows()
    if not rows:
        print("No team members.")
        return
    for r in rows:
        line = (
            f"{_TIER_MARK.get(r['risk_tier'], ' ')} {r['id']:<14} {bar(r['capacity_pct'])} "
            f"{r['capacity_pct']:>3}%  {r['open_tasks']}/{r['max_capacity']} open  "
            f"{r['risk_tier']:<8} {r['name']}"
        )
        if r["over_capacity"]:
            line += f"  (OVER CAPACITY: {r['over_capacity']} over limit)"
        print(line)
    s = vm.team_summary()
    print(f"{s['members']} member(s), {s['open_tasks']} open task(s), {s['Critical']} critical, {s['Elevated']} elevated")


def print_info(ctx: AppContext) -> None:
    if not ctx.persistent:
        print(f"DB: {ctx.db_path} (unavailable, running in memory)")
        return
    print(f"DB: {ctx.db_path}")
    print(f"Record: {ctx.record_key}, last saved {ctx.last_saved() or 'never'}")


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="vznx", description="Projects, tasks and team capacity")
    p.add_argument("--db", type=Path, default=None, help="Path to SQLite DB")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("projects", help="Project dashboard")
    s = sub.add_parser("tasks", help="Tasks of one project")
    s.add_argument("project_id")
    sub.add_parser("team", help="Team capacity and workload")

    s = sub.add_parser("add-project")
    s.add_argument("name")
    s = sub.add_parser("delete-project")
    s.add_argument("project_id")
    s = sub.add_parser("set-progress", help="Manual progress override (0-100)")
    s.add_argument("project_id")
    s.add_argument("progress")

    s = sub.add_parser("add-task")
    s.add_argument("project_id")
    s.add_argument("name")
    s.add_argument("--member", default=None, help="Assigned member id")
    s = sub.add_parser("toggle-task")
    s.add_argument("task_id")
    s = sub.add_parser("complete-task")
    s.add_argument("task_id")
    s.add_argument("--undo", action="store_true", help="Mark incomplete instead")
    s = sub.add_parser("delete-task")
    s.add_argument("task_id")

    s = sub.add_parser("add-member")
    s.add_argument("name")
    s.add_argument("--capacity", default=None)
    s = sub.add_parser("edit-member")
    s.add_argument("member_id")
    s.add_argument("name")
    s.add_argument("capacity")
    s = sub.add_parser("delete-member", help="Removes the member AND all tasks assigned to them")
    s.add_argument("member_id")

    sub.add_parser("reset", help="Replace the workspace with seed data")
    sub.add_parser("info", help="Storage location and last save time")
    return p.parse_args(argv)


def run(args: argparse.Namespace, ctx: AppContext) -> int:
    store = ctx.store
    vm = WorkspaceViewModel(store)
    cmd = args.cmd

    if cmd == "projects":
        print_projects(vm)
    elif cmd == "tasks":
        print_tasks(vm, args.project_id)
    elif cmd == "team":
        print_team(vm)
    elif cmd == "add-project":
        pid = vm.add_project(args.name)
        print(f"Added project {pid}" if pid else "Project name required; nothing added.")
        print_projects(vm)
    elif cmd == "delete-project":
        vm.delete_project(args.project_id)
        print_projects(vm)
    elif cmd == "set-progress":
        vm.override_progress(args.project_id, args.progress)
        print_projects(vm)
    elif cmd == "add-task":
        tid = store.add_task(args.project_id, args.name, args.member)
        print(f"Added task {tid}" if tid else "Unknown project or empty name; nothing added.")
        print_tasks(vm, args.project_id)
    elif cmd == "toggle-task":
        task = store.state.task(args.task_id)
        vm.toggle_task(args.task_id)
        if task: print_tasks(vm, task.project_id)
    elif cmd == "complete-task":
        task = store.state.task(args.task_id)
        store.update_task_completion(args.task_id, not args.undo)
        if task: print_tasks(vm, task.project_id)
    elif cmd == "delete-task":
        task = store.state.task(args.task_id)
        store.delete_task(args.task_id)
        if task: print_tasks(vm, task.project_id)
    elif cmd == "add-member":
        mid = vm.add_team_member(args.name, args.capacity)
        print(f"Added member {mid}" if mid else "Member name required; nothing added.")
        print_team(vm)
    elif cmd == "edit-member":
        vm.edit_team_member(args.member_id, args.name, args.capacity)
        print_team(vm)
    elif cmd == "delete-member":
        vm.delete_team_member(args.member_id)
        print_team(vm)
    elif cmd == "reset":
        store.reset()
        print_projects(vm)
    elif cmd == "info":
        print_info(ctx)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = load_settings()
    setup_logging(args.log_level or settings["logging"]["level"], console=False)
    ctx = AppContext.create(db_path=args.db, settings=settings)
    if not ctx.persistent:
        print(f"warning: cannot open {ctx.db_path}; changes will not be saved", file=sys.stderr)
    try:
        return run(args, ctx)
    finally:
        ctx.close()


if __name__ == "__main__":
    raise SystemExit(main())
