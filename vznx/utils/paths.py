# Rev 0.1.0

"""Paths and XDG helpers (Rev 0.1.0)
- Uses XDG Base Directory spec
- Workspace DB lives under $XDG_DATA_HOME/vznx/workspace.db
- Logs under $XDG_STATE_HOME/vznx/logs, settings under $XDG_CONFIG_HOME/vznx
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "vznx"


def xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def xdg_state_home() -> Path:
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


def xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def data_dir() -> Path:
    return xdg_data_home() / APP_NAME


def logs_dir() -> Path:
    return xdg_state_home() / APP_NAME / "logs"


def config_dir() -> Path:
    return xdg_config_home() / APP_NAME


# Shipped with the package, applied by repositories.db.Database
MIGRATIONS_DIR = (Path(__file__).resolve().parents[1] / "repositories" / "migrations").resolve()


def default_db_path() -> Path:
    return data_dir() / "workspace.db"
