# vznx/utils/config.py
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_setup import get_logger
from .paths import config_dir, default_db_path

RECORD_KEY = "vznx_workspace_data"

_DEFAULTS: Dict[str, Any] = {
    "storage": {
        "db_path": None,          # None -> $XDG_DATA_HOME/vznx/workspace.db
        "record_key": RECORD_KEY,
    },
    "logging": {
        "level": "INFO",
    },
}

_log = get_logger("config")


def settings_file() -> Path:
    return config_dir() / "settings.json"


def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(_DEFAULTS))


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    data = _defaults()
    if path.exists():
        try:
            stored = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _log.warning("Unreadable settings file %s; using defaults", path)
            return data
        if isinstance(stored, dict):
            for section, values in stored.items():
                if isinstance(values, dict) and isinstance(data.get(section), dict):
                    data[section].update(values)
                else:
                    data[section] = values
    return data


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def resolve_db_path(settings: Dict[str, Any]) -> Path:
    # env wins, then settings, then XDG default
    env = os.environ.get("VZNX_DB")
    if env:
        return Path(env)
    configured = settings.get("storage", {}).get("db_path")
    return Path(configured) if configured else default_db_path()


def resolve_record_key(settings: Dict[str, Any]) -> str:
    return settings.get("storage", {}).get("record_key") or RECORD_KEY
