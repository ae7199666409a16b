from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import pytest

from vznx.utils import logging_setup

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level, hook = list(root.handlers), root.level, sys.excepthook
    yield
    sys.excepthook = hook
    for h in root.handlers:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_get_logger_is_namespaced():
    assert logging_setup.get_logger("codec").name == "vznx.codec"


def test_core_imports_without_qt():
    # a None entry in sys.modules makes the import fail as if PySide6 were absent
    code = (
        "import sys\n"
        "sys.modules['PySide6'] = None\n"
        "sys.modules['PySide6.QtCore'] = None\n"
        "from vznx.utils import logging_setup\n"
        "from vznx.models import codec\n"
        "from vznx.services import cascade, workspace_service\n"
        "assert logging_setup.qInstallMessageHandler is None\n"
        "assert codec.loads(None).projects\n"
    )
    proc = subprocess.run([sys.executable, "-c", code], cwd=ROOT, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr


def test_setup_logging_without_qt_handler(monkeypatch, restore_root_logger):
    monkeypatch.setattr(logging_setup, "qInstallMessageHandler", None)
    logfile = logging_setup.setup_logging("debug", console=False)
    assert logfile == logging_setup.log_file()
    assert logging.getLogger().level == logging.DEBUG
    assert logfile.exists()
