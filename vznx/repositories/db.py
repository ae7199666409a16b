# Rev 0.1.1

"""SQLite connection & migration runner (Rev 0.1.1)
- WAL mode, foreign_keys=ON
- Applies SQL files in repositories/migrations in lexical order
- Tracks applied files in schema_migrations(filename TEXT PRIMARY KEY, applied_at UTC)
- Open and migration failures are logged with the DB path, then re-raised
  (AppContext decides whether to run without storage)
"""
from __future__ import annotations
import sqlite3
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

from ..utils.logging_setup import get_logger
from ..utils.paths import MIGRATIONS_DIR, default_db_path

OPEN_ERRORS = (sqlite3.Error, OSError)


class Database:
    def __init__(self, path: Path | str | None = None) -> None:
        self._log = get_logger("Database")
        self.path = Path(path) if path is not None else default_db_path()
        self.conn: Optional[sqlite3.Connection] = None
        try:
            if str(self.path) != ":memory:":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(self.path), isolation_level=None, check_same_thread=False)
            self.conn.execute("PRAGMA journal_mode=WAL;")
            self.conn.execute("PRAGMA foreign_keys=ON;")
            self.conn.execute(
                "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
            )
        except OPEN_ERRORS as e:
            self._log.error("Cannot open workspace DB %s: %s", self.path, e)
            self.close()
            raise
        self._log.info("SQLite open %s", self.path)

    def close(self) -> None:
        if self.conn is None:
            return
        try:
            self.conn.close()
        except sqlite3.Error:
            self._log.warning("Error closing %s", self.path, exc_info=True)
        self.conn = None

    def applied(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM schema_migrations").fetchall()
        return {r[0] for r in rows}

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        applied = self.applied()
        pending = [p for p in sorted(migrations_dir.glob("*.sql")) if p.name not in applied]
        for p in pending:
            try:
                self.conn.executescript(p.read_text(encoding="utf-8"))
                self.conn.execute(
                    "INSERT INTO schema_migrations(filename, applied_at) VALUES(?, ?)",
                    (p.name, datetime.now(timezone.utc).isoformat()),
                )
            except OPEN_ERRORS as e:
                self._log.error("Migration %s failed on %s: %s", p.name, self.path, e)
                raise
            self._log.info("Applied migration %s", p.name)
        return [p.name for p in pending]
