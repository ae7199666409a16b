# Rev 0.1.1
from __future__ import annotations

import sqlite3
from typing import Any, Optional, Union


class SQLiteWorkspaceRepository:
    """
    Key/value store for the serialized workspace record.
    Schema: workspace_records(key TEXT PRIMARY KEY, payload TEXT, updated_at_utc TEXT)
    Errors propagate as sqlite3.Error; WorkspaceStore decides what to do with them.
    """

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        c = getattr(self._db_or_conn, "conn", None)
        if isinstance(c, sqlite3.Connection):
            return c
        raise RuntimeError(
            "SQLiteWorkspaceRepository: could not obtain sqlite3.Connection "
            "(expected .conn on wrapper, or a raw Connection)."
        )

    # -------------------------
    # Record access
    # -------------------------
    def load_record(self, key: str) -> Optional[str]:
        """Return the stored JSON payload for `key`, or None if never saved."""
        row = self._conn().execute(
            "SELECT payload FROM workspace_records WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    def save_record(self, key: str, payload: str) -> None:
        con = self._conn()
        con.execute(
            """
            INSERT INTO workspace_records(key, payload, updated_at_utc)
            VALUES (?, ?, strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
            ON CONFLICT(key) DO UPDATE SET
                payload = excluded.payload,
                updated_at_utc = excluded.updated_at_utc
            """,
            (key, payload),
        )
        if con.in_transaction:
            con.commit()

    def updated_at(self, key: str) -> Optional[str]:
        row = self._conn().execute(
            "SELECT updated_at_utc FROM workspace_records WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None
