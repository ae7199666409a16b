# vznx application context
# Rev 0.1.1

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .repositories.db import OPEN_ERRORS, Database
from .repositories.sqlite_workspace_repository import SQLiteWorkspaceRepository
from .services.workspace_service import WorkspaceStore
from .utils.config import load_settings, resolve_db_path, resolve_record_key
from .utils.logging_setup import get_logger


@dataclass
class AppContext:
    """Central container for shared app resources.

    `db` and `repo` are None when the database could not be opened; the store
    then runs in memory on seed data and nothing is saved.
    """
    db_path: Path
    record_key: str
    db: Optional[Database]
    repo: Optional[SQLiteWorkspaceRepository]
    store: WorkspaceStore

    @classmethod
    def create(cls, db_path: Optional[Path] = None, settings: Optional[dict] = None) -> "AppContext":
        """Open DB, apply migrations, load the workspace record."""
        log = get_logger("AppContext")
        settings = settings if settings is not None else load_settings()
        db_path = Path(db_path) if db_path is not None else resolve_db_path(settings)
        key = resolve_record_key(settings)
        db: Optional[Database] = None
        repo: Optional[SQLiteWorkspaceRepository] = None
        try:
            db = Database(db_path)
            db.run_migrations()
            repo = SQLiteWorkspaceRepository(db)
        except OPEN_ERRORS:
            log.exception("Workspace DB %s unavailable; running in memory, changes will not be saved", db_path)
            if db is not None:
                db.close()
            db = None
        store = WorkspaceStore.open(repo, key=key)
        log.info("AppContext initialized with DB=%s (persistent=%s)", db_path, repo is not None)
        return cls(db_path=db_path, record_key=key, db=db, repo=repo, store=store)

    @property
    def persistent(self) -> bool:
        return self.repo is not None

    def last_saved(self) -> Optional[str]:
        """UTC timestamp of the last successful save, None if never saved or in memory."""
        if self.repo is None:
            return None
        try:
            return self.repo.updated_at(self.record_key)
        except OPEN_ERRORS:
            get_logger("AppContext").warning("Could not read save time for %r", self.record_key, exc_info=True)
            return None

    def close(self) -> None:
        if self.db is not None:
            self.db.close()
