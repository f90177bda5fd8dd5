"""
SQLite-based storage for the list of tracked repositories.

Keeps the repository paths between runs so only a scan has to walk the disk.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def _get_default_db_path() -> Path:
    """Get the default database path."""
    env_path = os.environ.get("GITSTATS_DB_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".git-local-stats" / "repos.db"


class RepoStore:
    """Ordered, deduplicated set of repository paths backed by SQLite."""

    def __init__(self, db_path: str | Path | None = None):
        """
        Initialize the repository store.

        Args:
            db_path: Path to the SQLite database file.
                     Defaults to ~/.git-local-stats/repos.db
        """
        if db_path is None:
            db_path = _get_default_db_path()
        self.db_path = Path(db_path)
        self._init_db()

    def _init_db(self) -> None:
        """Create the table if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS repos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    path TEXT NOT NULL UNIQUE,
                    added_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    def add_paths(self, paths: Iterable[str | Path]) -> int:
        """
        Add repository paths, skipping ones already stored.

        Uses INSERT OR IGNORE so the first-seen order is kept.

        Args:
            paths: Repository paths; relative paths are made absolute

        Returns:
            Number of new paths inserted
        """
        inserted = 0
        with sqlite3.connect(self.db_path) as conn:
            for path in paths:
                if not str(path).strip():
                    continue
                absolute = str(Path(path).expanduser().resolve())
                cursor = conn.execute(
                    "INSERT OR IGNORE INTO repos (path) VALUES (?)",
                    (absolute,),
                )
                inserted += cursor.rowcount
            conn.commit()

        logger.debug("Stored %d new repositories in %s", inserted, self.db_path)
        return inserted

    def list_paths(self) -> list[str]:
        """
        Get all stored repository paths.

        Returns:
            Absolute paths in the order they were first added
        """
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute("SELECT path FROM repos ORDER BY id").fetchall()
        return [row[0] for row in rows]

    def remove_path(self, path: str | Path) -> bool:
        """
        Stop tracking a repository.

        Returns:
            True if the path was stored and has been removed
        """
        absolute = str(Path(path).expanduser().resolve())
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM repos WHERE path = ?", (absolute,))
            conn.commit()
        return cursor.rowcount > 0

    def clear(self) -> None:
        """Delete all stored paths. Primarily for testing."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM repos")
            conn.commit()
