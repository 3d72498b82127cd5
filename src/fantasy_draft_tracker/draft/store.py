from __future__ import annotations

import logging
import sqlite3
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol

from fantasy_draft_tracker.draft.errors import DataUnavailableError
from fantasy_draft_tracker.draft.snapshot import RestoredFields, snapshot_from_json, snapshot_to_json
from fantasy_draft_tracker.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from fantasy_draft_tracker.draft.catalog import PlayerCatalog
    from fantasy_draft_tracker.draft.snapshot import DraftSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    def load(self, key: str) -> str | None: ...

    def save(self, key: str, payload: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SqliteSnapshotStore:
    """Key-value snapshot store backed by a single SQLite table.

    Any ``sqlite3.Error`` is re-raised as ``DataUnavailableError``.
    """

    def __init__(self, db_path: Path, clock: Callable[[], float] = time.time) -> None:
        self._db_path = db_path
        self._clock = clock

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._db_path))
        except (OSError, sqlite3.Error) as e:
            raise DataUnavailableError(f"Could not open snapshot store {self._db_path}: {e}") from e
        try:
            conn.execute("PRAGMA busy_timeout=5000")
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                "CREATE TABLE IF NOT EXISTS snapshots ("
                "  key TEXT PRIMARY KEY,"
                "  payload TEXT NOT NULL,"
                "  saved_at REAL NOT NULL"
                ")"
            )
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise DataUnavailableError(f"Snapshot store {self._db_path} failed: {e}") from e
        finally:
            conn.close()

    def load(self, key: str) -> str | None:
        with self._connection() as conn:
            row = conn.execute("SELECT payload FROM snapshots WHERE key = ?", (key,)).fetchone()
        return None if row is None else str(row[0])

    def save(self, key: str, payload: str) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO snapshots (key, payload, saved_at) VALUES (?, ?, ?)",
                (key, payload, self._clock()),
            )

    def delete(self, key: str) -> None:
        with self._connection() as conn:
            conn.execute("DELETE FROM snapshots WHERE key = ?", (key,))


class SnapshotPersister:
    """Session observer that writes every emitted snapshot under one key."""

    def __init__(self, store: SnapshotStore, key: str) -> None:
        self._store = store
        self._key = key

    def __call__(self, snapshot: DraftSnapshot) -> None:
        self._store.save(self._key, snapshot_to_json(snapshot))
        logger.debug("Saved snapshot %s at pick %d", self._key, snapshot.current_pick)

    def restore(self, catalog: PlayerCatalog | None = None) -> Result[RestoredFields, DataUnavailableError]:
        """Read the stored snapshot; an absent snapshot restores nothing."""
        try:
            payload = self._store.load(self._key)
        except DataUnavailableError as e:
            return Err(e)
        if payload is None:
            logger.debug("No stored snapshot for %s", self._key)
            return Ok(RestoredFields())
        return Ok(snapshot_from_json(payload, catalog))

    def clear(self) -> None:
        self._store.delete(self._key)
