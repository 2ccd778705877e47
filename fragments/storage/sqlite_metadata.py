"""SQLite metadata store; the (owner_id, fragment_id) primary key is the owner index."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional

from common.logging_config import get_logger
from fragments.exceptions import StorageError
from fragments.storage.backend import MetadataStore
from fragments.types import FragmentRecord

logger = get_logger(__name__)


class SqliteMetadataStore(MetadataStore):
    """
    Fragment metadata in a single SQLite table.

    Every call opens its own connection, so the store can be shared across
    threads. Listing order follows the rowid, which is stable across updates.
    """

    def __init__(self, database_path: str):
        self.database_path = database_path
        self.init_database()

    def init_database(self) -> None:
        """
        Create the fragments table if it doesn't exist.
        """
        Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)

        with self._connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS fragments (
                    owner_id TEXT NOT NULL,
                    fragment_id TEXT NOT NULL,
                    type TEXT NOT NULL,
                    created TEXT NOT NULL,
                    updated TEXT NOT NULL,
                    size INTEGER NOT NULL,
                    PRIMARY KEY(owner_id, fragment_id)
                )
            """)

            conn.commit()

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.

        Raises:
            StorageError: If the database cannot be opened or a statement fails
        """
        try:
            conn = sqlite3.connect(self.database_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open metadata database {self.database_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Metadata store failure: {e}", exc_info=True)
            raise StorageError(f"Metadata store failure: {e}") from e
        finally:
            conn.close()

    def put(self, owner_id: str, fragment_id: str, record: FragmentRecord) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO fragments (owner_id, fragment_id, type, created, updated, size)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(owner_id, fragment_id) DO UPDATE SET
                    type = excluded.type,
                    updated = excluded.updated,
                    size = excluded.size
                """,
                (owner_id, fragment_id, record.type, record.created, record.updated, record.size)
            )
            conn.commit()

    def get(self, owner_id: str, fragment_id: str) -> Optional[FragmentRecord]:
        with self._connection() as conn:
            row = conn.execute(
                """
                SELECT owner_id, fragment_id, type, created, updated, size
                FROM fragments WHERE owner_id = ? AND fragment_id = ?
                """,
                (owner_id, fragment_id)
            ).fetchone()

            if row is None:
                return None

            return FragmentRecord(
                id=row["fragment_id"],
                owner_id=row["owner_id"],
                type=row["type"],
                created=row["created"],
                updated=row["updated"],
                size=row["size"],
            )

    def list_ids(self, owner_id: str) -> List[str]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT fragment_id FROM fragments WHERE owner_id = ? ORDER BY rowid",
                (owner_id,)
            ).fetchall()
            return [row["fragment_id"] for row in rows]

    def remove(self, owner_id: str, fragment_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM fragments WHERE owner_id = ? AND fragment_id = ?",
                (owner_id, fragment_id)
            )
            conn.commit()
            return cursor.rowcount > 0
