"""SQLite history store backend.

Provides persistent history storage using a SQLite database.
Uses aiosqlite for async access. Each entry is stored as a JSON payload
next to the columns needed for lookup and ordering.
"""

from pathlib import Path

import aiosqlite
from pydantic import ValidationError as PydanticValidationError

from ..errors import HistoryStoreError
from ..models import HistoryEntry
from .base import HistoryStore


class SQLiteHistoryStore(HistoryStore):
    """SQLite-backed history store.

    Supports persistent storage across sessions.
    """

    def __init__(self, path: str | Path = "./rebound_history.db"):
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
            await self._create_schema()
        except (OSError, aiosqlite.Error) as e:
            raise HistoryStoreError(f"Could not open history database {self._db_path}: {e}") from e

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS history_entries (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                entry_id TEXT NOT NULL UNIQUE,
                title TEXT NOT NULL,
                created_at TEXT NOT NULL,
                payload TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _conn(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise HistoryStoreError("History database is not connected; call connect() first")
        return self._connection

    @staticmethod
    def _parse(payload: str) -> HistoryEntry:
        try:
            return HistoryEntry.model_validate_json(payload)
        except PydanticValidationError as e:
            raise HistoryStoreError(f"Corrupt history entry: {e}") from e

    async def add(self, entry: HistoryEntry) -> None:
        conn = self._conn()
        try:
            await conn.execute("""
                INSERT INTO history_entries (entry_id, title, created_at, payload)
                VALUES (?, ?, ?, ?)
            """, (
                entry.id,
                entry.title,
                entry.created_at.isoformat(),
                entry.model_dump_json()
            ))
            await conn.commit()
        except aiosqlite.Error as e:
            raise HistoryStoreError(f"Could not save history entry {entry.id}: {e}") from e

    async def get(self, entry_id: str) -> HistoryEntry | None:
        conn = self._conn()
        try:
            async with conn.execute(
                "SELECT payload FROM history_entries WHERE entry_id = ?",
                (entry_id,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise HistoryStoreError(f"Could not read history entry {entry_id}: {e}") from e

        if row is None:
            return None
        return self._parse(row[0])

    async def list_entries(self) -> list[HistoryEntry]:
        conn = self._conn()
        try:
            async with conn.execute(
                "SELECT payload FROM history_entries ORDER BY seq ASC"
            ) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise HistoryStoreError(f"Could not list history entries: {e}") from e

        return [self._parse(row[0]) for row in rows]

    async def remove(self, entry_id: str) -> bool:
        conn = self._conn()
        try:
            cursor = await conn.execute(
                "DELETE FROM history_entries WHERE entry_id = ?",
                (entry_id,)
            )
            await conn.commit()
        except aiosqlite.Error as e:
            raise HistoryStoreError(f"Could not remove history entry {entry_id}: {e}") from e
        return cursor.rowcount > 0

    async def clear(self) -> None:
        conn = self._conn()
        try:
            await conn.execute("DELETE FROM history_entries")
            await conn.commit()
        except aiosqlite.Error as e:
            raise HistoryStoreError(f"Could not clear history: {e}") from e

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
