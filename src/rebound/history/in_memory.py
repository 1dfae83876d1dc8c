"""In-memory history store backend.

Simple dict-based storage for session-only history.
Data is lost when the application exits.
"""

from ..models import HistoryEntry
from .base import HistoryStore


class InMemoryHistoryStore(HistoryStore):
    """In-memory history store (session-only).

    Suitable for single-session use or testing.
    """

    def __init__(self):
        # dicts keep insertion order, which is the display order
        self._entries: dict[str, HistoryEntry] = {}

    async def connect(self) -> None:
        """Initialize store (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close store (no-op for in-memory)."""
        pass

    async def add(self, entry: HistoryEntry) -> None:
        self._entries[entry.id] = entry

    async def get(self, entry_id: str) -> HistoryEntry | None:
        return self._entries.get(entry_id)

    async def list_entries(self) -> list[HistoryEntry]:
        return list(self._entries.values())

    async def remove(self, entry_id: str) -> bool:
        return self._entries.pop(entry_id, None) is not None

    async def clear(self) -> None:
        self._entries.clear()

    @property
    def backend_type(self) -> str:
        return "memory"
