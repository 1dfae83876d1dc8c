"""Abstract base class for history store backends.

This module defines the interface for archived-conversation storage.
The abstraction hides:
- Storage format (JSON rows, in-memory objects)
- Persistence mechanism (file, database, in-memory)
- Connection management
"""

from abc import ABC, abstractmethod

from ..models import HistoryEntry


class HistoryStore(ABC):
    """Abstract history store.

    Entries are kept in insertion order (oldest first). Entries are
    immutable; the only mutations are add, remove and clear.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store backend gracefully."""

    @abstractmethod
    async def add(self, entry: HistoryEntry) -> None:
        """Append an entry to the store."""

    @abstractmethod
    async def get(self, entry_id: str) -> HistoryEntry | None:
        """Return the entry with the given id, or None."""

    @abstractmethod
    async def list_entries(self) -> list[HistoryEntry]:
        """Return all entries, oldest first."""

    @abstractmethod
    async def remove(self, entry_id: str) -> bool:
        """Remove an entry. Returns False if it did not exist."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
