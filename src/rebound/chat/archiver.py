"""Archives the opening exchange of each fresh conversation."""

import logging

from ..history.base import HistoryStore
from ..models import HistoryEntry, Turn, utc_now
from .log import is_fresh

logger = logging.getLogger(__name__)

TITLE_FORMAT = "Chat %Y-%m-%d %H:%M"


class HistoryArchiver:
    """Snapshots ``[greeting, first user turn]`` once per conversation.

    A latch stops re-archiving until ``reset()`` starts a new conversation.
    Entries are never updated afterwards: they record how a conversation
    started, not its full transcript.
    """

    def __init__(self, store: HistoryStore):
        self._store = store
        self._archived = False

    @property
    def archived(self) -> bool:
        return self._archived

    def reset(self) -> None:
        """Allow the next fresh conversation to be archived."""
        self._archived = False

    def mark_archived(self) -> None:
        """Prevent archiving for the current conversation."""
        self._archived = True

    async def maybe_archive(
        self,
        log_before_user_turn: tuple[Turn, ...],
        new_user_turn: Turn,
    ) -> HistoryEntry | None:
        """Archive the opening exchange if this is the first user turn.

        Args:
            log_before_user_turn: Snapshot taken before the user turn was appended
            new_user_turn: The user turn just appended

        Returns:
            The new entry, or None when nothing was archived

        Raises:
            HistoryStoreError: If the store fails to save the entry
        """
        if self._archived or not is_fresh(log_before_user_turn):
            return None

        # Latch before awaiting the store so an overlapping call cannot archive twice
        self._archived = True
        created_at = utc_now()
        entry = HistoryEntry(
            title=created_at.astimezone().strftime(TITLE_FORMAT),
            messages=(log_before_user_turn[0], new_user_turn),
            created_at=created_at,
        )
        await self._store.add(entry)
        logger.info("Archived conversation %s (%s)", entry.id, entry.title)
        return entry
