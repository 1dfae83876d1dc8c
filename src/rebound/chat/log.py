"""Ordered, append-only message log for a single conversation."""

import logging
from collections.abc import Iterable

from ..models import Role, Turn, bootstrap_turn, new_id

logger = logging.getLogger(__name__)


class MessageLog:
    """Ordered sequence of turns, oldest first.

    Always holds at least one turn. Turn ids are unique and timestamps
    never decrease. An out-of-order timestamp raises ValueError in strict
    mode; otherwise it is clamped to the previous timestamp.
    """

    def __init__(self, bootstrap: Turn | None = None, strict: bool = False):
        self._strict = strict
        self._turns: list[Turn] = []
        self._ids: set[str] = set()
        self.replace_all(bootstrap if bootstrap is not None else bootstrap_turn())

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def last(self) -> Turn:
        return self._turns[-1]

    @property
    def is_fresh(self) -> bool:
        """True when the log holds only the assistant greeting."""
        return is_fresh(self._turns)

    def append(self, turn: Turn) -> Turn:
        """Append a turn, returning the turn as stored.

        The stored turn may differ from the argument: a missing or
        duplicate id is replaced with a fresh one, and in lenient mode an
        out-of-order timestamp is clamped.

        Raises:
            ValueError: If the content is empty, or the timestamp goes
                backwards in strict mode
        """
        if not turn.content:
            raise ValueError("Cannot append a turn with empty content")

        updates: dict = {}
        if turn.id is None or turn.id in self._ids:
            updates["id"] = new_id()

        if self._turns and turn.timestamp < self.last.timestamp:
            if self._strict:
                raise ValueError(
                    f"Turn timestamp {turn.timestamp.isoformat()} is earlier than "
                    f"the last turn ({self.last.timestamp.isoformat()})"
                )
            logger.warning(
                "Clamping out-of-order turn timestamp %s to %s",
                turn.timestamp.isoformat(),
                self.last.timestamp.isoformat(),
            )
            updates["timestamp"] = self.last.timestamp

        if updates:
            turn = turn.model_copy(update=updates)

        self._turns.append(turn)
        self._ids.add(turn.id)
        return turn

    def replace_all(self, bootstrap: Turn) -> None:
        """Reset the log to a single turn."""
        self._turns = []
        self._ids = set()
        self.append(bootstrap)

    def load(self, turns: Iterable[Turn]) -> None:
        """Replace the log with the given turns."""
        turns = list(turns)
        if not turns:
            raise ValueError("Cannot load an empty conversation")
        self.replace_all(turns[0])
        for turn in turns[1:]:
            self.append(turn)

    def snapshot(self) -> tuple[Turn, ...]:
        """Immutable copy of the log; later appends do not affect it."""
        return tuple(self._turns)


def is_fresh(turns: tuple[Turn, ...] | list[Turn]) -> bool:
    return len(turns) == 1 and turns[0].role == Role.ASSISTANT
