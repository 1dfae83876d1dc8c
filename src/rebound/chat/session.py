"""Conversation session controller.

Owns the message log and the pending flag for one conversation, and is
the only writer of both. The UI reads ``messages``/``pending`` and sends
commands through ``submit``, ``reset`` and ``load_history_entry``.

Every provider call is tagged with the log generation it was issued
against. ``reset()`` and ``load_history_entry()`` bump the generation, so
a reply that arrives afterwards is discarded instead of landing in the
replaced log.
"""

import logging

from ..config import ReboundConfig
from ..errors import (
    ConfigurationError,
    HistoryNotFoundError,
    HistoryStoreError,
    ProviderError,
    StaleResponseError,
    ValidationError,
)
from ..history.base import HistoryStore
from ..llm.base import LLMProvider
from ..llm.providers import FALLBACK_REPLY
from ..models import Role, Turn, bootstrap_turn
from ..prompts import get_system_instruction
from .archiver import HistoryArchiver
from .log import MessageLog
from .windowing import build_context

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "

UNEXPECTED_ERROR = "Something went wrong while generating a reply. Please try again."


def error_turn(exc: Exception) -> Turn:
    """Build the assistant turn that reports a failed request."""
    message = getattr(exc, "message", None) or str(exc) or "Something went wrong."
    return Turn(role=Role.ASSISTANT, content=f"{ERROR_PREFIX}{message}", is_error=True)


class SessionController:
    """Runs a single conversation against a generation provider.

    States are Idle (``pending`` false) and AwaitingReply (``pending``
    true). At most one provider request is in flight: ``submit`` is a
    no-op while a reply is pending.

    Usage:
        session = SessionController(provider, history_store)
        reply = await session.submit("What is 2+2?")
        session.reset()
    """

    def __init__(
        self,
        provider: LLMProvider,
        history: HistoryStore,
        config: ReboundConfig | None = None,
        system_instruction: str | None = None,
    ):
        """Initialize the controller.

        Args:
            provider: Generation provider used for replies
            history: Store receiving archived conversations
            config: Runtime configuration (defaults apply when omitted)
            system_instruction: Override for the packaged system prompt
        """
        self._provider = provider
        self._history = history
        self._config = config or ReboundConfig()
        self._system_instruction = (
            system_instruction if system_instruction is not None else get_system_instruction()
        )
        self._log = MessageLog(strict=self._config.strict_log)
        self._archiver = HistoryArchiver(history)
        self._pending = False
        self._generation = 0

    @property
    def messages(self) -> tuple[Turn, ...]:
        """Read-only view of the current conversation."""
        return self._log.snapshot()

    @property
    def pending(self) -> bool:
        """True while a provider request is in flight."""
        return self._pending

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def history(self) -> HistoryStore:
        return self._history

    @staticmethod
    def _validate(text: str) -> str:
        content = text.strip() if text else ""
        if not content:
            raise ValidationError("Message is empty")
        return content

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            raise StaleResponseError(generation, self._generation)

    async def submit(self, text: str) -> Turn | None:
        """Submit a user message and wait for the assistant's reply.

        Blank text, or a submission while a reply is pending, is ignored.
        Any failure to produce a reply becomes an assistant error turn;
        it never propagates.

        Args:
            text: Raw user input

        Returns:
            The assistant turn appended (a reply or an error turn), or None
            if nothing was appended for the reply
        """
        try:
            content = self._validate(text)
        except ValidationError as e:
            logger.debug("Ignoring submission: %s", e)
            return None

        if self._pending:
            logger.debug("Ignoring submission while a reply is pending")
            return None

        generation = self._generation
        self._pending = True
        try:
            before = self._log.snapshot()
            user_turn = self._log.append(Turn(role=Role.USER, content=content))
            logger.debug("Submitted user turn %s (generation %d)", user_turn.id, generation)

            await self._archive(before, user_turn)
            self._ensure_current(generation)

            context = build_context(self._log.snapshot(), self._config.context_window)
            try:
                reply = await self._provider.generate(
                    context,
                    self._system_instruction,
                    self._config.generation,
                )
                turn = Turn(role=Role.ASSISTANT, content=reply.strip() or FALLBACK_REPLY)
            except (ProviderError, ConfigurationError) as e:
                logger.warning("Reply failed: %s", e)
                turn = error_turn(e)
            except Exception:
                logger.exception("Unexpected error while generating a reply")
                turn = error_turn(ProviderError(UNEXPECTED_ERROR))

            self._ensure_current(generation)
            return self._log.append(turn)
        except StaleResponseError as e:
            logger.debug("%s", e)
            return None
        finally:
            # A reset or load has already cleared the flag for the new log
            if generation == self._generation:
                self._pending = False

    async def _archive(self, before: tuple[Turn, ...], user_turn: Turn) -> None:
        try:
            await self._archiver.maybe_archive(before, user_turn)
        except HistoryStoreError as e:
            logger.warning("Could not archive conversation: %s", e)

    def reset(self) -> None:
        """Start a new conversation with only the greeting.

        Any reply still in flight is discarded when it arrives.
        """
        self._generation += 1
        self._log.replace_all(bootstrap_turn())
        self._pending = False
        self._archiver.reset()
        logger.debug("Conversation reset (generation %d)", self._generation)

    async def load_history_entry(self, entry_id: str) -> None:
        """Replace the live conversation with a copy of an archived one.

        The loaded conversation is not archived again. Any reply still in
        flight is discarded when it arrives.

        Raises:
            HistoryNotFoundError: If no entry has the given id
            HistoryStoreError: If the store cannot be read
        """
        entry = await self._history.get(entry_id)
        if entry is None:
            raise HistoryNotFoundError(entry_id)

        self._generation += 1
        self._log.load(entry.messages)
        self._pending = False
        self._archiver.mark_archived()
        logger.debug("Loaded history entry %s (generation %d)", entry_id, self._generation)
