"""Selects and reshapes recent turns into provider context.

The window is a count of trailing turns, not a token budget: it bounds the
payload size but does not guarantee the model's context limit is respected.
"""

from collections.abc import Sequence

from ..config import DEFAULT_CONTEXT_WINDOW
from ..llm.models import ProviderMessage
from ..models import Role, Turn

_ROLE_MAP = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


def build_context(
    turns: Sequence[Turn],
    window_size: int = DEFAULT_CONTEXT_WINDOW,
) -> list[ProviderMessage]:
    """Build the provider context from a conversation.

    Takes the trailing ``window_size`` turns, drops those whose content is
    blank after trimming, and maps roles to the provider vocabulary while
    keeping their order. Pure: the same turns always give the same output.

    Args:
        turns: Conversation turns, oldest first
        window_size: Maximum number of trailing turns to consider

    Returns:
        At most ``window_size`` provider messages

    Raises:
        ValueError: If window_size is less than 1
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")

    recent = list(turns)[-window_size:]
    return [
        ProviderMessage(role=_ROLE_MAP[turn.role], text=turn.content)
        for turn in recent
        if turn.content.strip()
    ]
