"""Conversation session management.

The session controller owns the message log, builds provider context,
applies replies or failures, and archives the opening exchange.
"""

from .archiver import HistoryArchiver
from .log import MessageLog
from .session import ERROR_PREFIX, SessionController, error_turn
from .windowing import build_context

__all__ = [
    "ERROR_PREFIX",
    "HistoryArchiver",
    "MessageLog",
    "SessionController",
    "build_context",
    "error_turn",
]
