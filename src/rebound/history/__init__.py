"""Conversation history module for rebound.

Stores immutable snapshots of past conversations so they can be listed,
resumed or deleted after the live conversation is reset.
"""

from .base import HistoryStore
from .factory import create_history_store

__all__ = [
    "HistoryStore",
    "create_history_store",
]
