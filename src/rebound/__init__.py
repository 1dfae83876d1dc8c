"""
Rebound: a chat client for a remote generative-language provider.

The session controller keeps the live conversation and archives the
opening exchange of each new conversation into a history store.
"""

__version__ = "0.1.0"

from .chat import SessionController, build_context
from .config import ReboundConfig
from .errors import (
    ConfigurationError,
    HistoryNotFoundError,
    HistoryStoreError,
    ProviderError,
    ReboundError,
    StaleResponseError,
    ValidationError,
)
from .history import HistoryStore, create_history_store
from .llm import LLMProvider, create_llm_provider
from .models import GREETING, HistoryEntry, Role, Turn

__all__ = [
    "ConfigurationError",
    "GREETING",
    "HistoryEntry",
    "HistoryNotFoundError",
    "HistoryStore",
    "HistoryStoreError",
    "LLMProvider",
    "ProviderError",
    "ReboundConfig",
    "ReboundError",
    "Role",
    "SessionController",
    "StaleResponseError",
    "Turn",
    "ValidationError",
    "build_context",
    "create_history_store",
    "create_llm_provider",
]
