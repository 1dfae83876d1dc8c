"""Shared data models for conversations and their archived snapshots.

These models are independent of any storage backend or provider, and
are immutable so a snapshot can never be changed through a live log.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

GREETING = "Hello! I'm Rebound AI. How can I help you today?"


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Opaque id, assigned by the log when absent")
    role: Role = Field(description="Author of the turn")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=utc_now)
    is_error: bool = Field(default=False, description="True for assistant turns reporting a failure")


class HistoryEntry(BaseModel):
    """Immutable snapshot of a conversation's opening exchange."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    title: str = Field(description="Display title")
    messages: tuple[Turn, ...] = Field(description="Snapshot of the archived turns")
    created_at: datetime = Field(default_factory=utc_now)


def bootstrap_turn() -> Turn:
    """Build the canonical greeting that opens every conversation."""
    return Turn(id=new_id(), role=Role.ASSISTANT, content=GREETING)
