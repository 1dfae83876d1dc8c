"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from rebound.chat import SessionController
from rebound.config import ReboundConfig
from rebound.history.in_memory import InMemoryHistoryStore
from rebound.llm import GenerationConfig, LLMProvider, ProviderMessage


class ScriptedProvider(LLMProvider):
    """Provider returning canned replies (or raising canned errors) in order.

    When ``gate`` is set, each call waits on it before answering, which
    lets a test act while a request is in flight.
    """

    def __init__(self, replies: list | None = None):
        self.replies = list(replies or [])
        self.calls: list[list[ProviderMessage]] = []
        self.instructions: list[str] = []
        self.configs: list[GenerationConfig] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def generate(self, contents, system_instruction, generation_config):
        self.calls.append(list(contents))
        self.instructions.append(system_instruction)
        self.configs.append(generation_config)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


async def wait_for(condition, attempts: int = 100) -> None:
    """Yield to the event loop until condition() is true."""
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
def history_store():
    return InMemoryHistoryStore()


@pytest.fixture
def config():
    return ReboundConfig(strict_log=True)


@pytest.fixture
def session(provider, history_store, config):
    """Session controller wired to a scripted provider and in-memory history."""
    return SessionController(
        provider,
        history_store,
        config,
        system_instruction="You are Rebound AI.",
    )


@pytest.fixture
def sqlite_path(tmp_path):
    return tmp_path / "history.db"
