"""Unit tests for the history module."""
import pytest

from rebound.chat import HistoryArchiver
from rebound.errors import HistoryStoreError
from rebound.history import HistoryStore, create_history_store
from rebound.history.in_memory import InMemoryHistoryStore
from rebound.history.sqlite import SQLiteHistoryStore
from rebound.models import GREETING, HistoryEntry, Role, Turn, bootstrap_turn


def _entry(text: str) -> HistoryEntry:
    greeting = bootstrap_turn()
    user = Turn(id=f"user-{text}", role=Role.USER, content=text)
    return HistoryEntry(title=f"Chat about {text}", messages=(greeting, user))


class TestHistoryStoreInterface:

    def test_store_is_abstract(self):
        with pytest.raises(TypeError):
            HistoryStore()  # type: ignore


class TestInMemoryHistoryStore:
    """Tests for InMemoryHistoryStore."""

    @pytest.mark.asyncio
    async def test_add_get_list(self):
        store = InMemoryHistoryStore()
        first, second = _entry("one"), _entry("two")
        await store.add(first)
        await store.add(second)

        assert await store.get(first.id) == first
        assert await store.get("missing") is None
        assert await store.list_entries() == [first, second]

    @pytest.mark.asyncio
    async def test_remove_and_clear(self):
        store = InMemoryHistoryStore()
        first, second = _entry("one"), _entry("two")
        await store.add(first)
        await store.add(second)

        assert await store.remove(first.id)
        assert not await store.remove(first.id)
        assert await store.list_entries() == [second]

        await store.clear()
        assert await store.list_entries() == []


class TestSQLiteHistoryStore:
    """Tests for SQLiteHistoryStore."""

    @pytest.mark.asyncio
    async def test_round_trip_preserves_order(self, sqlite_path):
        store = SQLiteHistoryStore(sqlite_path)
        await store.connect()
        try:
            entries = [_entry("one"), _entry("two"), _entry("three")]
            for entry in entries:
                await store.add(entry)

            assert await store.list_entries() == entries
            assert await store.get(entries[1].id) == entries[1]
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_persists_across_connections(self, sqlite_path):
        entry = _entry("persisted")

        store = SQLiteHistoryStore(sqlite_path)
        await store.connect()
        await store.add(entry)
        await store.disconnect()

        reopened = SQLiteHistoryStore(sqlite_path)
        await reopened.connect()
        try:
            loaded = await reopened.get(entry.id)
            assert loaded == entry
            assert loaded.messages[0].content == GREETING
        finally:
            await reopened.disconnect()

    @pytest.mark.asyncio
    async def test_remove_and_clear(self, sqlite_path):
        store = SQLiteHistoryStore(sqlite_path)
        await store.connect()
        try:
            first, second = _entry("one"), _entry("two")
            await store.add(first)
            await store.add(second)

            assert await store.remove(first.id)
            assert not await store.remove(first.id)
            assert [e.id for e in await store.list_entries()] == [second.id]

            await store.clear()
            assert await store.list_entries() == []
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_store_error(self, sqlite_path):
        store = SQLiteHistoryStore(sqlite_path)
        await store.connect()
        try:
            entry = _entry("one")
            await store.add(entry)
            with pytest.raises(HistoryStoreError):
                await store.add(entry)
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_requires_connection(self, sqlite_path):
        store = SQLiteHistoryStore(sqlite_path)
        with pytest.raises(HistoryStoreError, match="not connected"):
            await store.list_entries()


class TestHistoryFactory:

    def test_create_memory_store(self):
        store = create_history_store("memory")
        assert isinstance(store, InMemoryHistoryStore)
        assert store.backend_type == "memory"

    def test_create_sqlite_store(self, sqlite_path):
        store = create_history_store("sqlite", path=sqlite_path)
        assert isinstance(store, SQLiteHistoryStore)
        assert store.db_path == sqlite_path

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unsupported history backend"):
            create_history_store("redis")


class TestHistoryArchiver:
    """Tests for HistoryArchiver."""

    @pytest.mark.asyncio
    async def test_archives_first_user_turn(self):
        store = InMemoryHistoryStore()
        archiver = HistoryArchiver(store)
        greeting = bootstrap_turn()
        user = Turn(id="u1", role=Role.USER, content="hello")

        entry = await archiver.maybe_archive((greeting,), user)

        assert entry is not None
        assert entry.messages == (greeting, user)
        assert entry.title.startswith("Chat ")
        assert archiver.archived
        assert await store.list_entries() == [entry]

    @pytest.mark.asyncio
    async def test_latch_blocks_second_archive(self):
        store = InMemoryHistoryStore()
        archiver = HistoryArchiver(store)
        greeting = bootstrap_turn()

        await archiver.maybe_archive((greeting,), Turn(id="u1", role=Role.USER, content="a"))
        again = await archiver.maybe_archive((greeting,), Turn(id="u2", role=Role.USER, content="b"))

        assert again is None
        assert len(await store.list_entries()) == 1

        archiver.reset()
        assert await archiver.maybe_archive((greeting,), Turn(id="u3", role=Role.USER, content="c"))

    @pytest.mark.asyncio
    async def test_ignores_conversation_that_is_not_fresh(self):
        archiver = HistoryArchiver(InMemoryHistoryStore())
        before = (bootstrap_turn(), Turn(id="u1", role=Role.USER, content="a"))

        assert await archiver.maybe_archive(before, Turn(id="u2", role=Role.USER, content="b")) is None
        assert not archiver.archived
