"""Unit tests for the message log."""
from datetime import timedelta

import pytest

from rebound.chat import MessageLog
from rebound.models import GREETING, Role, Turn, bootstrap_turn


class TestMessageLog:
    """Tests for MessageLog."""

    def test_starts_with_greeting(self):
        log = MessageLog()

        assert len(log) == 1
        assert log.last.role == Role.ASSISTANT
        assert log.last.content == GREETING
        assert log.is_fresh

    def test_append_assigns_missing_id(self):
        log = MessageLog()
        stored = log.append(Turn(role=Role.USER, content="hi"))

        assert stored.id is not None
        assert log.last == stored

    def test_append_replaces_duplicate_id(self):
        log = MessageLog()
        first = log.append(Turn(id="abc", role=Role.USER, content="one"))
        second = log.append(Turn(id="abc", role=Role.ASSISTANT, content="two"))

        assert first.id == "abc"
        assert second.id != "abc"
        assert len({turn.id for turn in log.snapshot()}) == 3

    def test_append_rejects_empty_content(self):
        log = MessageLog()
        with pytest.raises(ValueError, match="empty"):
            log.append(Turn(role=Role.USER, content=""))
        assert len(log) == 1

    def test_strict_mode_rejects_earlier_timestamp(self):
        log = MessageLog(strict=True)
        earlier = log.last.timestamp - timedelta(seconds=5)

        with pytest.raises(ValueError, match="earlier"):
            log.append(Turn(role=Role.USER, content="late", timestamp=earlier))

    def test_lenient_mode_clamps_earlier_timestamp(self):
        log = MessageLog()
        last = log.last.timestamp
        stored = log.append(
            Turn(role=Role.USER, content="late", timestamp=last - timedelta(seconds=5))
        )

        assert stored.timestamp == last

    def test_snapshot_is_not_affected_by_later_appends(self):
        log = MessageLog()
        snapshot = log.snapshot()
        log.append(Turn(role=Role.USER, content="hi"))

        assert len(snapshot) == 1
        assert isinstance(snapshot, tuple)

    def test_replace_all_resets_to_single_turn(self):
        log = MessageLog()
        log.append(Turn(role=Role.USER, content="hi"))
        log.replace_all(bootstrap_turn())

        assert len(log) == 1
        assert log.is_fresh

    def test_load_replaces_contents(self):
        log = MessageLog(strict=True)
        greeting = bootstrap_turn()
        user = Turn(id="u1", role=Role.USER, content="earlier question")
        log.load([greeting, user])

        assert log.snapshot() == (greeting, user)
        assert not log.is_fresh

    def test_load_rejects_empty(self):
        log = MessageLog()
        with pytest.raises(ValueError):
            log.load([])

    def test_user_only_log_is_not_fresh(self):
        log = MessageLog(bootstrap=Turn(role=Role.USER, content="hi"))
        assert not log.is_fresh
