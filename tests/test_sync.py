"""Tests for the sync bridge."""

from unittest.mock import MagicMock

import pytest

from evermind.adapters.json_cache import JsonFileCache
from evermind.adapters.offline import AnonymousIdentity, NullRemoteStore
from evermind.core.assignments import to_document
from evermind.core.store import AssignmentStore
from evermind.ports.identity import User
from evermind.ports.remote_store import SyncError
from evermind.sync import SyncBridge


class FakeCache:
    def __init__(self, items=None):
        self.items = items
        self.writes = []

    def read(self):
        return self.items

    def write(self, assignments):
        self.items = list(assignments)
        self.writes.append(list(assignments))


@pytest.fixture
def user():
    return User(id="u1", name="Ada", email="ada@example.com")


@pytest.fixture
def identity(user):
    ident = MagicMock()
    ident.current_user.return_value = user
    return ident


@pytest.fixture
def remote():
    r = MagicMock()
    r.load.return_value = None
    return r


def make_bridge(identity, remote, cache, messages=None):
    store = AssignmentStore()
    on_message = messages.append if messages is not None else None
    return store, SyncBridge(store, identity, remote, cache, on_message=on_message)


def add_one(store):
    return store.add(title="Essay", course="ENG101", due_date="2025-03-10", priority="high")


class TestStartSession:
    def test_remote_replaces_local(self, identity, remote, make_assignment):
        cached = [make_assignment(id="old")]
        fresh = [make_assignment(id="r1"), make_assignment(id="r2")]
        remote.load.return_value = to_document(fresh)
        cache = FakeCache(cached)
        store, bridge = make_bridge(identity, remote, cache)

        result = bridge.start_session()

        assert result.source == "remote"
        assert result.user.id == "u1"
        assert [a.id for a in store] == ["r1", "r2"]
        assert [a.id for a in cache.items] == ["r1", "r2"]
        remote.load.assert_called_once_with("u1")
        remote.save.assert_not_called()

    def test_load_failure_keeps_cache_silently(self, identity, remote, make_assignment):
        remote.load.side_effect = SyncError("down")
        messages = []
        store, bridge = make_bridge(identity, remote, FakeCache([make_assignment(id="c1")]), messages)

        result = bridge.start_session()

        assert result.source == "cache"
        assert [a.id for a in store] == ["c1"]
        assert messages == []
        assert store.loaded is True

    def test_malformed_remote_document_ignored(self, identity, remote, make_assignment):
        remote.load.return_value = {"events": "nope"}
        store, bridge = make_bridge(identity, remote, FakeCache([make_assignment(id="c1")]))
        assert bridge.start_session().source == "cache"
        assert [a.id for a in store] == ["c1"]

    def test_not_found_keeps_cache(self, identity, remote, make_assignment):
        store, bridge = make_bridge(identity, remote, FakeCache([make_assignment(id="c1")]))
        assert bridge.start_session().source == "cache"

    def test_unauthenticated_skips_remote(self, identity, remote):
        identity.current_user.return_value = None
        store, bridge = make_bridge(identity, remote, FakeCache())
        result = bridge.start_session()
        assert result.user is None
        assert result.source == "empty"
        assert store.loaded is True
        remote.load.assert_not_called()

    def test_unreadable_cache_starts_empty(self, tmp_path):
        cache_path = tmp_path / "assignments.json"
        cache_path.mkdir()
        store = AssignmentStore()
        bridge = SyncBridge(store, AnonymousIdentity(), NullRemoteStore(), JsonFileCache(cache_path))

        result = bridge.start_session()

        assert result.source == "empty"
        assert store.loaded is True
        assert len(store) == 0


class TestPushOnMutation:
    def test_add_pushes_full_snapshot(self, identity, remote, make_assignment):
        remote.load.return_value = to_document([make_assignment(id="r1")])
        cache = FakeCache()
        store, bridge = make_bridge(identity, remote, cache)
        bridge.start_session()

        added = add_one(store)

        remote.save.assert_called_once()
        user_id, document = remote.save.call_args.args
        assert user_id == "u1"
        assert [e["id"] for e in document["events"]] == ["r1", added.id]
        assert [a.id for a in cache.items] == ["r1", added.id]

    def test_every_mutation_pushes(self, identity, remote):
        store, bridge = make_bridge(identity, remote, FakeCache())
        bridge.start_session()
        a = add_one(store)
        store.toggle_complete(a.id)
        store.delete(a.id)
        assert remote.save.call_count == 3
        assert remote.save.call_args.args[1] == {"events": []}

    def test_noop_mutation_does_not_push(self, identity, remote):
        store, bridge = make_bridge(identity, remote, FakeCache())
        bridge.start_session()
        store.toggle_complete("missing")
        remote.save.assert_not_called()

    def test_push_failure_keeps_local_change(self, identity, remote):
        remote.save.side_effect = SyncError("Failed to sync events: boom")
        messages = []
        cache = FakeCache()
        store, bridge = make_bridge(identity, remote, cache, messages)
        bridge.start_session()

        a = add_one(store)

        assert store.get(a.id) is not None
        assert [x.id for x in cache.items] == [a.id]
        assert messages == ["Failed to sync events: boom"]

    def test_offline_writes_cache_only(self, identity, remote):
        identity.current_user.return_value = None
        cache = FakeCache()
        store, bridge = make_bridge(identity, remote, cache)
        bridge.start_session()
        add_one(store)
        assert len(cache.writes) == 1
        remote.save.assert_not_called()

    def test_cache_write_failure_does_not_block_push(self, identity, remote):
        cache = MagicMock()
        cache.read.return_value = None
        cache.write.side_effect = OSError("disk full")
        store, bridge = make_bridge(identity, remote, cache)
        bridge.start_session()
        add_one(store)
        remote.save.assert_called_once()

    def test_explicit_push(self, identity, remote):
        store, bridge = make_bridge(identity, remote, FakeCache())
        bridge.start_session()
        assert bridge.push() is True
        remote.save.assert_called_once_with("u1", {"events": []})
