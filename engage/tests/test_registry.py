"""Tests for the connection registry."""

from conftest import FakeConnection

from engage.realtime import ConnectionRegistry


def test_register_and_unregister_clears_room_membership():
    registry = ConnectionRegistry()
    registry.register(FakeConnection("a"))
    registry.join_room("a", "leaderboard")

    assert len(registry) == 1
    assert [entry.sid for entry in registry.members("leaderboard")] == ["a"]

    registry.unregister("a")
    assert "a" not in registry
    assert registry.members("leaderboard") == []


def test_register_is_idempotent_per_sid():
    registry = ConnectionRegistry()
    connection = FakeConnection("a")
    first = registry.register(connection)
    first.rooms.add("tasks")

    assert registry.register(connection) is first
    assert len(registry) == 1


def test_join_room_unknown_connection_is_refused():
    registry = ConnectionRegistry()
    assert registry.join_room("ghost", "markets") is False
    assert registry.members("markets") == []


def test_join_same_room_twice_keeps_single_membership():
    registry = ConnectionRegistry()
    registry.register(FakeConnection("a"))
    registry.join_room("a", "markets")
    registry.join_room("a", "markets")

    assert len(registry.members("markets")) == 1
    assert registry.rooms_of("a") == {"markets"}


def test_unregister_unknown_sid_is_noop():
    registry = ConnectionRegistry()
    assert registry.unregister("missing") is None


def test_user_identity_is_bound_once():
    registry = ConnectionRegistry()
    registry.register(FakeConnection("a"))

    assert registry.set_user_identity("a", "user-1") is True
    assert registry.set_user_identity("a", "user-1") is True
    assert registry.set_user_identity("a", "user-2") is False
    assert registry.get("a").user_id == "user-1"


def test_entries_for_user_spans_connections():
    registry = ConnectionRegistry()
    for sid in ("a", "b", "c"):
        registry.register(FakeConnection(sid))
    registry.set_user_identity("a", "user-1")
    registry.set_user_identity("c", "user-1")
    registry.set_user_identity("b", "user-2")

    assert sorted(entry.sid for entry in registry.entries_for_user("user-1")) == ["a", "c"]
