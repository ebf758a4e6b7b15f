"""Tests for connection lifecycle, heartbeats and periodic broadcasts."""

import pytest
from conftest import FakeConnection

from engage.realtime import ConnectionRegistry, LifecycleManager, PeriodicBroadcast, RoomBroadcaster


class ManualScheduler:
    """Captures spawned loops so tests can run them step by step."""

    def __init__(self):
        self.tasks = []
        self.sleeps = []
        self.on_sleep = None

    def spawn(self, fn, *args):
        self.tasks.append((fn, args))

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))

    def run_all(self):
        for fn, args in self.tasks:
            fn(*args)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def lifecycle(registry, scheduler):
    return LifecycleManager(
        registry,
        RoomBroadcaster(registry),
        heartbeat_interval=30,
        sleep=scheduler.sleep,
        spawn=scheduler.spawn,
        clock=lambda: "2025-01-01T00:00:00+00:00",
    )


def test_open_registers_and_starts_heartbeat(lifecycle, registry, scheduler):
    lifecycle.on_open(FakeConnection("a"))

    assert "a" in registry
    assert lifecycle.is_beating("a")
    assert len(scheduler.tasks) == 1


def test_heartbeat_runs_until_connection_closes(lifecycle, scheduler):
    connection = FakeConnection("a")
    lifecycle.on_open(connection)

    def close_on_fourth(count):
        if count == 4:
            connection.is_open = False

    scheduler.on_sleep = close_on_fourth
    scheduler.run_all()

    frames = connection.frames()
    assert len(frames) == 3
    assert frames[0] == {
        "type": "heartbeat",
        "data": {"timestamp": "2025-01-01T00:00:00+00:00", "connected_clients": 1},
    }
    assert scheduler.sleeps == [30, 30, 30, 30]
    assert not lifecycle.is_beating("a")


def test_close_cancels_heartbeat(lifecycle, registry, scheduler):
    connection = FakeConnection("a")
    lifecycle.on_open(connection)
    scheduler.on_sleep = lambda count: lifecycle.on_close("a")

    scheduler.run_all()

    assert connection.sent == []
    assert "a" not in registry
    assert not lifecycle.is_beating("a")


def test_error_unregisters_connection(lifecycle, registry):
    lifecycle.on_open(FakeConnection("a"))
    lifecycle.on_error("a", ConnectionResetError("reset"))

    assert "a" not in registry
    assert not lifecycle.is_beating("a")


def test_zero_interval_disables_heartbeat(registry, scheduler):
    lifecycle = LifecycleManager(
        registry, RoomBroadcaster(registry), heartbeat_interval=0, sleep=scheduler.sleep, spawn=scheduler.spawn
    )
    lifecycle.on_open(FakeConnection("a"))

    assert "a" in registry
    assert scheduler.tasks == []


def test_heartbeat_counts_all_connections(lifecycle, registry):
    lifecycle.on_open(FakeConnection("a"))
    lifecycle.on_open(FakeConnection("b"))

    assert lifecycle.heartbeat_frame()["data"]["connected_clients"] == 2


def test_periodic_broadcast_runs_action_until_stopped(scheduler):
    calls = []
    periodic = PeriodicBroadcast("leaderboard", 60, lambda: calls.append(1), scheduler.sleep, scheduler.spawn)

    def stop_on_third(count):
        if count == 3:
            periodic.stop()

    scheduler.on_sleep = stop_on_third

    assert periodic.start() is True
    assert periodic.start() is False
    scheduler.run_all()

    assert len(calls) == 2
    assert not periodic.running


def test_periodic_broadcast_survives_failing_action(scheduler):
    attempts = []

    def flaky():
        attempts.append(1)
        raise RuntimeError("boom")

    periodic = PeriodicBroadcast("leaderboard", 60, flaky, scheduler.sleep, scheduler.spawn)
    scheduler.on_sleep = lambda count: periodic.stop() if count == 3 else None

    periodic.start()
    scheduler.run_all()

    assert len(attempts) == 2


def test_periodic_broadcast_disabled_with_zero_interval(scheduler):
    periodic = PeriodicBroadcast("leaderboard", 0, lambda: None, scheduler.sleep, scheduler.spawn)

    assert periodic.start() is False
    assert scheduler.tasks == []
