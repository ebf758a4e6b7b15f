"""Wiring of the real-time components into one injected service object."""

from __future__ import annotations

from dataclasses import dataclass

from engage.realtime.broadcaster import RoomBroadcaster
from engage.realtime.lifecycle import LifecycleManager, PeriodicBroadcast, Sleep, Spawn
from engage.realtime.publisher import EventPublisher
from engage.realtime.registry import ConnectionRegistry
from engage.realtime.router import MessageRouter


@dataclass
class RealtimeHub:
    registry: ConnectionRegistry
    broadcaster: RoomBroadcaster
    publisher: EventPublisher
    router: MessageRouter
    lifecycle: LifecycleManager
    leaderboard_refresh: PeriodicBroadcast


def build_realtime_hub(
    repositories,
    token_service,
    sleep: Sleep,
    spawn: Spawn,
    heartbeat_interval: float = 30,
    leaderboard_interval: float = 60,
    leaderboard_limit: int = 100,
) -> RealtimeHub:
    """Construct the hub; ``repositories`` needs users, markets, tasks and user_tasks."""

    registry = ConnectionRegistry()
    broadcaster = RoomBroadcaster(registry)
    publisher = EventPublisher(
        broadcaster,
        user_repository=repositories.users,
        market_repository=repositories.markets,
        task_repository=repositories.tasks,
        user_task_repository=repositories.user_tasks,
        leaderboard_limit=leaderboard_limit,
    )
    router = MessageRouter(registry, broadcaster, publisher, token_service)
    lifecycle = LifecycleManager(
        registry, broadcaster, heartbeat_interval=heartbeat_interval, sleep=sleep, spawn=spawn
    )
    leaderboard_refresh = PeriodicBroadcast(
        "leaderboard",
        leaderboard_interval,
        publisher.leaderboard_changed,
        sleep=sleep,
        spawn=spawn,
    )
    return RealtimeHub(
        registry=registry,
        broadcaster=broadcaster,
        publisher=publisher,
        router=router,
        lifecycle=lifecycle,
        leaderboard_refresh=leaderboard_refresh,
    )
