"""Builds snapshot frames and pushes domain changes to rooms and users."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from engage.realtime.broadcaster import RoomBroadcaster
from engage.realtime.events import EventType, Room, make_frame
from engage.repositories import MarketRepository, TaskRepository, UserRepository, UserTaskRepository

logger = logging.getLogger(__name__)


class EventPublisher:
    """Single place that knows which frame goes to which room or user."""

    def __init__(
        self,
        broadcaster: RoomBroadcaster,
        user_repository: UserRepository,
        market_repository: MarketRepository,
        task_repository: TaskRepository,
        user_task_repository: UserTaskRepository,
        leaderboard_limit: int = 100,
    ) -> None:
        self.broadcaster = broadcaster
        self.user_repository = user_repository
        self.market_repository = market_repository
        self.task_repository = task_repository
        self.user_task_repository = user_task_repository
        self.leaderboard_limit = leaderboard_limit

    # Snapshots
    def leaderboard_snapshot(self) -> List[Dict[str, Any]]:
        return [
            UserRepository.leaderboard_entry(user)
            for user in self.user_repository.get_leaderboard(self.leaderboard_limit)
        ]

    def leaderboard_frame(self) -> Dict[str, Any]:
        return make_frame(EventType.LEADERBOARD_UPDATE, self.leaderboard_snapshot())

    def markets_frame(self) -> Dict[str, Any]:
        return make_frame(EventType.MARKET_UPDATE, self.market_repository.list_markets())

    def tasks_frame(self) -> Dict[str, Any]:
        return make_frame(EventType.TASK_UPDATE, self.task_repository.list_active_tasks())

    def snapshot_for_room(self, room: str):
        """Return the initial frame for a recognised room, or None."""
        builders = {
            Room.LEADERBOARD.value: self.leaderboard_frame,
            Room.MARKETS.value: self.markets_frame,
            Room.TASKS.value: self.tasks_frame,
        }
        builder = builders.get(room)
        return builder() if builder else None

    # Room broadcasts
    def leaderboard_changed(self) -> int:
        return self.broadcaster.broadcast_to_room(Room.LEADERBOARD.value, self.leaderboard_frame())

    def markets_changed(self) -> int:
        return self.broadcaster.broadcast_to_room(Room.MARKETS.value, self.markets_frame())

    def market_price_changed(self, market: Mapping[str, Any]) -> int:
        frame = make_frame(
            EventType.PRICE_UPDATE,
            {
                "market_id": market["id"],
                "total_pool": market["total_pool"],
                "yes_percentage": market["yes_percentage"],
                "no_percentage": market["no_percentage"],
                "participant_count": market["participant_count"],
            },
        )
        return self.broadcaster.broadcast_to_room(Room.MARKETS.value, frame)

    def tasks_changed(self) -> int:
        return self.broadcaster.broadcast_to_room(Room.TASKS.value, self.tasks_frame())

    # User-targeted broadcasts
    def user_tasks_changed(self, user_id: str) -> int:
        frame = make_frame(
            EventType.USER_TASK_UPDATE, self.user_task_repository.get_user_tasks(user_id)
        )
        return self.broadcaster.broadcast_to_user(user_id, frame)

    def user_stats_changed(self, user: Mapping[str, Any], fields) -> int:
        data = {"id": user["id"]}
        data.update({name: user.get(name) for name in fields})
        return self.broadcaster.broadcast_to_user(
            user["id"], make_frame(EventType.USER_STATS_UPDATE, data)
        )
