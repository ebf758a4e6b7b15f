"""Room and user fan-out over the connection registry."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from engage.realtime.events import encode_frame
from engage.realtime.registry import ConnectionEntry, ConnectionRegistry

logger = logging.getLogger(__name__)


class RoomBroadcaster:
    """Delivers a frame at most once to each matching open connection."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def broadcast_to_room(self, room: str, message: Mapping[str, Any]) -> int:
        delivered = self._deliver(self._registry.members(room), encode_frame(message))
        logger.debug(
            "room_broadcast room=%s type=%s delivered=%d", room, message.get("type"), delivered
        )
        return delivered

    def broadcast_to_user(self, user_id: str, message: Mapping[str, Any]) -> int:
        delivered = self._deliver(
            self._registry.entries_for_user(user_id), encode_frame(message)
        )
        logger.debug(
            "user_broadcast user_id=%s type=%s delivered=%d",
            user_id,
            message.get("type"),
            delivered,
        )
        return delivered

    def send(self, entry: ConnectionEntry, message: Mapping[str, Any]) -> bool:
        """Send a frame to a single connection if it is open."""
        return self._deliver([entry], encode_frame(message)) == 1

    @staticmethod
    def _deliver(entries: Iterable[ConnectionEntry], text: str) -> int:
        delivered = 0
        for entry in entries:
            connection = entry.connection
            if not connection.is_open:
                continue
            try:
                connection.send(text)
            except Exception as exc:  # transport failures skip the target only
                logger.debug("broadcast_send_failed sid=%s error=%s", entry.sid, exc)
                continue
            delivered += 1
        return delivered
