"""Dispatches inbound frames on a connection to join/ping/authenticate handlers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from engage.realtime.broadcaster import RoomBroadcaster
from engage.realtime.events import EventType, FrameError, decode_frame, frame_data, make_frame
from engage.realtime.publisher import EventPublisher
from engage.realtime.registry import ConnectionEntry, ConnectionRegistry

logger = logging.getLogger(__name__)


class MessageRouter:
    """Per-frame dispatcher; only the registry entry carries state between frames."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        broadcaster: RoomBroadcaster,
        publisher: EventPublisher,
        token_service,
    ) -> None:
        self._registry = registry
        self._broadcaster = broadcaster
        self._publisher = publisher
        self._token_service = token_service
        self._handlers: Dict[str, Callable[[ConnectionEntry, Dict[str, Any]], None]] = {
            EventType.JOIN_ROOM.value: self._handle_join_room,
            EventType.PING.value: self._handle_ping,
            EventType.AUTHENTICATE.value: self._handle_authenticate,
        }

    def handle(self, sid: str, raw) -> None:
        """Process one inbound frame. Never raises."""
        entry = self._registry.get(sid)
        if entry is None:
            logger.warning("frame_from_unregistered_connection sid=%s", sid)
            return

        try:
            frame = decode_frame(raw)
            handler = self._handlers.get(frame["type"])
            if handler is None:
                logger.warning("unknown_frame_type sid=%s type=%s", sid, frame["type"])
                return
            handler(entry, frame)
        except FrameError as exc:
            logger.warning("malformed_frame sid=%s error=%s", sid, exc)
        except Exception as exc:
            logger.error("frame_handler_failed sid=%s error=%s", sid, exc, exc_info=True)

    def _handle_join_room(self, entry: ConnectionEntry, frame: Mapping[str, Any]) -> None:
        room = frame_data(frame).get("room")
        if not isinstance(room, str) or not room:
            logger.warning("join_room_missing_room sid=%s", entry.sid)
            return

        self._registry.join_room(entry.sid, room)
        logger.info("client_joined_room sid=%s room=%s", entry.sid, room)

        snapshot = self._publisher.snapshot_for_room(room)
        if snapshot is not None:
            self._broadcaster.send(entry, snapshot)

    def _handle_ping(self, entry: ConnectionEntry, frame: Mapping[str, Any]) -> None:
        self._broadcaster.send(entry, make_frame(EventType.PONG))

    def _handle_authenticate(self, entry: ConnectionEntry, frame: Mapping[str, Any]) -> None:
        # older clients put the token next to the type instead of under data
        token = frame_data(frame).get("token") or frame.get("token")
        if not token:
            logger.warning("authenticate_missing_token sid=%s", entry.sid)
            return

        try:
            claims = self._token_service.decode(token)
        except Exception as exc:  # jwt raises many subclasses
            logger.warning("socket_auth_failed reason=invalid_token sid=%s error=%s", entry.sid, exc)
            return

        user_id = self._token_service.user_id_from_claims(claims)
        if not user_id:
            logger.warning("socket_auth_failed reason=no_user_claim sid=%s", entry.sid)
            return

        if self._registry.set_user_identity(entry.sid, user_id):
            logger.info("client_authenticated sid=%s user_id=%s", entry.sid, user_id)
