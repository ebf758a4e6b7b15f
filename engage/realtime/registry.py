"""Registry of live real-time connections, their rooms and user identity.

A connection is any object exposing ``sid`` (a unique, hashable id),
``is_open`` (bool) and ``send(text)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

logger = logging.getLogger(__name__)


@dataclass
class ConnectionEntry:
    connection: Any
    rooms: Set[str] = field(default_factory=set)
    user_id: Optional[str] = None

    @property
    def sid(self) -> str:
        return self.connection.sid


class ConnectionRegistry:
    """Tracks live connections and indexes them by room."""

    def __init__(self) -> None:
        self._entries: Dict[str, ConnectionEntry] = {}
        self._room_index: Dict[str, Set[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, sid: str) -> bool:
        return sid in self._entries

    def __iter__(self) -> Iterator[ConnectionEntry]:
        return iter(list(self._entries.values()))

    def get(self, sid: str) -> Optional[ConnectionEntry]:
        return self._entries.get(sid)

    def register(self, connection) -> ConnectionEntry:
        entry = self._entries.get(connection.sid)
        if entry is None:
            entry = ConnectionEntry(connection=connection)
            self._entries[connection.sid] = entry
            logger.info("connection_registered sid=%s total=%d", connection.sid, len(self))
        return entry

    def unregister(self, sid: str) -> Optional[ConnectionEntry]:
        entry = self._entries.pop(sid, None)
        if entry is None:
            return None
        for room in entry.rooms:
            members = self._room_index.get(room)
            if members is not None:
                members.discard(sid)
                if not members:
                    del self._room_index[room]
        logger.info("connection_unregistered sid=%s total=%d", sid, len(self))
        return entry

    def join_room(self, sid: str, room: str) -> bool:
        """Add the connection to ``room``; returns False when the connection is unknown."""
        entry = self._entries.get(sid)
        if entry is None:
            return False
        entry.rooms.add(room)
        self._room_index.setdefault(room, set()).add(sid)
        logger.debug("connection_joined_room sid=%s room=%s", sid, room)
        return True

    def set_user_identity(self, sid: str, user_id: str) -> bool:
        """Bind a user id to the connection once; later rebinding is refused."""
        entry = self._entries.get(sid)
        if entry is None:
            return False
        if entry.user_id is not None and entry.user_id != user_id:
            logger.warning(
                "connection_identity_already_set sid=%s user_id=%s attempted=%s",
                sid,
                entry.user_id,
                user_id,
            )
            return False
        entry.user_id = user_id
        return True

    def members(self, room: str) -> List[ConnectionEntry]:
        return [
            self._entries[sid]
            for sid in list(self._room_index.get(room, ()))
            if sid in self._entries
        ]

    def entries_for_user(self, user_id: str) -> List[ConnectionEntry]:
        return [entry for entry in self if entry.user_id == user_id]

    def rooms_of(self, sid: str) -> Set[str]:
        entry = self._entries.get(sid)
        return set(entry.rooms) if entry is not None else set()
