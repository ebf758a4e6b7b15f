"""Frame types, room names and the JSON envelope codec for the real-time channel.

Every frame is a JSON object ``{"type": str, "data": object?}`` sent as text.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class EventType(str, Enum):
    """Frame types exchanged over the real-time channel."""

    # Inbound
    JOIN_ROOM = "join_room"
    PING = "ping"
    AUTHENTICATE = "authenticate"

    # Outbound
    LEADERBOARD_UPDATE = "leaderboard_update"
    MARKET_UPDATE = "market_update"
    PRICE_UPDATE = "price_update"
    TASK_UPDATE = "task_update"
    USER_TASK_UPDATE = "user_task_update"
    USER_STATS_UPDATE = "user_stats_update"
    HEARTBEAT = "heartbeat"
    PONG = "pong"


class Room(str, Enum):
    LEADERBOARD = "leaderboard"
    MARKETS = "markets"
    TASKS = "tasks"
    USER_UPDATES = "user_updates"


class FrameError(ValueError):
    """Inbound frame could not be decoded into an envelope."""


def make_frame(event_type: Union[EventType, str], data: Any = None) -> Dict[str, Any]:
    frame: Dict[str, Any] = {"type": EventType(event_type).value}
    if data is not None:
        frame["data"] = data
    return frame


def encode_frame(frame: Mapping[str, Any]) -> str:
    return json.dumps(frame, separators=(",", ":"), default=str)


def decode_frame(raw: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    """Parse inbound JSON text (or an already-decoded mapping) into an envelope."""

    if isinstance(raw, Mapping):
        frame = dict(raw)
    else:
        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise FrameError("frame is not valid UTF-8") from exc
        if not isinstance(raw, str):
            raise FrameError(f"unsupported frame payload {type(raw).__name__}")
        try:
            frame = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise FrameError(f"frame is not valid JSON: {exc.msg}") from exc

    if not isinstance(frame, dict):
        raise FrameError("frame must be a JSON object")
    if not isinstance(frame.get("type"), str):
        raise FrameError("frame is missing a string type")
    return frame


def frame_data(frame: Mapping[str, Any]) -> Dict[str, Any]:
    data: Optional[Any] = frame.get("data")
    return data if isinstance(data, dict) else {}
