"""Room-based real-time fan-out.

Connection registry -> room broadcaster -> message router, with the lifecycle
manager driving heartbeats and the event publisher turning domain changes into
frames.
"""

from engage.realtime.broadcaster import RoomBroadcaster
from engage.realtime.events import EventType, Room, decode_frame, encode_frame, make_frame
from engage.realtime.hub import RealtimeHub, build_realtime_hub
from engage.realtime.lifecycle import LifecycleManager, PeriodicBroadcast
from engage.realtime.publisher import EventPublisher
from engage.realtime.registry import ConnectionEntry, ConnectionRegistry
from engage.realtime.router import MessageRouter

__all__ = [
    "ConnectionEntry",
    "ConnectionRegistry",
    "EventPublisher",
    "EventType",
    "LifecycleManager",
    "MessageRouter",
    "PeriodicBroadcast",
    "RealtimeHub",
    "Room",
    "RoomBroadcaster",
    "build_realtime_hub",
    "decode_frame",
    "encode_frame",
    "make_frame",
]
