"""Connection lifecycle: registration, per-connection heartbeat and periodic broadcasts.

Loops run as background tasks of the Socket.IO server so they cooperate with
eventlet; ``sleep`` and ``spawn`` are injected for that reason.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from engage.database import utc_now_iso
from engage.realtime.broadcaster import RoomBroadcaster
from engage.realtime.events import EventType, make_frame
from engage.realtime.registry import ConnectionEntry, ConnectionRegistry

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Any]
Spawn = Callable[..., Any]


class LifecycleManager:
    """Registers connections on open and runs their heartbeat until close."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        broadcaster: RoomBroadcaster,
        heartbeat_interval: float,
        sleep: Sleep,
        spawn: Spawn,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._registry = registry
        self._broadcaster = broadcaster
        self.heartbeat_interval = heartbeat_interval
        self._sleep = sleep
        self._spawn = spawn
        self._clock = clock
        # sid -> token of the heartbeat loop allowed to run for it
        self._timers: Dict[str, object] = {}

    def on_open(self, connection) -> ConnectionEntry:
        entry = self._registry.register(connection)
        if self.heartbeat_interval > 0 and connection.sid not in self._timers:
            token = object()
            self._timers[connection.sid] = token
            self._spawn(self._heartbeat_loop, connection.sid, token)
        return entry

    def on_close(self, sid: str) -> None:
        self._timers.pop(sid, None)
        if self._registry.unregister(sid) is not None:
            logger.info("client_disconnected sid=%s", sid)

    def on_error(self, sid: str, error: object = None) -> None:
        logger.warning("connection_error sid=%s error=%s", sid, error)
        self.on_close(sid)

    def is_beating(self, sid: str) -> bool:
        return sid in self._timers

    def heartbeat_frame(self) -> Dict[str, Any]:
        return make_frame(
            EventType.HEARTBEAT,
            {"timestamp": self._clock(), "connected_clients": len(self._registry)},
        )

    def _heartbeat_loop(self, sid: str, token: object) -> None:
        while True:
            self._sleep(self.heartbeat_interval)
            if self._timers.get(sid) is not token:
                return
            entry = self._registry.get(sid)
            if entry is None or not entry.connection.is_open:
                self._timers.pop(sid, None)
                logger.debug("heartbeat_stopped sid=%s", sid)
                return
            self._broadcaster.send(entry, self.heartbeat_frame())


class PeriodicBroadcast:
    """Runs ``action`` every ``interval`` seconds until stopped; errors are logged."""

    def __init__(
        self,
        name: str,
        interval: float,
        action: Callable[[], Any],
        sleep: Sleep,
        spawn: Spawn,
    ) -> None:
        self.name = name
        self.interval = interval
        self._action = action
        self._sleep = sleep
        self._spawn = spawn
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> bool:
        if self.interval <= 0 or self._running:
            return False
        self._running = True
        self._spawn(self._run)
        logger.info("periodic_broadcast_started name=%s interval=%s", self.name, self.interval)
        return True

    def stop(self) -> None:
        self._running = False

    def _run(self) -> None:
        while self._running:
            self._sleep(self.interval)
            if not self._running:
                break
            try:
                self._action()
            except Exception as exc:
                logger.error("periodic_broadcast_failed name=%s error=%s", self.name, exc, exc_info=True)
