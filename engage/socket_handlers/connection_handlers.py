"""Socket.IO handlers binding client connections to the real-time hub.

Every client frame travels as a JSON text payload on the Socket.IO
``message`` event in both directions.
"""

import logging

from flask import request

logger = logging.getLogger(__name__)

NAMESPACE = "/"


class SocketIOConnection:
    """Adapter giving a Socket.IO session the connection interface of the registry."""

    def __init__(self, socketio, sid):
        self._socketio = socketio
        self.sid = sid

    @property
    def is_open(self) -> bool:
        return self._socketio.server.manager.is_connected(self.sid, NAMESPACE)

    def send(self, text: str) -> None:
        self._socketio.send(text, to=self.sid, namespace=NAMESPACE)

    def __repr__(self):
        return f"SocketIOConnection(sid={self.sid!r})"


def register_handlers(socketio, hub):
    """Register connection lifecycle and frame handlers."""

    @socketio.on("connect")
    def handle_connect(auth=None):
        sid = request.sid
        hub.lifecycle.on_open(SocketIOConnection(socketio, sid))
        logger.info("client_connected sid=%s total=%d", sid, len(hub.registry))

    @socketio.on("message")
    def handle_message(data):
        hub.router.handle(request.sid, data)

    @socketio.on("disconnect")
    def handle_disconnect(*args):
        # newer servers pass the disconnect reason
        reason = str(args[0]) if args else ""
        if "error" in reason:
            hub.lifecycle.on_error(request.sid, reason)
        else:
            hub.lifecycle.on_close(request.sid)

    @socketio.on_error_default
    def handle_error(e):
        logger.error("socket_handler_error sid=%s error=%s", request.sid, e, exc_info=True)
