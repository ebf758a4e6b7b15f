"""Socket.IO event handlers for the real-time channel."""

from engage.socket_handlers.connection_handlers import SocketIOConnection, register_handlers

__all__ = ["SocketIOConnection", "register_handlers"]
