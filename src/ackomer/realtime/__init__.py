"""WebSocket rooms for session-scoped event delivery."""

from .rooms import RoomConnectionManager, get_connection_manager

__all__ = ["RoomConnectionManager", "get_connection_manager"]
