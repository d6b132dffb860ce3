"""
WebSocket room management.

Clients join a room named by a session id; background jobs publish
transcription and summary events to that room.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from fastapi import WebSocket

from ackomer.application.ports.services.event_publisher import EventPublisher

logger = logging.getLogger("ackomer")


class RoomConnectionManager(EventPublisher):
    """Tracks open WebSockets and the rooms each one has joined."""

    def __init__(self) -> None:
        self.active_connections: Set[WebSocket] = set()
        self.rooms: Dict[str, Set[WebSocket]] = {}
        self.lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self.lock:
            self.active_connections.add(websocket)
        logger.info(f"WebSocket connected: {len(self.active_connections)} active connections")

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self.lock:
            self._forget(websocket)
        logger.info(f"WebSocket disconnected: {len(self.active_connections)} active connections")

    def _forget(self, websocket: WebSocket) -> None:
        self.active_connections.discard(websocket)
        for room in list(self.rooms):
            members = self.rooms[room]
            members.discard(websocket)
            if not members:
                del self.rooms[room]

    async def join(self, room: str, websocket: WebSocket) -> None:
        async with self.lock:
            self.rooms.setdefault(room, set()).add(websocket)
        logger.info(f"Client joined session room: {room}")

    async def leave(self, room: str, websocket: WebSocket) -> None:
        async with self.lock:
            members = self.rooms.get(room)
            if members is not None:
                members.discard(websocket)
                if not members:
                    del self.rooms[room]
        logger.info(f"Client left session room: {room}")

    def room_size(self, room: str) -> int:
        return len(self.rooms.get(room, ()))

    async def emit(
        self,
        room: str,
        event: str,
        data: Dict[str, Any],
        exclude: Optional[WebSocket] = None,
    ) -> int:
        async with self.lock:
            targets = [ws for ws in self.rooms.get(room, ()) if ws is not exclude]

        if not targets:
            return 0

        message = {"event": event, "data": data}
        failed: List[WebSocket] = []
        delivered = 0
        for connection in targets:
            try:
                await connection.send_json(message)
                delivered += 1
            except Exception as exc:  # noqa: BLE001
                logger.error(f"WebSocket send failed in room {room}: {exc}")
                failed.append(connection)

        if failed:
            async with self.lock:
                for connection in failed:
                    self._forget(connection)
        return delivered


_manager: Optional[RoomConnectionManager] = None


def get_connection_manager() -> RoomConnectionManager:
    global _manager
    if _manager is None:
        _manager = RoomConnectionManager()
    return _manager
