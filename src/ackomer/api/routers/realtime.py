"""WebSocket endpoint for session room subscriptions."""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ...realtime.rooms import RoomConnectionManager, get_connection_manager

router = APIRouter(tags=["realtime"])
logger = logging.getLogger("ackomer")


async def send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({"event": "error", "data": {"message": message}})


async def handle_client_message(
    manager: RoomConnectionManager, websocket: WebSocket, message: Dict[str, Any]
) -> None:
    event = message.get("event")
    session_id = message.get("sessionId")
    if not event or not session_id:
        await send_error(websocket, "event and sessionId are required")
        return
    if not isinstance(session_id, str):
        await send_error(websocket, "sessionId must be a string")
        return

    if event == "join-session":
        await manager.join(session_id, websocket)
        await websocket.send_json({"event": "joined-session", "data": {"sessionId": session_id}})
    elif event == "leave-session":
        await manager.leave(session_id, websocket)
    elif event == "transcription-update":
        payload = {k: v for k, v in message.items() if k != "event"}
        await manager.emit(session_id, "transcription-update", payload, exclude=websocket)
    else:
        await send_error(websocket, f"Unknown event: {event}")


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    manager = get_connection_manager()
    await manager.connect(websocket)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            text = frame.get("text")
            if text is None:
                await send_error(websocket, "Binary frames are not supported")
                continue
            try:
                message = json.loads(text)
            except ValueError:
                await send_error(websocket, "Invalid JSON")
                continue
            if not isinstance(message, dict):
                await send_error(websocket, "Expected an object")
                continue
            await handle_client_message(manager, websocket, message)
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(websocket)
