"""
WebSocket room membership and event fan-out.
"""

import pytest
from fastapi.testclient import TestClient

from ackomer.api.routers.realtime import handle_client_message
from ackomer.app import app
from ackomer.realtime.rooms import RoomConnectionManager, get_connection_manager


class FakeWebSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.accepted = False
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


@pytest.mark.asyncio
async def test_emit_reaches_only_room_members():
    manager = RoomConnectionManager()
    inside, outside = FakeWebSocket(), FakeWebSocket()
    for ws in (inside, outside):
        await manager.connect(ws)
    await manager.join("sess_1", inside)

    delivered = await manager.emit("sess_1", "transcription-completed", {"text": "hi"})
    assert delivered == 1
    assert inside.sent == [{"event": "transcription-completed", "data": {"text": "hi"}}]
    assert outside.sent == []


@pytest.mark.asyncio
async def test_emit_to_empty_room_is_zero():
    assert await RoomConnectionManager().emit("sess_none", "summary-completed", {}) == 0


@pytest.mark.asyncio
async def test_failed_connections_are_pruned():
    manager = RoomConnectionManager()
    good, broken = FakeWebSocket(), FakeWebSocket(fail=True)
    for ws in (good, broken):
        await manager.connect(ws)
        await manager.join("sess_1", ws)

    assert await manager.emit("sess_1", "summary-completed", {}) == 1
    assert manager.room_size("sess_1") == 1
    assert broken not in manager.active_connections


@pytest.mark.asyncio
async def test_leave_and_disconnect_drop_empty_rooms():
    manager = RoomConnectionManager()
    ws = FakeWebSocket()
    await manager.connect(ws)
    await manager.join("sess_1", ws)
    await manager.join("sess_2", ws)

    await manager.leave("sess_1", ws)
    assert "sess_1" not in manager.rooms
    await manager.disconnect(ws)
    assert manager.rooms == {}
    assert manager.active_connections == set()


@pytest.mark.asyncio
async def test_transcription_update_is_relayed_to_other_members():
    manager = RoomConnectionManager()
    sender, listener = FakeWebSocket(), FakeWebSocket()
    for ws in (sender, listener):
        await manager.connect(ws)
        await handle_client_message(manager, ws, {"event": "join-session", "sessionId": "sess_1"})

    await handle_client_message(
        manager, sender, {"event": "transcription-update", "sessionId": "sess_1", "text": "draft"}
    )
    assert sender.sent == [{"event": "joined-session", "data": {"sessionId": "sess_1"}}]
    assert listener.sent[-1] == {
        "event": "transcription-update",
        "data": {"sessionId": "sess_1", "text": "draft"},
    }


@pytest.mark.asyncio
async def test_malformed_client_messages_get_error_events():
    manager = RoomConnectionManager()
    ws = FakeWebSocket()
    await handle_client_message(manager, ws, {"event": "join-session"})
    await handle_client_message(manager, ws, {"event": "dance", "sessionId": "sess_1"})
    assert [m["event"] for m in ws.sent] == ["error", "error"]


def test_websocket_endpoint_join_round_trip():
    client = TestClient(app)
    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"event": "join-session", "sessionId": "sess_ws"})
        assert websocket.receive_json() == {"event": "joined-session", "data": {"sessionId": "sess_ws"}}
        websocket.send_text("not json")
        assert websocket.receive_json()["event"] == "error"


@pytest.mark.asyncio
async def test_non_string_session_id_is_rejected():
    manager = RoomConnectionManager()
    ws = FakeWebSocket()
    await handle_client_message(manager, ws, {"event": "join-session", "sessionId": ["sess_1"]})
    assert ws.sent == [{"event": "error", "data": {"message": "sessionId must be a string"}}]
    assert manager.rooms == {}


def test_websocket_binary_frame_gets_error_and_connection_is_released():
    manager = get_connection_manager()
    before = len(manager.active_connections)
    client = TestClient(app)
    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"event": "join-session", "sessionId": "sess_binary"})
        websocket.receive_json()
        websocket.send_bytes(b"\x00\x01")
        assert websocket.receive_json() == {
            "event": "error",
            "data": {"message": "Binary frames are not supported"},
        }
        websocket.send_json({"event": "join-session", "sessionId": 42})
        assert websocket.receive_json()["event"] == "error"
        assert manager.room_size("sess_binary") == 1

    assert len(manager.active_connections) == before
    assert manager.room_size("sess_binary") == 0
