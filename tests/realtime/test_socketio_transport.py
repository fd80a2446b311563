"""Unit tests for src/realtime/socketio_transport.py (no network: the AsyncServer is replaced by a recorder)."""

import asyncio
from typing import Any

import pytest

from src.realtime.gateway import RealtimeGateway
from src.realtime.socketio_transport import SocketIOTransport
from src.services.room_service import RoomService


class RecordingServer:
    """Mock the parts of socketio.AsyncServer the transport uses."""

    def __init__(self) -> None:
        self.handlers: dict[str, Any] = {}
        self.calls: list[tuple] = []

    def on(self, event: str, handler: Any = None) -> None:
        self.handlers[event] = handler

    async def emit(self, event: str, data: Any = None, to: str | None = None, room: str | None = None) -> None:
        self.calls.append(("emit", event, to or room, data))

    async def enter_room(self, sid: str, room: str) -> None:
        self.calls.append(("enter", sid, room))

    async def leave_room(self, sid: str, room: str) -> None:
        self.calls.append(("leave", sid, room))

    def trigger(self, event: str, *args: Any) -> None:
        asyncio.run(self.handlers[event](*args))


@pytest.fixture
def server(gateway: RealtimeGateway) -> RecordingServer:
    sio = RecordingServer()
    SocketIOTransport(sio, gateway).register()  # type: ignore[arg-type]
    return sio


def test_registers_every_event(server: RecordingServer, gateway: RealtimeGateway) -> None:
    expected = {"connect", "disconnect"} | {str(event) for event in gateway.inbound_events}
    assert set(server.handlers) == expected


def test_join_enters_channel_before_emitting(server: RecordingServer, service: RoomService) -> None:
    service.create_room("Test Room", room_id="ROOM01")
    server.trigger("room:join", "sid-1", {"roomId": "ROOM01", "playerName": "Alice"})

    assert [call[:3] for call in server.calls] == [
        ("enter", "sid-1", "ROOM01"),
        ("emit", "room:joined", "sid-1"),
        ("emit", "room:updated", "ROOM01"),
    ]


def test_errors_are_emitted_to_sender(server: RecordingServer) -> None:
    server.trigger("room:get", "sid-1", {"roomId": "NOPE00"})
    assert server.calls == [("emit", "error", "sid-1", {"message": "Room NOPE00 not found"})]


def test_list_without_payload(server: RecordingServer) -> None:
    server.trigger("room:list", "sid-1")
    assert server.calls == [("emit", "room:list", "sid-1", {"rooms": []})]


def test_disconnect_broadcasts_to_remaining_player(server: RecordingServer, service: RoomService) -> None:
    service.create_room("Test Room", room_id="ROOM01")
    server.trigger("room:join", "sid-1", {"roomId": "ROOM01", "playerName": "Alice"})
    server.trigger("room:join", "sid-2", {"roomId": "ROOM01", "playerName": "Bob"})
    server.calls.clear()

    server.trigger("disconnect", "sid-2", "client disconnect")

    assert [call[:3] for call in server.calls] == [
        ("emit", "room:updated", "ROOM01"),
        ("emit", "player:disconnected", "ROOM01"),
    ]
    assert server.calls[1][3] == {"playerId": "sid-2"}


def test_connect_is_accepted(server: RecordingServer) -> None:
    server.trigger("connect", "sid-1", {})
    assert server.calls == []


class YieldingServer(RecordingServer):
    """Every network call gives the event loop a chance to run something else."""

    async def emit(self, event: str, data: Any = None, to: str | None = None, room: str | None = None) -> None:
        await asyncio.sleep(0)
        await super().emit(event, data, to=to, room=room)

    async def enter_room(self, sid: str, room: str) -> None:
        await asyncio.sleep(0)
        await super().enter_room(sid, room)


def test_concurrent_events_are_emitted_in_completion_order(service: RoomService, gateway: RealtimeGateway) -> None:
    service.create_room("Test Room", room_id="ROOM01")
    sio = YieldingServer()
    transport = SocketIOTransport(sio, gateway)  # type: ignore[arg-type]

    async def both_join() -> None:
        await asyncio.gather(
            transport.dispatch("sid-1", "room:join", {"roomId": "ROOM01", "playerName": "Alice"}),
            transport.dispatch("sid-2", "room:join", {"roomId": "ROOM01", "playerName": "Bob"}),
        )

    asyncio.run(both_join())

    assert [call[:3] for call in sio.calls] == [
        ("enter", "sid-1", "ROOM01"),
        ("emit", "room:joined", "sid-1"),
        ("emit", "room:updated", "ROOM01"),
        ("enter", "sid-2", "ROOM01"),
        ("emit", "room:joined", "sid-2"),
        ("emit", "room:updated", "ROOM01"),
    ]
    # the first update still shows one player, the second one the full room
    first_update, second_update = sio.calls[2][3]["room"], sio.calls[5][3]["room"]
    assert len(first_update["players"]) == 1
    assert second_update["status"] == "playing"
