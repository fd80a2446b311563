"""Socket.IO binding for the RealtimeGateway."""

import asyncio
import logging
from typing import Any

import socketio

from src.realtime.gateway import Action, Broadcast, EnterChannel, LeaveChannel, RealtimeGateway, Reply

logger = logging.getLogger(__name__)


class SocketIOTransport:
    """
    Wires gateway handlers onto a python-socketio AsyncServer.
    ----

    All events are handled one at a time, including the emits they trigger. Emitting awaits the network, so without
    the lock a second event could slip in between a state change and its broadcasts and reorder a room's updates.
    """

    def __init__(self, sio: socketio.AsyncServer, gateway: RealtimeGateway) -> None:
        self.sio = sio
        self.gateway = gateway
        self._lock = asyncio.Lock()

    def register(self) -> None:
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        for event in self.gateway.inbound_events:
            self.sio.on(str(event), self._make_handler(str(event)))

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        logger.info("Client connected: %s", sid)

    async def on_disconnect(self, sid: str, *args: Any) -> None:
        async with self._lock:
            await self.apply(self.gateway.disconnect(sid))

    async def dispatch(self, sid: str, event: str, data: Any = None) -> None:
        async with self._lock:
            await self.apply(self.gateway.handle(sid, event, data))

    async def apply(self, actions: list[Action]) -> None:
        for action in actions:
            match action:
                case Reply(connection_id=sid, event=event, data=data):
                    await self.sio.emit(str(event), data, to=sid)
                case Broadcast(channel=channel, event=event, data=data):
                    await self.sio.emit(str(event), data, room=channel)
                case EnterChannel(connection_id=sid, channel=channel):
                    await self.sio.enter_room(sid, channel)
                case LeaveChannel(connection_id=sid, channel=channel):
                    await self.sio.leave_room(sid, channel)

    def _make_handler(self, event: str):
        async def handler(sid: str, data: Any = None) -> None:
            await self.dispatch(sid, event, data)

        return handler
