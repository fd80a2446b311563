"""
Realtime Gateway.

Translates inbound client intents into RoomService calls, and decides who hears about the result.
The gateway does not talk to a socket itself: `handle` returns an ordered list of actions (reply to the sender,
broadcast to a room channel, enter/leave a channel) which the transport binding carries out in that order.
A room's channel name is its room id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from src.api.models import room_to_wire
from src.core.exceptions import GameError, InvalidRequestError, RoomNotFoundError
from src.core.shared_types import GameStatus
from src.realtime.connection_index import ConnectionIndex
from src.realtime.events import (
    CreateRoomPayload,
    EmptyPayload,
    InboundEvent,
    JoinRoomPayload,
    MovePayload,
    OutboundEvent,
    ReadyPayload,
    RoomPayload,
)
from src.services.room_service import RoomService

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


# --- Actions for the transport ---
@dataclass(frozen=True)
class Reply:
    """Send to the originating connection only."""

    connection_id: str
    event: OutboundEvent
    data: dict[str, Any]


@dataclass(frozen=True)
class Broadcast:
    """Send to every connection in the channel (the sender included, if it is a member)."""

    channel: str
    event: OutboundEvent
    data: dict[str, Any]


@dataclass(frozen=True)
class EnterChannel:
    connection_id: str
    channel: str


@dataclass(frozen=True)
class LeaveChannel:
    connection_id: str
    channel: str


Action = Union[Reply, Broadcast, EnterChannel, LeaveChannel]
Handler = Callable[[str, Any], list[Action]]


class RealtimeGateway:
    """Dispatch table from InboundEvent to a handler. One instance per server process."""

    def __init__(self, service: RoomService, index: Optional[ConnectionIndex] = None) -> None:
        self.service = service
        self.index = index if index is not None else ConnectionIndex()
        self._handlers: dict[InboundEvent, Handler] = {
            InboundEvent.CREATE_ROOM: self._create_room,
            InboundEvent.JOIN_ROOM: self._join_room,
            InboundEvent.LEAVE_ROOM: self._leave_room,
            InboundEvent.LIST_ROOMS: self._list_rooms,
            InboundEvent.GET_ROOM: self._get_room,
            InboundEvent.SET_READY: self._set_ready,
            InboundEvent.START_GAME: self._start_game,
            InboundEvent.MAKE_MOVE: self._make_move,
            InboundEvent.RESET_GAME: self._reset_game,
        }

    @property
    def inbound_events(self) -> list[InboundEvent]:
        return list(self._handlers)

    def handle(self, connection_id: str, event: str, payload: Any = None) -> list[Action]:
        """
        Handle one client intent to completion.
        ----

        Any GameError is turned into an `error` reply to the sender. It never reaches other connections, and never
        escapes this method.
        """
        try:
            handler = self._handlers[InboundEvent(event)]
        except ValueError:
            return self._error(connection_id, InvalidRequestError(f"Unknown event: {event!r}"))

        try:
            return handler(connection_id, payload)
        except GameError as exc:
            logger.warning("%s from %s rejected: %s", event, connection_id, exc)
            return self._error(connection_id, exc)

    def disconnect(self, connection_id: str) -> list[Action]:
        """Transport noticed the connection is gone: give up its seat, if it had one."""
        room_id = self.index.remove(connection_id)
        if room_id is None:
            logger.info("Client disconnected: %s", connection_id)
            return []

        try:
            room = self.service.leave_room(room_id, connection_id)
        except GameError as exc:
            # e.g. the room got deleted through the REST API in the meantime
            logger.warning("Cleanup for %s in room %s failed: %s", connection_id, room_id, exc)
            return []

        logger.info("Player %s disconnected from room %s", connection_id, room_id)
        if room.is_empty:
            return []
        return [
            Broadcast(room_id, OutboundEvent.ROOM_UPDATED, {"room": room_to_wire(room)}),
            Broadcast(room_id, OutboundEvent.PLAYER_DISCONNECTED, {"playerId": connection_id}),
        ]

    # --- Handlers ---
    def _create_room(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(CreateRoomPayload, payload)
        room = self.service.create_room(request.room_name)
        return [Reply(connection_id, OutboundEvent.ROOM_CREATED, {"room": room_to_wire(room)})]

    def _join_room(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(JoinRoomPayload, payload)
        room = self.service.join_room(request.room_id, connection_id, request.player_name)

        previous = self.index.room_of(connection_id)
        if previous is not None and previous != room.id:
            logger.warning("Connection %s joined room %s while still seated in %s", connection_id, room.id, previous)
        self.index.register(connection_id, room.id)

        wire = {"room": room_to_wire(room)}
        return [
            EnterChannel(connection_id, room.id),
            Reply(connection_id, OutboundEvent.ROOM_JOINED, wire),
            Broadcast(room.id, OutboundEvent.ROOM_UPDATED, wire),
        ]

    def _leave_room(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(RoomPayload, payload)
        room = self.service.leave_room(request.room_id, connection_id)
        if self.index.room_of(connection_id) == request.room_id:
            self.index.remove(connection_id)

        actions: list[Action] = [
            LeaveChannel(connection_id, request.room_id),
            Reply(connection_id, OutboundEvent.ROOM_LEFT, {"roomId": request.room_id}),
        ]
        if not room.is_empty:
            actions.append(Broadcast(request.room_id, OutboundEvent.ROOM_UPDATED, {"room": room_to_wire(room)}))
        return actions

    def _list_rooms(self, connection_id: str, payload: Any) -> list[Action]:
        _parse(EmptyPayload, payload)
        rooms = [room_to_wire(room) for room in self.service.list_rooms()]
        return [Reply(connection_id, OutboundEvent.ROOM_LIST, {"rooms": rooms})]

    def _get_room(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(RoomPayload, payload)
        room = self.service.get_room(request.room_id)
        if room is None:
            raise RoomNotFoundError(request.room_id)
        return [Reply(connection_id, OutboundEvent.ROOM_DETAILS, {"room": room_to_wire(room)})]

    def _set_ready(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(ReadyPayload, payload)
        room = self.service.set_ready(request.room_id, connection_id, request.ready)
        return [Broadcast(room.id, OutboundEvent.ROOM_UPDATED, {"room": room_to_wire(room)})]

    def _start_game(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(RoomPayload, payload)
        room = self.service.start_game(request.room_id)
        wire = {"room": room_to_wire(room)}
        return [
            Broadcast(room.id, OutboundEvent.GAME_STARTED, wire),
            Broadcast(room.id, OutboundEvent.ROOM_UPDATED, wire),
        ]

    def _make_move(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(MovePayload, payload)
        room = self.service.make_move(request.room_id, connection_id, request.position)
        wire = room_to_wire(room)

        actions: list[Action] = [
            Broadcast(
                room.id,
                OutboundEvent.GAME_MOVE,
                {"room": wire, "position": request.position, "playerId": connection_id},
            ),
            Broadcast(room.id, OutboundEvent.ROOM_UPDATED, {"room": wire}),
        ]
        if room.game_state.status == GameStatus.FINISHED:
            actions.append(
                Broadcast(
                    room.id,
                    OutboundEvent.GAME_FINISHED,
                    {
                        "room": wire,
                        "winner": wire["gameState"]["winner"],
                        "winningLine": wire["gameState"]["winningLine"],
                    },
                )
            )
        return actions

    def _reset_game(self, connection_id: str, payload: Any) -> list[Action]:
        request = _parse(RoomPayload, payload)
        room = self.service.reset_game(request.room_id)
        wire = {"room": room_to_wire(room)}
        return [
            Broadcast(room.id, OutboundEvent.GAME_RESET, wire),
            Broadcast(room.id, OutboundEvent.ROOM_UPDATED, wire),
        ]

    # -- Internal helpers --
    def _error(self, connection_id: str, exc: GameError) -> list[Action]:
        return [Reply(connection_id, OutboundEvent.ERROR, {"message": str(exc)})]


def _parse(model: type[PayloadT], payload: Any) -> PayloadT:
    """Validate an inbound payload. Malformed payloads become an InvalidRequestError."""
    try:
        return model.model_validate(payload if payload is not None else {})
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}" for error in exc.errors()
        )
        raise InvalidRequestError(f"Invalid payload: {details}") from exc
