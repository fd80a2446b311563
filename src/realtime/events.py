"""
Realtime event names and inbound payloads.

The set of inbound intents is closed: anything not listed in InboundEvent is rejected by the gateway.
"""

from enum import StrEnum

from pydantic import Field, StrictBool, field_validator

from src.api.models import CamelModel, CreateRoomRequest
from src.core.exceptions import InvalidRequestError
from src.tictactoe.board import BOARD_SIZE

PLAYER_NAME_MIN_LENGTH = 2
PLAYER_NAME_MAX_LENGTH = 20


class InboundEvent(StrEnum):
    CREATE_ROOM = "room:create"
    JOIN_ROOM = "room:join"
    LEAVE_ROOM = "room:leave"
    LIST_ROOMS = "room:list"
    GET_ROOM = "room:get"
    SET_READY = "player:ready"
    START_GAME = "game:start"
    MAKE_MOVE = "game:move"
    RESET_GAME = "game:reset"


class OutboundEvent(StrEnum):
    ROOM_CREATED = "room:created"
    ROOM_JOINED = "room:joined"
    ROOM_LEFT = "room:left"
    ROOM_LIST = "room:list"
    ROOM_DETAILS = "room:details"
    ROOM_UPDATED = "room:updated"
    GAME_STARTED = "game:started"
    GAME_MOVE = "game:move"
    GAME_FINISHED = "game:finished"
    GAME_RESET = "game:reset"
    PLAYER_DISCONNECTED = "player:disconnected"
    ERROR = "error"


# --- INBOUND PAYLOADS ---
class CreateRoomPayload(CreateRoomRequest):
    pass


class EmptyPayload(CamelModel):
    pass


class RoomPayload(CamelModel):
    room_id: str


class JoinRoomPayload(RoomPayload):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        value = value.strip()
        if not PLAYER_NAME_MIN_LENGTH <= len(value) <= PLAYER_NAME_MAX_LENGTH:
            raise InvalidRequestError(
                f"Player name must be between {PLAYER_NAME_MIN_LENGTH} and {PLAYER_NAME_MAX_LENGTH} characters."
            )
        return value


class ReadyPayload(RoomPayload):
    ready: StrictBool


class MovePayload(RoomPayload):
    position: int = Field(ge=0, lt=BOARD_SIZE, strict=True)
