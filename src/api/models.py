"""Requests and Response models"""

from datetime import datetime
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameStatus, Mark, RoomStatus
from src.tictactoe.board import GameState
from src.tictactoe.player import Player
from src.tictactoe.room import Room


class CamelModel(BaseModel):
    """Clients talk camelCase (roomName, isReady, ...). Python side keeps snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- REQUEST MODELS ---
class CreateRoomRequest(CamelModel):
    room_name: str

    @field_validator("room_name")
    @classmethod
    def validate_room_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidRequestError(
                "Room name is required and must be a non-empty string"
            )
        return value


# --- RESPONSE MODELS ---
class PlayerResponse(CamelModel):
    id: str
    name: str
    symbol: Mark
    is_ready: bool

    @classmethod
    def from_player(cls, player: Player) -> Self:
        return cls(id=player.id, name=player.name, symbol=player.symbol, is_ready=player.is_ready)


class GameStateResponse(CamelModel):
    board: list[Optional[Mark]]
    current_turn: Mark
    status: GameStatus
    winner: Optional[str]
    winning_line: Optional[list[int]]
    last_starting_player: Mark

    @classmethod
    def from_state(cls, state: GameState) -> Self:
        return cls(
            board=list(state.board),
            current_turn=state.current_turn,
            status=state.status,
            winner=state.winner,
            winning_line=list(state.winning_line) if state.winning_line else None,
            last_starting_player=state.last_starting_player,
        )


class RoomResponse(CamelModel):
    id: str
    name: str
    players: list[PlayerResponse]
    max_players: int
    game_state: GameStateResponse
    status: RoomStatus
    created_at: datetime

    @classmethod
    def from_room(cls, room: Room) -> Self:
        return cls(
            id=room.id,
            name=room.name,
            players=[PlayerResponse.from_player(p) for p in room.players],
            max_players=room.max_players,
            game_state=GameStateResponse.from_state(room.game_state),
            status=room.status,
            created_at=room.created_at,
        )


def room_to_wire(room: Room) -> dict:
    """JSON-ready camelCase dict, as sent over both REST and the realtime channel."""
    return RoomResponse.from_room(room).model_dump(by_alias=True, mode="json")
