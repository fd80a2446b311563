"""
A Room: up to two seated players and the game they play.

Rooms are immutable values. The helpers below return updated copies, the RoomService decides which copy gets written back
to the repository.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from src.core.exceptions import PlayerAlreadyInRoomError, RoomFullError
from src.core.shared_types import Mark, RoomStatus
from src.tictactoe.board import GameState, initial_state
from src.tictactoe.player import Player

MAX_PLAYERS = 2


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    players: tuple[Player, ...] = ()
    max_players: int = MAX_PLAYERS
    game_state: GameState = field(default_factory=initial_state)
    status: RoomStatus = RoomStatus.WAITING
    created_at: datetime = field(default_factory=utc_now)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def all_ready(self) -> bool:
        """Both seats taken, and both players flagged themselves as ready."""
        return len(self.players) == self.max_players and all(p.is_ready for p in self.players)

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)


def create_room(room_id: str, name: str) -> Room:
    return Room(id=room_id, name=name)


def add_player(room: Room, player: Player) -> Room:
    if room.is_full:
        raise RoomFullError()
    if room.find_player(player.id):
        raise PlayerAlreadyInRoomError()
    return replace(room, players=room.players + (player,))


def remove_player(room: Room, player_id: str) -> Room:
    return replace(room, players=tuple(p for p in room.players if p.id != player_id))


def update_player(room: Room, player: Player) -> Room:
    return replace(room, players=tuple(player if p.id == player.id else p for p in room.players))


def with_status(room: Room, status: RoomStatus) -> Room:
    return replace(room, status=status)


def with_players(room: Room, players: tuple[Player, ...]) -> Room:
    return replace(room, players=players)


def with_game_state(room: Room, game_state: GameState) -> Room:
    return replace(room, game_state=game_state)


def next_join_symbol(room: Room) -> Mark:
    """
    Mark for the next player to sit down.

    The first seat takes whoever is to move in the current game state (so an alternated starter carries over),
    the second seat takes the opposite of the first.
    """
    if not room.players:
        return room.game_state.current_turn
    return room.players[0].symbol.opponent


def reconcile_symbols(players: tuple[Player, ...], starting_mark: Mark) -> tuple[Player, ...]:
    """
    After a rematch reset the first seated player always takes the starting mark.

    If the first player's symbol already matches nothing changes, otherwise both symbols are flipped.
    Only applies to a full (two player) room.
    """
    if len(players) != MAX_PLAYERS:
        return players
    first, second = players
    if first.symbol == starting_mark:
        return players
    return (first.with_symbol(starting_mark), second.with_symbol(starting_mark.opponent))
