"""
Orchestration of communication from the API / realtime layers to the room logic and the repository (and the reverse direction).

Every public method follows the same pattern: fetch the room, compute an updated copy using the domain helpers,
write it back to the repository and return it. The returned Room is always the authoritative post-operation state.
"""

import logging
import secrets
import string

from src.core.exceptions import (
    DuplicateIdError,
    GameNotInProgressError,
    NotAllReadyError,
    NotYourTurnError,
    PlayerNotFoundError,
    RoomNotFoundError,
)
from src.core.shared_types import GameStatus, RoomStatus
from src.db.repository import RoomRepository
from src.tictactoe import board as engine
from src.tictactoe.player import Player
from src.tictactoe.room import (
    Room,
    add_player,
    next_join_symbol,
    reconcile_symbols,
    remove_player,
    update_player,
    with_game_state,
    with_players,
    with_status,
)

logger = logging.getLogger(__name__)

ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_ROOM_ID_LENGTH = 6
MAX_ID_ATTEMPTS = 10


def generate_room_id(length: int = DEFAULT_ROOM_ID_LENGTH) -> str:
    """Short join code, e.g. 'K3ZQ9A'."""
    return "".join(secrets.choice(ROOM_ID_ALPHABET) for _ in range(length))


class RoomService:
    """Room / game state machine."""

    def __init__(self, repository: RoomRepository, room_id_length: int = DEFAULT_ROOM_ID_LENGTH) -> None:
        self.repo = repository
        self.room_id_length = room_id_length

    # --- Room lifecycle ---
    def create_room(self, name: str, room_id: str | None = None) -> Room:
        """
        Create an empty room.
        ----

        With an explicit room_id a taken id raises DuplicateIdError straight away.
        Without one, ids are generated until a free one is found (giving up after MAX_ID_ATTEMPTS).
        """
        if room_id is not None:
            room = self.repo.create_room(room_id, name)
            logger.info("Room created: %s - %s", room.id, room.name)
            return room

        attempt = 0
        while True:
            attempt += 1
            candidate = generate_room_id(self.room_id_length)
            try:
                room = self.repo.create_room(candidate, name)
                break
            except DuplicateIdError:
                logger.debug("Generated room id %s already taken (attempt %d)", candidate, attempt)
                if attempt >= MAX_ID_ATTEMPTS:
                    raise

        logger.info("Room created: %s - %s", room.id, room.name)
        return room

    def get_room(self, room_id: str) -> Room | None:
        return self.repo.get_room(room_id)

    def list_rooms(self) -> list[Room]:
        return self.repo.list_rooms()

    def delete_room(self, room_id: str) -> bool:
        deleted = self.repo.delete_room(room_id)
        if deleted:
            logger.info("Room deleted: %s", room_id)
        return deleted

    # --- Seating ---
    def join_room(self, room_id: str, player_id: str, player_name: str) -> Room:
        """Seat a player. The room auto-starts as soon as the second seat is taken."""
        room = self._fetch_room(room_id)

        symbol = next_join_symbol(room)
        room = add_player(room, Player(id=player_id, name=player_name, symbol=symbol))
        logger.info(
            "Player %s (%s) joined room %s with symbol %s (%d/%d)",
            player_id,
            player_name,
            room_id,
            symbol,
            len(room.players),
            room.max_players,
        )

        # readiness is not required here: a full room always starts
        if room.is_full:
            room = self._start(room)
            logger.info("Room %s is full, game started. %s to move", room_id, room.game_state.current_turn)

        return self._save(room)

    def leave_room(self, room_id: str, player_id: str) -> Room:
        """
        Remove a player from the room.
        ----

        The last player leaving deletes the room. The returned (empty) Room is then no longer stored anywhere,
        callers should check `room.is_empty` before broadcasting it.
        If one player remains, the room goes back to waiting with a brand new game (starter alternation is forgotten).
        """
        room = self._fetch_room(room_id)
        room = remove_player(room, player_id)

        if room.is_empty:
            self.repo.delete_room(room_id)
            logger.info("Player %s left room %s. Room is empty and was removed", player_id, room_id)
            return room

        room = with_status(with_game_state(room, engine.initial_state()), RoomStatus.WAITING)
        logger.info("Player %s left room %s. Room reset, waiting for players", player_id, room_id)
        return self._save(room)

    def set_ready(self, room_id: str, player_id: str, ready: bool) -> Room:
        room = self._fetch_room(room_id)
        player = self._fetch_player(room, player_id)

        room = update_player(room, player.with_ready(ready))

        # NOTE join_room already starts a full room, so in practice the first branch only fires if a room somehow
        # sat full and waiting (and nothing moves a room into READY at the moment).
        if room.all_ready and room.is_full and room.status == RoomStatus.WAITING:
            room = self._start(room)
            logger.info("All players ready in room %s, game started", room_id)
        elif not room.all_ready and room.status == RoomStatus.READY:
            room = with_status(room, RoomStatus.WAITING)

        return self._save(room)

    # --- Playing ---
    def start_game(self, room_id: str) -> Room:
        room = self._fetch_room(room_id)
        if not room.all_ready:
            raise NotAllReadyError()
        room = self._start(room)
        logger.info("Game started in room %s", room_id)
        return self._save(room)

    def make_move(self, room_id: str, player_id: str, position: int) -> Room:
        room = self._fetch_room(room_id)
        logger.debug(
            "Move attempt in room %s by %s at %d (room=%s, game=%s)",
            room_id,
            player_id,
            position,
            room.status,
            room.game_state.status,
        )

        if room.status != RoomStatus.PLAYING:
            raise GameNotInProgressError()
        player = self._fetch_player(room, player_id)
        if player.symbol != room.game_state.current_turn:
            raise NotYourTurnError()

        game_state = engine.apply_move(room.game_state, position, player.symbol)
        room = with_game_state(room, game_state)

        if game_state.status == GameStatus.FINISHED:
            room = with_status(room, RoomStatus.FINISHED)
            logger.info("Game finished in room %s. winner: %s", room_id, game_state.winner)

        return self._save(room)

    def reset_game(self, room_id: str) -> Room:
        """
        Rematch.
        ----

        The new game starts with the other mark than the previous one. With two players seated, symbols are
        reconciled so the first seated player holds the starting mark, and the game starts right away.
        Otherwise the room waits for players. Ready flags are cleared in both cases.
        """
        room = self._fetch_room(room_id)

        game_state = engine.reset_game(room.game_state)
        starter = game_state.current_turn
        room = with_game_state(room, game_state)

        if room.is_full:
            room = self._start(with_players(room, reconcile_symbols(room.players, starter)))
            logger.info("Game reset in room %s, restarted with %s to move", room_id, starter)
        else:
            room = with_status(room, RoomStatus.WAITING)
            logger.info("Game reset in room %s, waiting for players", room_id)

        for player in room.players:
            room = update_player(room, player.with_ready(False))

        return self._save(room)

    # -- Internal helpers --
    def _start(self, room: Room) -> Room:
        return with_status(with_game_state(room, engine.start_game(room.game_state)), RoomStatus.PLAYING)

    def _save(self, room: Room) -> Room:
        stored = self.repo.update_room(room)
        if stored is None:
            raise RoomNotFoundError(room.id)
        return stored

    def _fetch_room(self, room_id: str) -> Room:
        """Attempt to find the room in the repository and raise error if it fails."""
        room = self.repo.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def _fetch_player(self, room: Room, player_id: str) -> Player:
        player = room.find_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player
