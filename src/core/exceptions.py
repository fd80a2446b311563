"""
Custom exceptions.

Every expected failure of the room store / room service is a subclass of GameError,
so the API and realtime layers only need to catch one top-level type.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong playing in a room."""


class InvalidRequestError(GameError):
    """Incoming request (HTTP body or realtime payload) could not be interpreted."""


# --- Store level ---
class RepositoryError(GameError):
    pass


class RoomNotFoundError(RepositoryError):
    def __init__(self, room_id: str) -> None:
        super().__init__(f"Room {room_id} not found")
        self.room_id = room_id


class DuplicateIdError(RepositoryError):
    def __init__(self, room_id: str) -> None:
        super().__init__(f"Room with ID {room_id} already exists")
        self.room_id = room_id


# --- Seating ---
class RoomError(GameError):
    pass


class RoomFullError(RoomError):
    def __init__(self) -> None:
        super().__init__("Room is full")


class PlayerAlreadyInRoomError(RoomError):
    def __init__(self) -> None:
        super().__init__("Player already in room")


class PlayerNotFoundError(RoomError):
    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player {player_id} not found in room")
        self.player_id = player_id


class NotAllReadyError(RoomError):
    def __init__(self) -> None:
        super().__init__("Not all players are ready")


# --- Playing ---
class GameStateError(GameError):
    pass


class GameNotInProgressError(GameStateError):
    def __init__(self) -> None:
        super().__init__("Game is not in progress")


class NotYourTurnError(GameError):
    def __init__(self) -> None:
        super().__init__("Not your turn")
