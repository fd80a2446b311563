"""
Type definitions used across layers
"""

from enum import StrEnum


class Mark(StrEnum):
    X = "X"
    O = "O"  # noqa: E741

    @property
    def opponent(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


# The outcome of a full board without a winning line. Kept apart from Mark so a draw can never be placed on a cell.
DRAW = "draw"


class GameStatus(StrEnum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


# --- NOTE RoomStatus has an extra READY value. Nothing in the service currently transitions into it, but clients know the value.
class RoomStatus(StrEnum):
    WAITING = "waiting"
    READY = "ready"
    PLAYING = "playing"
    FINISHED = "finished"
