"""Protocol repository (the in-memory store is the only implementation; rooms do not survive a restart)."""

from typing import Protocol

from src.tictactoe.room import Room


class RoomRepository(Protocol):
    """Room Store: owns every Room of the process, keyed by room id."""

    def create_room(self, room_id: str, name: str) -> Room:
        """Store a new, empty room. Raises DuplicateIdError if the id is taken."""
        ...

    def get_room(self, room_id: str) -> Room | None:
        """Get room by ID, if it exists."""
        ...

    def list_rooms(self) -> list[Room]:
        """All rooms, in the order they were created."""
        ...

    def update_room(self, room: Room) -> Room | None:
        """Replace the stored room with the same id. Returns None if there is no such room."""
        ...

    def delete_room(self, room_id: str) -> bool:
        """Remove a room. True if something was removed."""
        ...
