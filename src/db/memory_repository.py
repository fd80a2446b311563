"""Implementation of (Room)Repository using a plain dictionary."""

from src.core.exceptions import DuplicateIdError
from src.tictactoe.room import Room, create_room


class InMemoryRoomRepository:
    """
    Rooms stored in process memory.
    ----

    Not thread safe. The server handles one event at a time, so a read-modify-write from the service is never interleaved.
    """

    def __init__(self) -> None:
        # dicts keep insertion order, which gives list_rooms its ordering for free
        self._rooms: dict[str, Room] = {}

    def create_room(self, room_id: str, name: str) -> Room:
        if room_id in self._rooms:
            raise DuplicateIdError(room_id)
        room = create_room(room_id, name)
        self._rooms[room_id] = room
        return room

    def get_room(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def list_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def update_room(self, room: Room) -> Room | None:
        if room.id not in self._rooms:
            return None
        self._rooms[room.id] = room
        return room

    def delete_room(self, room_id: str) -> bool:
        return self._rooms.pop(room_id, None) is not None

    def clear(self) -> None:
        self._rooms.clear()

    def __len__(self) -> int:
        return len(self._rooms)
