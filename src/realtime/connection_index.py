"""Which room each live connection currently sits in. Only needed to clean up seats on disconnect."""

from typing import Optional


class ConnectionIndex:
    """Connection id -> room id."""

    def __init__(self) -> None:
        self._room_by_connection: dict[str, str] = {}

    def register(self, connection_id: str, room_id: str) -> None:
        """A connection sits in one room at a time: registering again moves it."""
        self._room_by_connection[connection_id] = room_id

    def room_of(self, connection_id: str) -> Optional[str]:
        return self._room_by_connection.get(connection_id)

    def remove(self, connection_id: str) -> Optional[str]:
        """Forget the connection. Returns the room it was in, if any."""
        return self._room_by_connection.pop(connection_id, None)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._room_by_connection

    def __len__(self) -> int:
        return len(self._room_by_connection)
