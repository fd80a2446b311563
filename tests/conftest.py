"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Generator

import pytest

from src.db.memory_repository import InMemoryRoomRepository
from src.realtime.gateway import RealtimeGateway
from src.services.room_service import RoomService


@pytest.fixture
def repository() -> Generator[InMemoryRoomRepository, None, None]:
    """Fresh in-memory store. Cleared at teardown to keep tests independent of each other."""
    repo = InMemoryRoomRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(repository: InMemoryRoomRepository) -> RoomService:
    return RoomService(repository)


@pytest.fixture
def gateway(service: RoomService) -> RealtimeGateway:
    return RealtimeGateway(service)
