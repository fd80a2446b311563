"""REST facade over the RoomService: create / list / get / delete rooms."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.api.models import CreateRoomRequest, room_to_wire
from src.core.exceptions import RoomNotFoundError
from src.services.room_service import RoomService

router = APIRouter()
rooms_router = APIRouter(prefix="/api/rooms")


async def get_room_service(request: Request) -> RoomService:
    """
    The service lives on app.state, shared with the realtime gateway.

    NOTE every route is `async def`, so it runs on the event loop thread like the Socket.IO handlers. Sync routes would
    touch the in-memory store from the threadpool.
    """
    return request.app.state.room_service


@router.get("/health")
async def health() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@rooms_router.get("")
async def list_rooms(service: RoomService = Depends(get_room_service)) -> dict:
    rooms = service.list_rooms()
    return {"success": True, "data": [room_to_wire(room) for room in rooms], "count": len(rooms)}


@rooms_router.get("/{room_id}")
async def get_room(room_id: str, service: RoomService = Depends(get_room_service)) -> dict:
    room = service.get_room(room_id)
    if room is None:
        raise RoomNotFoundError(room_id)
    return {"success": True, "data": room_to_wire(room)}


@rooms_router.post("", status_code=status.HTTP_201_CREATED)
async def create_room(request: CreateRoomRequest, service: RoomService = Depends(get_room_service)) -> dict:
    room = service.create_room(request.room_name)
    return {"success": True, "data": room_to_wire(room)}


@rooms_router.delete("/{room_id}")
async def delete_room(room_id: str, service: RoomService = Depends(get_room_service)) -> JSONResponse:
    if not service.delete_room(room_id):
        raise RoomNotFoundError(room_id)
    return JSONResponse(content={"success": True, "message": "Room deleted successfully"})


router.include_router(rooms_router)
