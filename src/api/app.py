"""
Application assembly: FastAPI (REST facade) + python-socketio (realtime gateway) on a single ASGI app,
both sharing one RoomService / in-memory repository.
"""

import logging

import socketio
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import Settings, get_settings
from src.core.exceptions import GameError, RoomNotFoundError
from src.core.log import configure_logging
from src.db.memory_repository import InMemoryRoomRepository
from src.realtime.gateway import RealtimeGateway
from src.realtime.socketio_transport import SocketIOTransport
from src.services.room_service import RoomService

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def create_fastapi_app(service: RoomService, settings: Settings) -> FastAPI:
    app = FastAPI(title="Tic-tac-toe rooms")
    app.state.room_service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.exception_handler(RoomNotFoundError)
    async def room_not_found(request: Request, exc: RoomNotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, "Room not found")

    @app.exception_handler(GameError)
    async def game_error(request: Request, exc: GameError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request: {details}")

    return app


def create_app(settings: Settings | None = None) -> socketio.ASGIApp:
    """Socket.IO handles /socket.io/, everything else is passed on to FastAPI."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    service = RoomService(InMemoryRoomRepository(), room_id_length=settings.room_id_length)
    fastapi_app = create_fastapi_app(service, settings)

    sio = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins=[settings.cors_origin])
    transport = SocketIOTransport(sio, RealtimeGateway(service))
    transport.register()

    logger.info("Socket.IO ready, CORS enabled for: %s", settings.cors_origin)
    return socketio.ASGIApp(sio, other_asgi_app=fastapi_app)
