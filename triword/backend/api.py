"""FastAPI endpoints for game sessions and websocket sync."""

from __future__ import annotations

import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import GameSettings, load_settings
from .errors import GameError, InvalidInput
from .models import FreezeEffect, PowerEffect, PowerKind, SwapEffect, TransformEffect
from .state import topic_for
from .store import Publisher, SessionRegistry, create_registry

logger = logging.getLogger(__name__)


class CellRef(BaseModel):
    row: int
    col: int


class CreateSessionRequest(BaseModel):
    hostName: str


class CreateSessionResponse(BaseModel):
    sessionId: str
    playerId: str
    session: dict[str, Any]


class JoinSessionRequest(BaseModel):
    playerName: str


class JoinSessionResponse(BaseModel):
    playerId: str
    session: dict[str, Any]


class PlayerRequest(BaseModel):
    playerId: str = Field(min_length=1)


class SelectCellRequest(PlayerRequest):
    row: int
    col: int


class PowerRequest(PlayerRequest):
    kind: PowerKind
    cell1: CellRef | None = None
    cell2: CellRef | None = None
    cell: CellRef | None = None
    letter: str | None = None


class OkResponse(BaseModel):
    ok: bool = True


class PowerResponse(OkResponse):
    description: str


class SubmitResponse(OkResponse):
    pointsAwarded: int


class SessionResponse(BaseModel):
    session: dict[str, Any]


def effect_from_request(payload: PowerRequest) -> PowerEffect:
    if payload.kind is PowerKind.SWAP:
        if payload.cell1 is None or payload.cell2 is None:
            raise InvalidInput("SWAP needs cell1 and cell2")
        return SwapEffect(a=(payload.cell1.row, payload.cell1.col), b=(payload.cell2.row, payload.cell2.col))
    if payload.kind is PowerKind.TRANSFORM:
        if payload.cell is None or payload.letter is None:
            raise InvalidInput("TRANSFORM needs cell and letter")
        return TransformEffect(cell=(payload.cell.row, payload.cell.col), letter=payload.letter)
    return FreezeEffect()


class SessionWebSocketHub:
    """Fan-out of session snapshots to websocket subscribers, keyed by topic.

    Each socket only ever receives snapshots newer than the last one it was
    sent, so a subscriber that joins while older snapshots are still queued
    never sees the version go backwards.
    """

    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)
        self._last_version: dict[WebSocket, int] = {}

    def subscriber_count(self, topic: str) -> int:
        return len(self._connections.get(topic, ()))

    async def connect(self, topic: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections[topic].add(websocket)

    def disconnect(self, topic: str, websocket: WebSocket) -> None:
        self._last_version.pop(websocket, None)
        connections = self._connections.get(topic)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(topic, None)

    async def send_state(self, websocket: WebSocket, state: dict[str, Any]) -> None:
        version = state.get("version", 0)
        if version <= self._last_version.get(websocket, 0):
            return
        self._last_version[websocket] = version
        await websocket.send_json({"type": "game-updated", "session": state})

    async def publish(self, topic: str, state: dict[str, Any]) -> None:
        stale_connections: list[WebSocket] = []
        for websocket in list(self._connections.get(topic, set())):
            try:
                await self.send_state(websocket, state)
            except (RuntimeError, WebSocketDisconnect):
                stale_connections.append(websocket)
        for websocket in stale_connections:
            self.disconnect(topic=topic, websocket=websocket)


def fan_out(*publishers: Publisher) -> Publisher:
    """Combine publishers; a failing one does not starve the others."""

    async def publish(topic: str, state: dict[str, Any]) -> None:
        for publisher in publishers:
            try:
                await publisher(topic, state)
            except Exception:
                logger.exception("Publisher failed for snapshot v%s on %s", state.get("version"), topic)

    return publish


def validation_detail(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        messages.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(messages) or InvalidInput.default_message


def create_app(
    registry: SessionRegistry | None = None,
    settings: GameSettings | None = None,
) -> FastAPI:
    app_settings = settings if settings is not None else load_settings()
    websocket_hub = SessionWebSocketHub()
    if registry is None:
        registry = create_registry(app_settings, publisher=websocket_hub.publish)
    elif registry.publisher is None:
        registry.publisher = websocket_hub.publish
    else:
        registry.publisher = fan_out(registry.publisher, websocket_hub.publish)
    sessions = registry

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        sessions.start()
        yield
        await sessions.close()

    app = FastAPI(title="Triword API", version="0.1.0", lifespan=lifespan)
    app.state.websocket_hub = websocket_hub
    app.state.registry = sessions

    @app.exception_handler(GameError)
    async def game_error_handler(_: Request, exc: GameError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.kind, "detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=InvalidInput.status_code,
            content={"error": InvalidInput.kind, "detail": validation_detail(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/sessions", response_model=CreateSessionResponse)
    async def create_session(payload: CreateSessionRequest) -> CreateSessionResponse:
        created = await sessions.create_session(payload.hostName)
        return CreateSessionResponse(sessionId=created.session_id, playerId=created.player_id, session=created.session)

    @app.get("/api/sessions/{session_id}", response_model=SessionResponse)
    async def get_session(session_id: str) -> SessionResponse:
        return SessionResponse(session=sessions.get(session_id))

    @app.post("/api/sessions/{session_id}/join", response_model=JoinSessionResponse)
    async def join_session(session_id: str, payload: JoinSessionRequest) -> JoinSessionResponse:
        joined = await sessions.join_session(session_id, payload.playerName)
        return JoinSessionResponse(playerId=joined.player_id, session=joined.session)

    @app.post("/api/sessions/{session_id}/select", response_model=OkResponse)
    async def select_cell(session_id: str, payload: SelectCellRequest) -> OkResponse:
        await sessions.select_cell(session_id, payload.playerId, payload.row, payload.col)
        return OkResponse()

    @app.post("/api/sessions/{session_id}/clear", response_model=OkResponse)
    async def clear_selection(session_id: str, payload: PlayerRequest) -> OkResponse:
        await sessions.clear_selection(session_id, payload.playerId)
        return OkResponse()

    @app.post("/api/sessions/{session_id}/power", response_model=PowerResponse)
    async def apply_power(session_id: str, payload: PowerRequest) -> PowerResponse:
        outcome = await sessions.apply_power(session_id, payload.playerId, effect_from_request(payload))
        return PowerResponse(description=outcome.description)

    @app.post("/api/sessions/{session_id}/submit", response_model=SubmitResponse)
    async def submit_word(session_id: str, payload: PlayerRequest) -> SubmitResponse:
        outcome = await sessions.submit_word(session_id, payload.playerId)
        return SubmitResponse(pointsAwarded=outcome.points)

    @app.websocket("/ws/sessions/{session_id}")
    async def session_ws(websocket: WebSocket, session_id: str) -> None:
        if session_id not in sessions:
            await websocket.close(code=1008)
            return

        topic = topic_for(session_id)
        await websocket_hub.connect(topic=topic, websocket=websocket)
        try:
            state = sessions.get(session_id)
        except GameError:
            websocket_hub.disconnect(topic=topic, websocket=websocket)
            await websocket.close(code=1008)
            return
        await websocket_hub.send_state(websocket=websocket, state=state)
        logger.info("Observer subscribed to %s", topic)

        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            websocket_hub.disconnect(topic=topic, websocket=websocket)

    return app


app = create_app()
