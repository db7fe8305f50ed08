"""FastAPI application — state route, WebSocket endpoint, game loop lifecycle."""

import json
import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .config import get_settings
from .connection_manager import ConnectionManager, build_state, build_state_msg
from .game import GameEngine
from .models import GameEvent, Snapshot
from .runner import SessionRunner

logger = logging.getLogger(__name__)

manager = ConnectionManager()
session: Optional[SessionRunner] = None


async def publish(snapshot: Snapshot, event: GameEvent) -> None:
    await manager.broadcast(build_state_msg(snapshot, event))


@asynccontextmanager
async def lifespan(app: FastAPI):
    global session
    settings = get_settings()
    engine = GameEngine(
        base_interval_ms=settings.base_tick_interval_ms,
        rng=random.Random(settings.seed),
    )
    session = SessionRunner(engine, on_update=publish)
    await session.start()
    try:
        yield
    finally:
        await session.stop()
        session = None


app = FastAPI(lifespan=lifespan)


@app.get("/state")
async def get_state():
    return build_state(session.snapshot())


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    client_id = f"c{id(ws)}"
    await manager.connect(ws, client_id)
    logger.info(f"Client {client_id} connected")
    try:
        await manager.send_personal(ws, build_state_msg(session.snapshot()))
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except ValueError:
                logger.warning(f"Client {client_id} sent malformed JSON: {raw[:80]!r}")
                continue
            if not isinstance(msg, dict):
                logger.warning(f"Client {client_id} sent non-object message")
                continue

            kind = msg.get("type")
            if kind == "input":
                await session.turn(msg.get("direction"))
            elif kind == "speed":
                await session.set_speed(msg.get("multiplier"))
            elif kind == "reset":
                await session.reset()
            elif kind == "state":
                await manager.send_personal(ws, build_state_msg(session.snapshot()))
            else:
                logger.warning(f"Client {client_id} sent unknown message type {kind!r}")
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)
        logger.info(f"Client {client_id} disconnected")


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Snake server starting on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
