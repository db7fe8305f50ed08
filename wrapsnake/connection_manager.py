"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket

from .constants import SPEED_MULTIPLIERS, TONES
from .models import GameEvent, Snapshot

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: dict[WebSocket, str] = {}

    async def connect(self, ws: WebSocket, client_id: str):
        await ws.accept()
        self.connections[ws] = client_id

    def disconnect(self, ws: WebSocket):
        self.connections.pop(ws, None)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception as e:
                logger.info(f"Dropping connection {self.connections.get(ws)}: {e!r}")
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.pop(ws, None)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def position_to_list(position):
    return None if position is None else [position[0], position[1]]


def build_state(snapshot: Snapshot, event: GameEvent = GameEvent.NONE) -> dict:
    tone = TONES.get(event.value)
    return {
        "type": "state",
        "grid": [snapshot.grid_size, snapshot.grid_size],
        "segments": [position_to_list(s) for s in snapshot.segments],
        "food": position_to_list(snapshot.food),
        "heading": snapshot.heading.value,
        "score": snapshot.score,
        "status": snapshot.status.value,
        "game_over": snapshot.game_over,
        "tick": snapshot.tick_number,
        "tick_interval_ms": snapshot.tick_interval_ms,
        "speed_multiplier": snapshot.speed_multiplier,
        "speed_levels": list(SPEED_MULTIPLIERS),
        "event": event.value,
        "tone": list(tone) if tone else None,
    }


def build_state_msg(snapshot: Snapshot, event: GameEvent = GameEvent.NONE) -> str:
    return json.dumps(build_state(snapshot, event))
