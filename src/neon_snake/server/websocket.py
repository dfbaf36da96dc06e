"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from neon_snake.server.session import GameSession
from neon_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

# Keyboard bindings: arrow keys steer, space pauses.
KEY_BINDINGS: dict[str, Direction | str] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    " ": "pause",
    "Space": "pause",
}

_ACTIONS = ("start", "pause", "reset")


def _get_session(ws: WebSocket) -> GameSession:
    return ws.app.state.session


async def _dispatch(session: GameSession, msg: dict) -> None:
    """Apply one client message. Malformed messages are ignored."""
    key = msg.get("key")
    if isinstance(key, str) and key in KEY_BINDINGS:
        bound = KEY_BINDINGS[key]
        if isinstance(bound, Direction):
            await session.request_direction(bound)
        else:
            await session.toggle_pause()
        return

    direction_str = msg.get("direction")
    if isinstance(direction_str, str):
        try:
            direction = Direction.parse(direction_str)
        except ValueError:
            return
        await session.request_direction(direction)
        return

    action = msg.get("action")
    if action == "start":
        await session.start()
    elif action == "pause":
        await session.toggle_pause()
    elif action == "reset":
        await session.reset()


@ws_router.websocket("/game/ws")
async def play(websocket: WebSocket) -> None:
    """Player WebSocket: send input, receive a snapshot after every change."""
    session = _get_session(websocket)
    await websocket.accept()
    session.clients.append(websocket)
    logger.info("Client connected (%d total).", len(session.clients))

    await websocket.send_text(
        json.dumps(session.payload(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            await _dispatch(session, msg)
    except WebSocketDisconnect:
        logger.info("Client disconnected.")
    finally:
        if websocket in session.clients:
            session.clients.remove(websocket)
