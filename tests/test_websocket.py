"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient

from neon_snake.config import GameConfig
from neon_snake.server.app import create_app


@pytest.fixture()
def tc():
    """TestClient running the lifespan, so one session serves every call."""
    application = create_app(
        GameConfig(seed=0, difficulty="medium", scores_path=None),
    )
    with TestClient(application) as client:
        yield client


def _receive_until(ws, state: str, limit: int = 50) -> dict:
    """Read snapshots until one reports *state*."""
    for _ in range(limit):
        msg = json.loads(ws.receive_text())
        if msg["state"] == state:
            return msg
        if msg["state"] in ("game_over", "won"):
            break
    raise AssertionError(f"never saw state {state!r}")


class TestPlayWebSocket:
    def test_initial_snapshot(self, tc):
        with tc.websocket_connect("/game/ws") as ws:
            state = json.loads(ws.receive_text())
            assert state["state"] == "idle"
            assert state["snake"] == [[10, 10]]
            assert "high_score" in state
            assert state["grid"]["cells"][10][10] == 2

    def test_start_pause_reset(self, tc):
        with tc.websocket_connect("/game/ws") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            assert _receive_until(ws, "running")["score"] == 0
            ws.send_text(json.dumps({"key": " "}))
            paused = _receive_until(ws, "paused")
            assert paused["level"] == 1
            ws.send_text(json.dumps({"action": "reset"}))
            idle = _receive_until(ws, "idle")
            assert idle["snake"] == [[10, 10]]

    def test_arrow_key_turns(self, tc):
        with tc.websocket_connect("/game/ws") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            _receive_until(ws, "running")
            ws.send_text(json.dumps({"key": "ArrowUp"}))
            for _ in range(8):
                msg = json.loads(ws.receive_text())
                if msg["direction"] == "up" or msg["state"] != "running":
                    break
            assert msg["direction"] == "up"
            ws.send_text(json.dumps({"action": "pause"}))
            _receive_until(ws, "paused")

    def test_bad_messages_ignored(self, tc):
        with tc.websocket_connect("/game/ws") as ws:
            ws.receive_text()
            ws.send_text("not json")
            ws.send_text(json.dumps([1, 2, 3]))
            ws.send_text(json.dumps({"direction": "sideways"}))
            ws.send_text(json.dumps({"action": "explode"}))
            ws.send_text(json.dumps({"action": "start"}))
            assert _receive_until(ws, "running")["state"] == "running"
            ws.send_text(json.dumps({"action": "pause"}))
            _receive_until(ws, "paused")

    def test_rest_and_websocket_share_session(self, tc):
        with tc.websocket_connect("/game/ws") as ws:
            ws.receive_text()
            resp = tc.post("/game/start")
            assert resp.status_code == 200
            assert _receive_until(ws, "running")["tick"] >= 0
            tc.post("/game/pause")
            _receive_until(ws, "paused")
