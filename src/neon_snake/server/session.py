"""Single game session: engine ownership, async tick loop and broadcasting."""

from __future__ import annotations

import asyncio
import json
import logging

from starlette.websockets import WebSocket, WebSocketState

from neon_snake.config import GameConfig
from neon_snake.engine import GameEngine, LifecycleState, Snapshot
from neon_snake.scores import ScoreBoard
from neon_snake.snake import Direction

logger = logging.getLogger(__name__)


class GameSession:
    """Drives one :class:`GameEngine` from an asyncio tick loop.

    All engine access goes through ``lock`` so a tick always runs to
    completion before the next command is applied. The loop re-reads the
    tick interval every iteration, so a difficulty change only affects ticks
    scheduled after it.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        scores: ScoreBoard | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        if scores is None:
            path = self.config.scores_path
            scores = ScoreBoard.load(path) if path else ScoreBoard()
        # The tick loop saves scores off the event loop.
        scores.autosave = False
        self.scores = scores
        self.engine = GameEngine(
            grid_size=self.config.grid_size,
            difficulty=self.config.difficulty,
            record_sink=self.scores.record,
            seed=self.config.seed,
        )
        self.lock = asyncio.Lock()
        self.clients: list[WebSocket] = []
        self._task: asyncio.Task | None = None

    def payload(self, snapshot: Snapshot | None = None) -> dict:
        """Snapshot dict enriched with session-level data for clients."""
        snap = snapshot if snapshot is not None else self.engine.snapshot
        data = snap.to_dict()
        data["high_score"] = self.scores.high_score
        data["tick_interval_ms"] = self.engine.tick_interval_ms
        data["grid"] = self.engine.grid.to_dict(snap.snake, snap.food)
        return data

    async def start(self) -> Snapshot:
        async with self.lock:
            before = self.engine.state
            snapshot = self.engine.start()
            if before is LifecycleState.IDLE:
                self._restart_loop()
        await self._broadcast(snapshot)
        return snapshot

    async def reset(self) -> Snapshot:
        async with self.lock:
            self._cancel_loop()
            snapshot = self.engine.reset()
        await self._broadcast(snapshot)
        return snapshot

    async def toggle_pause(self) -> Snapshot:
        async with self.lock:
            snapshot = self.engine.toggle_pause()
        await self._broadcast(snapshot)
        return snapshot

    async def request_direction(self, direction: Direction) -> None:
        async with self.lock:
            self.engine.request_direction(direction)

    async def set_difficulty(self, name: str) -> Snapshot:
        """Change difficulty. Raises ``ValueError`` for unknown names."""
        async with self.lock:
            snapshot = self.engine.set_difficulty(name)
        logger.info(
            "Tick interval now %d ms.", self.engine.tick_interval_ms,
        )
        await self._broadcast(snapshot)
        return snapshot

    def _restart_loop(self) -> None:
        self._cancel_loop()
        self._task = asyncio.create_task(self._tick_loop())

    def _cancel_loop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _tick_loop(self) -> None:
        """Tick the engine until it leaves Running/Paused."""
        try:
            while True:
                await asyncio.sleep(self.engine.tick_interval_ms / 1000.0)
                async with self.lock:
                    state = self.engine.state
                    if state is LifecycleState.PAUSED:
                        continue
                    if state is not LifecycleState.RUNNING:
                        break
                    snapshot = self.engine.tick()
                await self._broadcast(snapshot)
                if snapshot.state.terminal:
                    await self._save_scores()
                    break
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick loop error.")

    async def _save_scores(self) -> None:
        """Write the score board to disk without blocking the event loop."""
        if self.scores.path is None:
            return
        try:
            await asyncio.to_thread(self.scores.save)
        except OSError:
            logger.exception("Failed saving scores to %s.", self.scores.path)

    async def _broadcast(self, snapshot: Snapshot) -> None:
        """Send a snapshot to every connected client."""
        payload = json.dumps(self.payload(snapshot), separators=(",", ":"))
        dead: list[WebSocket] = []

        for ws in list(self.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in self.clients:
                self.clients.remove(ws)

    async def cleanup(self) -> None:
        """Cancel the tick loop and close client sockets."""
        task = self._task
        self._cancel_loop()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        for ws in list(self.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1001, reason="Server shutting down.")
            except Exception:
                logger.warning("Failed closing client socket.")
        self.clients.clear()
        logger.info("GameSession cleanup complete.")
