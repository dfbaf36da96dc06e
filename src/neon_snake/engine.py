"""Tick-driven game engine composing grid, snake, food and collision logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone

import numpy as np

from neon_snake import collision
from neon_snake.collision import CollisionOutcome
from neon_snake.config import DEFAULT_DIFFICULTY, DIFFICULTIES, Difficulty, get_difficulty
from neon_snake.direction import DirectionGate
from neon_snake.food import FoodPlacer
from neon_snake.grid import Cell, Grid
from neon_snake.snake import Direction, SnakeBody

logger = logging.getLogger(__name__)

SCORE_PER_FOOD = 10
POINTS_PER_LEVEL = 100
INITIAL_DIRECTION = Direction.RIGHT


class LifecycleState(str, enum.Enum):
    """Which commands have an effect on the engine."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"

    @property
    def terminal(self) -> bool:
        return self in (LifecycleState.GAME_OVER, LifecycleState.WON)


class ReentrantTickError(RuntimeError):
    """Raised when tick() is invoked while a tick is already running."""


def level_for(score: int) -> int:
    """Derive the level from a score."""
    return score // POINTS_PER_LEVEL + 1


@dataclass(frozen=True)
class GameRecord:
    """Result of a finished game, handed to the persistence collaborator."""

    score: int
    level: int
    date: str
    difficulty_label: str

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level,
            "date": self.date,
            "difficulty": self.difficulty_label,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> GameRecord:
        return cls(
            score=int(data["score"]),
            level=int(data["level"]),
            date=str(data["date"]),
            difficulty_label=str(data["difficulty"]),
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine after a tick or lifecycle transition."""

    snake: tuple[Cell, ...]
    food: Cell | None
    score: int
    level: int
    state: LifecycleState
    direction: Direction
    tick: int
    difficulty: str
    grid_size: int

    @property
    def length(self) -> int:
        return len(self.snake)

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict."""
        return {
            "snake": [[c.x, c.y] for c in self.snake],
            "food": None if self.food is None else [self.food.x, self.food.y],
            "score": self.score,
            "level": self.level,
            "state": self.state.value,
            "direction": self.direction.name.lower(),
            "tick": self.tick,
            "difficulty": self.difficulty,
            "grid_size": self.grid_size,
        }


RecordSink = Callable[[GameRecord], None]
SnapshotListener = Callable[[Snapshot], None]


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class GameEngine:
    """Single-snake, tick-driven game engine.

    The engine owns the grid, snake, direction gate and food placer. It holds
    no timer: an external scheduler calls :meth:`tick` once per interval of
    the selected difficulty. Every tick and lifecycle transition publishes an
    immutable :class:`Snapshot` to subscribers, and every terminal transition
    hands one :class:`GameRecord` to ``record_sink``.
    """

    def __init__(
        self,
        grid_size: int = 20,
        difficulty: str = DEFAULT_DIFFICULTY,
        record_sink: RecordSink | None = None,
        seed: int | None = None,
        difficulties: Mapping[str, Difficulty] = DIFFICULTIES,
        today: Callable[[], date] | None = None,
    ) -> None:
        self.grid = Grid(grid_size)
        self.difficulties = dict(difficulties)
        get_difficulty(difficulty, self.difficulties)
        self.difficulty_name = difficulty
        self.rng = np.random.default_rng(seed)
        self.food_placer = FoodPlacer(self.grid, rng=self.rng)
        self.record_sink = record_sink
        self._today = today if today is not None else _utc_today
        self._listeners: list[SnapshotListener] = []
        self._ticking = False

        self.gate = DirectionGate(INITIAL_DIRECTION)
        self.state = LifecycleState.IDLE
        self.last_record: GameRecord | None = None
        self._init_board()
        self._snapshot = self._build_snapshot()

    @property
    def level(self) -> int:
        return level_for(self.score)

    @property
    def difficulty(self) -> Difficulty:
        return self.difficulties[self.difficulty_name]

    @property
    def tick_interval_ms(self) -> int:
        return self.difficulty.tick_interval_ms

    @property
    def initial_food(self) -> Cell:
        return Cell(3 * self.grid.size // 4, 3 * self.grid.size // 4)

    @property
    def snapshot(self) -> Snapshot:
        """The snapshot published after the most recent tick or transition."""
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener* for snapshots. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> Snapshot:
        """Begin a game from Idle. No-op in any other state."""
        if self.state is not LifecycleState.IDLE:
            return self._snapshot
        self._init_board()
        self.food = self.food_placer.place(self.snake.occupied())
        self.state = LifecycleState.RUNNING
        logger.info(
            "Game started on %dx%d grid at %s difficulty.",
            self.grid.size, self.grid.size, self.difficulty.label,
        )
        return self._publish()

    def reset(self) -> Snapshot:
        """Return to Idle from any state, discarding the board."""
        self._init_board()
        self.state = LifecycleState.IDLE
        logger.info("Game reset.")
        return self._publish()

    def toggle_pause(self) -> Snapshot:
        """Suspend a running game or resume a paused one."""
        if self.state is LifecycleState.RUNNING:
            self.state = LifecycleState.PAUSED
        elif self.state is LifecycleState.PAUSED:
            self.state = LifecycleState.RUNNING
        else:
            return self._snapshot
        logger.info("Game %s.", self.state.value)
        return self._publish()

    def request_direction(self, direction: Direction) -> None:
        """Buffer a direction change for the next tick.

        Reversals and requests outside Running/Paused are ignored.
        """
        if self.state not in (LifecycleState.RUNNING, LifecycleState.PAUSED):
            return
        if not self.gate.request(direction):
            logger.debug(
                "Ignored reversal %s while heading %s.",
                direction.name, self.gate.current.name,
            )

    def set_difficulty(self, name: str) -> Snapshot:
        """Select a difficulty. Only the tick interval and record label change."""
        get_difficulty(name, self.difficulties)
        if name == self.difficulty_name:
            return self._snapshot
        self.difficulty_name = name
        logger.info("Difficulty set to %s.", self.difficulty.label)
        return self._publish()

    def tick(self) -> Snapshot:
        """Advance the game by one step. No-op unless Running."""
        if self._ticking:
            raise ReentrantTickError("tick() is not reentrant.")
        if self.state is not LifecycleState.RUNNING:
            return self._snapshot

        self._ticking = True
        try:
            direction = self.gate.commit()
            proposed = self.snake.head.shifted(direction)
            outcome = collision.check(proposed, self.snake, self.grid)
            self.ticks += 1

            if outcome is not CollisionOutcome.NONE:
                self._finish(LifecycleState.GAME_OVER, outcome)
            elif proposed == self.food:
                self.snake.advance(proposed, grow=True)
                self.score += SCORE_PER_FOOD
                self.food = self.food_placer.place(self.snake.occupied())
                if self.food is None:
                    self._finish(LifecycleState.WON, outcome)
            else:
                self.snake.advance(proposed, grow=False)

            return self._publish()
        finally:
            self._ticking = False

    def _init_board(self) -> None:
        self.snake = SnakeBody([self.grid.center])
        self.food: Cell | None = self.initial_food
        self.gate.reset(INITIAL_DIRECTION)
        self.score = 0
        self.ticks = 0

    def _finish(self, state: LifecycleState, outcome: CollisionOutcome) -> None:
        """Enter a terminal state and emit exactly one game record."""
        self.state = state
        record = GameRecord(
            score=self.score,
            level=self.level,
            date=self._today().isoformat(),
            difficulty_label=self.difficulty.label,
        )
        self.last_record = record
        if state is LifecycleState.WON:
            logger.info(
                "Board full at tick %d with score %d.", self.ticks, self.score,
            )
        else:
            logger.info(
                "Snake hit %s at tick %d with score %d.",
                outcome.value, self.ticks, self.score,
            )
        if self.record_sink is None:
            return
        try:
            self.record_sink(record)
        except Exception:
            logger.exception("Record sink failed for %s.", record)

    def _build_snapshot(self) -> Snapshot:
        return Snapshot(
            snake=self.snake.cells(),
            food=self.food,
            score=self.score,
            level=self.level,
            state=self.state,
            direction=self.gate.current,
            tick=self.ticks,
            difficulty=self.difficulty.label,
            grid_size=self.grid.size,
        )

    def _publish(self) -> Snapshot:
        """Deliver a fresh snapshot to every listener.

        A reentrant tick from a listener is re-raised only after the
        remaining listeners have seen the snapshot.
        """
        self._snapshot = self._build_snapshot()
        reentrant: ReentrantTickError | None = None
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except ReentrantTickError as exc:
                reentrant = exc
            except Exception:
                logger.exception("Snapshot listener %r failed.", listener)
        if reentrant is not None:
            raise reentrant
        return self._snapshot
