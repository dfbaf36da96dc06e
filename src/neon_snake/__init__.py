"""Neon Snake — core game engine."""

from neon_snake.collision import CollisionOutcome
from neon_snake.config import DIFFICULTIES, Difficulty, GameConfig
from neon_snake.direction import DirectionGate
from neon_snake.engine import GameEngine, GameRecord, LifecycleState, Snapshot
from neon_snake.food import FoodPlacer
from neon_snake.grid import Cell, Grid
from neon_snake.scores import ScoreBoard
from neon_snake.snake import Direction, SnakeBody

__all__ = [
    "DIFFICULTIES",
    "Cell",
    "CollisionOutcome",
    "Difficulty",
    "Direction",
    "DirectionGate",
    "FoodPlacer",
    "GameConfig",
    "GameEngine",
    "GameRecord",
    "Grid",
    "LifecycleState",
    "ScoreBoard",
    "Snapshot",
    "SnakeBody",
]
