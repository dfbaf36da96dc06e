"""Grid geometry for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

if TYPE_CHECKING:
    from neon_snake.snake import Direction


class Cell(NamedTuple):
    """A single grid coordinate. ``y`` grows downwards."""

    x: int
    y: int

    def shifted(self, direction: Direction) -> Cell:
        """Return the neighbouring cell one step along *direction*."""
        dx, dy = direction.value
        return Cell(self.x + dx, self.y + dy)


class CellType(enum.IntEnum):
    """Integer codes used in the rendered occupancy matrix."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3


class Grid:
    """Fixed-size square grid.

    The grid holds no occupancy state of its own; it only answers bounds
    questions and can paint a snapshot into a NumPy matrix for renderers.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4×4.")
        self.size = size

    @property
    def area(self) -> int:
        return self.size * self.size

    @property
    def center(self) -> Cell:
        return Cell(self.size // 2, self.size // 2)

    def contains(self, cell: Cell) -> bool:
        """Check whether a cell lies within the grid."""
        return 0 <= cell.x < self.size and 0 <= cell.y < self.size

    def cells(self) -> list[Cell]:
        """Return every cell of the grid in row-major order."""
        return [Cell(x, y) for y in range(self.size) for x in range(self.size)]

    def render(self, snake: Iterable[Cell], food: Cell | None) -> np.ndarray:
        """Paint snake and food into an ``(size, size)`` matrix indexed [y, x]."""
        board = np.zeros((self.size, self.size), dtype=np.int8)
        if food is not None and self.contains(food):
            board[food.y, food.x] = CellType.FOOD
        for i, cell in enumerate(snake):
            if not self.contains(cell):
                continue
            board[cell.y, cell.x] = CellType.HEAD if i == 0 else CellType.SNAKE
        return board

    def to_dict(
        self, snake: Iterable[Cell] = (), food: Cell | None = None,
    ) -> dict:
        """Serialize grid geometry and the painted occupancy matrix."""
        return {
            "width": self.size,
            "height": self.size,
            "cells": self.render(snake, food).tolist(),
        }
