"""Terminal-condition checks for a proposed head position."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neon_snake.grid import Cell, Grid
    from neon_snake.snake import SnakeBody


class CollisionOutcome(enum.Enum):
    """Result of moving the head into a proposed cell."""

    NONE = "none"
    WALL = "wall"
    SELF = "self"


def check(proposed_head: Cell, body: SnakeBody, grid: Grid) -> CollisionOutcome:
    """Classify a move of the head into *proposed_head*.

    Walls are checked first. The self check runs against the full current
    body, tail included, so moving into the cell the tail is about to vacate
    counts as a collision.
    """
    if not grid.contains(proposed_head):
        return CollisionOutcome.WALL
    if body.occupies(proposed_head):
        return CollisionOutcome.SELF
    return CollisionOutcome.NONE
