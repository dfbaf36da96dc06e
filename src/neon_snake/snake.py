"""Snake body representation and movement directions."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Iterator

from neon_snake.grid import Cell


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """Return the direction that would be a 180° reversal."""
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class SnakeBody:
    """An ordered chain of cells. The head is ``body[0]``; the tail is ``body[-1]``.

    A set mirrors the deque so membership checks stay O(1) as the snake grows.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self.body: deque[Cell] = deque(Cell(*c) for c in cells)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        self._occupied: set[Cell] = set(self.body)
        if len(self._occupied) != len(self.body):
            raise ValueError("Snake cells must not overlap.")

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.body)

    def cells(self) -> tuple[Cell, ...]:
        """Return an immutable copy of the body, head first."""
        return tuple(self.body)

    def occupied(self) -> frozenset[Cell]:
        return frozenset(self._occupied)

    def advance(self, new_head: Cell, grow: bool = False) -> Cell | None:
        """Push *new_head* onto the front of the chain.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        Collision checks must already have passed.
        """
        self.body.appendleft(new_head)
        self._occupied.add(new_head)
        if grow:
            return None
        vacated = self.body.pop()
        # The vacated tail may be the cell the head just moved into.
        if vacated not in self.body:
            self._occupied.discard(vacated)
        return vacated

    def occupies(self, cell: Cell) -> bool:
        """Check whether any segment occupies *cell*."""
        return cell in self._occupied

    def headless_occupies(self, cell: Cell) -> bool:
        """Check whether any segment other than the head occupies *cell*."""
        if cell == self.head:
            return False
        return cell in self._occupied
