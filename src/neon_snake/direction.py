"""Buffered direction input with reversal rejection."""

from __future__ import annotations

from neon_snake.snake import Direction


class DirectionGate:
    """Holds the committed direction and the next one requested by input.

    Requests are validated against the *committed* direction, so two quick
    presses between ticks cannot chain into a 180° turn.
    """

    def __init__(self, initial: Direction = Direction.RIGHT) -> None:
        self.current = initial
        self.pending = initial

    def request(self, direction: Direction) -> bool:
        """Buffer *direction* unless it reverses the current heading."""
        if direction is self.current.opposite:
            return False
        self.pending = direction
        return True

    def commit(self) -> Direction:
        """Make the pending direction current. Called at the start of a tick."""
        self.current = self.pending
        return self.current

    def reset(self, direction: Direction = Direction.RIGHT) -> None:
        self.current = direction
        self.pending = direction
