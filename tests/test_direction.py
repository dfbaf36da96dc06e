"""Tests for the DirectionGate."""

from neon_snake.direction import DirectionGate
from neon_snake.snake import Direction


class TestDirectionGate:
    def test_initial(self):
        gate = DirectionGate()
        assert gate.current is Direction.RIGHT
        assert gate.pending is Direction.RIGHT

    def test_accept_turn(self):
        gate = DirectionGate(Direction.RIGHT)
        assert gate.request(Direction.UP)
        assert gate.pending is Direction.UP
        assert gate.current is Direction.RIGHT

    def test_reject_reversal(self):
        gate = DirectionGate(Direction.RIGHT)
        assert not gate.request(Direction.LEFT)
        assert gate.pending is Direction.RIGHT

    def test_reversal_checked_against_current(self):
        gate = DirectionGate(Direction.RIGHT)
        gate.request(Direction.UP)
        # LEFT reverses the committed RIGHT even though UP is pending.
        assert not gate.request(Direction.LEFT)
        assert gate.pending is Direction.UP

    def test_last_request_wins(self):
        gate = DirectionGate(Direction.RIGHT)
        gate.request(Direction.UP)
        gate.request(Direction.DOWN)
        assert gate.commit() is Direction.DOWN

    def test_commit(self):
        gate = DirectionGate(Direction.UP)
        gate.request(Direction.LEFT)
        assert gate.commit() is Direction.LEFT
        assert gate.current is Direction.LEFT

    def test_reset(self):
        gate = DirectionGate(Direction.UP)
        gate.request(Direction.LEFT)
        gate.reset(Direction.DOWN)
        assert gate.current is Direction.DOWN
        assert gate.pending is Direction.DOWN
