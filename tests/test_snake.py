"""Tests for the snake module."""

import pytest

from neon_snake.grid import Cell
from neon_snake.snake import Direction, SnakeBody


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT

    def test_parse(self):
        assert Direction.parse("up") is Direction.UP
        assert Direction.parse(" Left ") is Direction.LEFT

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.parse("sideways")


class TestSnakeBodyInit:
    def test_single_cell(self):
        body = SnakeBody([Cell(10, 10)])
        assert body.head == Cell(10, 10)
        assert body.tail == Cell(10, 10)
        assert len(body) == 1

    def test_accepts_plain_tuples(self):
        body = SnakeBody([(1, 1), (0, 1)])
        assert body.head == Cell(1, 1)
        assert isinstance(body.tail, Cell)

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="at least 1"):
            SnakeBody([])

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="overlap"):
            SnakeBody([Cell(1, 1), Cell(1, 1)])


class TestSnakeBodyMovement:
    def test_advance_without_growth(self):
        body = SnakeBody([Cell(5, 5), Cell(4, 5), Cell(3, 5)])
        vacated = body.advance(Cell(6, 5))
        assert body.cells() == (Cell(6, 5), Cell(5, 5), Cell(4, 5))
        assert vacated == Cell(3, 5)
        assert not body.occupies(Cell(3, 5))

    def test_advance_with_growth(self):
        body = SnakeBody([Cell(10, 10)])
        vacated = body.advance(Cell(11, 10), grow=True)
        assert vacated is None
        assert body.cells() == (Cell(11, 10), Cell(10, 10))

    def test_single_segment_moves(self):
        body = SnakeBody([Cell(0, 0)])
        body.advance(Cell(1, 0))
        assert body.cells() == (Cell(1, 0),)
        assert not body.occupies(Cell(0, 0))


class TestSnakeBodyMembership:
    def test_occupies(self):
        body = SnakeBody([Cell(5, 5), Cell(4, 5)])
        assert body.occupies(Cell(5, 5))
        assert body.occupies(Cell(4, 5))
        assert not body.occupies(Cell(0, 0))

    def test_headless_occupies_excludes_head(self):
        body = SnakeBody([Cell(5, 5), Cell(4, 5), Cell(3, 5)])
        assert not body.headless_occupies(Cell(5, 5))
        assert body.headless_occupies(Cell(4, 5))
        assert body.headless_occupies(Cell(3, 5))

    def test_occupied_is_a_copy(self):
        body = SnakeBody([Cell(5, 5)])
        occupied = body.occupied()
        body.advance(Cell(6, 5), grow=True)
        assert occupied == frozenset({Cell(5, 5)})
