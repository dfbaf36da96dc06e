"""Tests for the FoodPlacer module."""

import numpy as np
import pytest

from neon_snake.food import FoodPlacer
from neon_snake.grid import Cell, Grid


class TestFoodPlacerInit:
    def test_default_budget(self):
        placer = FoodPlacer(Grid(size=5))
        assert placer.max_attempts == 64 * 25

    def test_invalid_budget(self):
        with pytest.raises(ValueError, match="at least 1"):
            FoodPlacer(Grid(size=5), max_attempts=0)


class TestFoodPlacement:
    def test_never_on_occupied(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid, rng=np.random.default_rng(3))
        occupied = {c for c in grid.cells() if c.x < 3}
        for _ in range(50):
            cell = placer.place(occupied)
            assert cell is not None
            assert cell not in occupied
            assert grid.contains(cell)

    def test_single_free_cell(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid, rng=np.random.default_rng(0))
        free = Cell(2, 3)
        occupied = [c for c in grid.cells() if c != free]
        assert placer.place(occupied) == free

    def test_fallback_after_budget(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid, rng=np.random.default_rng(0), max_attempts=1)
        free = Cell(0, 0)
        occupied = {c for c in grid.cells() if c != free}
        assert placer.place(occupied) == free

    def test_board_full_returns_none(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid)
        assert placer.place(set(grid.cells())) is None

    def test_deterministic(self):
        """Same seed produces the same placements."""
        assert self._place_with_seed(42) == self._place_with_seed(42)

    def test_different_seeds(self):
        assert self._place_with_seed(1) != self._place_with_seed(2)

    @staticmethod
    def _place_with_seed(seed: int) -> list[Cell]:
        placer = FoodPlacer(Grid(size=20), rng=np.random.default_rng(seed))
        return [placer.place({Cell(10, 10)}) for _ in range(5)]
