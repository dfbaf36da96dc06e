"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

from neon_snake.grid import Cell

if TYPE_CHECKING:
    from neon_snake.grid import Grid

logger = logging.getLogger(__name__)


class FoodPlacer:
    """Chooses a free cell for the next piece of food.

    Uses rejection sampling over a seeded NumPy RNG so placement is
    reproducible. A full board yields ``None`` instead of sampling forever.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = (
            max_attempts if max_attempts is not None else 64 * grid.area
        )
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")

    def place(self, occupied: Collection[Cell]) -> Cell | None:
        """Return a uniformly random cell not in *occupied*.

        Returns ``None`` when *occupied* covers the whole grid.
        """
        taken = occupied if isinstance(occupied, (set, frozenset)) else set(occupied)
        if len(taken) >= self.grid.area:
            logger.warning("Board full: no free cell left for food.")
            return None

        size = self.grid.size
        for _ in range(self.max_attempts):
            x, y = self.rng.integers(0, size, size=2).tolist()
            candidate = Cell(x, y)
            if candidate not in taken:
                return candidate

        # Sampling budget spent on a nearly full board.
        free = [c for c in self.grid.cells() if c not in taken]
        if not free:
            logger.warning("Board full: no free cell left for food.")
            return None
        logger.debug(
            "Rejection sampling exhausted; choosing among %d free cells.",
            len(free),
        )
        return free[int(self.rng.integers(len(free)))]
