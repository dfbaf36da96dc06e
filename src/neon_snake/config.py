"""Difficulty table and game configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Difficulty:
    """Tick interval and display label for a named difficulty."""

    tick_interval_ms: int
    label: str

    def __post_init__(self) -> None:
        if self.tick_interval_ms < 1:
            raise ValueError("tick_interval_ms must be positive.")


DIFFICULTIES: dict[str, Difficulty] = {
    "easy": Difficulty(tick_interval_ms=200, label="Easy"),
    "medium": Difficulty(tick_interval_ms=150, label="Medium"),
    "hard": Difficulty(tick_interval_ms=100, label="Hard"),
    "insane": Difficulty(tick_interval_ms=50, label="Insane"),
}

DEFAULT_DIFFICULTY = "medium"


def get_difficulty(
    name: str, table: Mapping[str, Difficulty] = DIFFICULTIES,
) -> Difficulty:
    """Look up a difficulty by name."""
    try:
        return table[name]
    except KeyError:
        choices = ", ".join(table)
        raise ValueError(
            f"Unknown difficulty {name!r}; expected one of: {choices}.",
        ) from None


@dataclass(frozen=True)
class GameConfig:
    """Settings for a game session.

    Supports JSON serialization so a session can be reproduced.
    """

    grid_size: int = 20
    difficulty: str = DEFAULT_DIFFICULTY
    seed: int | None = None
    scores_path: str | None = "neon_snake_scores.json"

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        get_difficulty(self.difficulty)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
