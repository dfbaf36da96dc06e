"""High score and game history persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from neon_snake.engine import GameRecord

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10


class ScoreBoard:
    """Keeps the running high score and the most recent game records.

    History is ordered most recent first and capped at ``limit`` entries.
    When ``path`` is set and ``autosave`` is on, every recorded game is
    written through to a JSON file.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        limit: int = HISTORY_LIMIT,
        autosave: bool = True,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1.")
        self.path = Path(path) if path is not None else None
        self.limit = limit
        self.autosave = autosave
        self.high_score = 0
        self.history: list[GameRecord] = []

    def record(self, game: GameRecord) -> None:
        """Add a finished game. Usable directly as an engine record sink."""
        self.high_score = max(self.high_score, game.score)
        self.history = [game, *self.history][: self.limit]
        logger.info(
            "Recorded game: score=%d level=%d (%s). High score %d.",
            game.score, game.level, game.difficulty_label, self.high_score,
        )
        if self.autosave and self.path is not None:
            self.save()

    def to_dict(self) -> dict:
        return {
            "high_score": self.high_score,
            "history": [r.to_dict() for r in self.history],
        }

    def save(self, path: str | Path | None = None) -> None:
        """Write high score and history to a JSON file."""
        p = Path(path) if path is not None else self.path
        if p is None:
            raise ValueError("No path configured for the score board.")
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.debug("Scores saved to %s", p)

    @classmethod
    def load(
        cls, path: str | Path, limit: int = HISTORY_LIMIT,
    ) -> ScoreBoard:
        """Load a score board from *path*.

        A missing file yields an empty board; an unreadable one is logged and
        replaced on the next save.
        """
        board = cls(path, limit=limit)
        p = Path(path)
        if not p.exists():
            return board
        try:
            raw = json.loads(p.read_text())
            history = [GameRecord.from_dict(r) for r in raw.get("history", [])]
            high_score = int(raw.get("high_score", 0))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Ignoring unreadable score file %s.", p)
            return board
        board.history = history[:limit]
        board.high_score = max(
            [high_score, *(r.score for r in board.history)],
        )
        return board
