"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DirectionRequest(BaseModel):
    """Request body for POST /game/direction."""

    direction: str = Field(min_length=1, max_length=8)


class DifficultyRequest(BaseModel):
    """Request body for PUT /game/difficulty."""

    difficulty: str = Field(min_length=1, max_length=32)


class DifficultyInfo(BaseModel):
    """One entry of the difficulty table."""

    name: str
    label: str
    tick_interval_ms: int


class GameRecordModel(BaseModel):
    """A finished game as stored in the history."""

    score: int = Field(ge=0)
    level: int = Field(ge=1)
    date: str
    difficulty: str


class ScoresResponse(BaseModel):
    """High score and recent history, most recent first."""

    high_score: int
    history: list[GameRecordModel]


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
