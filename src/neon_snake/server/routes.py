"""REST API route handlers for the game lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from neon_snake.server.models import (
    DifficultyInfo,
    DifficultyRequest,
    DirectionRequest,
    GameRecordModel,
    ScoresResponse,
)
from neon_snake.server.session import GameSession
from neon_snake.snake import Direction

router = APIRouter(tags=["game"])


def _get_session(request: Request) -> GameSession:
    return request.app.state.session


@router.get("/game")
async def get_game(request: Request) -> dict:
    """Current snapshot of the game."""
    session = _get_session(request)
    return session.payload()


@router.post("/game/start")
async def start_game(request: Request) -> dict:
    """Start a game from Idle."""
    session = _get_session(request)
    return session.payload(await session.start())


@router.post("/game/reset")
async def reset_game(request: Request) -> dict:
    """Return the game to Idle."""
    session = _get_session(request)
    return session.payload(await session.reset())


@router.post("/game/pause")
async def toggle_pause(request: Request) -> dict:
    """Pause a running game or resume a paused one."""
    session = _get_session(request)
    return session.payload(await session.toggle_pause())


@router.post("/game/direction", status_code=202)
async def request_direction(body: DirectionRequest, request: Request) -> dict:
    """Buffer a direction change for the next tick."""
    try:
        direction = Direction.parse(body.direction)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    await _get_session(request).request_direction(direction)
    return {"direction": direction.name.lower()}


@router.get("/game/difficulties")
async def list_difficulties(request: Request) -> list[DifficultyInfo]:
    """The difficulty table."""
    engine = _get_session(request).engine
    return [
        DifficultyInfo(
            name=name, label=d.label, tick_interval_ms=d.tick_interval_ms,
        )
        for name, d in engine.difficulties.items()
    ]


@router.put("/game/difficulty")
async def set_difficulty(body: DifficultyRequest, request: Request) -> DifficultyInfo:
    """Select a difficulty; applies to ticks scheduled from now on."""
    session = _get_session(request)
    try:
        await session.set_difficulty(body.difficulty)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    d = session.engine.difficulty
    return DifficultyInfo(
        name=body.difficulty, label=d.label, tick_interval_ms=d.tick_interval_ms,
    )


@router.get("/scores")
async def get_scores(request: Request) -> ScoresResponse:
    """High score and the most recent games."""
    scores = _get_session(request).scores
    return ScoresResponse(
        high_score=scores.high_score,
        history=[GameRecordModel(**r.to_dict()) for r in scores.history],
    )
