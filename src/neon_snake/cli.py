"""Command-line launcher for Neon Snake."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neon-snake",
        description="Neon Snake game server and score tools.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the game server.")
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument("--grid-size", type=int, default=None)
    serve_p.add_argument("--difficulty", type=str, default=None)
    serve_p.add_argument("--seed", type=int, default=None)
    serve_p.add_argument("--scores-path", type=str, default=None)

    # --- scores ---
    scores_p = sub.add_parser("scores", help="Show high score and history.")
    scores_p.add_argument(
        "--scores-path", type=str, default="neon_snake_scores.json",
    )

    # --- difficulties ---
    sub.add_parser("difficulties", help="List the difficulty table.")

    return parser


def _resolve_config(args: argparse.Namespace):
    from neon_snake.config import GameConfig

    cfg = GameConfig.load(args.config) if args.config else GameConfig()
    overrides = {
        "grid_size": args.grid_size,
        "difficulty": args.difficulty,
        "seed": args.seed,
        "scores_path": args.scores_path,
    }
    merged = cfg.to_dict()
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return GameConfig(**merged)


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from neon_snake.server.app import create_app

    try:
        config = _resolve_config(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    logger.info(
        "Serving %dx%d grid at %s difficulty on %s:%d.",
        config.grid_size, config.grid_size, config.difficulty,
        args.host, args.port,
    )
    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0


def _run_scores(args: argparse.Namespace) -> int:
    from neon_snake.scores import ScoreBoard

    board = ScoreBoard.load(args.scores_path)
    print(f"High score: {board.high_score}")  # noqa: T201
    if not board.history:
        print("No games played yet!")  # noqa: T201
        return 0
    for record in board.history:
        print(
            f"{record.date}  {record.score:>6}  "
            f"Level {record.level:<3} {record.difficulty_label}",
        )  # noqa: T201
    return 0


def _run_difficulties(args: argparse.Namespace) -> int:
    from neon_snake.config import DIFFICULTIES

    for name, d in DIFFICULTIES.items():
        print(f"{name:<8} {d.label:<8} {d.tick_interval_ms} ms")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``neon-snake``."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "serve": _run_serve,
        "scores": _run_scores,
        "difficulties": _run_difficulties,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
