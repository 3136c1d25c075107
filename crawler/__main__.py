"""Entry point: ``python -m crawler``.

Supports two modes:
  - ``python -m crawler``            -> Launch the FastAPI server
  - ``python -m crawler cli``        -> Play in the terminal, one command per line
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn-based dungeon crawler")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--save-file", type=str, default="savegame.json")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Terminal mode ---
    cli = sub.add_parser("cli", help="Play in the terminal")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--save-file", type=str, default="savegame.json")
    cli.add_argument("--continue", dest="resume", action="store_true", help="Load the saved game")
    cli.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from crawler.api.app import create_app
    from crawler.config import GameConfig

    config = GameConfig(seed=args.seed, save_file=args.save_file, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> int:
    from crawler.config import GameConfig
    from crawler.core.errors import NoSavedGameError
    from crawler.engine.terminal import run_session
    from crawler.engine.turn_engine import TurnEngine
    from crawler.persistence import load_game
    from crawler.utils.logging import setup_logging

    config = GameConfig(seed=args.seed, save_file=args.save_file, log_level=args.log_level)
    setup_logging(config.log_level, stream=sys.stderr)

    engine = TurnEngine(config)
    if args.resume:
        try:
            engine.attach_world(load_game(engine.save_path))
        except NoSavedGameError as exc:
            logger.error("%s", exc)
            print("No saved game to load.", file=sys.stderr)
            return 1
    else:
        engine.new_game()

    return run_session(engine, input, sys.stdout)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        sys.exit(_run_cli(args))


if __name__ == "__main__":
    main()
