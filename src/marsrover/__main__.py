"""Command line entry point.

``marsrover serve`` runs the HTTP API; ``marsrover move`` runs the
movement interpreter once, without a store, and prints the result.
"""

from __future__ import annotations

import argparse
import logging

from marsrover.config import RoverConfig
from marsrover.exceptions import RoverError
from marsrover.models.rover import Heading, Position
from marsrover.navigation import execute

_LOG = logging.getLogger("marsrover")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="marsrover", description="Track and drive grid-bound rovers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the rover HTTP API")
    serve.add_argument("--host", help="Bind address (default: MARSROVER_HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Bind port (default: MARSROVER_PORT or 8080)")
    serve.add_argument("--store", dest="store_path", help="JSON file to persist rovers in")

    move = sub.add_parser("move", help="Apply an instruction string to a start state")
    move.add_argument("instruction", help="Commands over L, R and M, e.g. 'LMLMLMLMM'")
    move.add_argument("--x", type=int, default=0, help="Start x (default: 0)")
    move.add_argument("--y", type=int, default=0, help="Start y (default: 0)")
    move.add_argument("--heading", default="N", help="Start heading N/E/S/W (default: N)")

    return parser.parse_args(argv)


def _serve(args: argparse.Namespace) -> int:
    from marsrover.server import run

    overrides = {key: getattr(args, key) for key in ("host", "port", "store_path") if getattr(args, key) is not None}
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    config = RoverConfig.from_env(**overrides)
    logging.getLogger().setLevel(config.log_level_value)
    run(config)
    return 0


def _move(args: argparse.Namespace) -> int:
    try:
        heading = Heading(args.heading)
    except ValueError:
        _LOG.error("Unknown heading %r", args.heading)
        return 2
    final_heading, final_position = execute(heading, Position(x=args.x, y=args.y), args.instruction)
    print(f"{final_position.x} {final_position.y} {final_heading.value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "serve":
            return _serve(args)
        return _move(args)
    except RoverError as exc:
        _LOG.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
