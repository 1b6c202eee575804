"""Hex Dungeon CLI entry point.

Provides subcommands for running the JSON API server, generating a dungeon
to the terminal, and printing the sizing estimate for a level triple.
Accepts configuration via flags and environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from hexdungeon import __version__

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Hex Dungeon

    Generate procedural room-and-corridor dungeons, or serve them over a JSON
    API. Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                               Bind address for the web server (default: 0.0.0.0)
          PORT                               Port for the web server (default: 5000)
          DUNGEON_ENABLE_GENERATION_METRICS  Attach generation metrics to results (default: 1)
          HEXDUNGEON_LOG_LEVEL               debug|info|warn|error (default: info)

        Examples:
          # Preview a dungeon for a level-5 player facing level-1 monsters
          python run.py generate --seed 42 --player-level 5 --difficulty-level 1

          # Same dungeon as JSON
          python run.py generate --seed 42 --player-level 5 --difficulty-level 1 --json

          # Grid size to allocate for a level triple
          python run.py size --player-level 3 --monster-level 2

          # Run the API server on a custom port
          python run.py serve --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="hexdungeon",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Hex Dungeon {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the JSON API server")
    serve_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    def add_level_args(p):
        p.add_argument("--player-level", type=int, default=1)
        p.add_argument("--monster-level", type=int, default=1)
        p.add_argument("--difficulty-level", type=int, default=1)

    gen_parser = subparsers.add_parser("generate", help="Generate a dungeon and print it")
    add_level_args(gen_parser)
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument("--z", type=int, default=0, help="Level index stamped into tile keys")
    gen_parser.add_argument("--json", action="store_true", help="Print the full result as JSON instead of ASCII")
    gen_parser.add_argument("--default-room", action="store_true", help="Build the single-room default dungeon")

    size_parser = subparsers.add_parser("size", help="Print room count and grid size estimate")
    add_level_args(size_parser)

    if len(argv) == 0:
        argv = ["generate"]
    return parser.parse_args(argv)


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val: str | int) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def cmd_generate(args) -> int:
    from hexdungeon.dungeon import DungeonBuilder, RoomPlacementError, WorldSize, estimate_world_size
    from hexdungeon.dungeon.preview import render_ascii
    from hexdungeon.routes.dungeon_api import coerce_seed

    seed = coerce_seed(args.seed)
    if args.default_room:
        world = WorldSize(15, 15)
        builder = DungeonBuilder.from_seed(world, seed)
        result = builder.build_default(z=args.z)
    else:
        estimate = estimate_world_size(args.player_level, args.monster_level, args.difficulty_level)
        world = WorldSize(estimate.w, estimate.h)
        builder = DungeonBuilder.from_seed(world, seed)
        try:
            result = builder.build_dungeon(
                player_level=args.player_level,
                monster_level=args.monster_level,
                difficulty_level=args.difficulty_level,
                z=args.z,
            )
        except RoomPlacementError as e:
            print(f"[ERROR] {e}", file=sys.stderr)
            return 1
    if args.json:
        print(json.dumps({"seed": seed, "world": world.to_dict(), "dungeon": result.to_dict()}, indent=2))
        return 0
    divider = "=" * 40
    print(divider)
    print(f"  {label('Seed:'):12} {value(seed)}")
    print(f"  {label('World:'):12} {value(f'{world.w}x{world.h}')}")
    print(f"  {label('Rooms:'):12} {value(len(result.rooms))} / {result.meta['room_count_target']}")
    print(f"  {label('Doors:'):12} {value(len(result.doors))}")
    print(divider)
    print(render_ascii(result, world))
    return 0


def cmd_size(args) -> int:
    from hexdungeon.dungeon import estimate_world_size

    est = estimate_world_size(args.player_level, args.monster_level, args.difficulty_level)
    print(json.dumps({"room_count": est.room_count, "w": est.w, "h": est.h}))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return cmd_generate(args)
    if mode == "size":
        return cmd_size(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    from hexdungeon.logging_utils import log
    from hexdungeon.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Hex Dungeon API{Style.RESET_ALL}" if _COLOR_ENABLED else "Hex Dungeon API"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    print("\n".join([divider, f"  {title}", divider, f"  {label('Host:'):12} {value(host)}", f"  {label('Port:'):12} {value(port)}", divider, ""]))
    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=getattr(args, "debug", False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
