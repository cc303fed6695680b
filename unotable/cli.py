"""
Unotable CLI - Command-line interface for the engine.

Usage:
    unotable serve [--host H] [--port P]   Run the HTTP API with uvicorn
    unotable deal NAME NAME... [--seed N]  Deal a game and print it as JSON
"""

import argparse
import json
import random
import sys

from .config import Settings, setup_logging


def main(argv=None):
    """Main CLI entry point."""
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="Unotable - Uno table engine with an HTTP API",
        prog="unotable",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="DEBUG, INFO, WARNING, ERROR")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    serve_parser.add_argument("--store-dir", default=settings.store_dir, help="Directory for game records")
    serve_parser.add_argument("--seed", type=int, default=settings.seed, help="Shuffle seed")

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Deal a game and print the table")
    deal_parser.add_argument("players", nargs="+", help="Player names in seat order")
    deal_parser.add_argument("--seed", type=int, default=settings.seed, help="Shuffle seed")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "serve":
        cmd_serve(args, settings)
    elif args.command == "deal":
        cmd_deal(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, settings: Settings):
    """Run the HTTP API."""
    import uvicorn
    from .api.app import create_app

    settings.host = args.host
    settings.port = args.port
    settings.store_dir = args.store_dir
    settings.seed = args.seed

    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=args.log_level.lower())


def cmd_deal(args):
    """Deal a game and print the snapshot."""
    from .engine_core import GameEngine

    engine = GameEngine(rng=random.Random(args.seed))
    result = engine.start(args.players)
    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)

    print(json.dumps(result.value, indent=2))


if __name__ == "__main__":
    main()
