from __future__ import annotations

import argparse
import logging
from typing import List, Optional


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="falling-blocks")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play in a pygame window")
    play.add_argument("--seed", type=int, default=None)
    play.add_argument("--cell-size", type=int, default=30)
    play.add_argument("--mono", action="store_true", help="Render blocks in grayscale")
    play.add_argument("--mute", action="store_true", help="Disable sound cues")

    serve = sub.add_parser("serve", help="Serve the landing page and health check")
    serve.add_argument("--port", type=int, default=None, help="Defaults to $PORT or 3000")
    serve.add_argument("--root", type=str, default=None, help="Static file root")

    rand = sub.add_parser("random", help="Run a random agent in the headless environment")
    rand.add_argument("--steps", type=int, default=200)
    rand.add_argument("--seed", type=int, default=None)
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if args.command == "play":
        from falling_blocks.visualization.human_play import run

        run(seed=args.seed, cell_size=args.cell_size, monochrome=args.mono, sound=not args.mute)
    elif args.command == "serve":
        from falling_blocks.server import serve as run_server

        run_server(port=args.port, static_root=args.root)
    elif args.command == "random":
        from falling_blocks.rl.random_agent import run_random

        run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
