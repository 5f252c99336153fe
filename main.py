"""
Plate scene: single entry point.

Usage:
    python main.py view [--seed N]               # interactive MuJoCo viewer
    python main.py render [--seeds ...] [--out]   # offscreen PNG grid
    python main.py describe [--seed N]            # print the composed scene

On macOS the viewer must be launched under mjpython:
    mjpython main.py view
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

log = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure the root logger and install an excepthook.

    Unhandled exceptions (including backend drawing failures) are logged
    at CRITICAL and then passed to the original hook.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    _original_excepthook = sys.excepthook

    def _logging_excepthook(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.critical(
                "Unhandled exception", exc_info=(exc_type, exc_value, exc_tb)
            )
        _original_excepthook(exc_type, exc_value, exc_tb)

    sys.excepthook = _logging_excepthook


def _check_mjpython():
    """Warn if not launched via mjpython (needed for MuJoCo viewer on macOS)."""
    if sys.platform != "darwin" or shutil.which("mjpython") is None:
        return
    if "MJPYTHON_BIN" not in os.environ:
        print(
            "Warning: the viewer should be launched with mjpython on macOS.\n"
            "  Use: mjpython main.py view\n"
        )


def _seed_arg(value: str) -> int:
    """argparse type: non-negative integer seed (numpy rejects negatives)."""
    seed = int(value)
    if seed < 0:
        raise argparse.ArgumentTypeError(f"seed must be non-negative, got {seed}")
    return seed


def _count_arg(value: str) -> int:
    """argparse type: integer of at least 1."""
    count = int(value)
    if count < 1:
        raise argparse.ArgumentTypeError(f"count must be at least 1, got {count}")
    return count


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="Plate scene - procedural plates, support lines and scatter boxes",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p_view = sub.add_parser("view", help="Launch MuJoCo viewer")
    p_view.add_argument(
        "--seed", type=_seed_arg, default=None, help="Scatter seed (default: random)"
    )

    p_render = sub.add_parser("render", help="Render scenes offscreen to a PNG grid")
    p_render.add_argument("--seeds", nargs="*", type=_seed_arg, help="Specific seeds to render")
    p_render.add_argument(
        "--count", type=_count_arg, default=4, help="Random scenes (default: 4)"
    )
    p_render.add_argument("--out", type=str, default="docs/scenes", help="Output directory")

    p_desc = sub.add_parser("describe", help="Print the composed scene")
    p_desc.add_argument(
        "--seed", type=_seed_arg, default=None, help="Scatter seed (default: random)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "view":
        _check_mjpython()
        from scene_view import run_scene_view

        run_scene_view(seed=args.seed)

    elif args.command == "render":
        from plate_scene.render_snapshot import random_seeds, render_grid

        seeds = args.seeds or random_seeds(args.count)
        path = render_grid(seeds, Path(args.out))
        log.info("Wrote %s", path)

    elif args.command == "describe":
        from plate_scene import create_scene, describe_scene

        print(describe_scene(create_scene(seed=args.seed)))

    else:
        parser.print_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
