"""Command-line tools for Natrix maps and headless simulation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="natrix",
        description="Natrix map checks, headless simulation and benchmarks.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- maps ---
    maps_p = sub.add_parser("maps", help="Validate and list map files.")
    maps_p.add_argument(
        "directory", nargs="?", default=None,
        help="Map directory (defaults to the configured maps_dir).",
    )
    maps_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a scripted game without a window.",
    )
    sim_p.add_argument(
        "--map", type=str, default=None,
        help="Map file to play (defaults to the built-in arena).",
    )
    sim_p.add_argument(
        "--keys", type=str, default="",
        help="One character per tick: w/a/s/d steer, anything else waits.",
    )
    sim_p.add_argument(
        "--ticks", type=int, default=None,
        help="Total ticks to run (defaults to the length of --keys).",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--config", type=str, default=None)

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=int, default=100)
    bench_p.add_argument("--max-ticks", type=int, default=500)
    bench_p.add_argument("--seed", type=int, default=42)

    return parser


def _load_config(path: str | None):
    from natrix.config import GameConfig

    return GameConfig.load(path) if path else GameConfig()


def _run_maps(args: argparse.Namespace) -> int:
    from natrix.grid import GridMap, MapError
    from natrix.tile import TileKind

    config = _load_config(args.config)
    root = Path(args.directory or config.maps_dir)
    if not root.is_dir():
        logger.error("Map directory %s does not exist.", root)
        return 1

    failures = 0
    for path in sorted(p for p in root.iterdir() if p.is_file()):
        try:
            grid = GridMap.load(path)
        except MapError as exc:
            failures += 1
            print(f"{path.name}: invalid ({exc})")  # noqa: T201
            continue
        walls = int((grid.kinds() == TileKind.WALL).sum())
        print(  # noqa: T201
            f"{path.name}: {grid.name!r} spawn={grid.spawn} walls={walls}"
        )
    return 1 if failures else 0


def _run_simulate(args: argparse.Namespace) -> int:
    import dataclasses

    import numpy as np

    from natrix.game import GameSession
    from natrix.grid import GridMap, MapError
    from natrix.state import KeyDown

    config = _load_config(args.config)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)

    try:
        template = GridMap.load(args.map) if args.map else GridMap()
    except MapError as exc:
        logger.error("Cannot load map %s: %s", args.map, exc)
        return 1

    session = GameSession(
        template, config=config, rng=np.random.default_rng(config.seed),
    )
    ticks = args.ticks if args.ticks is not None else len(args.keys)
    for i in range(ticks):
        char = args.keys[i] if i < len(args.keys) else ""
        events = [KeyDown.from_name(char)] if char.strip() else []
        session.update(events)

    state = session.to_dict()
    state.pop("map")
    print(json.dumps(state, indent=2))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from natrix.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.num_games,
        max_ticks=args.max_ticks,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``natrix`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "maps": _run_maps,
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
