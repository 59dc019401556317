# stepstar/app/cli.py
#!/usr/bin/env python3
"""
Headless runner: load a map, step a search to the end, print the outcome.

    stepstar 02_small_astar --heuristic octile --diagonal --trace

Defaults:
- ENV: STEPSTAR_HEURISTIC, STEPSTAR_LOG_LEVEL
- CLI flags override the environment.

Exit codes: 0 path found, 1 no path, 2 invalid input, 3 step budget exhausted.
"""

import argparse
import os
import sys
from typing import List, Optional, Sequence

from loguru import logger

from stepstar.app.maps import available_maps, load_map, resolve_map
from stepstar.core.astar import SearchController
from stepstar.core.dijkstra import DijkstraSearch
from stepstar.core.errors import StepstarError
from stepstar.core.heuristics import Heuristic
from stepstar.core.types import Cell, StepResult, Success

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_INVALID = 2
EXIT_BUDGET = 3

LOG_FORMAT = ("<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
              "<level>{level: <8}</level> | "
              "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
              "<level>{message}</level>")


def setup_logger(level: str = "WARNING") -> None:
    """Route stepstar's log records to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper(), colorize=None)
    logger.enable("stepstar")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stepstar", description="Step an A* search over a grid map.")
    p.add_argument("map", help=f"map file, or a bundled map name ({', '.join(available_maps()) or 'none'})")
    p.add_argument("--algo", choices=("astar", "dijkstra"), default="astar")
    p.add_argument("--heuristic", default=os.getenv("STEPSTAR_HEURISTIC", Heuristic.MANHATTAN.value),
                   help="manhattan | euclidean | chebyshev | octile | zero")
    p.add_argument("--diagonal", action=argparse.BooleanOptionalAction, default=None,
                   help="allow diagonal moves (default: the map's 'move' setting)")
    p.add_argument("--max-steps", type=int, default=None, help="stop after this many expansions")
    p.add_argument("--trace", action="store_true", help="print every expansion")
    p.add_argument("--log-level", default=os.getenv("STEPSTAR_LOG_LEVEL", "WARNING"))
    return p


def _fmt_cell(c: Cell) -> str:
    return f"({c[0]},{c[1]})"


def _fmt_path(path: List[Cell]) -> str:
    return " -> ".join(_fmt_cell(c) for c in path)


def _trace_line(n: int, res: StepResult) -> str:
    m = res.metrics
    cur = _fmt_cell(res.current) if res.current is not None else "-"
    return (f"step {n:>4}: {res.status.value:<9} current={cur} "
            f"+{len(res.opened)} open ~{len(res.updated)} updated "
            f"open_size={m.get('open_size')} closed={m.get('closed_count')}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level)

    try:
        spec = load_map(resolve_map(args.map))
        diagonal = spec.diagonal_allowed if args.diagonal is None else args.diagonal
        if args.algo == "dijkstra":
            search = DijkstraSearch(spec.grid, spec.start, spec.goal, diagonal)
            label = "dijkstra"
        else:
            search = SearchController(spec.grid, spec.start, spec.goal,
                                      heuristic=args.heuristic, diagonal_allowed=diagonal)
            label = search.heuristic.value
    except (StepstarError, ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    print(f"map: {spec.name} ({spec.grid.width}x{spec.grid.height})  algo: {search.name}  "
          f"heuristic: {label}  diagonal: {'on' if diagonal else 'off'}")

    steps = 0
    while not search.status.terminal:
        if args.max_steps is not None and steps >= args.max_steps:
            print(f"result: stopped after {steps} steps, search still {search.status.value}")
            _print_metrics(search.metrics())
            return EXIT_BUDGET
        res = search.step()
        steps += 1
        if args.trace:
            print(_trace_line(steps, res))

    outcome = search.outcome
    if isinstance(outcome, Success):
        print("result: path found")
        print(f"path: {_fmt_path(outcome.path)}")
        print(f"total_cost: {outcome.total_cost:.3f}")
        code = EXIT_FOUND
    else:
        print("result: no path exists")
        code = EXIT_NO_PATH
    _print_metrics(search.metrics())
    return code


def _print_metrics(m: dict) -> None:
    for key in ("popped", "open_size", "closed_count", "path_len", "elapsed_ms"):
        if key not in m:
            continue
        value = m[key]
        print(f"{key}: {value:.2f}" if isinstance(value, float) else f"{key}: {value}")


if __name__ == "__main__":
    sys.exit(main())
