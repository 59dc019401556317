# stepstar/app/maps.py
#!/usr/bin/env python3
"""
JSON map files.

    {
      "width": 10, "height": 6,
      "start": [0, 0], "goal": [9, 5],
      "move": 4,                      # optional, 4 or 8
      "cells": [[0, 0, 1, ...], ...], # cells[row][col]
      "weights": {"2": "BLOCK"}       # optional, cell value -> "BLOCK" | number
    }

A cell is blocked when its value is 1 or its weight is "BLOCK". The search
kernel is uniform-cost, so numeric weights are read but not used.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from loguru import logger

from stepstar.core.errors import MapFormatError
from stepstar.core.types import Cell, Grid

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


@dataclass(frozen=True)
class MapSpec:
    name: str
    grid: Grid
    start: Cell
    goal: Cell
    diagonal_allowed: bool = False


def available_maps() -> List[str]:
    if not MAP_DIR.is_dir():
        return []
    return sorted(p.stem for p in MAP_DIR.glob("*.json"))


def resolve_map(ref: Union[str, Path]) -> Path:
    """A filesystem path, or the stem of a bundled map in MAP_DIR."""
    path = Path(ref)
    if path.exists():
        return path
    bundled = MAP_DIR / f"{path.stem}.json"
    if bundled.exists():
        return bundled
    raise FileNotFoundError(f"map not found: {ref} (bundled: {', '.join(available_maps()) or 'none'})")


def _fail(msg: str) -> None:
    logger.error(msg)
    raise MapFormatError(msg)


def _cell(data: Dict[str, Any], key: str) -> Cell:
    value = data.get(key)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        _fail(f"'{key}' must be a [x, y] pair, got {value!r}")
    try:
        return (int(value[0]), int(value[1]))
    except (TypeError, ValueError):
        _fail(f"'{key}' must hold integers, got {value!r}")


def _int(data: Dict[str, Any], key: str, name: str) -> int:
    value = data[key]
    if isinstance(value, bool):
        _fail(f"{name}: '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        _fail(f"{name}: '{key}' must be an integer, got {value!r}")


def parse_map(data: Dict[str, Any], name: str = "<map>") -> MapSpec:
    for key in ("width", "height", "start", "goal", "cells"):
        if key not in data:
            _fail(f"{name}: missing '{key}'")

    width = _int(data, "width", name)
    height = _int(data, "height", name)
    cells = data["cells"]
    if width <= 0 or height <= 0:
        _fail(f"{name}: width and height must be positive, got {width}x{height}")
    if not isinstance(cells, list) or any(not isinstance(r, list) for r in cells):
        _fail(f"{name}: 'cells' must be a list of rows")
    if len(cells) != height or any(len(r) != width for r in cells):
        _fail(f"{name}: cells size mismatch, expected {height} rows of {width}")

    move = _int(data, "move", name) if "move" in data else 4
    if move not in (4, 8):
        _fail(f"{name}: 'move' must be 4 or 8, got {move}")

    weights = data.get("weights") or {}
    if not isinstance(weights, dict):
        _fail(f"{name}: 'weights' must be an object of cell value -> weight, got {type(weights).__name__}")
    blocked = set()
    ignored = set()
    for y, row in enumerate(cells):
        for x, v in enumerate(row):
            w = weights.get(str(v), 1)
            if w == "BLOCK" or v == 1:
                blocked.add((x, y))
            elif w != 1:
                ignored.add(str(v))
    if ignored:
        logger.warning(f"{name}: weights for cell values {sorted(ignored)} ignored, search is uniform-cost")

    start = _cell(data, "start")
    goal = _cell(data, "goal")
    grid = Grid(width, height, frozenset(blocked))
    for label, c in (("start", start), ("goal", goal)):
        if not grid.in_bounds(c):
            _fail(f"{name}: {label} {c} out of bounds")

    return MapSpec(name=name, grid=grid, start=start, goal=goal, diagonal_allowed=move == 8)


def load_map(path: Union[str, Path]) -> MapSpec:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        msg = f"{path}: invalid JSON: {e}"
        logger.error(msg)
        raise MapFormatError(msg) from e
    if not isinstance(data, dict):
        _fail(f"{path}: top level must be an object")
    spec = parse_map(data, name=path.stem)
    logger.debug(f"loaded map {spec.name}: {spec.grid.width}x{spec.grid.height}, "
                 f"{len(spec.grid.blocked)} blocked")
    return spec
