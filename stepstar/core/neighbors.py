# stepstar/core/neighbors.py
#!/usr/bin/env python3
from math import sqrt
from typing import Iterator, Tuple

from stepstar.core.types import Cell, Grid

CARDINAL_COST = 1.0
DIAGONAL_COST = sqrt(2.0)

# Fixed enumeration order; tie-breaking downstream depends on it.
CARDINALS: Tuple[Cell, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONALS: Tuple[Cell, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def neighbors(grid: Grid, c: Cell, diagonal_allowed: bool = False) -> Iterator[Tuple[Cell, float]]:
    """Yield (cell, move_cost) for every legal successor of c."""
    x, y = c
    for dx, dy in CARDINALS:
        n = (x + dx, y + dy)
        if grid.passable(n):
            yield n, CARDINAL_COST

    if not diagonal_allowed:
        return

    for dx, dy in DIAGONALS:
        n = (x + dx, y + dy)
        if not grid.passable(n):
            continue
        # no corner cutting: both orthogonal cells must be open
        if not grid.passable((x + dx, y)) or not grid.passable((x, y + dy)):
            continue
        yield n, DIAGONAL_COST


def move_cost(grid: Grid, a: Cell, b: Cell, diagonal_allowed: bool = False) -> float:
    """Cost of the single step a -> b; ValueError if it is not a legal move."""
    for n, cost in neighbors(grid, a, diagonal_allowed):
        if n == b:
            return cost
    raise ValueError(f"{b} is not reachable from {a} in one move")
